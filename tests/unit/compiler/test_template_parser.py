from __future__ import annotations

from app.compiler.template import EachBlock, Text, Variable, parse_template


def test_plain_text_is_a_single_text_node():
    template = parse_template("<p>No tokens here</p>")
    assert template.nodes == (Text("<p>No tokens here</p>"),)


def test_none_source_parses_to_empty_template():
    assert parse_template(None).nodes == ()


def test_variables_keep_their_raw_token():
    template = parse_template("Hi {{client_name}}!")
    assert template.nodes == (Text("Hi "), Variable("client_name", "{{client_name}}"), Text("!"))


def test_each_block_captures_body_and_source_text():
    source = "{{#each products}}<b>{{title}}</b>{{/each}}"
    (block,) = parse_template(source).nodes
    assert isinstance(block, EachBlock)
    assert block.collection == "products"
    assert block.raw == source
    assert block.body == (Text("<b>"), Variable("title", "{{title}}"), Text("</b>"))


def test_each_blocks_nest():
    source = "{{#each products}}{{#each features}}{{this}}{{/each}}{{/each}}"
    (outer,) = parse_template(source).nodes
    (inner,) = outer.body
    assert inner.collection == "features"
    assert inner.raw == "{{#each features}}{{this}}{{/each}}"
    assert parse_template(source).collection_names() == {"products", "features"}


def test_stray_close_token_is_literal_text():
    template = parse_template("a{{/each}}b")
    assert "".join(node.value for node in template.nodes) == "a{{/each}}b"
    assert all(isinstance(node, Text) for node in template.nodes)


def test_unterminated_block_degrades_to_literal_opening_token():
    template = parse_template("{{#each items}}{{title}}")
    assert template.nodes == (Text("{{#each items}}"), Variable("title", "{{title}}"))


def test_spaced_or_invalid_braces_are_not_tokens():
    template = parse_template("{{ client_name }} {{1abc}} {{}}")
    assert template.variable_names() == set()
    assert template.nodes == (Text("{{ client_name }} {{1abc}} {{}}"),)


def test_variable_names_are_matched_whole():
    template = parse_template("{{price}} {{unit_price}} {{#each products}}{{title}}{{/each}}")
    assert template.variable_names() == {"price", "unit_price", "title"}
