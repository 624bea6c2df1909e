from __future__ import annotations

from datetime import date
from types import SimpleNamespace

from app.compiler.assembler import compile_content_with_data, compile_preview, sort_parts, wrap_section
from app.core.config import get_config

PARTS = [
    {"id": 1, "title": "One", "content": "<p>first {{client_name}}</p>", "order_index": 2},
    {"id": 2, "title": "Two", "content": "<p>second</p>", "order_index": 0},
    {"id": 3, "title": "Three", "content": "<p>third</p>", "order_index": 1},
]


def _assert_order(html: str, titles: list[str]) -> None:
    positions = [html.index(f">{title}</h3>") for title in titles]
    assert positions == sorted(positions)


def test_preview_orders_by_order_index_regardless_of_input_order():
    _assert_order(compile_preview(PARTS), ["Two", "Three", "One"])
    _assert_order(compile_preview(list(reversed(PARTS))), ["Two", "Three", "One"])


def test_data_compile_orders_by_order_index():
    html = compile_content_with_data(list(reversed(PARTS)), {"client_name": "Ada"})
    _assert_order(html, ["Two", "Three", "One"])
    assert "first Ada" in html


def test_preview_does_not_merge_data():
    assert "{{client_name}}" in compile_preview(PARTS)


def test_empty_parts_compile_to_empty_string():
    assert compile_preview([]) == ""
    assert compile_content_with_data([]) == ""
    assert compile_content_with_data([], {"client_name": "Ada"}, framed=True) == ""


def test_sections_are_joined_with_newlines():
    html = compile_preview(PARTS[:2])
    assert html == "\n".join([wrap_section("Two", "<p>second</p>"), wrap_section("One", "<p>first {{client_name}}</p>")])


def test_sort_is_stable_and_missing_index_sorts_as_zero():
    parts = [{"title": "A"}, {"title": "B", "order_index": 0}, {"title": "C", "order_index": -1}]
    assert [part["title"] for part in sort_parts(parts)] == ["C", "A", "B"]


def test_accepts_attribute_style_parts():
    parts = [
        SimpleNamespace(title="Later", content="x", order_index=1),
        SimpleNamespace(title="Sooner", content="y", order_index=0),
    ]
    _assert_order(compile_preview(parts), ["Sooner", "Later"])


def test_missing_title_renders_empty_heading():
    assert "></h3>" in compile_preview([{"content": "body"}])


def test_framed_document_wraps_body_with_header_and_footer():
    cfg = get_config()
    html = compile_content_with_data(
        PARTS,
        {"client_name": "Ada", "start_date": "2024-01-15"},
        framed=True,
        today=date(2024, 2, 1),
    )

    header, _, rest = html.partition("\n\n")
    assert "February 1, 2024" in header
    assert "Project Start Date:</strong> January 15, 2024" in header
    assert "<p>Ada</p>" in header
    assert "{{client_business}}" in header
    assert cfg.BUSINESS_OWNER_NAME in header
    assert "Agreement Acknowledgment" in rest
    assert f"governed by the laws of {cfg.GOVERNING_LAW}" in rest
    assert rest.index(">Two</h3>") < rest.index("Agreement Acknowledgment")


def test_framed_header_omits_start_date_line_without_a_date():
    html = compile_content_with_data(PARTS, {}, framed=True, today=date(2024, 2, 1))
    assert "Project Start Date" not in html


def test_data_compile_is_total_for_odd_related_data():
    parts = [
        {"title": "Costs", "content": "{{#each products}}{{title}}{{/each}}{{payments}}", "order_index": 0},
        {"title": "Plan", "content": "{{#each selectedMilestones}}<b>{{title}}</b>{{/each}}", "order_index": 1},
    ]
    related = {
        "products": [{"title": "A", "price": 1e30}],
        "payments": [{"title": "Deposit", "amount": "1e27", "due_date": "2024-01-01"}],
        "selectedMilestones": [["x", "y"]],
    }

    html = compile_content_with_data(parts, {}, related)

    assert "$1,000,000,000,000,000,000,000,000,000,000.00" in html
    assert "$1,000,000,000,000,000,000,000,000,000.00" in html
    assert "<b></b>" in html


def test_unusable_order_index_sorts_as_zero():
    parts = [
        {"title": "B", "order_index": 1},
        {"title": "A", "order_index": float("inf")},
        {"title": "C", "order_index": float("nan")},
    ]
    assert [part["title"] for part in sort_parts(parts)] == ["A", "C", "B"]
