"""Template parsing for contract part content.

Part content is HTML with a small set of mustache-style tokens:

* ``{{field}}`` - a scalar reference;
* ``{{#each collection}}...{{/each}}`` - a repeated region, which may nest.

The source is tokenized once into an immutable tree. Anything that does not
form a valid token (an unterminated block, a stray ``{{/each}}``, braces
around text that is not a name) is kept as literal text, so parsing never
fails and every node remembers the exact source text it came from.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Union

TOKEN_PATTERN = re.compile(
    r"\{\{(?:#each\s+(?P<collection>[A-Za-z_][\w-]*)|(?P<close>/each)|(?P<name>[A-Za-z_][\w-]*))\}\}"
)


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Variable:
    name: str
    raw: str


@dataclass(frozen=True)
class EachBlock:
    collection: str
    body: tuple["Node", ...]
    raw: str


Node = Union[Text, Variable, EachBlock]


@dataclass(frozen=True)
class Template:
    source: str
    nodes: tuple[Node, ...]

    def variable_names(self) -> set[str]:
        """All scalar names referenced anywhere in the template."""
        return {node.name for node in _walk(self.nodes) if isinstance(node, Variable)}

    def collection_names(self) -> set[str]:
        return {node.collection for node in _walk(self.nodes) if isinstance(node, EachBlock)}


@dataclass
class _OpenBlock:
    collection: str
    open_raw: str
    start: int
    children: list[Node] = field(default_factory=list)


def _walk(nodes: tuple[Node, ...]):
    for node in nodes:
        yield node
        if isinstance(node, EachBlock):
            yield from _walk(node.body)


@lru_cache(maxsize=512)
def parse_template(source: str | None) -> Template:
    """Parse template source into a :class:`Template` tree."""
    source = source or ""
    root: list[Node] = []
    stack: list[_OpenBlock] = []
    cursor = 0

    def sink() -> list[Node]:
        return stack[-1].children if stack else root

    for match in TOKEN_PATTERN.finditer(source):
        if match.start() > cursor:
            sink().append(Text(source[cursor : match.start()]))
        cursor = match.end()
        token = match.group(0)

        if match.group("collection"):
            stack.append(_OpenBlock(match.group("collection"), token, match.start()))
        elif match.group("close"):
            if not stack:
                sink().append(Text(token))
                continue
            block = stack.pop()
            sink().append(
                EachBlock(
                    collection=block.collection,
                    body=tuple(block.children),
                    raw=source[block.start : match.end()],
                )
            )
        else:
            sink().append(Variable(name=match.group("name"), raw=token))

    if cursor < len(source):
        sink().append(Text(source[cursor:]))

    # Unterminated blocks degrade to literal opening tokens around their content.
    while stack:
        block = stack.pop()
        sink().extend([Text(block.open_raw), *block.children])

    return Template(source=source, nodes=tuple(root))
