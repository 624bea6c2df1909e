"""Evaluate parsed templates against contract data.

Rendering walks the tree once with a chain of scopes: each-block items on the
inside, then computed values (the payments table), then the contract's own
scalar fields. Lookups fall outward until a value is found, and a token that
resolves nowhere is written back verbatim so authors can see missing data.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from app.compiler.formatting import field, format_usd, parse_amount, stringify
from app.compiler.payments import render_payments_table
from app.compiler.template import EachBlock, Node, Text, Variable, parse_template

MILESTONES = "selectedMilestones"
PRODUCTS = "products"
PAYMENTS = "payments"

_SCALARS = (str, int, float, Decimal, date)


@dataclass(frozen=True)
class Scope:
    values: Mapping[str, Any]
    collections: Mapping[str, Any]


def _record_fields(item: Any) -> dict[str, Any]:
    if isinstance(item, Mapping):
        return dict(item)
    attributes = getattr(item, "__dict__", None)
    if isinstance(item, _SCALARS) or not isinstance(attributes, Mapping):
        return {}
    return {key: value for key, value in attributes.items() if not key.startswith("_")}


def _list_fields(fields: Mapping[str, Any]) -> dict[str, list]:
    return {key: value for key, value in fields.items() if isinstance(value, list)}


def _milestone_scope(item: Any) -> Scope:
    fields = _record_fields(item)
    values = dict(fields)
    values["title"] = field(item, "title") or ""
    values["description"] = field(item, "description") or ""
    return Scope(values=values, collections=_list_fields(fields))


def _deliverables_html(deliverables: Any) -> str:
    if not isinstance(deliverables, list):
        return ""
    entries = []
    for deliverable in deliverables:
        if isinstance(deliverable, _SCALARS):
            label = deliverable
        else:
            label = field(deliverable, "title") or field(deliverable, "name") or ""
        entries.append(f"<li>{label}</li>")
    if not entries:
        return ""
    return f"<ul>{''.join(entries)}</ul>"


def _product_scope(item: Any) -> Scope:
    fields = _record_fields(item)
    values = dict(fields)
    values["title"] = field(item, "title") or field(item, "name") or ""
    values["description"] = field(item, "description") or ""
    values["deliverables"] = _deliverables_html(field(item, "deliverables"))
    # Line items never show their own price; the block total follows the items.
    values["price"] = ""
    collections = _list_fields(fields)
    collections.pop("deliverables", None)
    return Scope(values=values, collections=collections)


def _generic_scope(item: Any) -> Scope:
    fields = _record_fields(item)
    values = dict(fields)
    if isinstance(item, _SCALARS):
        values["this"] = item
    return Scope(values=values, collections=_list_fields(fields))


def products_total_html(products: Sequence[Any]) -> str:
    total = sum((parse_amount(field(product, "price")) for product in products), Decimal("0"))
    return (
        '<div style="margin-top: 2rem; padding: 1rem; background-color: #f0f9ff; '
        'border: 2px solid #0ea5e9; border-radius: 8px;">'
        '<h4 style="margin: 0 0 0.5rem 0; font-weight: 600; color: #0c4a6e;">Total Project Cost</h4>'
        '<p style="margin: 0; font-size: 1.5rem; font-weight: bold; color: #0ea5e9;">'
        f"{format_usd(total)}</p>"
        "</div>"
    )


ITEM_SCOPES: dict[str, Callable[[Any], Scope]] = {
    MILESTONES: _milestone_scope,
    PRODUCTS: _product_scope,
}

BLOCK_FOOTERS: dict[str, Callable[[Sequence[Any]], str]] = {
    PRODUCTS: products_total_html,
}


class Renderer:
    """Render template trees against a chain of scopes."""

    def __init__(self, scopes: Sequence[Scope]) -> None:
        # Innermost scope first.
        self.scopes = tuple(scopes)

    def _push(self, scope: Scope) -> "Renderer":
        return Renderer((scope, *self.scopes))

    def resolve(self, name: str) -> str | None:
        for scope in self.scopes:
            if name in scope.values:
                rendered = stringify(scope.values[name])
                if rendered is not None:
                    return rendered
        return None

    def collection(self, name: str) -> list | None:
        for scope in self.scopes:
            if name in scope.collections:
                value = scope.collections[name]
                return value if isinstance(value, list) else None
        return None

    def render_nodes(self, nodes: Sequence[Node]) -> str:
        return "".join(self.render_node(node) for node in nodes)

    def render_node(self, node: Node) -> str:
        if isinstance(node, Text):
            return node.value
        if isinstance(node, Variable):
            resolved = self.resolve(node.name)
            return node.raw if resolved is None else resolved
        return self.render_block(node)

    def render_block(self, block: EachBlock) -> str:
        items = self.collection(block.collection)
        if items is None:
            return block.raw

        make_scope = ITEM_SCOPES.get(block.collection, _generic_scope)
        rendered = "".join(self._push(make_scope(item)).render_nodes(block.body) for item in items)
        footer = BLOCK_FOOTERS.get(block.collection)
        if footer is not None:
            rendered += footer(items)
        return rendered


def _computed_values(related_data: Mapping[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    payments = related_data.get(PAYMENTS)
    if isinstance(payments, list):
        values[PAYMENTS] = render_payments_table(payments)
    return values


def _collections(related_data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in related_data.items() if isinstance(value, list)}


def render_template(
    template: str | None,
    contract_data: Mapping[str, Any] | None = None,
    related_data: Mapping[str, Any] | None = None,
) -> str:
    """Run each-block expansion, payments rendering and scalar substitution."""
    contract_data = contract_data or {}
    related_data = related_data or {}
    renderer = Renderer(
        (
            Scope(values=_computed_values(related_data), collections=_collections(related_data)),
            Scope(values=contract_data, collections={}),
        )
    )
    return renderer.render_nodes(parse_template(template).nodes)


def substitute(template: str | None, data: Mapping[str, Any] | None) -> str:
    """Replace ``{{field}}`` tokens whose value is not None.

    Tokens inside each-blocks are left for block expansion.
    """
    renderer = Renderer((Scope(values=data or {}, collections={}),))
    return renderer.render_nodes(parse_template(template).nodes)


def expand_each_blocks(template: str | None, related_data: Mapping[str, Any] | None) -> str:
    """Expand ``{{#each}}`` regions whose collection is a list.

    Scalar tokens that the current item cannot resolve stay in place for a
    later :func:`substitute` pass.
    """
    renderer = Renderer((Scope(values={}, collections=_collections(related_data or {})),))
    return renderer.render_nodes(parse_template(template).nodes)


def render_payments(template: str | None, related_data: Mapping[str, Any] | None) -> str:
    """Replace ``{{payments}}`` with the schedule table when payments are a list."""
    renderer = Renderer((Scope(values=_computed_values(related_data or {}), collections={}),))
    return renderer.render_nodes(parse_template(template).nodes)
