"""Assemble ordered contract parts into the final contract HTML."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from app.compiler.formatting import field, format_long_date
from app.compiler.renderer import render_template
from app.core.config import get_config

SECTION_TEMPLATE = (
    '<div class="contract-section" style="margin-bottom: 2rem;">\n'
    '  <h3 style="font-size: 1.25rem; font-weight: 600; margin-bottom: 1rem; color: #1f2937;">{title}</h3>\n'
    '  <div class="section-content" style="color: #374151; line-height: 1.6;">{content}</div>\n'
    "</div>"
)

HEADER_TEMPLATE = """<div class="contract-header">
  <h2>Agreement/Contract Details</h2>
  <div class="contract-date-section">
    <p><strong>This agreement is made as of:</strong></p>
    <p><strong>Today's Date:</strong></p>
    <p>{{today}}</p>
    {start_date_line}
  </div>
  <div class="parties-section">
    <p><strong>This agreement is made between:</strong></p>
    <div class="client-details">
      <h3><strong>Client Details</strong></h3>
      <p><strong>Full Name (First and Last):</strong></p>
      <p>{{client_name}}</p>
      <p><strong>Business or Company Name:</strong></p>
      <p>{{client_business}}</p>
      <p><strong>Company or Personal Address:</strong></p>
      <p>{{company_address}}</p>
      <p><strong>Email Address:</strong></p>
      <p>{{company_email}}</p>
      <p>(hereinafter "Client" or "I")</p>
    </div>
    <div class="business-owner-details">
      <h3><strong>Business Owner</strong></h3>
      <p><strong>Name:</strong> {owner_name}</p>
      <p><strong>Business:</strong> {business_name}</p>
      <p><strong>Address:</strong> {business_address}</p>
      <p>(hereinafter "Business owner" or "We")</p>
    </div>
  </div>
</div>"""

FOOTER_TEMPLATE = """<div class="contract-footer">
  <div class="signature-section">
    <h3>Agreement Acknowledgment</h3>
    <p>By signing below, both parties acknowledge that they have read, understood, and agree to be bound by the terms and conditions outlined in this contract.</p>
    <div class="signature-block">
      <p><strong>Client Signature:</strong> _________________________ <strong>Date:</strong> _____________</p>
      <p><strong>Print Name:</strong> _________________________</p>
    </div>
    <div class="signature-block">
      <p><strong>Business Owner Signature:</strong> _________________________ <strong>Date:</strong> _____________</p>
      <p><strong>Print Name:</strong> {owner_name}</p>
    </div>
  </div>
  <div class="terms-section">
    <h3>Additional Terms</h3>
    <p>This contract represents the entire agreement between the parties and supersedes all prior negotiations, representations, or agreements relating to the subject matter herein. Any modifications to this contract must be made in writing and signed by both parties.</p>
    <p>If any provision of this contract is deemed invalid or unenforceable, the remaining provisions shall continue to be valid and enforceable.</p>
    <p>This contract shall be governed by the laws of {governing_law}.</p>
  </div>
</div>"""


def _order_key(part: Any) -> int:
    value = field(part, "order_index")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def sort_parts(parts: Iterable[Any]) -> list[Any]:
    """Stable ascending sort on ``order_index`` (missing values sort as 0)."""
    return sorted(parts, key=_order_key)


def wrap_section(title: Any, content: str) -> str:
    return SECTION_TEMPLATE.format(title="" if title is None else title, content=content)


def compile_preview(parts: Iterable[Any]) -> str:
    """Concatenate sections without merging any data into the content."""
    return "\n".join(
        wrap_section(field(part, "title"), field(part, "content") or "") for part in sort_parts(parts)
    )


def render_header(contract_data: Mapping[str, Any], today: date | None = None) -> str:
    cfg = get_config()
    start_date = format_long_date(contract_data.get("start_date"))
    start_date_line = f"<p><strong>Project Start Date:</strong> {start_date}</p>" if start_date else ""
    source = (
        HEADER_TEMPLATE.replace("{start_date_line}", start_date_line)
        .replace("{owner_name}", cfg.BUSINESS_OWNER_NAME)
        .replace("{business_name}", cfg.BUSINESS_NAME)
        .replace("{business_address}", cfg.BUSINESS_ADDRESS)
    )
    scope = {"today": format_long_date(today or date.today())}
    scope.update({key: value for key, value in contract_data.items() if value is not None})
    return render_template(source, scope)


def render_footer() -> str:
    cfg = get_config()
    return FOOTER_TEMPLATE.replace("{owner_name}", cfg.BUSINESS_OWNER_NAME).replace(
        "{governing_law}", cfg.GOVERNING_LAW
    )


def compile_content_with_data(
    parts: Iterable[Any],
    contract_data: Mapping[str, Any] | None = None,
    related_data: Mapping[str, Any] | None = None,
    framed: bool = False,
    today: date | None = None,
) -> str:
    """Merge data into every part and assemble the contract body.

    Returns an empty string when there are no parts, framed or not.
    """
    ordered = sort_parts(parts)
    if not ordered:
        return ""

    contract_data = contract_data or {}
    related_data = related_data or {}
    body = "\n".join(
        wrap_section(
            field(part, "title"),
            render_template(field(part, "content") or "", contract_data, related_data),
        )
        for part in ordered
    )
    if not framed:
        return body
    return "\n\n".join((render_header(contract_data, today=today), body, render_footer()))
