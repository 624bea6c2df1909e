from __future__ import annotations

from app.core.config import get_config
from app.services.contract_part_service import ContractPartService


def test_list_parts_orders_by_sort_order(session, part_library):
    service = ContractPartService(db=session)
    assert [part.title for part in service.list_parts()] == ["Introduction", "Scope", "Payments", "Extras"]


def test_create_part_appends_to_sort_order(session, part_library):
    service = ContractPartService(db=session)
    part = service.create_part(title="Confidentiality", content="<p>NDA</p>", is_required=True)
    assert part.id is not None
    assert part.sort_order == 4
    assert part.status == "published"
    assert service.get_part(part.id).title == "Confidentiality"


def test_create_part_in_empty_library_starts_at_zero(session):
    part = ContractPartService(db=session).create_part(title="First")
    assert part.sort_order == 0
    assert part.content == ""


def test_create_custom_part_uses_configured_defaults(session):
    cfg = get_config()
    part = ContractPartService(db=session).create_custom_part()
    assert part.title == cfg.CUSTOM_PART_TITLE
    assert part.content == cfg.CUSTOM_PART_CONTENT
    assert part.is_required is False


def test_update_part_changes_only_given_fields(session, part_library):
    service = ContractPartService(db=session)
    target = part_library["Extras"]

    updated = service.update_part(target.id, content="<p>More extras</p>", is_required=True)

    assert updated.content == "<p>More extras</p>"
    assert updated.is_required is True
    assert updated.title == "Extras"
    assert service.update_part(9999, title="Nope") is None
