"""Seed the contract part library with the agency's standard sections."""

import logging

from sqlalchemy.orm import Session

from app.database.db import get_db_session
from app.database.init_db import init_db
from app.models import ContractPart
from app.services.contract_part_service import ContractPartService

logger = logging.getLogger(__name__)

DEFAULT_PARTS = [
    {
        "title": "Project Overview",
        "content": (
            "<p>This agreement covers the {{projected_length}} engagement for {{client_business}}, "
            "starting {{start_date}}.</p>"
        ),
        "is_required": True,
    },
    {
        "title": "Milestones",
        "content": (
            "<ol>{{#each selectedMilestones}}<li><strong>{{title}}</strong>: {{description}}</li>{{/each}}</ol>"
        ),
        "is_required": True,
    },
    {
        "title": "Products & Deliverables",
        "content": "{{#each products}}<h4>{{title}}</h4><p>{{description}}</p>{{deliverables}}{{/each}}",
        "is_required": True,
    },
    {
        "title": "Payment Schedule",
        "content": "{{payments}}",
        "is_required": True,
    },
    {
        "title": "Revisions",
        "content": "<p>Two rounds of revisions are included per deliverable.</p>",
        "is_required": False,
    },
    {
        "title": "Confidentiality",
        "content": "<p>Both parties keep non-public information shared under this agreement confidential.</p>",
        "is_required": False,
    },
]


def seed_contract_parts(db: Session) -> int:
    """Insert missing default parts (matched by title); returns how many were added."""
    service = ContractPartService(db=db)
    existing = {title for (title,) in db.query(ContractPart.title).all()}
    added = 0
    for part in DEFAULT_PARTS:
        if part["title"] in existing:
            continue
        service.create_part(**part)
        added += 1

    logger.info("seed.contract_parts.completed", extra={"event": "seed.contract_parts.completed", "added": added})
    return added


if __name__ == "__main__":
    init_db()
    with get_db_session() as session:
        seed_contract_parts(session)
