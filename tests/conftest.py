from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, Contract, ContractPart, ContractPartLink, Deliverable, Milestone, Product


def build_session_factory():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session_factory():
    return build_session_factory()


@pytest.fixture
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def part_library(session):
    """Three required parts and one optional part, inserted out of sort order."""
    parts = [
        ContractPart(title="Scope", content="<p>Scope for {{client_name}}</p>", is_required=True, sort_order=1),
        ContractPart(title="Introduction", content="<p>Hello {{client_name}}</p>", is_required=True, sort_order=0),
        ContractPart(title="Payments", content="{{payments}}", is_required=True, sort_order=2),
        ContractPart(title="Extras", content="<p>Optional extras</p>", is_required=False, sort_order=3),
    ]
    session.add_all(parts)
    session.commit()
    return {part.title: part for part in parts}


@pytest.fixture
def contract(session):
    record = Contract(
        title="Website Redesign",
        content="",
        status="draft",
        start_date=date(2024, 1, 15),
        client_name="Ada Client",
        client_business="Client Co",
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


@pytest.fixture
def linked_contract(session, contract, part_library):
    """Contract linked to Introduction, Scope and Extras (in that order)."""
    for index, title in enumerate(["Introduction", "Scope", "Extras"]):
        session.add(
            ContractPartLink(
                contract_id=contract.id,
                contractpart_id=part_library[title].id,
                order_index=index,
            )
        )
    session.commit()
    session.refresh(contract)
    return contract


@pytest.fixture
def catalog(session):
    """Milestones and products with deliverables."""
    design = Deliverable(title="Design mockups")
    build = Deliverable(title="Production build")
    website = Product(
        title="Website",
        description="Marketing site",
        price=Decimal("1200.00"),
        yearly_price=Decimal("12000.00"),
        payment_split_count=3,
        deliverables=[design, build],
    )
    hosting = Product(title="Hosting", price=Decimal("50.00"), yearly_price=None)
    kickoff = Milestone(title="Kickoff", description="Project start", order_index=0)
    launch = Milestone(title="Launch", description="Go live", order_index=1)
    session.add_all([website, hosting, kickoff, launch])
    session.commit()
    return {"website": website, "hosting": hosting, "kickoff": kickoff, "launch": launch}
