"""SQLAlchemy model package for the contracts schema."""

from app.models.associations import contract_milestone, contract_product, deliverable_product
from app.models.base import Base
from app.models.contract import Contract
from app.models.contract_part import ContractPart
from app.models.contract_part_link import ContractPartLink
from app.models.enums import BillingMode, ContractPartStatus, ContractStatus, PaymentStatus
from app.models.milestone import Milestone
from app.models.payment import Payment
from app.models.product import Deliverable, Product

__all__ = [
    "Base",
    "BillingMode",
    "Contract",
    "ContractPart",
    "ContractPartLink",
    "ContractPartStatus",
    "ContractStatus",
    "Deliverable",
    "Milestone",
    "Payment",
    "PaymentStatus",
    "Product",
    "contract_milestone",
    "contract_product",
    "deliverable_product",
]
