"""SQLAlchemy model package for the contract management schema."""

from app.models.base import Base
from app.models.client import Client
from app.models.contract import Contract, ContractSequence
from app.models.contract_attachments import ContractFile, Payment, SpotSchedule
from app.models.enums import ContractStatus, PaymentStatus, SpotStatus, UserRole, Weekday
from app.models.radio_program import AdType, RadioProgram
from app.models.user import User

__all__ = [
    "AdType",
    "Base",
    "Client",
    "Contract",
    "ContractFile",
    "ContractSequence",
    "ContractStatus",
    "Payment",
    "PaymentStatus",
    "RadioProgram",
    "SpotSchedule",
    "SpotStatus",
    "User",
    "UserRole",
    "Weekday",
]
