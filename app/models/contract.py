"""Contract model module."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import AuditMixin, Base, enum_column_type
from app.models.enums import ContractStatus, PaymentStatus


class Contract(Base, AuditMixin):
    __tablename__ = "contracts"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_contracts_date_range"),
        CheckConstraint("total_spots > 0", name="ck_contracts_total_spots"),
        CheckConstraint(
            "discount_percentage >= 0 AND discount_percentage <= 100",
            name="ck_contracts_discount_range",
        ),
        Index("idx_contracts_status", "status"),
        Index("idx_contracts_client_status", "client_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contract_number: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    client_id: Mapped[int] = mapped_column(ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False)
    program_id: Mapped[int] = mapped_column(ForeignKey("radio_programs.id", ondelete="RESTRICT"), nullable=False, index=True)
    ad_type_id: Mapped[int] = mapped_column(ForeignKey("ad_types.id", ondelete="RESTRICT"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_spots: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_spot: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    discount_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"), nullable=False)
    total_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    final_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[ContractStatus] = mapped_column(
        enum_column_type(ContractStatus), default=ContractStatus.DRAFT, nullable=False
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        enum_column_type(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    approved_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))

    client = relationship("Client", back_populates="contracts")
    program = relationship("RadioProgram")
    ad_type = relationship("AdType")
    creator = relationship("User", foreign_keys=[created_by])
    approver = relationship("User", foreign_keys=[approved_by])


class ContractSequence(Base):
    """Per-year counter row that serializes contract number allocation."""

    __tablename__ = "contract_sequences"

    year: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
