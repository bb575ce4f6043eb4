"""Radio program and ad type reference models."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import AuditMixin, Base, SoftDeleteMixin


class RadioProgram(Base, AuditMixin, SoftDeleteMixin):
    __tablename__ = "radio_programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    program_name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    days_of_week: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    locutor_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), index=True)

    locutor = relationship("User")


class AdType(Base, AuditMixin, SoftDeleteMixin):
    __tablename__ = "ad_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type_name: Mapped[str] = mapped_column(String(50), nullable=False)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False)
