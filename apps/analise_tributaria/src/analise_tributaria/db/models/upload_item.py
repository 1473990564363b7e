"""Append-only uploaded item ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from analise_tributaria.db.base import Base


class UploadItem(Base):
    """One consolidated spreadsheet row stored as part of an upload batch.

    A batch has no identifier of its own: every row inserted by one upload
    shares the same ``created_at`` and the latest batch of a company is the
    set of rows carrying the maximum ``created_at`` for that company.
    """

    __tablename__ = "upload_items"
    __table_args__ = (
        Index("ix_upload_items_company_created_at", "company_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    ncm: Mapped[str] = mapped_column(String(20), nullable=False)
    cfop: Mapped[str] = mapped_column(String(20), nullable=False)
    cclasstrib_sugerido: Mapped[str | None] = mapped_column(String(20), nullable=True)
    qtd_registros: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    descricao: Mapped[str] = mapped_column(Text, nullable=False, default="")
    nome_produto: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
