"""NBS reference table ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from analise_tributaria.db.base import Base


class NbsEntry(Base):
    """One row of the NBS x LC 116 x cClassTrib reference table."""

    __tablename__ = "nbs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nbs_code: Mapped[str] = mapped_column(String(50), nullable=False)
    descricao_nbs: Mapped[str | None] = mapped_column(Text, nullable=True)
    item_lc_116: Mapped[str | None] = mapped_column(String(50), nullable=True)
    descricao_item: Mapped[str | None] = mapped_column(Text, nullable=True)
    ps_onerosa: Mapped[str | None] = mapped_column(String(10), nullable=True)
    adq_exterior: Mapped[str | None] = mapped_column(String(10), nullable=True)
    indop: Mapped[str | None] = mapped_column(String(50), nullable=True)
    local_incidencia: Mapped[str | None] = mapped_column(String(255), nullable=True)
    c_class_trib: Mapped[str | None] = mapped_column(String(50), nullable=True)
    nome_c_class_trib: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
