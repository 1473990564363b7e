"""Create users, companies, associations, upload items and NBS tables.

Revision ID: 001_initial_tables
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "is_admin",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )

    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("cnpj", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "user_companies",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "company_id"),
    )

    op.create_table(
        "upload_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("ncm", sa.String(length=20), nullable=False),
        sa.Column("cfop", sa.String(length=20), nullable=False),
        sa.Column("cclasstrib_sugerido", sa.String(length=20), nullable=True),
        sa.Column("qtd_registros", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=False),
        sa.Column("nome_produto", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_upload_items_company_created_at",
        "upload_items",
        ["company_id", "created_at"],
    )

    op.create_table(
        "nbs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nbs_code", sa.String(length=50), nullable=False),
        sa.Column("descricao_nbs", sa.Text(), nullable=True),
        sa.Column("item_lc_116", sa.String(length=50), nullable=True),
        sa.Column("descricao_item", sa.Text(), nullable=True),
        sa.Column("ps_onerosa", sa.String(length=10), nullable=True),
        sa.Column("adq_exterior", sa.String(length=10), nullable=True),
        sa.Column("indop", sa.String(length=50), nullable=True),
        sa.Column("local_incidencia", sa.String(length=255), nullable=True),
        sa.Column("c_class_trib", sa.String(length=50), nullable=True),
        sa.Column("nome_c_class_trib", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("nbs")
    op.drop_index("ix_upload_items_company_created_at", table_name="upload_items")
    op.drop_table("upload_items")
    op.drop_table("user_companies")
    op.drop_table("companies")
    op.drop_table("users")
