"""SQLAlchemy base metadata and model registration utilities."""

from importlib import import_module

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


def import_orm_models() -> None:
    """Import ORM models so metadata is fully populated."""

    modules = (
        "analise_tributaria.db.models.user",
        "analise_tributaria.db.models.company",
        "analise_tributaria.db.models.user_company",
        "analise_tributaria.db.models.upload_item",
        "analise_tributaria.db.models.nbs_entry",
    )
    for module_name in modules:
        import_module(module_name)
