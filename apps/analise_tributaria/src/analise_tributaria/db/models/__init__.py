"""ORM models for the analise_tributaria domain."""

from analise_tributaria.db.models.company import Company
from analise_tributaria.db.models.nbs_entry import NbsEntry
from analise_tributaria.db.models.upload_item import UploadItem
from analise_tributaria.db.models.user import User
from analise_tributaria.db.models.user_company import UserCompany

__all__ = [
    "Company",
    "NbsEntry",
    "UploadItem",
    "User",
    "UserCompany",
]
