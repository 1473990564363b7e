"""API v1 router registration."""

from fastapi import APIRouter

from analise_tributaria.api.routes import (
    auth,
    companies,
    nbs,
    reports,
    uploads,
    users,
)

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(auth.router)
v1_router.include_router(users.router)
v1_router.include_router(companies.router)
v1_router.include_router(uploads.router)
v1_router.include_router(reports.router)
v1_router.include_router(nbs.router)
