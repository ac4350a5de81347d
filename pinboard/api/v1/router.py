"""API router aggregating all endpoints."""

from fastapi import APIRouter

from pinboard.api.v1 import auth, collections, health, images, users

api_router = APIRouter()

api_router.include_router(
    health.router,
    prefix="",
    tags=["System"],
)

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    images.router,
    prefix="/images",
    tags=["Images"],
)

api_router.include_router(
    collections.router,
    prefix="/collections",
    tags=["Collections"],
)

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)
