"""API v1: aggregates all routers under a single prefix."""

from fastapi import APIRouter

from irtus.api.v1.routers import generation, sessions

router = APIRouter()
router.include_router(generation.router)
router.include_router(sessions.router)
