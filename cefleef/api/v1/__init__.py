"""API v1 router."""

from fastapi import APIRouter

from cefleef.api.v1 import parsing

router = APIRouter()

router.include_router(parsing.router, prefix="/parsing", tags=["Parsing"])
