from fastapi import APIRouter

from mailvet.api.validate import router as validate_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(validate_router, prefix="/api", tags=["validate"])
