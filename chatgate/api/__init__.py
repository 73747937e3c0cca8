"""API routes."""

from fastapi import APIRouter

from chatgate.api import auth, conversations, health, query

# Mounted under API_PREFIX (default /api).
router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(conversations.router, prefix="/conversations", tags=["conversations"])
router.include_router(health.router, prefix="/health", tags=["health"])

# Mounted at the application root (POST /query).
query_router = APIRouter()
query_router.include_router(query.router, prefix="/query", tags=["query"])
