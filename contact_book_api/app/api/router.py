"""
Top‑level API router.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import contacts, health

router = APIRouter()

router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
router.include_router(health.router, prefix="/health", tags=["health"])
