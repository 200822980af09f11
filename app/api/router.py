"""
Router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from app.api.endpoints import benefits, session

web_router = APIRouter()

# Login, signup, logout, welcome page
web_router.include_router(session.router)

# Admin-only pages
web_router.include_router(benefits.router)
