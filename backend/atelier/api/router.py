"""
Main API router.
"""

from fastapi import APIRouter
from atelier.api import allocations, clients, projects, statements

api_router = APIRouter()

api_router.include_router(projects.router)
api_router.include_router(clients.router)
api_router.include_router(statements.router)
api_router.include_router(allocations.router)
