"""
API router configuration.
"""

from fastapi import APIRouter

from api.endpoints import analysis, health, results

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(analysis.router, tags=["analysis"])
api_router.include_router(results.router, prefix="/analysis-results", tags=["analysis-results"])
