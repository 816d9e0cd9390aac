from fastapi import APIRouter

from snipers.api.endpoints import (
    health,
    auth,
    users,
    strategies,
    positions,
    portfolio,
)

api_router = APIRouter()
api_router.include_router(health.router, tags=["system"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(strategies.router, tags=["strategies"])
api_router.include_router(positions.router, tags=["positions"])
api_router.include_router(portfolio.router, tags=["portfolio"])
