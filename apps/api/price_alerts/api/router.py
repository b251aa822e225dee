from __future__ import annotations

from fastapi import APIRouter

from price_alerts.api.endpoints import alerts

api_router = APIRouter()
api_router.include_router(alerts.router)
