from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from price_alerts.api.deps import get_runtime
from price_alerts.core.runtime import AlertRuntime
from price_alerts.schemas.alert import CheckResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["alerts"])


@router.api_route(
    "/check-price-alerts",
    methods=["GET", "POST"],
    response_model=CheckResponse,
    responses={500: {"model": ErrorResponse}},
)
async def check_price_alerts(runtime: AlertRuntime = Depends(get_runtime)):
    try:
        result = await runtime.alert_service.check_alerts()
    except Exception as exc:
        logger.exception("Error processing price alerts")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    if not result.ok:
        logger.error("Price alert check finished with errors")
        return JSONResponse(status_code=500, content={"error": result.first_error})
    return {"status": "success"}
