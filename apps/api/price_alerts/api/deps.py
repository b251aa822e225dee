from __future__ import annotations

from fastapi import Request

from price_alerts.core.runtime import AlertRuntime


def get_runtime(request: Request) -> AlertRuntime:
    return request.app.state.runtime
