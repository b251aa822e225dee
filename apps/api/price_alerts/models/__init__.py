from __future__ import annotations

from price_alerts.models.alert import AlertCondition, PriceAlert, is_triggered
from price_alerts.models.user import User

__all__ = [
    "AlertCondition",
    "PriceAlert",
    "User",
    "is_triggered",
]
