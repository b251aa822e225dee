from __future__ import annotations

import logging

import httpx

from price_alerts.core.config import Settings
from price_alerts.core.errors import NotificationError

logger = logging.getLogger(__name__)


def format_price(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


def build_subject(symbol: str) -> str:
    return f"Price Alert: {symbol} has reached your target!"


def build_html(symbol: str, target_price: float, current_price: float, condition: str) -> str:
    return (
        "<h2>Price Alert Triggered</h2>"
        f"<p>Your price alert for {symbol} has been triggered!</p>"
        f"<p>Target Price: ${format_price(target_price)}</p>"
        f"<p>Current Price: ${format_price(current_price)}</p>"
        f"<p>Condition: Price goes {condition} target</p>"
    )


class NotificationService:
    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self.client = client
        self.url = settings.notification_url
        self.service_key = settings.service_key

    async def send_alert_email(
        self,
        to_email: str,
        symbol: str,
        target_price: float,
        current_price: float,
        condition: str,
    ) -> None:
        payload = {
            "to": [to_email],
            "subject": build_subject(symbol),
            "html": build_html(symbol, target_price, current_price, condition),
        }
        headers = {"Authorization": f"Bearer {self.service_key}"}
        try:
            response = await self.client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise NotificationError(f"Failed to send email: {exc}") from exc

        if not response.is_success:
            raise NotificationError(f"Failed to send email: {response.text}")

        logger.info("Email alert sent to %s", to_email)
