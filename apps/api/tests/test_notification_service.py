from __future__ import annotations

import json

import httpx
import pytest

from price_alerts.core.errors import NotificationError
from price_alerts.services.notification_service import NotificationService, build_html, format_price


def test_format_price_drops_trailing_zero():
    assert format_price(50000.0) == "50000"
    assert format_price(0.0456) == "0.0456"
    assert format_price(1234.5) == "1234.5"


def test_html_mentions_prices_and_condition():
    html = build_html("solana", 150.0, 149.25, "below")

    assert "solana" in html
    assert "Target Price: $150<" in html
    assert "Current Price: $149.25<" in html
    assert "Price goes below target" in html


async def test_posts_email_with_bearer_credential(settings):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "msg_1"})

    service = NotificationService(httpx.AsyncClient(transport=httpx.MockTransport(handler)), settings)

    await service.send_alert_email(
        to_email="trader@example.com",
        symbol="bitcoin",
        target_price=50000.0,
        current_price=51000.0,
        condition="above",
    )

    request = seen[0]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert str(request.url) == settings.notification_url
    assert request.headers["authorization"] == "Bearer test-service-key"
    assert body["to"] == ["trader@example.com"]
    assert body["subject"] == "Price Alert: bitcoin has reached your target!"
    assert "$50000" in body["html"]
    assert "$51000" in body["html"]


async def test_non_success_response_raises(settings):
    service = NotificationService(
        httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(422, text="invalid recipient"))),
        settings,
    )

    with pytest.raises(NotificationError, match="invalid recipient"):
        await service.send_alert_email("x@example.com", "bitcoin", 1.0, 2.0, "above")


async def test_transport_error_raises(settings):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    service = NotificationService(httpx.AsyncClient(transport=httpx.MockTransport(handler)), settings)

    with pytest.raises(NotificationError) as excinfo:
        await service.send_alert_email("x@example.com", "bitcoin", 1.0, 2.0, "above")

    assert excinfo.value.kind == "notification"
