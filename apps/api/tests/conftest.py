from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from price_alerts.core.config import Settings
from price_alerts.core.database import Base, create_db_engine, create_session_factory
from price_alerts.core.runtime import AlertRuntime
from price_alerts.models import PriceAlert, User

PRICE_URL = "http://prices.test/api/v3/simple/price"
EMAIL_URL = "http://mail.test/functions/v1/send-email"


class FakeUpstream:
    """Answers price and email requests from in-memory state."""

    def __init__(self) -> None:
        self.prices: dict[str, float] = {}
        self.price_requests: list[httpx.Request] = []
        self.emails: list[dict] = []
        self.email_requests: list[httpx.Request] = []
        self.email_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "prices.test":
            self.price_requests.append(request)
            asset_id = request.url.params["ids"]
            if asset_id not in self.prices:
                return httpx.Response(200, json={})
            return httpx.Response(200, json={asset_id: {"usd": self.prices[asset_id]}})

        if request.url.host == "mail.test":
            self.email_requests.append(request)
            if self.email_status >= 300:
                return httpx.Response(self.email_status, text="mailer unavailable")
            self.emails.append(json.loads(request.content))
            return httpx.Response(200, json={"id": "msg_1"})

        return httpx.Response(404)


def as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        service_key="test-service-key",
        notification_url=EMAIL_URL,
        price_api_url=PRICE_URL,
    )


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def runtime(settings, engine, upstream) -> AlertRuntime:
    return AlertRuntime(settings, engine=engine, transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def add_user(session_factory):
    def _add(email: str | None = "trader@example.com", **fields) -> User:
        with session_factory() as db:
            user = User(email=email, **fields)
            db.add(user)
            db.commit()
            db.refresh(user)
            return user

    return _add


@pytest.fixture
def add_alert(session_factory):
    def _add(user_id: str, **fields) -> PriceAlert:
        values = {
            "cryptocurrency": "bitcoin",
            "target_price": 50000.0,
            "condition": "above",
            "email_notification": True,
        }
        values.update(fields)
        with session_factory() as db:
            alert = PriceAlert(user_id=user_id, **values)
            db.add(alert)
            db.commit()
            db.refresh(alert)
            return alert

    return _add


@pytest.fixture
def load_alert(session_factory):
    def _load(alert_id: str) -> PriceAlert:
        with session_factory() as db:
            return db.get(PriceAlert, alert_id)

    return _load
