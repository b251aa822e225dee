from __future__ import annotations

import httpx
from sqlalchemy.engine import Engine

from price_alerts.core.config import Settings
from price_alerts.core.database import Base, create_db_engine, create_session_factory
from price_alerts.services.alert_service import AlertService
from price_alerts.services.alert_store import AlertStore
from price_alerts.services.notification_service import NotificationService
from price_alerts.services.providers.coingecko_provider import CoinGeckoProvider


class AlertRuntime:
    def __init__(
        self,
        settings: Settings,
        engine: Engine | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.engine = engine or create_db_engine(settings.database_url)
        self.http = httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=transport)

        self.store = AlertStore(create_session_factory(self.engine))
        self.prices = CoinGeckoProvider(self.http, settings)
        self.notifier = NotificationService(self.http, settings)
        self.alert_service = AlertService(
            self.store,
            self.prices,
            self.notifier,
            fail_fast=settings.fail_fast,
        )

        if settings.auto_create_tables:
            Base.metadata.create_all(bind=self.engine)

    async def close(self) -> None:
        await self.http.aclose()
        self.engine.dispose()
