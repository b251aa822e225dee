from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from price_alerts.api.router import api_router
from price_alerts.core.config import Settings, load_settings
from price_alerts.core.logging import configure_logging
from price_alerts.core.runtime import AlertRuntime

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app(settings: Settings | None = None, runtime: AlertRuntime | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        active = runtime
        if active is None:
            # Missing DATABASE_URL / SERVICE_KEY stops startup with ConfigError.
            active = AlertRuntime(settings or load_settings())
        configure_logging(active.settings.log_level)
        app.state.runtime = active
        yield
        await active.close()

    app = FastAPI(
        title="Price Alert Checker",
        version="1.0.0",
        description="Evaluates stored cryptocurrency price alerts and emails users when they fire.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(api_router)
    return app


app = create_app()
