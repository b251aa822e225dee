from __future__ import annotations


class AlertCheckError(Exception):
    kind = "alert_check"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(AlertCheckError):
    kind = "config"


class PriceFetchError(AlertCheckError):
    kind = "price_fetch"


class StoreError(AlertCheckError):
    kind = "store"


class NotificationError(AlertCheckError):
    kind = "notification"
