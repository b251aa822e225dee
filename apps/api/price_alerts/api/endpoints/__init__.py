from price_alerts.api.endpoints import alerts

__all__ = ["alerts"]
