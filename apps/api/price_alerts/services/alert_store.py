from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from price_alerts.core.errors import StoreError
from price_alerts.models.alert import PriceAlert
from price_alerts.models.user import User

logger = logging.getLogger(__name__)


class AlertStore:
    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def list_eligible(self) -> list[PriceAlert]:
        try:
            with self.session_factory() as db:
                return (
                    db.query(PriceAlert)
                    .filter(PriceAlert.is_active.is_(True), PriceAlert.triggered_at.is_(None))
                    .all()
                )
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not load active price alerts: {exc}") from exc

    def mark_triggered(self, alert_id: str, triggered_at: datetime) -> bool:
        # False when another run already triggered it.
        try:
            with self.session_factory() as db:
                updated = (
                    db.query(PriceAlert)
                    .filter(
                        PriceAlert.id == alert_id,
                        PriceAlert.is_active.is_(True),
                        PriceAlert.triggered_at.is_(None),
                    )
                    .update({"triggered_at": triggered_at, "is_active": False}, synchronize_session=False)
                )
                db.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not update price alert {alert_id}: {exc}") from exc
        return updated == 1

    def release(self, alert_id: str, triggered_at: datetime) -> None:
        try:
            with self.session_factory() as db:
                db.query(PriceAlert).filter(
                    PriceAlert.id == alert_id,
                    PriceAlert.triggered_at == triggered_at,
                ).update({"triggered_at": None, "is_active": True}, synchronize_session=False)
                db.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not re-activate price alert {alert_id}: {exc}") from exc
        logger.info("Alert %s re-activated for the next run", alert_id)

    def get_user_email(self, user_id: str) -> str | None:
        try:
            with self.session_factory() as db:
                user = db.get(User, user_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not look up user {user_id}: {exc}") from exc
        if not user or not user.email:
            return None
        return user.email
