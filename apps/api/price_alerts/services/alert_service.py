from __future__ import annotations

import logging
from datetime import datetime, timezone

from price_alerts.core.errors import AlertCheckError, StoreError
from price_alerts.models.alert import PriceAlert, is_triggered
from price_alerts.schemas.alert import AlertOutcome, CheckResult
from price_alerts.services.alert_store import AlertStore
from price_alerts.services.notification_service import NotificationService
from price_alerts.services.providers.base import PriceProvider

logger = logging.getLogger(__name__)


class AlertService:
    def __init__(
        self,
        store: AlertStore,
        prices: PriceProvider,
        notifier: NotificationService,
        fail_fast: bool = True,
    ) -> None:
        self.store = store
        self.prices = prices
        self.notifier = notifier
        self.fail_fast = fail_fast

    async def check_alerts(self) -> CheckResult:
        result = CheckResult(started_at=datetime.now(timezone.utc))
        logger.info("Checking price alerts...")

        alerts = self.store.list_eligible()
        result.checked = len(alerts)

        for alert in alerts:
            try:
                outcome = await self.check_alert(alert)
            except AlertCheckError as exc:
                if self.fail_fast:
                    raise
                logger.warning("Alert %s (%s) failed: %s", alert.id, alert.cryptocurrency, exc)
                outcome = AlertOutcome(
                    alert_id=alert.id,
                    symbol=alert.cryptocurrency,
                    target_price=alert.target_price,
                    condition=alert.condition,
                    error=str(exc),
                )
            result.outcomes.append(outcome)

        logger.info("Checked %d alerts, %d triggered", result.checked, len(result.triggered))
        return result

    async def check_alert(self, alert: PriceAlert) -> AlertOutcome:
        current_price = await self.prices.get_price(alert.cryptocurrency)
        outcome = AlertOutcome(
            alert_id=alert.id,
            symbol=alert.cryptocurrency,
            target_price=alert.target_price,
            condition=alert.condition,
            current_price=current_price,
            triggered=is_triggered(alert.condition, current_price, alert.target_price),
        )
        if not outcome.triggered:
            return outcome

        logger.info("Alert triggered for %s", alert.cryptocurrency)

        to_email = None
        if alert.email_notification:
            to_email = self.store.get_user_email(alert.user_id)
            if not to_email:
                logger.warning("No email address for user %s, alert %s fires silently", alert.user_id, alert.id)

        triggered_at = datetime.now(timezone.utc)
        if not self.store.mark_triggered(alert.id, triggered_at):
            logger.info("Alert %s was already triggered by another run", alert.id)
            return outcome
        outcome.claimed = True

        if to_email:
            try:
                await self.notifier.send_alert_email(
                    to_email=to_email,
                    symbol=alert.cryptocurrency,
                    target_price=alert.target_price,
                    current_price=current_price,
                    condition=alert.condition,
                )
            except BaseException:
                # Cancellation included: an unsent alert must stay eligible.
                self._release(alert.id, triggered_at)
                raise
            outcome.notified = True

        return outcome

    def _release(self, alert_id: str, triggered_at: datetime) -> None:
        logger.error("Email alert for %s was not sent, re-activating it", alert_id)
        try:
            self.store.release(alert_id, triggered_at)
        except StoreError:
            logger.exception("Could not re-activate alert %s", alert_id)
