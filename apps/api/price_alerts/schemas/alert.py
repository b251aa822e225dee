from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class AlertOutcome(BaseModel):
    alert_id: str
    symbol: str
    target_price: float
    condition: str
    current_price: float | None = None
    triggered: bool = False
    claimed: bool = False
    notified: bool = False
    error: str | None = None


class CheckResult(BaseModel):
    started_at: datetime
    checked: int = 0
    outcomes: list[AlertOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(outcome.error is None for outcome in self.outcomes)

    @property
    def triggered(self) -> list[AlertOutcome]:
        return [outcome for outcome in self.outcomes if outcome.triggered and outcome.claimed]

    @property
    def first_error(self) -> str | None:
        return next((outcome.error for outcome in self.outcomes if outcome.error), None)


class CheckResponse(BaseModel):
    status: str = "success"


class ErrorResponse(BaseModel):
    error: str
