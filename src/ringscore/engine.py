from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

from .aggregate import CarryLedger, PointsByPerformer, aggregate_single_event, aggregate_with_carry
from .config import Settings, configure_logging, load_settings
from .events import classify_event
from .models import Event, EventType, ReignInterval, ScoredEvent, SeasonTotals
from .personas import resolve_persona
from .scorer import score_event
from .title_holding import compute_title_holding, infer_reigns_from_events, title_reigns_for_performer

LOGGER = logging.getLogger(__name__)

EventInput = Event | dict[str, Any]
ReignInput = ReignInterval | dict[str, Any]


class ScoringEngine:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

    @classmethod
    def from_env(cls) -> "ScoringEngine":
        """Engine configured from the environment and an optional `.env` file, with logging set up."""
        settings = load_settings()
        configure_logging(settings.log_level)
        return cls(settings)

    def classify_event(self, name: str, event_id: str = "") -> EventType:
        return classify_event(name, event_id)

    def score_event(self, event: EventInput) -> ScoredEvent:
        return score_event(event)

    def aggregate(self, events: Iterable[EventInput]) -> PointsByPerformer:
        totals, ledger = aggregate_with_carry(events)
        pending = sum(1 for balance in ledger.values() if balance.total)
        if pending:
            LOGGER.info("%d performer(s) still hold unrealized tournament carry", pending)
        return totals

    def aggregate_single_event(
        self, event: EventInput, carry_in: CarryLedger | None = None
    ) -> tuple[PointsByPerformer, CarryLedger]:
        return aggregate_single_event(event, carry_in)

    def compute_title_holding(
        self,
        reigns: Iterable[ReignInput],
        first_eligible_month_end: date | None = None,
        today: date | None = None,
    ) -> dict[str, int]:
        return compute_title_holding(
            reigns,
            first_eligible_month_end or self.settings.first_month_end,
            today=today,
            reign_effective_start=self.settings.reign_effective_start,
        )

    def title_reigns_for_performer(
        self, reigns: Iterable[ReignInput], performer: str, today: date | None = None
    ) -> list[tuple[str, list[date]]]:
        return title_reigns_for_performer(
            reigns,
            performer,
            self.settings.first_month_end,
            today=today,
            reign_effective_start=self.settings.reign_effective_start,
        )

    def infer_reigns_from_events(self, events: Iterable[EventInput]) -> list[ReignInterval]:
        return infer_reigns_from_events(events, reign_effective_start=self.settings.reign_effective_start)

    def resolve_persona(self, alias: str, on_date: date | None) -> str | None:
        return resolve_persona(alias, on_date)

    def season_totals(
        self,
        events: Iterable[EventInput],
        reigns: Iterable[ReignInput] | None = None,
        today: date | None = None,
    ) -> PointsByPerformer:
        """Event buckets plus month-end title accrual; reigns are inferred from the events when not supplied."""
        events = list(events)
        totals = self.aggregate(events)
        if reigns is None:
            reigns = self.infer_reigns_from_events(events)
        for performer, points in self.compute_title_holding(reigns, today=today).items():
            totals.setdefault(performer, SeasonTotals()).title_holding += points
        return totals
