from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable

from .events import is_tournament_finale, is_weekly_show
from .models import CarryBalance, Event, ScoredParticipant, SeasonTotals
from .names import normalize_name
from .personas import canonical_identity
from .schedules import TOURNAMENT
from .scorer import as_event, score_event
from .tournament import SEMIFINAL

LOGGER = logging.getLogger(__name__)

CarryLedger = dict[str, CarryBalance]
PointsByPerformer = dict[str, SeasonTotals]


def copy_ledger(ledger: CarryLedger | None) -> CarryLedger:
    return {performer: replace(balance) for performer, balance in (ledger or {}).items()}


def credit_carry(ledger: CarryLedger, performer: str, sp: ScoredParticipant) -> None:
    """Record a weekly-show tournament award; each stage counts at most once per performer."""
    balance = ledger.setdefault(performer, CarryBalance())
    if sp.tournament_round == SEMIFINAL:
        balance.semifinal = TOURNAMENT.semifinal
    else:
        balance.qualifier = TOURNAMENT.qualifier
    balance.bracket = sp.tournament_bracket or balance.bracket


def realize_carry(ledger: CarryLedger, performer: str) -> int:
    balance = ledger.get(performer)
    if balance is None or balance.total == 0:
        return 0
    points = balance.total
    ledger[performer] = CarryBalance()
    LOGGER.debug(
        "Realized tournament carry for %s: qualifier=%d semifinal=%d bracket=%s",
        performer,
        balance.qualifier,
        balance.semifinal,
        balance.bracket,
    )
    return points


def aggregate_single_event(
    event: Event | dict[str, Any], carry_in: CarryLedger | None = None
) -> tuple[PointsByPerformer, CarryLedger]:
    """One step of the season fold: points earned at `event` and the carry ledger after it."""
    ledger = copy_ledger(carry_in)
    scored = score_event(event)
    weekly = is_weekly_show(scored.event_type)
    finale = is_tournament_finale(scored.event_type)
    totals: PointsByPerformer = {}

    for match in scored.matches:
        for sp in match.per_participant:
            slug = normalize_name(sp.performer)
            if not slug:
                continue
            performer = canonical_identity(slug, scored.date)
            bucket = totals.setdefault(performer, SeasonTotals())
            bucket.title_holding += sp.title_points
            if weekly:
                bucket.weekly_show += sp.event_points
                if sp.tournament_carry:
                    credit_carry(ledger, performer, sp)
                continue
            bucket.premium_event += sp.event_points
            if finale:
                bucket.premium_event += realize_carry(ledger, performer)
    return totals, ledger


def merge_totals(into: PointsByPerformer, other: PointsByPerformer) -> PointsByPerformer:
    for performer, totals in other.items():
        into.setdefault(performer, SeasonTotals()).add(totals)
    return into


def sort_events(events: Iterable[Event | dict[str, Any]]) -> list[Event]:
    """Date-ascending events; undated or badly dated records are logged and dropped."""
    dated: list[Event] = []
    for raw in events:
        event = as_event(raw)
        if event.date is None:
            LOGGER.warning("Skipping event %s: no date", event.id or "<no id>")
            continue
        dated.append(event)
    return sorted(dated, key=lambda e: e.date)


def aggregate_with_carry(
    events: Iterable[Event | dict[str, Any]], carry_in: CarryLedger | None = None
) -> tuple[PointsByPerformer, CarryLedger]:
    totals: PointsByPerformer = {}
    ledger = copy_ledger(carry_in)
    for event in sort_events(events):
        event_totals, ledger = aggregate_single_event(event, ledger)
        merge_totals(totals, event_totals)
    return totals, ledger


def aggregate(events: Iterable[Event | dict[str, Any]]) -> PointsByPerformer:
    """Season totals per canonical performer, split into weekly-show, premium-event and title-holding buckets."""
    totals, _ = aggregate_with_carry(events)
    return totals
