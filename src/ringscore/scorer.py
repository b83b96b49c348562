from __future__ import annotations

import logging
from typing import Any

from .calculator import calculate_match_points
from .corrections import apply_corrections
from .events import classify_event
from .extractor import extract_match_participants
from .matches import is_promotional_segment, is_valid_match, match_order, title_outcome
from .models import Event, EventType, ScoredEvent, ScoredMatch
from .names import normalize_name, text

LOGGER = logging.getLogger(__name__)


def as_event(event: Event | dict[str, Any]) -> Event:
    return event if isinstance(event, Event) else Event.from_dict(event)


def distinct_performers(names: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for name in names:
        slug = normalize_name(name)
        if slug and slug not in seen:
            seen.add(slug)
            out.append(name)
    return out


def score_event(event: Event | dict[str, Any]) -> ScoredEvent:
    """Per-match, per-performer point ledger for one event."""
    event = apply_corrections(as_event(event))
    event_type = classify_event(event.name, event.id)
    scored = ScoredEvent(event_id=event.id, event_name=event.name, event_type=event_type, date=event.date)

    for index, match in enumerate(event.matches):
        if not is_valid_match(match):
            LOGGER.warning("Skipping match #%d of %s: no participants and no result", index, event.id)
            continue
        row = ScoredMatch(
            order=match_order(match),
            participants=match.get("participants"),
            result=text(match.get("result")),
            method=text(match.get("method")),
            title=text(match.get("title")),
            title_outcome=title_outcome(match),
        )
        scored.matches.append(row)
        if is_promotional_segment(match):
            row.is_promotional_segment = True
            continue
        if event_type is EventType.UNKNOWN:
            continue

        extracted = extract_match_participants(match)
        for performer in distinct_performers(extracted.scoring_participants):
            row.per_participant.append(
                calculate_match_points(
                    match,
                    event_type,
                    event.matches,
                    performer,
                    event_id=event.id,
                    event_statistics=event.statistics,
                    extracted=extracted,
                )
            )
    return scored
