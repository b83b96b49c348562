from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable

from .aggregate import sort_events
from .config import DEFAULT_FIRST_MONTH_END, DEFAULT_REIGN_EFFECTIVE_START
from .corrections import apply_corrections
from .extractor import extract_match_participants
from .matches import is_title_change, is_title_match
from .models import Event, ReignInterval
from .names import normalize_name, text

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TitleTier:
    pattern: re.Pattern[str]
    points: int


# Most specific first; the first pattern found in the title name decides the bonus.
TITLE_TIERS: tuple[TitleTier, ...] = (
    TitleTier(re.compile(r"women'?s?\s+world\s+champion|women'?s?\s+champion", re.IGNORECASE), 10),
    TitleTier(re.compile(r"undisputed\s+wwe|wwe\s+undisputed", re.IGNORECASE), 10),
    TitleTier(re.compile(r"heavyweight|heavy\s+weight|world\s+champion", re.IGNORECASE), 10),
    TitleTier(re.compile(r"intercontinental", re.IGNORECASE), 8),
    TitleTier(re.compile(r"\b(?:us|u\.s\.)\s+champion|\bus\b|united\s+states", re.IGNORECASE), 7),
    TitleTier(re.compile(r"tag\s+team", re.IGNORECASE), 4),
)
DEFAULT_TITLE_POINTS = 5


def title_points_for(title: Any) -> int:
    name = text(title)
    for tier in TITLE_TIERS:
        if tier.pattern.search(name):
            return tier.points
    return DEFAULT_TITLE_POINTS


def month_end(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def month_ends_since(first_month_end: date, today: date | None = None) -> list[date]:
    """Month-ends from `first_month_end` through the last fully completed month before `today`."""
    today = today or date.today()
    cutoff = today.replace(day=1)
    out: list[date] = []
    cursor = first_month_end.replace(day=1)
    while cursor < cutoff:
        end = month_end(cursor)
        if end >= first_month_end:
            out.append(end)
        cursor = end + timedelta(days=1)
    return out


def as_reigns(reigns: Iterable[ReignInterval | dict[str, Any]]) -> list[ReignInterval]:
    out: list[ReignInterval] = []
    for row in reigns:
        reign = row if isinstance(row, ReignInterval) else ReignInterval.from_dict(row)
        if reign is None:
            LOGGER.debug("Ignoring reign without champion or won date: %r", row)
            continue
        out.append(reign)
    return out


def holds_at(reign: ReignInterval, end: date, reign_effective_start: date = DEFAULT_REIGN_EFFECTIVE_START) -> bool:
    if end < reign_effective_start:
        return False
    won = max(reign.won_date, reign_effective_start)
    return won <= end and (reign.lost_date is None or reign.lost_date > end)


def compute_title_holding_for_month(
    reigns: Iterable[ReignInterval | dict[str, Any]],
    end: date,
    reign_effective_start: date = DEFAULT_REIGN_EFFECTIVE_START,
) -> dict[str, int]:
    """Title-holding points for a single month-end."""
    points: dict[str, int] = {}
    for reign in as_reigns(reigns):
        performer = normalize_name(reign.performer)
        if performer and holds_at(reign, end, reign_effective_start):
            points[performer] = points.get(performer, 0) + title_points_for(reign.title)
    return points


def compute_title_holding(
    reigns: Iterable[ReignInterval | dict[str, Any]],
    first_eligible_month_end: date = DEFAULT_FIRST_MONTH_END,
    today: date | None = None,
    reign_effective_start: date = DEFAULT_REIGN_EFFECTIVE_START,
) -> dict[str, int]:
    """Month-end accrual per performer; the month in progress is never counted."""
    reigns = as_reigns(reigns)
    points: dict[str, int] = {}
    for end in month_ends_since(first_eligible_month_end, today):
        for performer, earned in compute_title_holding_for_month(reigns, end, reign_effective_start).items():
            points[performer] = points.get(performer, 0) + earned
    return points


def title_reigns_for_performer(
    reigns: Iterable[ReignInterval | dict[str, Any]],
    performer: str,
    first_eligible_month_end: date = DEFAULT_FIRST_MONTH_END,
    today: date | None = None,
    reign_effective_start: date = DEFAULT_REIGN_EFFECTIVE_START,
) -> list[tuple[str, list[date]]]:
    slug = normalize_name(performer)
    month_ends = month_ends_since(first_eligible_month_end, today)
    out: list[tuple[str, list[date]]] = []
    for reign in as_reigns(reigns):
        if normalize_name(reign.performer) != slug:
            continue
        held = [end for end in month_ends if holds_at(reign, end, reign_effective_start)]
        if held:
            out.append((reign.title or "Championship", held))
    return out


def infer_reigns_from_events(
    events: Iterable[Event | dict[str, Any]],
    reign_effective_start: date = DEFAULT_REIGN_EFFECTIVE_START,
) -> list[ReignInterval]:
    """Reign intervals rebuilt from title-change matches, for when no reign history is available."""
    dated = [e for e in sort_events(events) if e.date is not None and e.date >= reign_effective_start]

    current: dict[str, list[ReignInterval]] = {}
    closed: list[ReignInterval] = []
    for event in dated:
        for match in apply_corrections(event).matches:
            if not is_title_match(match) or not is_title_change(match):
                continue
            title = text(match.get("title"))
            winners = [w for w in extract_match_participants(match).winners if normalize_name(w)]
            if not winners:
                LOGGER.warning("Title change without a readable winner at %s: %r", event.id, match.get("result"))
                continue
            for previous in current.get(title, []):
                previous.lost_date = event.date
                closed.append(previous)
            current[title] = [ReignInterval(normalize_name(w), title, event.date) for w in winners]

    open_reigns = [reign for held in current.values() for reign in held]
    return closed + open_reigns
