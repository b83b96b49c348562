from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

LOGGER = logging.getLogger(__name__)


class EventType(str, Enum):
    RAW = "raw"
    SMACKDOWN = "smackdown"
    WRESTLEMANIA_NIGHT_1 = "wrestlemania-night-1"
    WRESTLEMANIA_NIGHT_2 = "wrestlemania-night-2"
    SUMMERSLAM_NIGHT_1 = "summerslam-night-1"
    SUMMERSLAM_NIGHT_2 = "summerslam-night-2"
    SURVIVOR_SERIES = "survivor-series"
    ROYAL_RUMBLE = "royal-rumble"
    ELIMINATION_CHAMBER = "elimination-chamber"
    CROWN_JEWEL = "crown-jewel"
    NIGHT_OF_CHAMPIONS = "night-of-champions"
    KING_QUEEN_OF_THE_RING = "king-queen-of-the-ring"
    MONEY_IN_THE_BANK = "money-in-the-bank"
    SATURDAY_NIGHTS_MAIN_EVENT = "saturday-nights-main-event"
    BACKLASH = "backlash"
    EVOLUTION = "evolution"
    CLASH_IN_PARIS = "clash-in-paris"
    WRESTLEPALOOZA = "wrestlepalooza"
    UNKNOWN = "unknown"


class PremiumCategory(str, Enum):
    MAJOR = "major"
    MEDIUM = "medium"
    MINOR = "minor"
    WEEKLY = "weekly"


def parse_date(value: Any) -> date | None:
    """Accept a `date`, an ISO date string or an ISO timestamp; None when empty or unreadable."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        LOGGER.warning("Ignoring unreadable date %r", value)
        return None


@dataclass(slots=True)
class Event:
    id: str
    name: str = ""
    date: date | None = None
    matches: list[dict[str, Any]] = field(default_factory=list)
    statistics: Any = None

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "Event":
        matches = row.get("matches") or []
        if not isinstance(matches, list):
            matches = []
        statistics = row.get("statistics")
        if statistics is None:
            statistics = row.get("royalRumbleStatistics", row.get("royal_rumble_statistics"))
        return cls(
            id=str(row.get("id") or ""),
            name=str(row.get("name") or ""),
            date=parse_date(row.get("date")),
            matches=[m for m in matches if isinstance(m, dict)],
            statistics=statistics,
        )


@dataclass(slots=True)
class MatchParticipants:
    participants: list[str] = field(default_factory=list)
    scoring_participants: list[str] = field(default_factory=list)
    winners: list[str] = field(default_factory=list)
    losers: list[str] = field(default_factory=list)
    unclear: bool = False
    has_result: bool = False
    is_tag_team_match: bool = False


@dataclass(slots=True)
class ScoredParticipant:
    performer: str
    match_points: int = 0
    title_points: int = 0
    special_points: int = 0
    main_event_points: int = 0
    mass_entry_points: int = 0
    breakdown_lines: list[str] = field(default_factory=list)
    tournament_carry: int = 0
    tournament_bracket: str | None = None
    tournament_round: str | None = None

    @property
    def total(self) -> int:
        return (
            self.match_points
            + self.title_points
            + self.special_points
            + self.main_event_points
            + self.mass_entry_points
        )

    @property
    def event_points(self) -> int:
        """Everything except title bonuses, which are booked separately."""
        return self.total - self.title_points


@dataclass(slots=True)
class ScoredMatch:
    order: int
    participants: Any = None
    result: str = ""
    method: str = ""
    title: str = ""
    title_outcome: str = ""
    is_promotional_segment: bool = False
    per_participant: list[ScoredParticipant] = field(default_factory=list)


@dataclass(slots=True)
class ScoredEvent:
    event_id: str
    event_name: str
    event_type: EventType
    date: date | None
    matches: list[ScoredMatch] = field(default_factory=list)


@dataclass(slots=True)
class SeasonTotals:
    weekly_show: int = 0
    premium_event: int = 0
    title_holding: int = 0

    @property
    def grand_total(self) -> int:
        return self.weekly_show + self.premium_event + self.title_holding

    def add(self, other: "SeasonTotals") -> None:
        self.weekly_show += other.weekly_show
        self.premium_event += other.premium_event
        self.title_holding += other.title_holding


@dataclass(slots=True)
class ReignInterval:
    performer: str
    title: str
    won_date: date
    lost_date: date | None = None

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "ReignInterval | None":
        performer = (
            row.get("champion_slug")
            or row.get("champion_id")
            or row.get("champion")
            or row.get("champion_name")
            or row.get("performer")
            or ""
        )
        won = parse_date(row.get("won_date") or row.get("start_date"))
        if not str(performer).strip() or won is None:
            return None
        return cls(
            performer=str(performer).strip(),
            title=str(row.get("title") or row.get("title_name") or "").strip(),
            won_date=won,
            lost_date=parse_date(row.get("lost_date") or row.get("end_date")),
        )


@dataclass(slots=True)
class CarryBalance:
    qualifier: int = 0
    semifinal: int = 0
    bracket: str | None = None

    @property
    def total(self) -> int:
        return self.qualifier + self.semifinal
