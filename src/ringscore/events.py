from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .models import EventType, PremiumCategory
from .names import text

LOGGER = logging.getLogger(__name__)

_NIGHT_ONE = ("night 1", "night one")
_NIGHT_TWO = ("night 2", "night two")


@dataclass(frozen=True, slots=True)
class ClassifierRule:
    event_type: EventType
    any_of: tuple[str, ...]
    requires: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    sources: tuple[str, ...] = ("id", "name")

    def matches(self, haystacks: dict[str, str]) -> bool:
        for source in self.sources:
            hay = haystacks.get(source, "")
            if not hay or not any(term in hay for term in self.any_of):
                continue
            if self.requires and not any(term in hay for term in self.requires):
                continue
            if any(term in hay for term in self.excludes):
                continue
            return True
        return False


# First match wins: weekly shows, then night-specific variants, then bare event families.
CLASSIFIER_RULES: tuple[ClassifierRule, ...] = (
    ClassifierRule(EventType.SMACKDOWN, ("smackdown", "smack down")),
    ClassifierRule(EventType.RAW, ("raw",), sources=("id",)),
    ClassifierRule(EventType.RAW, ("raw",), excludes=("tag team",), sources=("name",)),
    ClassifierRule(EventType.WRESTLEMANIA_NIGHT_1, ("wrestlemania",), requires=_NIGHT_ONE),
    ClassifierRule(EventType.WRESTLEMANIA_NIGHT_2, ("wrestlemania",), requires=_NIGHT_TWO),
    ClassifierRule(EventType.WRESTLEMANIA_NIGHT_1, ("wrestlemania",)),
    ClassifierRule(EventType.SUMMERSLAM_NIGHT_1, ("summerslam", "summer slam"), requires=_NIGHT_ONE),
    ClassifierRule(EventType.SUMMERSLAM_NIGHT_2, ("summerslam", "summer slam"), requires=_NIGHT_TWO),
    ClassifierRule(EventType.SUMMERSLAM_NIGHT_1, ("summerslam", "summer slam")),
    ClassifierRule(EventType.SURVIVOR_SERIES, ("survivor series",)),
    ClassifierRule(EventType.ROYAL_RUMBLE, ("royal rumble", "royal riyadh rumble")),
    ClassifierRule(EventType.ELIMINATION_CHAMBER, ("elimination chamber",)),
    ClassifierRule(EventType.CROWN_JEWEL, ("crown jewel",)),
    ClassifierRule(EventType.NIGHT_OF_CHAMPIONS, ("night of champions",)),
    ClassifierRule(
        EventType.KING_QUEEN_OF_THE_RING,
        ("king of the ring", "queen of the ring", "king & queen", "king and queen"),
    ),
    ClassifierRule(EventType.MONEY_IN_THE_BANK, ("money in the bank",)),
    ClassifierRule(
        EventType.SATURDAY_NIGHTS_MAIN_EVENT,
        ("saturday night's main event", "saturday nights main event"),
    ),
    ClassifierRule(EventType.BACKLASH, ("backlash",)),
    ClassifierRule(EventType.EVOLUTION, ("evolution",)),
    ClassifierRule(EventType.CLASH_IN_PARIS, ("clash in paris", "clash")),
    ClassifierRule(EventType.WRESTLEPALOOZA, ("wrestlepalooza",)),
)

_CATEGORY_BY_TYPE: dict[EventType, PremiumCategory] = {
    EventType.RAW: PremiumCategory.WEEKLY,
    EventType.SMACKDOWN: PremiumCategory.WEEKLY,
    EventType.WRESTLEMANIA_NIGHT_1: PremiumCategory.MAJOR,
    EventType.WRESTLEMANIA_NIGHT_2: PremiumCategory.MAJOR,
    EventType.SUMMERSLAM_NIGHT_1: PremiumCategory.MAJOR,
    EventType.SUMMERSLAM_NIGHT_2: PremiumCategory.MAJOR,
    EventType.SURVIVOR_SERIES: PremiumCategory.MAJOR,
    EventType.ROYAL_RUMBLE: PremiumCategory.MAJOR,
    EventType.ELIMINATION_CHAMBER: PremiumCategory.MEDIUM,
    EventType.CROWN_JEWEL: PremiumCategory.MEDIUM,
    EventType.NIGHT_OF_CHAMPIONS: PremiumCategory.MEDIUM,
    EventType.KING_QUEEN_OF_THE_RING: PremiumCategory.MEDIUM,
    EventType.MONEY_IN_THE_BANK: PremiumCategory.MEDIUM,
    EventType.SATURDAY_NIGHTS_MAIN_EVENT: PremiumCategory.MINOR,
    EventType.BACKLASH: PremiumCategory.MINOR,
    EventType.EVOLUTION: PremiumCategory.MINOR,
    EventType.CLASH_IN_PARIS: PremiumCategory.MINOR,
    EventType.WRESTLEPALOOZA: PremiumCategory.MINOR,
}

WEEKLY_SHOW_TYPES = frozenset({EventType.RAW, EventType.SMACKDOWN})
TOURNAMENT_FINALE_TYPES = frozenset({EventType.NIGHT_OF_CHAMPIONS, EventType.KING_QUEEN_OF_THE_RING})
SINGLE_MAIN_EVENT_TYPES = frozenset({EventType.SATURDAY_NIGHTS_MAIN_EVENT, EventType.WRESTLEPALOOZA})


def classify_event(name: Any = "", event_id: Any = "") -> EventType:
    haystacks = {
        "id": text(event_id).lower().replace("-", " ").replace("_", " "),
        "name": text(name).lower(),
    }
    for rule in CLASSIFIER_RULES:
        if rule.matches(haystacks):
            return rule.event_type
    LOGGER.warning("Unknown event type: name=%r id=%r", text(name), text(event_id))
    return EventType.UNKNOWN


def premium_category(event_type: EventType) -> PremiumCategory:
    return _CATEGORY_BY_TYPE.get(event_type, PremiumCategory.WEEKLY)


def is_weekly_show(event_type: EventType) -> bool:
    return event_type in WEEKLY_SHOW_TYPES


def is_premium_event(event_type: EventType) -> bool:
    return premium_category(event_type) is not PremiumCategory.WEEKLY


def is_tournament_finale(event_type: EventType) -> bool:
    return event_type in TOURNAMENT_FINALE_TYPES


def single_main_event_only(event_type: EventType) -> bool:
    return event_type in SINGLE_MAIN_EVENT_TYPES
