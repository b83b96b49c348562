from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field, replace
from typing import Any

from .extractor import parse_participants
from .matches import Match, match_order
from .models import Event
from .names import normalize_name

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchCorrection:
    event_id: str
    overrides: dict[str, Any]
    requires_participants: frozenset[str] = field(default_factory=frozenset)
    main_event_only: bool = False

    def applies_to_event(self, event_id: str) -> bool:
        return bool(self.event_id) and (event_id == self.event_id or event_id.startswith(self.event_id))

    def selects(self, match: Match) -> bool:
        if not self.requires_participants:
            return False
        raw = match.get("participants")
        if isinstance(raw, list):
            slugs = {normalize_name(p) for p in raw}
        else:
            slugs = {normalize_name(p.name) for p in parse_participants(raw)}
        return self.requires_participants <= slugs


MATCH_CORRECTIONS: tuple[MatchCorrection, ...] = (
    MatchCorrection(
        event_id="smackdown-20251017-1761444082617",
        requires_participants=frozenset({"cody-rhodes", "drew-mcintyre"}),
        overrides={
            "result": "Drew McIntyre def. Cody Rhodes",
            "method": "DQ",
            "winner": "drew-mcintyre",
            "titleOutcome": "Champion Retains",
            "defendingChampion": "cody-rhodes",
        },
    ),
    MatchCorrection(
        event_id="raw-20250714",
        main_event_only=True,
        overrides={
            "title": "",
            "titleOutcome": "",
            "participants": ["bron-breakker", "penta", "la-knight", "jey-uso", "cm-punk"],
            "result": "CM Punk def. Bron Breakker, Penta, LA Knight, Jey Uso",
            "winner": "cm-punk",
        },
    ),
)


def corrections_for(event_id: str, table: tuple[MatchCorrection, ...] = MATCH_CORRECTIONS) -> list[MatchCorrection]:
    return [c for c in table if c.applies_to_event(event_id)]


def _main_event_index(matches: list[Match]) -> int | None:
    if not matches:
        return None
    max_order = max(0, *(match_order(m) for m in matches))
    candidates = [i for i, m in enumerate(matches) if match_order(m) == max_order]
    return candidates[-1] if candidates else None


def apply_corrections(event: Event, table: tuple[MatchCorrection, ...] = MATCH_CORRECTIONS) -> Event:
    """Return `event` with known upstream errors patched; the input record is never mutated."""
    corrections = corrections_for(event.id, table)
    if not corrections:
        return event

    matches = list(event.matches)
    for correction in corrections:
        if correction.main_event_only:
            index = _main_event_index(matches)
        else:
            index = next((i for i, m in enumerate(matches) if correction.selects(m)), None)
        if index is None:
            continue
        patched = dict(matches[index])
        patched.update(copy.deepcopy(correction.overrides))
        matches[index] = patched
        LOGGER.debug("Applied match correction to %s match #%d", event.id, index)
    return replace(event, matches=matches)
