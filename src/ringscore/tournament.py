from __future__ import annotations

import re
from dataclasses import dataclass

from .events import is_weekly_show
from .matches import Match, is_main_event, match_order, participants_text
from .models import EventType
from .names import normalize_name

QUALIFIER = "first"
SEMIFINAL = "semi"
FINAL = "final"
KING = "king"
QUEEN = "queen"

_SKIP_KEYS = frozenset(
    {"participants", "result", "method", "order", "wrestlerPoints", "warGamesData", "war_games_data"}
)
_NESTED_KEYS = frozenset({"stipulation", "Stipulation", "title", "round"})

_TOURNAMENT_PHRASES = ("king of the ring", "queen of the ring", "kotr", "qotr", "king & queen", "king and queen")
_ROUND_WORDS = ("qualifier", "semi", "first round")
_RING_WORDS = ("ring", "king", "queen", "women")
_NOT_TOURNAMENT = ("elimination chamber", "money in the bank")

# (bracket, groups): every group must have a phrase present. A None bracket is settled by gender.
BRACKET_RULES: tuple[tuple[str | None, tuple[tuple[str, ...], ...]], ...] = (
    (None, (("king & queen", "king and queen"),)),
    (QUEEN, (("queen of the ring", "qotr"),)),
    (KING, (("king of the ring", "kotr"),)),
    (QUEEN, (("women",), ("qualifier", "semi", "final", "first round"), ("ring",))),
    (QUEEN, (("women",), ("semi", "semifinal"))),
)

_SEMI_RE = re.compile(r"semi-final|semi final|semifinal|\bsemi\b")
ROUND_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    (SEMIFINAL, _SEMI_RE),
    (FINAL, re.compile(r"final")),
    (QUALIFIER, re.compile(r"first round|quarter|qualifier")),
)

KNOWN_WOMEN = frozenset(
    {
        "becky", "lynch", "giulia", "naomi", "nattie", "natalya", "zelina", "vega", "zoey", "stark",
        "asuka", "alexa", "bliss", "jade", "roxanne", "perez", "cargill", "bayley", "bianca", "charlotte",
        "rhea", "liv", "shotzi", "michin", "alba", "fyre", "candice", "lerae", "piper", "niven",
        "raquel", "rodriguez",
    }
)


@dataclass(frozen=True, slots=True)
class SemifinalSlot:
    bracket: str
    required_substrings: tuple[str, ...]


# Weekly shows whose semifinal matches carry no round or bracket text upstream.
KNOWN_SEMIFINALS: dict[str, tuple[SemifinalSlot, ...]] = {
    "smackdown-20250620": (
        SemifinalSlot(KING, ("randy", "sami")),
        SemifinalSlot(QUEEN, ("asuka", "alexa")),
    ),
    "smackdown-20260620": (
        SemifinalSlot(KING, ("randy", "sami")),
        SemifinalSlot(QUEEN, ("asuka", "alexa")),
    ),
}


@dataclass(frozen=True, slots=True)
class TournamentSlot:
    round: str
    bracket: str


def tournament_text(match: Match) -> str:
    parts: list[str] = []
    for key, value in match.items():
        if key in _SKIP_KEYS or value is None:
            continue
        if isinstance(value, str):
            if value.strip():
                parts.append(value.strip())
        elif isinstance(value, list):
            parts.append(" ".join(str(item) for item in value))
        elif isinstance(value, dict) and key in _NESTED_KEYS:
            parts.append(str(value))
    return " ".join(parts).lower()


def is_tournament_match(match: Match) -> bool:
    combined = tournament_text(match)
    if any(term in combined for term in _NOT_TOURNAMENT):
        return False
    if any(term in combined for term in _TOURNAMENT_PHRASES):
        return True
    return any(w in combined for w in _ROUND_WORDS) and any(w in combined for w in _RING_WORDS)


def is_known_woman(performer: str) -> bool:
    words = normalize_name(performer).split("-")
    return any(word in KNOWN_WOMEN for word in words)


def tournament_bracket(match: Match, performer: str) -> str:
    combined = tournament_text(match)
    bracket: str | None = None
    for candidate, groups in BRACKET_RULES:
        if all(any(phrase in combined for phrase in group) for group in groups):
            bracket = candidate
            break
    if bracket is None or (bracket == KING and is_known_woman(performer)):
        return QUEEN if is_known_woman(performer) else KING
    return bracket


def tournament_round(match: Match, all_matches: list[Match], event_type: EventType) -> str:
    combined = tournament_text(match)
    for round_name, pattern in ROUND_RULES:
        if pattern.search(combined):
            return round_name
    # The final is never held on a weekly show.
    if is_weekly_show(event_type):
        return QUALIFIER
    if is_main_event(match, all_matches) and is_tournament_match(match):
        return FINAL
    bracket_matches = [m for m in all_matches if is_tournament_match(m)]
    if any(m is match for m in bracket_matches):
        if match_order(match) >= max(match_order(m) for m in bracket_matches):
            return FINAL
    return QUALIFIER


def known_semifinal_key(event_id: str) -> str | None:
    lowered = event_id.lower()
    return next((key for key in KNOWN_SEMIFINALS if key in lowered), None)


def known_semifinal_slot(match: Match, event_id: str) -> TournamentSlot | None:
    key = known_semifinal_key(event_id)
    if key is None:
        return None
    names = participants_text(match).lower()
    if not names:
        return None
    for slot in KNOWN_SEMIFINALS[key]:
        if all(sub in names for sub in slot.required_substrings):
            return TournamentSlot(SEMIFINAL, slot.bracket)
    return None


def weekly_show_slot(
    match: Match,
    all_matches: list[Match],
    event_id: str,
    event_type: EventType,
    performer: str,
) -> TournamentSlot | None:
    """Qualifier or semifinal slot for a weekly-show match; hand-authored events bypass keyword detection."""
    if known_semifinal_key(event_id) is not None:
        return known_semifinal_slot(match, event_id)
    if not is_tournament_match(match):
        return None
    round_name = tournament_round(match, all_matches, event_type)
    if round_name == FINAL:
        return None
    return TournamentSlot(round_name, tournament_bracket(match, performer))
