from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .matches import Match, first_present, is_no_contest, participants_text
from .models import MatchParticipants
from .names import names_match, slugs_equal, text

LOGGER = logging.getLogger(__name__)

_SIDES_RE = re.compile(r"\s+vs\.?\s+", re.IGNORECASE)
_TEAM_RE = re.compile(r"^(.+?)\s*\(([^)]+)\)$")
_AMPERSAND_RE = re.compile(r"\s+&\s+")
_AND_RE = re.compile(r"\s+and\s+", re.IGNORECASE)
_COMMA_RE = re.compile(r"\s*,\s*")
_MEMBER_SPLIT_RE = re.compile(r"\s*[&,]\s*")
_TRAILING_NOISE_RE = re.compile(
    r"(?:\s*[\(\[](?:dq|disqualification|pinfall|pin|submission|count[- ]?out|knockout|ko|tko|"
    r"referee stoppage|forfeit|via [^\)\]]+)[\)\]]|\s+-\s+\d{1,2}:\d{2}(?::\d{2})?)+\s*$",
    re.IGNORECASE,
)
_STATS_WINNER_RE = re.compile(r"Winner[:\s]+([^\n-]+?)(?:\s*[-|\n]|$)", re.IGNORECASE)
_NO_DECISION_RE = re.compile(
    r"\b(?:no contest|draw|double (?:count[- ]?out|dq|disqualification|pin)|no decision)\b",
    re.IGNORECASE,
)


@dataclass(slots=True)
class Participant:
    kind: str
    name: str
    members: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ResultRule:
    name: str
    pattern: re.Pattern[str]
    losers_from_text: bool


# Applied in order after the explicit winner field; first match wins.
RESULT_RULES: tuple[ResultRule, ...] = (
    ResultRule(
        "defeats",
        re.compile(r"^(.+?)\s+(?:def(?:eat(?:s|ed)?)?\.?|wins?)\s+(.+)$", re.IGNORECASE | re.DOTALL),
        losers_from_text=True,
    ),
    ResultRule(
        "won-rumble",
        re.compile(r"^(.+?)\s+won\s+(?:the\s+)?(?:royal\s+)?rumble\b", re.IGNORECASE),
        losers_from_text=False,
    ),
    ResultRule(
        "won-chamber",
        re.compile(r"^(.+?)\s+won\s+(?:the\s+)?(?:elimination\s+)?chamber\b", re.IGNORECASE),
        losers_from_text=False,
    ),
    ResultRule(
        "wins",
        re.compile(r"^(.+?)\s+wins?\.?$", re.IGNORECASE),
        losers_from_text=False,
    ),
)


def _clean_side(side: str) -> str:
    return _TRAILING_NOISE_RE.sub("", side.strip()).strip()


def _split_individuals(side: str) -> list[str]:
    for splitter in (_AMPERSAND_RE, _AND_RE, _COMMA_RE):
        parts = [p.strip() for p in splitter.split(side) if p.strip()]
        if len(parts) > 1:
            out: list[str] = []
            for part in parts:
                out.extend(_split_individuals(part))
            return out
    return [side] if side else []


def parse_participants(raw: Any) -> list[Participant]:
    """Free-text card line -> teams and individuals; team members are listed again as individuals."""
    if isinstance(raw, list):
        raw = " vs ".join(text(p) for p in raw if text(p))
    source = text(raw)
    if not source:
        return []

    out: list[Participant] = []
    for part in _SIDES_RE.split(source):
        side = _clean_side(part)
        if not side:
            continue
        team = _TEAM_RE.match(side)
        if team:
            members = [m.strip() for m in _MEMBER_SPLIT_RE.split(team.group(2)) if m.strip()]
            out.append(Participant("team", team.group(1).strip(), members))
            out.extend(Participant("individual", member) for member in members)
            continue
        out.extend(Participant("individual", name) for name in _split_individuals(side))
    return out


def _individual_names(raw: Any, teams: dict[str, list[str]] | None = None) -> list[str]:
    """Individuals named in `raw`; a bare team label expands to that team's members."""
    out: list[str] = []
    for p in parse_participants(raw):
        if p.kind != "individual":
            continue
        members = next((m for label, m in (teams or {}).items() if slugs_equal(label, p.name) and m), None)
        out.extend(members or [p.name])
    return out


def _everyone_else(pool: list[str], winners: list[str]) -> list[str]:
    return [p for p in pool if not any(names_match(p, w) for w in winners)]


def _named_losers(raw: str, pool: list[str], winners: list[str], teams: dict[str, list[str]] | None) -> list[str]:
    """Losers named in the result, spelled as on the card; words naming nobody listed ("via pinfall") are dropped."""
    named = _individual_names(raw, teams)
    if not pool:
        return named
    on_card: list[str] = []
    for name in named:
        listed = next((p for p in pool if names_match(name, p)), None)
        if listed and listed not in on_card:
            on_card.append(listed)
    return on_card or _everyone_else(pool, winners)


def explicit_winner(match: Match) -> str | None:
    value = first_present(
        match, "winner", "winnerWrestler", "winnerName", "winner_slug", "winner_wrestler", "winner_name"
    )
    if text(value):
        return text(value)
    stats = first_present(match, "statistics", "royalRumbleStatistics", "royal_rumble_statistics")
    if isinstance(stats, str):
        found = _STATS_WINNER_RE.search(stats)
        if found and found.group(1).strip():
            return found.group(1).strip()
    return None


def parse_result(
    result: str, pool: list[str], teams: dict[str, list[str]] | None = None
) -> tuple[list[str], list[str], bool]:
    """Winners, losers, and whether the text could not be read."""
    result = text(result)
    if not result:
        return [], [], False
    for rule in RESULT_RULES:
        found = rule.pattern.search(result)
        if not found:
            continue
        winners = _individual_names(found.group(1), teams)
        if not winners:
            continue
        if rule.losers_from_text:
            losers = _named_losers(found.group(2), pool, winners, teams)
        else:
            losers = _everyone_else(pool, winners)
        return winners, losers, False
    if _NO_DECISION_RE.search(result):
        return [], [], False
    LOGGER.warning("Could not parse result string: %r", result)
    return [], [], True


def extract_match_participants(match: Match) -> MatchParticipants:
    raw = match.get("participants")
    if isinstance(raw, list) and raw:
        names = [text(p) for p in raw if text(p)]
        parsed = [Participant("individual", name) for name in names]
    else:
        parsed = parse_participants(participants_text(match))

    scoring = [p.name for p in parsed if p.kind == "individual"]
    teams = {p.name: p.members for p in parsed if p.kind == "team"}
    result = text(match.get("result"))

    winner = explicit_winner(match)
    if winner:
        winners = _individual_names(winner, teams)
        losers = _everyone_else(scoring, winners)
        unclear = False
    else:
        winners, losers, unclear = parse_result(result, scoring, teams)

    if is_no_contest(match):
        unclear = False

    return MatchParticipants(
        participants=[p.name for p in parsed],
        scoring_participants=scoring,
        winners=winners,
        losers=losers,
        unclear=unclear,
        has_result=bool(result),
        is_tag_team_match=any(p.kind == "team" for p in parsed),
    )
