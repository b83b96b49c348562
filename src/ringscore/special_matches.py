from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from .extractor import extract_match_participants
from .matches import Match, first_present
from .names import names_match, normalize_name, text

LOGGER = logging.getLogger(__name__)

_INLINE_SPACE_RE = re.compile(r"[ \t]+")
_STOP = r"(?=\s*(?:-\s*[\d:]+|[\n|;•]|$))"
_IRON_ANY_RE = re.compile(r"iron\s*(?:man|woman)", re.IGNORECASE)
_IRON_BOTH_RE = re.compile(r"iron\s*man/?\s*iron\s*woman[:\s]+([^-\n|;•]+?)" + _STOP, re.IGNORECASE)
_IRON_WOMAN_RE = re.compile(r"iron\s*woman\b[:\s]+([^-\n|;•]+?)" + _STOP, re.IGNORECASE)
_IRON_MAN_RE = re.compile(r"iron\s*man\b(?!\s*/)[:\s]+([^-\n|;•]+?)" + _STOP, re.IGNORECASE)
_MOST_ELIMS_RE = re.compile(r"most\s+eliminations[:\s]+([^-\n|;•]+?)" + _STOP, re.IGNORECASE)
_LONGEST_RE = re.compile(
    r"(?:longest\s+lasting|iron\s*man/?\s*iron\s*woman)[:\s]+([^-\[\n]+?)(?:\s*[-\[\n]|$)", re.IGNORECASE
)
_ELIMINATED_RE = re.compile(
    r"([^()\n,;]+?)\s+eliminated\s+((?:(?!\s+eliminated\s+)[^()\n,;])+?)\s*\([^)]+\)", re.IGNORECASE
)
_NAME_LIST_RE = re.compile(r"\s+&\s+")
_ENTRY_ORDER_RE = re.compile(r"entry\s+order\s*:\s*([^\])]+)", re.IGNORECASE)
_ENTRY_ARROW_RE = re.compile(r"\s*→\s*|\s+->\s+")
_DECIDING_FALL_RES = (
    re.compile(r"(?:pinfall|submission|pin|sub)\s+by\s*[:–-]?\s*([^·\[()\n]+?)(?:\s*[·\[()\n]|$)", re.IGNORECASE),
    re.compile(r"(.+?)\s+pinned\s+", re.IGNORECASE),
)

_RUMBLE_WINNER_RANK = 30
_WAR_GAMES_TEAM_SIZE = 5

_MATCH_IRON_KEYS = (
    "ironMan", "ironManWrestler", "royalRumbleIronMan", "iron_man", "iron_man_wrestler", "ironWoman", "iron_woman",
)
_DATA_IRON_KEYS = (
    "ironManWrestler", "iron_man_wrestler", "ironMan", "ironWoman", "iron_man", "iron_woman",
    "ironManName", "ironManWrestlerName", "ironWomanName",
)
_STATS_IRON_KEYS = (
    "ironMan", "ironManWrestler", "ironWoman", "iron_woman", "iron_man", "iron_man_wrestler",
    "ironManName", "ironWomanName",
)
_MOST_ELIMS_KEYS = ("mostEliminations", "mostEliminationsWrestler", "most_eliminations_wrestler", "mostEliminationsName")


def _data(match: Match, *keys: str) -> dict[str, Any]:
    value = first_present(match, *keys)
    return value if isinstance(value, dict) else {}


def _in_pool(slug: str, pool: set[str]) -> bool:
    return bool(slug) and (not pool or any(names_match(slug, p) for p in pool))


def _split_names(value: Any) -> list[str]:
    if isinstance(value, list):
        value = " & ".join(text(v) for v in value)
    return [normalize_name(n) for n in _NAME_LIST_RE.split(text(value)) if normalize_name(n)]


def _eliminations(rows: Any) -> tuple[Counter[str], list[str]]:
    """Eliminator tallies and the order performers left the match."""
    counts: Counter[str] = Counter()
    order: list[str] = []
    if not isinstance(rows, list):
        return counts, order
    for row in rows:
        if not isinstance(row, dict):
            continue
        eliminator = normalize_name(first_present(row, "eliminatedBy", "eliminated_by", "eliminator"))
        eliminated = normalize_name(row.get("eliminated"))
        if not eliminator or not eliminated:
            continue
        counts[eliminator] += 1
        order.append(eliminated)
    return counts, order


def _count_for(counts: Counter[str], performer: str) -> int:
    return next((n for slug, n in counts.items() if names_match(slug, performer)), 0)


def iron_names_from_text(value: str) -> tuple[str | None, str | None]:
    """("Iron Woman" name, "Iron Man" name) found in a statistics blurb."""
    normalized = _INLINE_SPACE_RE.sub(" ", value)
    woman: str | None = None
    man: str | None = None
    for pattern in (_IRON_BOTH_RE, _IRON_WOMAN_RE):
        found = pattern.search(normalized)
        if found and found.group(1).strip():
            woman = found.group(1).strip()
    found = _IRON_MAN_RE.search(normalized)
    if found and found.group(1).strip():
        man = found.group(1).strip()
    return woman, man


def _iron_from_statistics(stats: Any) -> str | None:
    if isinstance(stats, dict):
        value = first_present(stats, *_STATS_IRON_KEYS)
        return text(value) or None
    if isinstance(stats, str):
        woman, man = iron_names_from_text(stats)
        return man or woman
    return None


def _pick_iron(woman: str | None, man: str | None, pool: set[str]) -> str | None:
    candidates = [normalize_name(n) for n in (woman, man) if n]
    member = next((c for c in candidates if _in_pool(c, pool)), None)
    return member or next(iter(candidates), None)


def _string_values(obj: Any, depth: int = 0) -> list[str]:
    out: list[str] = []
    if depth > 2 or not isinstance(obj, dict):
        return out
    for value in obj.values():
        if isinstance(value, str):
            out.append(value)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, str):
                    out.append(item)
                elif isinstance(item, dict):
                    out.extend(_string_values(item, depth + 1))
        elif isinstance(value, dict):
            out.extend(_string_values(value, depth + 1))
    return out


def parse_minutes(value: Any) -> float:
    """Ring time such as "59:49" or "1:05:00" in minutes; 0 when unreadable."""
    parts = text(value).split(":")
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return 0.0
    if len(numbers) == 2:
        return numbers[0] + numbers[1] / 60
    if len(numbers) == 3:
        return numbers[0] * 60 + numbers[1] + numbers[2] / 60
    return 0.0


@dataclass(slots=True)
class RumbleStats:
    eliminations: Counter[str] = field(default_factory=Counter)
    iron_man: str | None = None
    most_eliminations: list[str] = field(default_factory=list)

    def eliminations_for(self, performer: str) -> int:
        return _count_for(self.eliminations, performer)

    def is_iron_man(self, performer: str) -> bool:
        return bool(self.iron_man) and names_match(self.iron_man, performer)

    def has_most_eliminations(self, performer: str) -> bool:
        return any(names_match(slug, performer) for slug in self.most_eliminations)


def _time_in_ring_candidate(rumble: dict[str, Any], pool: set[str]) -> str | None:
    best: tuple[float, str] | None = None
    entries = first_present(rumble, "entryOrder", "entry_order")
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            slug = normalize_name(first_present(entry, "slug", "wrestler", "name"))
            minutes = parse_minutes(first_present(entry, "timeInRing", "time_in_ring"))
            if minutes > 0 and _in_pool(slug, pool) and (best is None or minutes > best[0]):
                best = (minutes, slug)
    minutes_by_name = first_present(rumble, "timeInRingMinutes", "time_in_ring_minutes")
    if best is None and isinstance(minutes_by_name, dict):
        for name, value in minutes_by_name.items():
            try:
                minutes = float(value)
            except (TypeError, ValueError):
                continue
            slug = normalize_name(name)
            if _in_pool(slug, pool) and (best is None or minutes > best[0]):
                best = (minutes, slug)
    return best[1] if best else None


def _explicit_iron_candidate(match: Match, rumble: dict[str, Any]) -> str | None:
    value = first_present(match, *_MATCH_IRON_KEYS) or first_present(rumble, *_DATA_IRON_KEYS)
    return normalize_name(value) or None


def _derived_iron_candidate(
    rumble: dict[str, Any], participants: list[str], eliminated_order: list[str], winner: str | None
) -> str | None:
    """Longest stay computed as elimination rank minus entry number."""
    entry_numbers: dict[str, int] = {}
    entries = first_present(rumble, "entryOrder", "entry_order")
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            try:
                number = int(first_present(entry, "entryNumber", "entry_number") or 0)
            except (TypeError, ValueError):
                continue
            slug = normalize_name(first_present(entry, "wrestler", "name", "slug"))
            if number >= 1 and slug:
                entry_numbers[slug] = number
    if not eliminated_order or not entry_numbers:
        return None

    field_size = max(len(participants), len(eliminated_order) + 1, _RUMBLE_WINNER_RANK)
    ranks = {slug: index + 1 for index, slug in enumerate(eliminated_order)}
    if winner:
        ranks[normalize_name(winner)] = field_size
    best: tuple[int, str] | None = None
    for participant in participants:
        slug = normalize_name(participant)
        stay = ranks.get(slug, field_size) - entry_numbers.get(slug, _RUMBLE_WINNER_RANK)
        if best is None or stay > best[0]:
            best = (stay, slug)
    return best[1] if best else None


def _statistics_iron_candidate(match: Match, rumble: dict[str, Any], event_statistics: Any, pool: set[str]) -> str | None:
    stats = first_present(
        match, "statistics", "royalRumbleStatistics", "royal_rumble_statistics", "royalRumbleStats", "royal_rumble_stats"
    )
    if stats is None:
        stats = first_present(rumble, "statistics", "royalRumbleStatistics")
    found = _iron_from_statistics(stats)
    for key in ("result", "notes"):
        if not found and _IRON_ANY_RE.search(text(match.get(key))):
            found = _iron_from_statistics(text(match.get(key)))
    if found:
        return normalize_name(found) or None
    if isinstance(event_statistics, str) and _IRON_ANY_RE.search(event_statistics):
        return _pick_iron(*iron_names_from_text(event_statistics), pool)
    if isinstance(event_statistics, dict):
        return normalize_name(_iron_from_statistics(event_statistics)) or None
    return None


def _scanned_iron_candidate(match: Match, event_statistics: Any, pool: set[str]) -> str | None:
    woman: str | None = None
    man: str | None = None
    sources = [match, {"statistics": event_statistics}]
    for source in sources:
        for value in _string_values(source):
            if not _IRON_ANY_RE.search(value):
                continue
            found_woman, found_man = iron_names_from_text(value)
            for name in (found_woman, found_man):
                if name and _in_pool(normalize_name(name), pool) and pool:
                    return normalize_name(name)
            woman = woman or found_woman
            man = man or found_man
    return _pick_iron(woman, man, pool)


def rumble_stats(match: Match, event_statistics: Any = None) -> RumbleStats:
    """Elimination tallies, iron man/woman and most eliminations for a Rumble-style match."""
    rumble = _data(match, "royalRumbleData", "royal_rumble_data")
    extracted = extract_match_participants(match)
    participants = extracted.scoring_participants
    pool = {normalize_name(p) for p in participants if normalize_name(p)}
    winner = extracted.winners[0] if extracted.winners else None

    counts, eliminated_order = _eliminations(first_present(rumble, "eliminations", "elimination"))
    stats = RumbleStats(eliminations=counts)

    # Ordered from most to least trustworthy; the scan over every string field is best-effort.
    sources = (
        ("time in ring", lambda: _time_in_ring_candidate(rumble, pool)),
        ("explicit field", lambda: _explicit_iron_candidate(match, rumble)),
        ("entry/elimination order", lambda: _derived_iron_candidate(rumble, participants, eliminated_order, winner)),
        ("statistics text", lambda: _statistics_iron_candidate(match, rumble, event_statistics, pool)),
        ("string scan", lambda: _scanned_iron_candidate(match, event_statistics, pool)),
    )
    chosen_source = None
    for label, resolve in sources:
        candidate = resolve()
        if not candidate or not _in_pool(candidate, pool):
            continue
        if stats.iron_man is None:
            stats.iron_man = candidate
            chosen_source = label
        elif not names_match(candidate, stats.iron_man):
            LOGGER.warning(
                "Iron man sources disagree for %r: %s says %s, %s says %s",
                text(match.get("participants"))[:60] or text(match.get("result"))[:60],
                chosen_source,
                stats.iron_man,
                label,
                candidate,
            )
            break

    if counts:
        top = max(counts.values())
        stats.most_eliminations = [slug for slug, n in counts.items() if n == top]
    explicit = first_present(match, *_MOST_ELIMS_KEYS[:3]) or first_present(rumble, *_MOST_ELIMS_KEYS)
    named = _split_names(explicit) if explicit else []
    if named:
        if stats.most_eliminations and not any(
            names_match(a, b) for a in named for b in stats.most_eliminations
        ):
            LOGGER.warning(
                "Most eliminations field %s disagrees with elimination log %s", named, stats.most_eliminations
            )
        stats.most_eliminations = named
    if not stats.most_eliminations:
        text_stats = first_present(
            match, "statistics", "royalRumbleStatistics", "royal_rumble_statistics", "royalRumbleStats"
        )
        if text_stats is None:
            text_stats = rumble.get("statistics")
        if isinstance(text_stats, dict):
            stats.most_eliminations = _split_names(first_present(text_stats, *_MOST_ELIMS_KEYS))
        elif isinstance(text_stats, str):
            found = _MOST_ELIMS_RE.search(_INLINE_SPACE_RE.sub(" ", text_stats))
            if found:
                stats.most_eliminations = _split_names(found.group(1))
    return stats


@dataclass(slots=True)
class ChamberStats:
    participants: set[str] = field(default_factory=set)
    eliminations: Counter[str] = field(default_factory=Counter)
    longest_lasting: str | None = None

    def is_participant(self, performer: str) -> bool:
        return _in_pool(normalize_name(performer), self.participants) and bool(self.participants)

    def eliminations_for(self, performer: str) -> int:
        return _count_for(self.eliminations, performer)

    def is_longest_lasting(self, performer: str) -> bool:
        return bool(self.longest_lasting) and names_match(self.longest_lasting, performer)


def _chamber_text_eliminations(match: Match) -> tuple[Counter[str], list[str]]:
    rows = [
        {"eliminator": m.group(1), "eliminated": m.group(2)}
        for key in ("result", "notes")
        for m in _ELIMINATED_RE.finditer(text(match.get(key)))
    ]
    return _eliminations(rows)


def chamber_stats(match: Match) -> ChamberStats:
    """Eliminations and longest-lasting performer for an elimination-gauntlet match."""
    extracted = extract_match_participants(match)
    stats = ChamberStats(participants={normalize_name(p) for p in extracted.scoring_participants if normalize_name(p)})
    chamber = _data(match, "eliminationChamberData", "elimination_chamber_data")

    rows = first_present(chamber, "eliminations", "elimination")
    if isinstance(rows, list) and rows:
        counts, order = _eliminations(rows)
    else:
        counts, order = _chamber_text_eliminations(match)
    stats.eliminations = counts

    explicit = first_present(match, "ironMan", "ironManWrestler", "iron_woman", "iron_man_wrestler") or first_present(
        chamber, "ironMan", "ironManWrestler", "iron_man", "iron_man_wrestler", "longestLasting", "longest_lasting"
    )
    stats.longest_lasting = normalize_name(explicit) or None
    if not stats.longest_lasting:
        blurb = first_present(match, "statistics", "eliminationChamberStatistics")
        if blurb is None:
            blurb = chamber.get("statistics")
        if isinstance(blurb, str):
            found = _LONGEST_RE.search(blurb)
            if found:
                stats.longest_lasting = normalize_name(found.group(1)) or None
    if not stats.longest_lasting and order:
        winner = normalize_name(extracted.winners[0]) if extracted.winners else ""
        if order[-1] != winner:
            stats.longest_lasting = order[-1]
    return stats


def deciding_fall(match: Match) -> str | None:
    """Performer credited with the pinfall or submission that ended a team cage match."""
    war_games = _data(match, "warGamesData", "war_games_data")
    found = text(first_present(war_games, "pinSubmissionWinner", "pin_submission_winner")) or text(
        first_present(war_games, "pinWinnerName", "pin_winner_name")
    )
    if found:
        return found
    found = text(first_present(match, "pinfallWinner", "pinfall_winner"))
    if found:
        return found
    combined = f"{text(match.get('result'))} {text(match.get('method'))}"
    for pattern in _DECIDING_FALL_RES:
        hit = pattern.search(combined)
        if hit and hit.group(1).strip():
            return hit.group(1).strip()
    return None


def _entry_number(entry: dict[str, Any]) -> int:
    try:
        return int(first_present(entry, "entryNumber", "entry_number") or 0)
    except (TypeError, ValueError):
        return 0


def _entry_name(entry: Any) -> str:
    if isinstance(entry, dict):
        return text(first_present(entry, "wrestler", "slug", "name"))
    return text(entry)


def entry_order_from_result(result: Any) -> list[str]:
    found = _ENTRY_ORDER_RE.search(text(result))
    if not found:
        return []
    return [name.strip() for name in _ENTRY_ARROW_RE.split(found.group(1)) if name.strip()]


def _rank_points(position: int) -> int:
    if 0 <= position < _WAR_GAMES_TEAM_SIZE:
        return _WAR_GAMES_TEAM_SIZE - position
    return 0


def war_games_entry_points(match: Match, performer: str) -> int:
    """Entry award by position within the performer's own team: 5 for the first in, down to 1."""
    war_games = _data(match, "warGamesData", "war_games_data")
    entries = first_present(war_games, "entryOrder", "entry_order")
    if isinstance(entries, list) and entries:
        rows = [e for e in entries if isinstance(e, dict) and _entry_name(e)]
        mine = next((e for e in rows if names_match(_entry_name(e), performer)), None)
        if mine is None:
            return 0
        team = first_present(mine, "team", "teamNumber")
        if team is not None and team != "":
            teammates = sorted(
                (e for e in rows if first_present(e, "team", "teamNumber") == team), key=_entry_number
            )
            position = next(i for i, e in enumerate(teammates) if e is mine)
            return _rank_points(position)
        number = min(10, max(1, _entry_number(mine)))
        return _rank_points((number - 1) % _WAR_GAMES_TEAM_SIZE)

    ordered = entry_order_from_result(match.get("result"))
    if not ordered:
        flat = first_present(match, "warGamesEntryOrder", "war_games_entry_order")
        ordered = [_entry_name(e) for e in flat] if isinstance(flat, list) else []
    index = next((i for i, name in enumerate(ordered) if name and names_match(name, performer)), None)
    if index is None:
        return 0
    return _rank_points(index % _WAR_GAMES_TEAM_SIZE)
