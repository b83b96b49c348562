from __future__ import annotations

from typing import Any

from .names import text

Match = dict[str, Any]


def first_present(match: Any, *keys: str) -> Any:
    """First non-None value among aliased keys (camelCase and snake_case upstream spellings)."""
    if not isinstance(match, dict):
        return None
    for key in keys:
        value = match.get(key)
        if value is not None:
            return value
    return None


def is_valid_match(match: Any) -> bool:
    if not isinstance(match, dict):
        return False
    return bool(match.get("participants")) or bool(text(match.get("result")))


def match_order(match: Match) -> int:
    try:
        return int(match.get("order") or 0)
    except (TypeError, ValueError):
        return 0


def match_type(match: Match) -> str:
    value = first_present(match, "matchType", "match_type", "stipulation", "Stipulation")
    return text(value) or "Unknown"


def stipulation(match: Match) -> str:
    return text(first_present(match, "stipulation", "Stipulation"))


def special_winner_type(match: Match) -> str:
    return text(first_present(match, "specialWinnerType", "special_winner_type"))


def is_match_kind(match: Match, phrase: str) -> bool:
    return phrase in match_type(match).lower() or phrase in special_winner_type(match).lower()


def is_promotional_segment(match: Match) -> bool:
    kind = text(first_present(match, "matchType", "match_type")).lower()
    return kind == "promo" or stipulation(match).lower() == "promo"


def participants_text(match: Match) -> str:
    raw = match.get("participants")
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        names = []
        for item in raw:
            if isinstance(item, dict):
                item = first_present(item, "name", "slug", "displayName", "id")
            if text(item):
                names.append(text(item))
        return " ".join(names)
    return ""


def is_battle_royal(match: Match) -> bool:
    return (
        "battle royal" in match_type(match).lower()
        or "battle royal" in participants_text(match).lower()
        or "battle royal" in special_winner_type(match).lower()
    )


def _card_type(match: Match) -> str:
    return text(first_present(match, "cardType", "card_type")).lower()


def is_explicit_undercard(match: Match) -> bool:
    return _card_type(match) == "undercard" or match.get("mainEvent") is False or match.get("isMainEvent") is False


def is_explicit_main_event(match: Match) -> bool:
    return _card_type(match) == "main event" or match.get("mainEvent") is True or match.get("isMainEvent") is True


def is_main_event(match: Match, all_matches: list[Match], single_main_event_only: bool = False) -> bool:
    if not all_matches:
        return False
    if is_explicit_undercard(match):
        return False
    if is_explicit_main_event(match):
        return True

    orders = [match_order(m) for m in all_matches]
    max_order = max(orders)
    is_closing_match = all_matches[-1] is match
    if orders.count(max_order) == len(all_matches):
        return is_closing_match

    if single_main_event_only:
        last_max = max(i for i, order in enumerate(orders) if order == max_order)
        return all_matches[last_max] is match

    return match_order(match) == max_order or is_closing_match


def is_title_match(match: Match) -> bool:
    title = text(match.get("title"))
    return bool(title) and title.lower() != "none"


def title_outcome(match: Match) -> str:
    return text(first_present(match, "titleOutcome", "title_outcome")).lower()


def is_title_change(match: Match) -> bool:
    return title_outcome(match) == "new champion"


def method(match: Match) -> str:
    return text(match.get("method")).lower()


def is_disqualification(match: Match) -> bool:
    value = method(match)
    return "dq" in value or "disqualification" in value or title_outcome(match) == "retains via dq"


def is_no_contest(match: Match) -> bool:
    return "no contest" in method(match)


def defending_champion(match: Match) -> str:
    return text(first_present(match, "defendingChampion", "defending_champion"))
