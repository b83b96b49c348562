from datetime import date

from ringscore.models import ReignInterval
from ringscore.title_holding import (
    compute_title_holding,
    compute_title_holding_for_month,
    infer_reigns_from_events,
    month_ends_since,
    title_points_for,
    title_reigns_for_performer,
)

TODAY = date(2025, 8, 15)
WORLD = "World Heavyweight Championship"


def test_title_points_by_tier() -> None:
    assert title_points_for("Women's World Championship") == 10
    assert title_points_for("Undisputed WWE Championship") == 10
    assert title_points_for(WORLD) == 10
    assert title_points_for("Intercontinental Championship") == 8
    assert title_points_for("United States Championship") == 7
    assert title_points_for("World Tag Team Championship") == 4
    assert title_points_for("WWE Women's Tag Team Championship") == 4
    assert title_points_for("Speed Championship") == 5
    assert title_points_for(None) == 5


def test_month_ends_exclude_the_month_in_progress() -> None:
    assert month_ends_since(date(2025, 5, 31), today=TODAY) == [
        date(2025, 5, 31),
        date(2025, 6, 30),
        date(2025, 7, 31),
    ]
    assert month_ends_since(date(2025, 5, 31), today=date(2025, 5, 31)) == []
    assert month_ends_since(date(2025, 12, 31), today=date(2026, 3, 1))[-1] == date(2026, 2, 28)


def test_accrual_follows_reigns_across_month_ends() -> None:
    reigns = [
        {"champion_slug": "gunther", "title": WORLD, "won_date": "2025-04-20", "lost_date": "2025-06-29"},
        {"champion": "CM Punk", "title": WORLD, "won_date": "2025-06-29"},
        {"champion_slug": "jacob-fatu", "title": "United States Championship", "won_date": "2025-07-31"},
    ]
    points = compute_title_holding(reigns, today=TODAY)

    assert points == {"gunther": 10, "cm-punk": 20, "jacob-fatu": 7}


def test_title_lost_on_month_end_does_not_count_that_month() -> None:
    reign = ReignInterval("dominik-mysterio", "Intercontinental Championship", date(2025, 5, 1), date(2025, 6, 30))
    assert compute_title_holding([reign], today=TODAY) == {"dominik-mysterio": 8}


def test_reign_inside_a_single_month_earns_nothing() -> None:
    reign = ReignInterval("dominik-mysterio", "Intercontinental Championship", date(2025, 7, 3), date(2025, 7, 20))
    assert compute_title_holding([reign], today=TODAY) == {}


def test_reigns_before_the_effective_start_are_ignored() -> None:
    reigns = [
        {"champion_slug": "cody-rhodes", "title": "Undisputed WWE Championship", "won_date": "2024-04-07", "lost_date": "2025-04-20"},
        {"champion_slug": "no-date", "title": WORLD},
    ]
    assert compute_title_holding(reigns, today=TODAY) == {}


def test_points_for_a_single_month_end() -> None:
    reigns = [
        ReignInterval("tiffany-stratton", "WWE Women's Championship", date(2025, 1, 3)),
        ReignInterval("penta", "Intercontinental Championship", date(2025, 6, 2)),
    ]
    assert compute_title_holding_for_month(reigns, date(2025, 5, 31)) == {"tiffany-stratton": 10}
    assert compute_title_holding_for_month(reigns, date(2025, 6, 30)) == {"tiffany-stratton": 10, "penta": 8}


def test_reign_breakdown_for_one_performer() -> None:
    reigns = [
        {"champion": "CM Punk", "title": WORLD, "won_date": "2025-06-29"},
        {"champion": "CM Punk", "won_date": "2025-07-10"},
        {"champion": "Seth Rollins", "title": WORLD, "won_date": "2025-05-01"},
    ]
    assert title_reigns_for_performer(reigns, "cm-punk", today=TODAY) == [
        (WORLD, [date(2025, 6, 30), date(2025, 7, 31)]),
        ("Championship", [date(2025, 7, 31)]),
    ]


def _title_change(event_id: str, day: str, winner: str, loser: str) -> dict:
    return {
        "id": event_id,
        "name": "Raw",
        "date": day,
        "matches": [
            {
                "order": 1,
                "participants": f"{winner} vs {loser}",
                "result": f"{winner} def. {loser}",
                "title": "Intercontinental Championship",
                "titleOutcome": "New Champion",
            }
        ],
    }


def test_reigns_inferred_from_title_changes() -> None:
    events = [
        _title_change("raw-20250707", "2025-07-07", "Dominik Mysterio", "Penta"),
        _title_change("raw-20250602", "2025-06-02", "Penta", "Dominik Mysterio"),
        _title_change("raw-20250303", "2025-03-03", "Bron Breakker", "Sheamus"),
    ]
    reigns = infer_reigns_from_events(events)

    assert reigns == [
        ReignInterval("penta", "Intercontinental Championship", date(2025, 6, 2), date(2025, 7, 7)),
        ReignInterval("dominik-mysterio", "Intercontinental Championship", date(2025, 7, 7)),
    ]
    assert compute_title_holding(reigns, today=TODAY) == {"penta": 8, "dominik-mysterio": 8}


def test_unreadable_title_change_is_skipped(caplog) -> None:
    event = _title_change("raw-20250609", "2025-06-09", "Penta", "Dominik Mysterio")
    event["matches"][0]["result"] = "Title changed hands in chaos"

    assert infer_reigns_from_events([event]) == []
    assert "Title change without a readable winner" in caplog.text
