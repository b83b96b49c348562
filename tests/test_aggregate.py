import logging

from ringscore.aggregate import (
    aggregate,
    aggregate_single_event,
    aggregate_with_carry,
    merge_totals,
    sort_events,
)
from ringscore.models import CarryBalance, SeasonTotals


def _closer(order: int = 2) -> dict:
    return {"order": order, "participants": "Naomi vs Iyo Sky", "result": "Naomi def. Iyo Sky"}


RAW_QUALIFIER = {
    "id": "raw-20250602",
    "name": "Raw",
    "date": "2025-06-02",
    "matches": [
        {
            "order": 1,
            "stipulation": "King of the Ring Qualifier",
            "participants": "Cody Rhodes vs Carmelo Hayes",
            "result": "Cody Rhodes def. Carmelo Hayes",
        },
        _closer(),
    ],
}
SMACKDOWN_FIRST_ROUND = {
    "id": "smackdown-20250606",
    "name": "SmackDown",
    "date": "2025-06-06",
    "matches": [
        {
            "order": 1,
            "stipulation": "King of the Ring First Round",
            "participants": "Cody Rhodes vs Shinsuke Nakamura",
            "result": "Cody Rhodes def. Shinsuke Nakamura",
        },
        _closer(),
    ],
}
NIGHT_OF_CHAMPIONS = {
    "id": "night-of-champions-2025",
    "name": "Night of Champions",
    "date": "2025-06-28",
    "matches": [
        {
            "order": 1,
            "stipulation": "King of the Ring Final",
            "participants": "Cody Rhodes vs Randy Orton",
            "result": "Cody Rhodes def. Randy Orton",
        },
        {"order": 2, "participants": "Carmelo Hayes vs Sheamus", "result": "Carmelo Hayes def. Sheamus"},
    ],
}
SEASON = [RAW_QUALIFIER, SMACKDOWN_FIRST_ROUND, NIGHT_OF_CHAMPIONS]


def test_tournament_winner_through_qualifiers_only() -> None:
    totals = aggregate(SEASON)

    assert totals["cody-rhodes"].weekly_show == 6
    assert totals["cody-rhodes"].premium_event == 30 + 3
    assert totals["randy-orton"].premium_event == 10


def test_carry_is_realized_by_any_finale_appearance() -> None:
    totals = aggregate(SEASON)

    # Main-event win at a medium premium event plus the qualifier carry.
    assert totals["carmelo-hayes"].premium_event == 15 + 9 + 3
    assert totals["shinsuke-nakamura"].premium_event == 0


def test_tournament_final_with_semifinal_carry() -> None:
    events = [
        RAW_QUALIFIER,
        {
            "id": "smackdown-20250606",
            "name": "SmackDown",
            "date": "2025-06-06",
            "matches": [
                {
                    "order": 1,
                    "stipulation": "King of the Ring Qualifier",
                    "participants": "Randy Orton vs LA Knight",
                    "result": "Randy Orton def. LA Knight",
                },
                _closer(),
            ],
        },
        {
            "id": "smackdown-20250613",
            "name": "SmackDown",
            "date": "2025-06-13",
            "matches": [
                {
                    "order": 1,
                    "stipulation": "King of the Ring Semifinal",
                    "participants": "Cody Rhodes vs Sami Zayn",
                    "result": "Cody Rhodes def. Sami Zayn",
                },
                {
                    "order": 2,
                    "stipulation": "King of the Ring Semifinal",
                    "participants": "Randy Orton vs Jacob Fatu",
                    "result": "Randy Orton def. Jacob Fatu",
                },
            ],
        },
        NIGHT_OF_CHAMPIONS,
    ]
    totals, ledger = aggregate_with_carry(events)

    assert totals["cody-rhodes"].premium_event == 40
    assert totals["randy-orton"].premium_event == 20
    assert ledger["sami-zayn"].total == 7
    assert ledger["cody-rhodes"].total == 0


def test_unrealized_carry_stays_in_ledger() -> None:
    totals, ledger = aggregate_with_carry([RAW_QUALIFIER, SMACKDOWN_FIRST_ROUND])

    assert totals["cody-rhodes"] == SeasonTotals(weekly_show=6)
    assert ledger["cody-rhodes"] == CarryBalance(qualifier=3, semifinal=0, bracket="king")
    assert ledger["shinsuke-nakamura"].qualifier == 3


def test_title_bonus_is_booked_as_title_holding() -> None:
    event = {
        "id": "raw-20250609",
        "name": "Raw",
        "date": "2025-06-09",
        "matches": [
            {
                "order": 1,
                "participants": "Dominik Mysterio vs Penta",
                "result": "Penta def. Dominik Mysterio",
                "title": "Intercontinental Championship",
                "titleOutcome": "New Champion",
            },
            _closer(),
        ],
    }
    totals = aggregate([event])

    assert totals["penta"] == SeasonTotals(weekly_show=3, premium_event=0, title_holding=5)
    assert totals["dominik-mysterio"].grand_total == 1


def test_fold_matches_whole_season_aggregation() -> None:
    totals: dict[str, SeasonTotals] = {}
    ledger = None
    for event in SEASON:
        event_totals, ledger = aggregate_single_event(event, ledger)
        merge_totals(totals, event_totals)

    assert totals == aggregate(SEASON)

    head, carry = aggregate_with_carry(SEASON[:2])
    tail, _ = aggregate_with_carry(SEASON[2:], carry_in=carry)
    assert merge_totals(head, tail) == aggregate(SEASON)


def test_single_event_does_not_mutate_carry_in() -> None:
    _, ledger = aggregate_with_carry([RAW_QUALIFIER])
    before = {k: CarryBalance(v.qualifier, v.semifinal, v.bracket) for k, v in ledger.items()}

    _, after = aggregate_single_event(NIGHT_OF_CHAMPIONS, ledger)

    assert ledger == before
    assert after["cody-rhodes"].total == 0


def test_event_order_in_input_does_not_matter() -> None:
    assert aggregate(list(reversed(SEASON))) == aggregate(SEASON)


def test_persona_points_follow_the_date_window() -> None:
    def raw(day: str) -> dict:
        return {
            "id": f"raw-{day.replace('-', '')}",
            "name": "Raw",
            "date": day,
            "matches": [
                {
                    "order": 1,
                    "participants": "El Grande Americano vs Rey Fenix",
                    "result": "El Grande Americano def. Rey Fenix",
                },
                _closer(),
            ],
        }

    totals = aggregate([raw("2025-06-23"), raw("2025-07-07")])

    assert totals["chad-gable"].weekly_show == 3
    assert totals["ludwig-kaiser"].weekly_show == 3
    assert "el-grande-americano" not in totals
    assert totals["rey-fenix"].weekly_show == 2


def test_unknown_events_contribute_nothing() -> None:
    event = {
        "id": "house-show-1",
        "name": "House Show",
        "date": "2025-06-01",
        "matches": [{"order": 1, "participants": "Jey Uso vs Gunther", "result": "Jey Uso def. Gunther"}],
    }
    assert aggregate([event]) == {}


def test_sort_events_drops_undated_records(caplog) -> None:
    events = [
        {"id": "raw-b", "name": "Raw", "date": "2025-06-09"},
        {"id": "raw-none", "name": "Raw"},
        {"id": "raw-bad", "name": "Raw", "date": "next monday"},
        {"id": "raw-a", "name": "Raw", "date": "2025-06-02T20:00:00Z"},
    ]
    with caplog.at_level(logging.WARNING):
        ordered = sort_events(events)

    assert [e.id for e in ordered] == ["raw-a", "raw-b"]
    assert "raw-none" in caplog.text
    assert "unreadable date" in caplog.text


def test_single_event_with_impossible_date_still_folds(caplog) -> None:
    event = {
        "id": "raw-bad",
        "name": "Raw",
        "date": "2025-13-40",
        "matches": [
            {"order": 1, "participants": "Jey Uso vs Gunther", "result": "Jey Uso def. Gunther"},
            {"order": 2, "participants": "CM Punk vs Seth Rollins", "result": "CM Punk def. Seth Rollins"},
        ],
    }
    with caplog.at_level(logging.WARNING):
        totals, ledger = aggregate_single_event(event)

    assert totals["jey-uso"].weekly_show == 3
    assert totals["gunther"].weekly_show == 1
    assert ledger == {}
    assert "unreadable date" in caplog.text
