import logging

from ringscore.events import (
    classify_event,
    is_premium_event,
    is_tournament_finale,
    is_weekly_show,
    premium_category,
    single_main_event_only,
)
from ringscore.models import EventType, PremiumCategory


def test_weekly_shows_from_name_or_id() -> None:
    assert classify_event("Friday Night SmackDown") is EventType.SMACKDOWN
    assert classify_event("", "raw-20250602") is EventType.RAW
    assert classify_event("Monday Night Raw") is EventType.RAW


def test_raw_tag_team_title_name_is_not_a_weekly_show(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert classify_event("Raw Tag Team Championship Showcase") is EventType.UNKNOWN
    assert "Unknown event type" in caplog.text


def test_two_night_events() -> None:
    assert classify_event("WrestleMania 41 Night 1") is EventType.WRESTLEMANIA_NIGHT_1
    assert classify_event("WrestleMania 41 Night Two") is EventType.WRESTLEMANIA_NIGHT_2
    assert classify_event("WrestleMania 41") is EventType.WRESTLEMANIA_NIGHT_1
    assert classify_event("", "summerslam-2025-night-2") is EventType.SUMMERSLAM_NIGHT_2
    assert classify_event("SummerSlam") is EventType.SUMMERSLAM_NIGHT_1


def test_premium_events() -> None:
    cases = {
        "Survivor Series: WarGames": EventType.SURVIVOR_SERIES,
        "Royal Rumble 2026": EventType.ROYAL_RUMBLE,
        "Elimination Chamber: Toronto": EventType.ELIMINATION_CHAMBER,
        "Crown Jewel": EventType.CROWN_JEWEL,
        "Night of Champions": EventType.NIGHT_OF_CHAMPIONS,
        "King and Queen of the Ring": EventType.KING_QUEEN_OF_THE_RING,
        "Money in the Bank": EventType.MONEY_IN_THE_BANK,
        "Saturday Night's Main Event XL": EventType.SATURDAY_NIGHTS_MAIN_EVENT,
        "Backlash": EventType.BACKLASH,
        "Evolution": EventType.EVOLUTION,
        "Clash in Paris": EventType.CLASH_IN_PARIS,
        "Wrestlepalooza": EventType.WRESTLEPALOOZA,
    }
    for name, expected in cases.items():
        assert classify_event(name) is expected, name


def test_categories_and_flags() -> None:
    assert premium_category(EventType.ROYAL_RUMBLE) is PremiumCategory.MAJOR
    assert premium_category(EventType.CROWN_JEWEL) is PremiumCategory.MEDIUM
    assert premium_category(EventType.BACKLASH) is PremiumCategory.MINOR
    assert premium_category(EventType.UNKNOWN) is PremiumCategory.WEEKLY

    assert is_weekly_show(EventType.SMACKDOWN)
    assert not is_premium_event(EventType.RAW)
    assert is_premium_event(EventType.EVOLUTION)
    assert is_tournament_finale(EventType.KING_QUEEN_OF_THE_RING)
    assert not is_tournament_finale(EventType.CROWN_JEWEL)
    assert single_main_event_only(EventType.WRESTLEPALOOZA)
    assert not single_main_event_only(EventType.BACKLASH)
