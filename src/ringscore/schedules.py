from __future__ import annotations

from dataclasses import dataclass

from .models import EventType


@dataclass(frozen=True, slots=True)
class CardSchedule:
    label: str
    on_card: int
    win: int
    main_event: int | None
    win_main_event: int | None

    @property
    def has_main_event_tier(self) -> bool:
        return self.main_event is not None


@dataclass(frozen=True, slots=True)
class TitleAwards:
    change: int = 5
    defense: int = 4

    @property
    def dq_defense(self) -> int:
        return self.defense // 2


@dataclass(frozen=True, slots=True)
class BattleRoyalAwards:
    entry: int = 1
    winner: int = 8


@dataclass(frozen=True, slots=True)
class RumbleAwards:
    participant: int = 2
    per_elimination: int = 3
    iron_man: int = 12
    most_eliminations: int = 12
    winner: int = 30


@dataclass(frozen=True, slots=True)
class WarGamesAwards:
    team: int = 8
    winning_side: int = 14
    deciding_fall: int = 10
    first_entrant: int = 5
    ranks: int = 5


@dataclass(frozen=True, slots=True)
class ChamberAwards:
    participant: int = 10
    per_elimination: int = 10
    longest_lasting: int = 15
    winner: int = 30


@dataclass(frozen=True, slots=True)
class LadderAwards:
    participant: int = 12
    winner: int = 25


@dataclass(frozen=True, slots=True)
class CrownJewelAwards:
    participant: int = 10
    winner: int = 20


@dataclass(frozen=True, slots=True)
class TournamentAwards:
    qualifier: int = 3
    semifinal: int = 7
    finalist: int = 10
    winner: int = 20


TITLE = TitleAwards()
BATTLE_ROYAL = BattleRoyalAwards()
RUMBLE = RumbleAwards()
WAR_GAMES = WarGamesAwards()
CHAMBER = ChamberAwards()
LADDER = LadderAwards()
CROWN_JEWEL = CrownJewelAwards()
TOURNAMENT = TournamentAwards()

_PREMIUM_MEDIUM = (4, 8, 9, 15)
_PREMIUM_MINOR = (3, 6, 7, 12)

CARD_SCHEDULES: dict[EventType, CardSchedule] = {
    EventType.RAW: CardSchedule("Raw", 1, 2, 3, 4),
    EventType.SMACKDOWN: CardSchedule("SmackDown", 1, 2, 3, 4),
    EventType.WRESTLEMANIA_NIGHT_1: CardSchedule("WrestleMania Night 1", 6, 12, 20, 25),
    EventType.WRESTLEMANIA_NIGHT_2: CardSchedule("WrestleMania Night 2", 6, 12, 25, 35),
    EventType.SUMMERSLAM_NIGHT_1: CardSchedule("SummerSlam Night 1", 5, 10, 10, 20),
    EventType.SUMMERSLAM_NIGHT_2: CardSchedule("SummerSlam Night 2", 5, 10, 15, 20),
    EventType.SURVIVOR_SERIES: CardSchedule("Survivor Series", 5, 10, None, None),
    EventType.ROYAL_RUMBLE: CardSchedule("Royal Rumble", 5, 10, 12, 15),
    EventType.ELIMINATION_CHAMBER: CardSchedule("Elimination Chamber", *_PREMIUM_MEDIUM),
    EventType.CROWN_JEWEL: CardSchedule("Crown Jewel", *_PREMIUM_MEDIUM),
    EventType.NIGHT_OF_CHAMPIONS: CardSchedule("Night of Champions", *_PREMIUM_MEDIUM),
    EventType.KING_QUEEN_OF_THE_RING: CardSchedule("King & Queen of the Ring", *_PREMIUM_MEDIUM),
    EventType.MONEY_IN_THE_BANK: CardSchedule("Money in the Bank", *_PREMIUM_MEDIUM),
    EventType.SATURDAY_NIGHTS_MAIN_EVENT: CardSchedule("Saturday Night's Main Event", *_PREMIUM_MINOR),
    EventType.BACKLASH: CardSchedule("Backlash", *_PREMIUM_MINOR),
    EventType.EVOLUTION: CardSchedule("Evolution", *_PREMIUM_MINOR),
    EventType.CLASH_IN_PARIS: CardSchedule("Clash in Paris", *_PREMIUM_MINOR),
    EventType.WRESTLEPALOOZA: CardSchedule("Wrestlepalooza", *_PREMIUM_MINOR),
}


def card_schedule(event_type: EventType) -> CardSchedule | None:
    return CARD_SCHEDULES.get(event_type)


def halve_for_dq(points: int) -> int:
    return points // 2
