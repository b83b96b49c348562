from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .events import is_weekly_show, single_main_event_only
from .extractor import extract_match_participants
from .matches import (
    Match,
    defending_champion,
    is_battle_royal,
    is_disqualification,
    is_main_event,
    is_match_kind,
    is_no_contest,
    is_title_change,
    is_title_match,
    stipulation,
)
from .models import EventType, MatchParticipants, ScoredParticipant
from .names import names_match, slugs_equal, text
from .schedules import (
    BATTLE_ROYAL,
    CHAMBER,
    CROWN_JEWEL,
    LADDER,
    RUMBLE,
    TITLE,
    TOURNAMENT,
    WAR_GAMES,
    CardSchedule,
    card_schedule,
    halve_for_dq,
)
from .special_matches import chamber_stats, deciding_fall, rumble_stats, war_games_entry_points
from .tournament import FINAL, SEMIFINAL, is_tournament_match, tournament_bracket, tournament_round, weekly_show_slot

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchContext:
    """Everything the rules need to know about one performer in one match."""

    match: Match
    event_type: EventType
    event_id: str
    all_matches: list[Match]
    performer: str
    extracted: MatchParticipants
    event_statistics: Any = None

    @property
    def no_contest(self) -> bool:
        return is_no_contest(self.match)

    @property
    def disqualification(self) -> bool:
        return is_disqualification(self.match)

    @property
    def is_winner(self) -> bool:
        return any(names_match(w, self.performer) for w in self.extracted.winners)

    @property
    def decided_winner(self) -> bool:
        """Won a match that paid a win: not a no-contest and not an unreadable result."""
        return self.is_winner and not self.no_contest and not self.extracted.unclear

    @property
    def main_event(self) -> bool:
        return is_main_event(self.match, self.all_matches, single_main_event_only(self.event_type))


def _add(sp: ScoredParticipant, bucket: str, points: int, line: str) -> None:
    if points <= 0:
        return
    setattr(sp, bucket, getattr(sp, bucket) + points)
    sp.breakdown_lines.append(f"{line}: +{points}")


def _score_title(ctx: MatchContext, sp: ScoredParticipant) -> None:
    if not is_title_match(ctx.match):
        return
    if is_title_change(ctx.match):
        if ctx.decided_winner:
            _add(sp, "title_points", TITLE.change, "Title win")
        return
    if ctx.disqualification:
        champion = defending_champion(ctx.match)
        is_champion = slugs_equal(champion, ctx.performer) if champion else ctx.is_winner
        if is_champion and not ctx.no_contest:
            _add(sp, "title_points", TITLE.dq_defense, "Title defense (DQ)")
    elif ctx.decided_winner:
        _add(sp, "title_points", TITLE.defense, "Title defense")


def _score_battle_royal(ctx: MatchContext, sp: ScoredParticipant) -> None:
    _add(sp, "mass_entry_points", BATTLE_ROYAL.entry, "Battle royal entry")
    if ctx.decided_winner:
        _add(sp, "mass_entry_points", BATTLE_ROYAL.winner, "Battle royal winner")


def _score_card(ctx: MatchContext, sp: ScoredParticipant, schedule: CardSchedule) -> None:
    if ctx.main_event and schedule.has_main_event_tier:
        if ctx.decided_winner:
            win = schedule.win_main_event or 0
            if ctx.disqualification:
                _add(sp, "match_points", halve_for_dq(win), f"Winning {schedule.label} main event (DQ)")
            else:
                _add(sp, "match_points", win, f"Winning {schedule.label} main event")
        _add(sp, "main_event_points", schedule.main_event or 0, f"Main eventing {schedule.label}")
        return

    if ctx.decided_winner:
        if ctx.disqualification:
            _add(sp, "match_points", halve_for_dq(schedule.win), f"Winning {schedule.label} match (DQ)")
        else:
            _add(sp, "match_points", schedule.win, f"Winning {schedule.label} match")
    _add(sp, "match_points", schedule.on_card, f"On {schedule.label} card")


def _score_rumble(ctx: MatchContext, sp: ScoredParticipant) -> None:
    stats = rumble_stats(ctx.match, ctx.event_statistics)
    _add(sp, "special_points", RUMBLE.participant, "Royal Rumble participant")
    eliminations = stats.eliminations_for(ctx.performer)
    _add(sp, "special_points", RUMBLE.per_elimination * eliminations, f"Royal Rumble eliminations ({eliminations})")
    if stats.is_iron_man(ctx.performer):
        _add(sp, "special_points", RUMBLE.iron_man, "Royal Rumble iron man / iron woman")
    if stats.has_most_eliminations(ctx.performer):
        _add(sp, "special_points", RUMBLE.most_eliminations, "Royal Rumble most eliminations")
    if ctx.decided_winner:
        _add(sp, "special_points", RUMBLE.winner, "Royal Rumble winner")


def _score_war_games(ctx: MatchContext, sp: ScoredParticipant) -> None:
    _add(sp, "special_points", WAR_GAMES.team, "War Games team")
    if ctx.decided_winner:
        _add(sp, "special_points", WAR_GAMES.winning_side, "Winning War Games")
    fall = deciding_fall(ctx.match)
    if fall and names_match(fall, ctx.performer):
        _add(sp, "special_points", WAR_GAMES.deciding_fall, "War Games deciding fall")
    entry = war_games_entry_points(ctx.match, ctx.performer)
    _add(sp, "special_points", entry, f"War Games entry #{WAR_GAMES.ranks + 1 - entry}")


def _score_chamber(ctx: MatchContext, sp: ScoredParticipant) -> None:
    stats = chamber_stats(ctx.match)
    if stats.is_participant(ctx.performer):
        _add(sp, "special_points", CHAMBER.participant, "Elimination Chamber participant")
    if ctx.decided_winner:
        _add(sp, "special_points", CHAMBER.winner, "Winning Elimination Chamber")
    eliminations = stats.eliminations_for(ctx.performer)
    _add(sp, "special_points", CHAMBER.per_elimination * eliminations, f"Elimination Chamber eliminations ({eliminations})")
    if stats.is_longest_lasting(ctx.performer):
        _add(sp, "special_points", CHAMBER.longest_lasting, "Elimination Chamber longest lasting")


def _score_ladder(ctx: MatchContext, sp: ScoredParticipant) -> None:
    _add(sp, "special_points", LADDER.participant, "Money in the Bank ladder match participant")
    if ctx.decided_winner:
        _add(sp, "special_points", LADDER.winner, "Money in the Bank winner")


def _score_crown_jewel(ctx: MatchContext, sp: ScoredParticipant) -> None:
    if ctx.decided_winner:
        _add(sp, "special_points", CROWN_JEWEL.winner, "Winning Crown Jewel Championship")
    else:
        _add(sp, "special_points", CROWN_JEWEL.participant, "Crown Jewel Championship match")


def _bracket_label(bracket: str | None) -> str:
    return f"{(bracket or 'king').title()} of the Ring"


def _score_tournament(ctx: MatchContext, sp: ScoredParticipant) -> None:
    round_name = tournament_round(ctx.match, ctx.all_matches, ctx.event_type)
    bracket = tournament_bracket(ctx.match, ctx.performer)
    label = _bracket_label(bracket)
    sp.tournament_round = round_name
    sp.tournament_bracket = bracket
    if round_name == FINAL:
        _add(sp, "special_points", TOURNAMENT.finalist, f"{label} finalist")
        if ctx.decided_winner:
            _add(sp, "special_points", TOURNAMENT.winner, f"{label} winner")
    elif round_name == SEMIFINAL:
        _add(sp, "special_points", TOURNAMENT.semifinal, f"{label} semi-final")
    else:
        _add(sp, "special_points", TOURNAMENT.qualifier, f"{label} first round")


def _is_qualifier(match: Match) -> bool:
    return "qualifier" in stipulation(match).lower()


def _is_war_games(match: Match) -> bool:
    return is_match_kind(match, "war games") or "war games" in stipulation(match).lower()


def _is_crown_jewel_championship(match: Match) -> bool:
    return "crown jewel" in text(match.get("title")).lower() or "crown jewel" in stipulation(match).lower()


SpecialRule = tuple[Callable[[MatchContext], bool], Callable[[MatchContext, ScoredParticipant], None]]

# Matches these rules pick up are scored by their own engine instead of the card schedule.
SPECIAL_RULES: dict[EventType, tuple[SpecialRule, ...]] = {
    EventType.SURVIVOR_SERIES: ((lambda c: _is_war_games(c.match), _score_war_games),),
    EventType.ROYAL_RUMBLE: ((lambda c: is_match_kind(c.match, "royal rumble"), _score_rumble),),
    EventType.ELIMINATION_CHAMBER: (
        (lambda c: is_match_kind(c.match, "elimination chamber") and not _is_qualifier(c.match), _score_chamber),
    ),
    EventType.MONEY_IN_THE_BANK: (
        (lambda c: is_match_kind(c.match, "money in the bank") and not _is_qualifier(c.match), _score_ladder),
    ),
    EventType.CROWN_JEWEL: ((lambda c: _is_crown_jewel_championship(c.match), _score_crown_jewel),),
    EventType.NIGHT_OF_CHAMPIONS: ((lambda c: is_tournament_match(c.match), _score_tournament),),
    EventType.KING_QUEEN_OF_THE_RING: ((lambda c: is_tournament_match(c.match), _score_tournament),),
}


def _score_weekly_tournament(ctx: MatchContext, sp: ScoredParticipant) -> None:
    slot = weekly_show_slot(ctx.match, ctx.all_matches, ctx.event_id, ctx.event_type, ctx.performer)
    if slot is None:
        return
    carry = TOURNAMENT.semifinal if slot.round == SEMIFINAL else TOURNAMENT.qualifier
    sp.tournament_carry = carry
    sp.tournament_bracket = slot.bracket
    sp.tournament_round = slot.round
    stage = "semi-final" if slot.round == SEMIFINAL else "qualifier"
    sp.breakdown_lines.append(f"{_bracket_label(slot.bracket)} {stage} (carried to finale): +{carry}")


def calculate_match_points(
    match: Match,
    event_type: EventType,
    all_matches: list[Match],
    performer: str,
    event_id: str = "",
    event_statistics: Any = None,
    extracted: MatchParticipants | None = None,
) -> ScoredParticipant:
    sp = ScoredParticipant(performer=performer)
    schedule = card_schedule(event_type)
    if schedule is None:
        LOGGER.warning("No point schedule for event type %r (event %s)", event_type, event_id)
        return sp

    extracted = extracted or extract_match_participants(match)
    if not any(names_match(p, performer) for p in extracted.participants):
        return sp

    ctx = MatchContext(match, event_type, event_id, all_matches, performer, extracted, event_statistics)
    if ctx.no_contest:
        sp.breakdown_lines.append("No contest: appearance points only")
    elif extracted.unclear:
        sp.breakdown_lines.append("Unclear result: appearance points only")

    if is_battle_royal(match):
        _score_battle_royal(ctx, sp)
    _score_title(ctx, sp)

    for applies, score in SPECIAL_RULES.get(event_type, ()):
        if applies(ctx):
            score(ctx, sp)
            break
    else:
        _score_card(ctx, sp, schedule)

    if is_weekly_show(event_type):
        _score_weekly_tournament(ctx, sp)
    return sp
