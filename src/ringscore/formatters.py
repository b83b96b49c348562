from __future__ import annotations

from html import escape
from typing import Any

from .models import ScoredEvent, ScoredParticipant, SeasonTotals
from .names import text
from .personas import personas_for_display


def _participants_label(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(text(v) for v in value if text(v))
    return text(value)


def format_participant(sp: ScoredParticipant) -> list[str]:
    lines = [f"- <b>{escape(sp.performer)}</b>: {sp.total} pts"]
    lines.extend(f"    {escape(line)}" for line in sp.breakdown_lines)
    return lines


def format_scored_event(event: ScoredEvent) -> str:
    date = f"{event.date:%b %d, %Y}" if event.date else "TBD"
    lines = [
        f"<b>{escape(event.event_name or event.event_id)}</b>",
        f"Date: {escape(date)} | Type: {escape(event.event_type.value)}",
    ]
    if not event.matches:
        lines.append("No scorable matches.")
        return "\n".join(lines)

    for match in sorted(event.matches, key=lambda m: m.order):
        header = _participants_label(match.participants)
        if match.is_promotional_segment:
            lines.append(f"\n#{match.order} Promo: {escape(header or match.result or 'segment')}")
            continue
        lines.append(f"\n#{match.order} {escape(header)}")
        if match.result:
            lines.append(f"Result: {escape(match.result)}")
        if match.title:
            outcome = f" ({escape(match.title_outcome)})" if match.title_outcome else ""
            lines.append(f"Title: {escape(match.title)}{outcome}")
        for sp in match.per_participant:
            lines.extend(format_participant(sp))
    return "\n".join(lines)


def format_season_totals(totals: dict[str, SeasonTotals], limit: int | None = None) -> str:
    if not totals:
        return "No points scored yet."

    ranked = sorted(totals.items(), key=lambda row: (-row[1].grand_total, row[0]))
    if limit is not None:
        ranked = ranked[:limit]

    lines = ["<b>Season totals</b>", "Performer | Weekly | Premium | Titles | Total"]
    for idx, (performer, row) in enumerate(ranked, start=1):
        lines.append(
            f"{idx}. {escape(performer)} | {row.weekly_show} | {row.premium_event} | "
            f"{row.title_holding} | <b>{row.grand_total}</b>"
        )
        note = personas_for_display(performer)
        if note:
            lines.append(f"   {escape(note)}")
    return "\n".join(lines)
