from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .names import normalize_name


@dataclass(frozen=True, slots=True)
class PersonaWindow:
    canonical: str
    starts: date | None = None
    ends: date | None = None

    def covers(self, on_date: date) -> bool:
        if self.starts is not None and on_date < self.starts:
            return False
        if self.ends is not None and on_date > self.ends:
            return False
        return True

    def label(self) -> str:
        if self.starts and self.ends:
            return f"{self.starts:%b %Y} to {self.ends:%b %Y}"
        if self.ends:
            return f"through {self.ends:%b %Y}"
        if self.starts:
            return f"from {self.starts:%b %Y}"
        return "always"


@dataclass(frozen=True, slots=True)
class Persona:
    alias: str
    display_name: str
    windows: tuple[PersonaWindow, ...]
    persona_only: bool = True


# Aliases that contain another alias must come first.
PERSONAS: tuple[Persona, ...] = (
    Persona(
        alias="original-el-grande-americano",
        display_name="Original El Grande Americano",
        windows=(PersonaWindow("chad-gable", starts=date(2026, 1, 31)),),
    ),
    Persona(
        alias="el-grande-americano",
        display_name="El Grande Americano",
        windows=(
            PersonaWindow("chad-gable", ends=date(2025, 6, 29)),
            PersonaWindow("ludwig-kaiser", starts=date(2025, 6, 30)),
        ),
    ),
)


def _windows_overlap(a: PersonaWindow, b: PersonaWindow) -> bool:
    a_start = a.starts or date.min
    b_start = b.starts or date.min
    a_end = a.ends or date.max
    b_end = b.ends or date.max
    return a_start <= b_end and b_start <= a_end


def validate_personas(personas: tuple[Persona, ...] = PERSONAS) -> None:
    seen: list[str] = []
    for persona in personas:
        for earlier in seen:
            if earlier in persona.alias:
                raise ValueError(f"Persona {persona.alias!r} must be listed before {earlier!r}")
        seen.append(persona.alias)
        for i, window in enumerate(persona.windows):
            for other in persona.windows[i + 1 :]:
                if _windows_overlap(window, other):
                    raise ValueError(f"Overlapping windows for persona {persona.alias!r}")


validate_personas()

_BY_ALIAS = {persona.alias: persona for persona in PERSONAS}


def resolve_persona(alias: str, on_date: date | None) -> str | None:
    """Canonical performer behind `alias` on `on_date`, or None to keep the alias as the identity."""
    slug = normalize_name(alias)
    if not slug or on_date is None:
        return None
    for persona in PERSONAS:
        if slug != persona.alias:
            continue
        for window in persona.windows:
            if window.covers(on_date):
                return window.canonical
        return None
    return None


def canonical_identity(alias: str, on_date: date | None) -> str:
    slug = normalize_name(alias)
    return resolve_persona(slug, on_date) or slug


def is_persona_only(performer: str) -> bool:
    persona = _BY_ALIAS.get(normalize_name(performer))
    return persona is not None and persona.persona_only


def personas_for_display(canonical: str) -> str | None:
    slug = normalize_name(canonical)
    entries: list[tuple[date, str]] = []
    for persona in PERSONAS:
        for window in persona.windows:
            if window.canonical == slug:
                entries.append((window.starts or date.min, f"{persona.display_name} ({window.label()})"))
    if not entries:
        return None
    entries.sort(key=lambda row: row[0])
    return "Also: " + "; ".join(label for _, label in entries)
