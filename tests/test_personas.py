from datetime import date

import pytest

from ringscore.personas import (
    Persona,
    PersonaWindow,
    canonical_identity,
    is_persona_only,
    personas_for_display,
    resolve_persona,
    validate_personas,
)


def test_resolve_persona_by_date_window() -> None:
    assert resolve_persona("El Grande Americano", date(2025, 6, 29)) == "chad-gable"
    assert resolve_persona("el-grande-americano", date(2025, 6, 30)) == "ludwig-kaiser"
    assert resolve_persona("Original El Grande Americano", date(2026, 2, 2)) == "chad-gable"


def test_resolve_persona_without_a_covering_window() -> None:
    assert resolve_persona("Original El Grande Americano", date(2025, 12, 1)) is None
    assert resolve_persona("El Grande Americano", None) is None
    assert resolve_persona("Chad Gable", date(2025, 6, 1)) is None


def test_canonical_identity_falls_back_to_slug() -> None:
    assert canonical_identity("El Grande Americano", date(2025, 7, 1)) == "ludwig-kaiser"
    assert canonical_identity("Original El Grande Americano", date(2025, 12, 1)) == "original-el-grande-americano"
    assert canonical_identity("Chad Gable", date(2025, 7, 1)) == "chad-gable"


def test_persona_only_labels() -> None:
    assert is_persona_only("El Grande Americano")
    assert not is_persona_only("Chad Gable")


def test_display_note_lists_windows_in_order() -> None:
    assert personas_for_display("chad-gable") == (
        "Also: El Grande Americano (through Jun 2025); Original El Grande Americano (from Jan 2026)"
    )
    assert personas_for_display("Ludwig Kaiser") == "Also: El Grande Americano (from Jun 2025)"
    assert personas_for_display("penta") is None


def test_validate_rejects_overlapping_windows() -> None:
    bad = (
        Persona(
            alias="masked-man",
            display_name="Masked Man",
            windows=(
                PersonaWindow("first", ends=date(2025, 6, 30)),
                PersonaWindow("second", starts=date(2025, 6, 30)),
            ),
        ),
    )
    with pytest.raises(ValueError, match="Overlapping"):
        validate_personas(bad)


def test_validate_rejects_shadowed_alias() -> None:
    shadowed = (
        Persona("el-grande-americano", "El Grande Americano", (PersonaWindow("chad-gable"),)),
        Persona("original-el-grande-americano", "Original El Grande Americano", (PersonaWindow("chad-gable"),)),
    )
    with pytest.raises(ValueError, match="must be listed before"):
        validate_personas(shadowed)
