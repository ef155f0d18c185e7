"""Tests for species_sim.types — enums, death-cause exceptions, outcomes."""

import pytest

from species_sim.types import (
    ALIVE,
    MONTHS_PER_YEAR,
    Alive,
    Dead,
    DeathCause,
    DeathCauseError,
    Dehydrated,
    Froze,
    Gender,
    NaturalCauses,
    Overheated,
    Starved,
)


# ── Enum tests ────────────────────────────────────────────────────────

class TestGenderEnum:
    def test_values(self):
        assert Gender.MALE == 0
        assert Gender.FEMALE == 1

    def test_count(self):
        assert len(Gender) == 2


class TestDeathCauseEnum:
    def test_count(self):
        assert len(DeathCause) == 5

    def test_labels(self):
        assert DeathCause.NATURAL_CAUSES.label == "natural causes"
        assert DeathCause.FROZE.label == "froze"


def test_months_per_year():
    assert MONTHS_PER_YEAR == 12


# ── Exception tests ───────────────────────────────────────────────────

class TestDeathCauseErrors:
    @pytest.mark.parametrize("exc_cls, cause", [
        (NaturalCauses, DeathCause.NATURAL_CAUSES),
        (Dehydrated, DeathCause.DEHYDRATED),
        (Starved, DeathCause.STARVED),
        (Overheated, DeathCause.OVERHEATED),
        (Froze, DeathCause.FROZE),
    ])
    def test_cause_mapping(self, exc_cls, cause):
        assert exc_cls.cause is cause
        assert issubclass(exc_cls, DeathCauseError)

    def test_causes_are_distinct(self):
        classes = [NaturalCauses, Dehydrated, Starved, Overheated, Froze]
        assert len({c.cause for c in classes}) == 5

    def test_parameterless(self):
        with pytest.raises(DeathCauseError, match="too cold"):
            raise Froze()


# ── Outcome tests ─────────────────────────────────────────────────────

class TestSurviveOutcome:
    def test_alive(self):
        assert isinstance(ALIVE, Alive)
        assert ALIVE.is_alive

    def test_dead_carries_cause(self):
        outcome = Dead(DeathCause.STARVED)
        assert not outcome.is_alive
        assert outcome.cause is DeathCause.STARVED

    def test_dead_equality(self):
        assert Dead(DeathCause.FROZE) == Dead(DeathCause.FROZE)
        assert Dead(DeathCause.FROZE) != Dead(DeathCause.OVERHEATED)
