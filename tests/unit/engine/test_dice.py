"""Tests for hit die rolling."""

from __future__ import annotations

import pytest

from dnd_advancement.core.exceptions import DiceRollError
from dnd_advancement.engine.dice import DiceResult, DiceRoller


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_simple_roll(self, dice_roller: DiceRoller) -> None:
        """Test a single die stays in range."""
        result = dice_roller.roll("1d10")

        assert isinstance(result, DiceResult)
        assert 1 <= result.total <= 10
        assert len(result.dice) == 1
        assert result.modifier == 0

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test the static part of the total is reported."""
        result = dice_roller.roll("1d8+2")

        assert result.modifier == 2
        assert result.natural == result.total - 2

    def test_multiple_dice(self, dice_roller: DiceRoller) -> None:
        """Test rolling several dice."""
        result = dice_roller.roll("3d6")

        assert 3 <= result.total <= 18
        assert len(result.dice) == 3

    def test_seed_reproducible(self) -> None:
        """Test the same seed yields the same rolls."""
        first = DiceRoller(seed=7).roll("4d12").dice
        second = DiceRoller(seed=7).roll("4d12").dice

        assert first == second

    @pytest.mark.parametrize("expression", ["", "   ", "1d", "not dice"])
    def test_invalid_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        """Test invalid expressions raise DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll(expression)


class TestRollHitDie:
    """Tests for hit die rolls."""

    @pytest.mark.parametrize("hit_die", [6, 8, 10, 12])
    def test_range(self, dice_roller: DiceRoller, hit_die: int) -> None:
        """Test hit die results stay on the die."""
        for _ in range(20):
            result = dice_roller.roll_hit_die(hit_die)
            assert 1 <= result.total <= hit_die
            assert result.expression == f"1d{hit_die}"

    def test_invalid_size(self, dice_roller: DiceRoller) -> None:
        """Test non-positive die sizes are rejected."""
        with pytest.raises(DiceRollError) as exc_info:
            dice_roller.roll_hit_die(0)

        assert exc_info.value.details["expression"] == "1d0"
