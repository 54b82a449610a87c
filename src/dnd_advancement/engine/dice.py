"""Hit die rolling using the d20 library."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any

import d20

from dnd_advancement.core.exceptions import DiceRollError
from dnd_advancement.core.logging import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class DiceResult:
    """The result of one dice expression.

    Attributes:
        expression: The rolled expression.
        total: Total of the roll, modifiers included.
        dice: Individual kept die values.
        modifier: Static part of the total.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int

    @property
    def natural(self) -> int:
        """Sum of the dice alone."""
        return sum(self.dice)


class DiceRoller:
    """Dice roller backed by d20.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> 1 <= roller.roll_hit_die(10).total <= 10
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceResult:
        """Roll a dice expression.

        Args:
            expression: Dice expression (e.g., '1d10', '1d8+2').

        Returns:
            DiceResult with the total and kept dice.

        Raises:
            DiceRollError: If the expression is empty or invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        rolled = DiceResult(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )
        logger.debug("Dice rolled", expression=expression, total=rolled.total)
        return rolled

    def _extract_dice_values(self, expr: Any) -> list[int]:
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                values.extend(die.number for die in node.values if die.kept)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values

    def roll_hit_die(self, hit_die: int) -> DiceResult:
        """Roll one hit die.

        Args:
            hit_die: Die size (e.g., 10 for a d10).

        Returns:
            DiceResult of ``1d{hit_die}``.

        Raises:
            DiceRollError: If the die size is not positive.
        """
        if hit_die < 1:
            raise DiceRollError(
                f"Invalid hit die size: {hit_die}",
                expression=f"1d{hit_die}",
            )
        return self.roll(f"1d{hit_die}")


__all__ = ["DiceResult", "DiceRoller"]
