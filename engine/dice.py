"""Dice rolling for character creation.

The derivation engine never rolls. Character creation uses these helpers
with an injected ``random.Random`` and passes the results back in, e.g. as
``CharacterAttributes.hit_points_override``.
"""

import random
import re

from pydantic import BaseModel

from engine.combat import resolve_class_levels
from models.characters import Ability, AbilityScores, ClassLevel
from models.rules import RulesDataStore


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    rolls: list[int]
    modifier: int
    notation: str


def roll(notation: str, rng: random.Random | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6+3', '1d20', '4d6-1'.

    Args:
        notation: Dice notation string (e.g. "2d6+3").
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        DiceResult with total, individual rolls, modifier, and notation.
    """
    rng = rng or random.Random()
    notation = notation.strip().lower()

    match = re.match(r"^(\d+)d(\d+)([+-]\d+)?$", notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    if num_dice < 1 or die_size < 1:
        raise ValueError(f"Invalid dice notation: {notation}")
    modifier = int(match.group(3)) if match.group(3) else 0

    rolls = [rng.randint(1, die_size) for _ in range(num_dice)]
    total = sum(rolls) + modifier

    return DiceResult(
        total=total,
        rolls=rolls,
        modifier=modifier,
        notation=notation,
    )


def roll_ability_score(rng: random.Random | None = None) -> int:
    """Roll 4d6 and drop the lowest die."""
    result = roll("4d6", rng=rng)
    return sum(sorted(result.rolls)[1:])


def roll_ability_scores(rng: random.Random | None = None) -> AbilityScores:
    """Roll all six abilities in order with 4d6-drop-lowest."""
    rng = rng or random.Random()
    return AbilityScores(**{a.value: roll_ability_score(rng) for a in Ability})


def roll_hit_points(
    classes: list[ClassLevel],
    rules: RulesDataStore,
    con_modifier: int,
    rng: random.Random | None = None,
) -> int:
    """Roll hit points for a character.

    The first character level gets the maximum of its hit die; every later
    level rolls. Each level gives at least 1 HP after the CON modifier.

    Args:
        classes: Class levels in the order they were taken.
        rules: The rules data store (for hit dice).
        con_modifier: Constitution modifier.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        The rolled HP total.
    """
    rng = rng or random.Random()
    total = 0
    first = True
    for cls, level in resolve_class_levels(classes, rules):
        for _ in range(level):
            if first:
                hp = cls.hit_die
                first = False
            else:
                hp = roll(f"1d{cls.hit_die}", rng=rng).total
            total += max(1, hp + con_modifier)
    return total
