"""Experience thresholds, the multiclass XP penalty and carrying capacity."""

from __future__ import annotations

from config import MULTICLASS_XP_PENALTY
from engine.size import CARRY_MULTIPLIER
from models.derived import CarryingCapacity, Experience
from models.rules import ClassDefinition, RaceDefinition, Size

# Heavy load in pounds for a Medium biped, Strength 1-29
HEAVY_LOAD = (
    10, 20, 30, 40, 50, 60, 70, 80, 90, 100,
    115, 130, 150, 175, 200, 230, 260, 300, 350, 400,
    460, 520, 600, 700, 800, 920, 1040, 1200, 1400,
)


def xp_for_level(level: int) -> int:
    """Experience needed to reach a character level (1 -> 0, 2 -> 1000)."""
    return level * (level - 1) * 500


def multiclass_xp_penalty(
    class_levels: list[tuple[ClassDefinition, int]], race: RaceDefinition
) -> int:
    """XP penalty percent for unbalanced multiclassing.

    Every class more than one level below the highest-level class costs
    20%, except the race's favored class. A favored class of "any" means
    the highest-level class is favored.
    """
    if len(class_levels) <= 1:
        return 0
    highest = max(level for _, level in class_levels)
    favored = race.favored_class
    if favored == "any":
        favored = max(class_levels, key=lambda pair: pair[1])[0].id

    offending = 0
    for cls, level in class_levels:
        if cls.id == favored:
            continue
        if highest - level > 1:
            offending += 1
    return offending * MULTICLASS_XP_PENALTY


def compute_experience(
    total_level: int,
    class_levels: list[tuple[ClassDefinition, int]],
    race: RaceDefinition,
) -> Experience:
    return Experience(
        current_level_xp=xp_for_level(total_level),
        next_level_xp=xp_for_level(total_level + 1),
        multiclass_penalty=multiclass_xp_penalty(class_levels, race),
    )


def heavy_load(strength: int) -> int:
    """Heavy load for a Medium creature; x4 for every 10 points above 29."""
    if strength <= 0:
        return 0
    multiplier = 1
    while strength > len(HEAVY_LOAD):
        strength -= 10
        multiplier *= 4
    return HEAVY_LOAD[strength - 1] * multiplier


def carrying_capacity(strength: int, size: Size = Size.MEDIUM) -> CarryingCapacity:
    """Load limits for a Strength score and size.

    Args:
        strength: Final Strength score.
        size: Creature size.

    Returns:
        CarryingCapacity in pounds.
    """
    heavy = int(heavy_load(strength) * CARRY_MULTIPLIER[size])
    return CarryingCapacity(
        light=heavy // 3,
        medium=heavy * 2 // 3,
        heavy=heavy,
        lift_over_head=heavy,
        lift_off_ground=heavy * 2,
        push_or_drag=heavy * 5,
    )
