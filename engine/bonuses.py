"""Bonus stacking: which typed modifiers add up and which overlap."""

from __future__ import annotations

from collections.abc import Iterable

from engine.errors import UnknownModifierTarget
from models.characters import Ability, BonusType, Modifier

# The only bonus types that stack with themselves
SELF_STACKING_TYPES = frozenset({BonusType.DODGE, BonusType.UNTYPED})

ABILITY_PREFIX = "ability:"
SKILL_PREFIX = "skill:"

STAT_TARGETS = frozenset({
    "ac",
    "fortitude",
    "reflex",
    "will",
    "saves",        # All three saves
    "initiative",
    "hp",
    "attack",       # Melee, ranged and grapple
    "melee",
    "ranged",
    "grapple",
    "speed",
    "skills",       # Every skill
})


def resolve_by_type(modifiers: Iterable[Modifier]) -> dict[BonusType, int]:
    """Resolve a set of modifiers to one value per bonus type.

    Bonuses of the same type overlap (only the highest counts) unless the
    type is dodge or untyped. Penalties always add.

    Args:
        modifiers: Modifiers that all apply to the same statistic.

    Returns:
        Mapping of bonus type to its resolved contribution.
    """
    best: dict[BonusType, int] = {}
    penalties: dict[BonusType, int] = {}
    for mod in modifiers:
        if mod.value < 0:
            penalties[mod.bonus_type] = penalties.get(mod.bonus_type, 0) + mod.value
        elif mod.bonus_type in SELF_STACKING_TYPES:
            best[mod.bonus_type] = best.get(mod.bonus_type, 0) + mod.value
        else:
            best[mod.bonus_type] = max(best.get(mod.bonus_type, 0), mod.value)

    resolved = dict(best)
    for bonus_type, value in penalties.items():
        resolved[bonus_type] = resolved.get(bonus_type, 0) + value
    return resolved


def stack_bonuses(modifiers: Iterable[Modifier]) -> int:
    """Total contribution of modifiers to one statistic after stacking."""
    return sum(resolve_by_type(modifiers).values())


def select(modifiers: Iterable[Modifier], *targets: str) -> list[Modifier]:
    """Return the modifiers that apply to any of the given targets."""
    wanted = set(targets)
    return [mod for mod in modifiers if mod.target in wanted]


def ability_target(ability: Ability) -> str:
    return ABILITY_PREFIX + ability.value


def skill_target(skill_id: str) -> str:
    return SKILL_PREFIX + skill_id


def validate_target(target: str, skill_ids: Iterable[str]) -> None:
    """Raise UnknownModifierTarget if nothing in the engine reads ``target``."""
    if target in STAT_TARGETS:
        return
    if target.startswith(ABILITY_PREFIX):
        name = target[len(ABILITY_PREFIX):]
        if name in {a.value for a in Ability}:
            return
    if target.startswith(SKILL_PREFIX):
        if target[len(SKILL_PREFIX):] in set(skill_ids):
            return
    raise UnknownModifierTarget(target)
