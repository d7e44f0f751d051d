"""Size category adjustments."""

from models.characters import BonusType, Modifier
from models.rules import Size

# Size bonus to AC and attack rolls
SIZE_MODIFIER = {
    Size.FINE: 8,
    Size.DIMINUTIVE: 4,
    Size.TINY: 2,
    Size.SMALL: 1,
    Size.MEDIUM: 0,
    Size.LARGE: -1,
    Size.HUGE: -2,
    Size.GARGANTUAN: -4,
    Size.COLOSSAL: -8,
}

# Special size modifier for grapple checks
GRAPPLE_SIZE_MODIFIER = {
    Size.FINE: -16,
    Size.DIMINUTIVE: -12,
    Size.TINY: -8,
    Size.SMALL: -4,
    Size.MEDIUM: 0,
    Size.LARGE: 4,
    Size.HUGE: 8,
    Size.GARGANTUAN: 12,
    Size.COLOSSAL: 16,
}

HIDE_SIZE_MODIFIER = {
    Size.FINE: 16,
    Size.DIMINUTIVE: 12,
    Size.TINY: 8,
    Size.SMALL: 4,
    Size.MEDIUM: 0,
    Size.LARGE: -4,
    Size.HUGE: -8,
    Size.GARGANTUAN: -12,
    Size.COLOSSAL: -16,
}

# Carrying capacity multipliers for bipeds
CARRY_MULTIPLIER = {
    Size.FINE: 1 / 8,
    Size.DIMINUTIVE: 1 / 4,
    Size.TINY: 1 / 2,
    Size.SMALL: 3 / 4,
    Size.MEDIUM: 1,
    Size.LARGE: 2,
    Size.HUGE: 4,
    Size.GARGANTUAN: 8,
    Size.COLOSSAL: 16,
}


def size_modifiers(size: Size, *targets: str) -> list[Modifier]:
    """Size-typed modifiers for the given targets (empty for Medium)."""
    value = SIZE_MODIFIER[size]
    if value == 0:
        return []
    return [
        Modifier(target=t, value=value, bonus_type=BonusType.SIZE, source=f"{size.value} size")
        for t in targets
    ]
