"""Spellcasting progression: slots per day, bonus spells, spells known."""

from __future__ import annotations

from engine.errors import UnknownSpellcastingType
from models.characters import Ability, AbilityScores
from models.derived import SpellcastingStats
from models.rules import ClassDefinition, SpellcastingType

SPELLCASTING_TYPES = frozenset(t.value for t in SpellcastingType)


def bonus_spells(ability_modifier: int, spell_level: int) -> int:
    """Bonus spells of one level from a high casting ability.

    A modifier of at least the spell level grants one, plus one more for
    every 4 points beyond it. Cantrips and orisons never get bonus spells.
    """
    if spell_level <= 0 or ability_modifier < spell_level:
        return 0
    return (ability_modifier - spell_level) // 4 + 1


def spellcasting_type(cls: ClassDefinition) -> SpellcastingType:
    """The class's spellcasting style, validated against the known styles."""
    if cls.spellcasting not in SPELLCASTING_TYPES:
        raise UnknownSpellcastingType(cls.id, cls.spellcasting)
    return SpellcastingType(cls.spellcasting)


def _table_row(
    table: dict[int, tuple[int | None, ...]], level: int
) -> tuple[int | None, ...]:
    """Row for a class level; past the end of the table the last row holds."""
    eligible = [lvl for lvl in table if lvl <= level]
    if not eligible:
        return ()
    return table[max(eligible)]


def _can_cast(ability_score: int | None, spell_level: int) -> bool:
    # Casting a spell needs a score of at least 10 + spell level
    return ability_score is None or ability_score >= 10 + spell_level


def class_spell_slots(
    cls: ClassDefinition,
    level: int,
    ability_modifier: int,
    ability_score: int | None = None,
) -> dict[int, int]:
    """Spells per day for one class at its own class level.

    Args:
        cls: The class definition.
        level: Levels in this class.
        ability_modifier: Modifier of the class's casting ability.
        ability_score: Casting ability score; when given, spell levels the
            score is too low for get zero slots.

    Returns:
        Mapping of spell level to slot count (empty for non-casters).
    """
    if spellcasting_type(cls) == SpellcastingType.NONE:
        return {}

    slots = {}
    for spell_level, base in enumerate(_table_row(cls.spells_per_day, level)):
        if base is None:
            continue
        if not _can_cast(ability_score, spell_level):
            slots[spell_level] = 0
            continue
        slots[spell_level] = base + bonus_spells(ability_modifier, spell_level)
    return slots


def class_domain_slots(
    cls: ClassDefinition, level: int, ability_score: int | None = None
) -> dict[int, int]:
    """One domain slot per castable spell level of 1st and above."""
    if not cls.domain_spells or spellcasting_type(cls) == SpellcastingType.NONE:
        return {}
    return {
        spell_level: 1
        for spell_level, base in enumerate(_table_row(cls.spells_per_day, level))
        if spell_level >= 1 and base is not None and _can_cast(ability_score, spell_level)
    }


def class_spells_known(cls: ClassDefinition, level: int) -> dict[int, int]:
    """Spells known for spontaneous casters; prepared casters get {}."""
    if spellcasting_type(cls) != SpellcastingType.SPONTANEOUS:
        return {}
    return {
        spell_level: known
        for spell_level, known in enumerate(_table_row(cls.spells_known, level))
        if known is not None
    }


def _casting_ability(cls: ClassDefinition, ability_mods: dict[Ability, int],
                     scores: AbilityScores | None) -> tuple[int, int | None]:
    if cls.spellcasting_ability is None:
        return 0, None
    score = scores.get(cls.spellcasting_ability) if scores is not None else None
    return ability_mods[cls.spellcasting_ability], score


def compute_spell_slots(
    class_levels: list[tuple[ClassDefinition, int]],
    ability_mods: dict[Ability, int],
    scores: AbilityScores | None = None,
) -> dict[str, dict[int, int]]:
    """Spells per day for every class, kept separate per class.

    Multiclass casters never pool slots: a wizard/cleric gets the wizard's
    slots and the cleric's slots side by side. Non-casters map to {}.
    """
    result = {}
    for cls, level in class_levels:
        modifier, score = _casting_ability(cls, ability_mods, scores)
        result[cls.id] = class_spell_slots(cls, level, modifier, score)
    return result


def compute_spellcasting(
    class_levels: list[tuple[ClassDefinition, int]],
    ability_mods: dict[Ability, int],
    scores: AbilityScores | None = None,
) -> SpellcastingStats:
    """Slots, domain slots, spells known and base save DC for every caster."""
    stats = SpellcastingStats(
        spells_per_day=compute_spell_slots(class_levels, ability_mods, scores)
    )
    for cls, level in class_levels:
        if spellcasting_type(cls) == SpellcastingType.NONE:
            continue
        modifier, score = _casting_ability(cls, ability_mods, scores)
        domain = class_domain_slots(cls, level, score)
        if domain:
            stats.domain_slots[cls.id] = domain
        known = class_spells_known(cls, level)
        if known:
            stats.spells_known[cls.id] = known
        if _table_row(cls.spells_per_day, level):
            stats.save_dc_base[cls.id] = 10 + modifier
    return stats
