"""D&D 3.5 SRD combat statistics: HP, BAB, AC, saves, initiative, speed."""

from __future__ import annotations

from config import BASE_ARMOR_CLASS, ITERATIVE_ATTACK_STEP
from engine.bonuses import resolve_by_type, select, stack_bonuses
from engine.errors import InvalidHitPoints, NegativeLevel, UnknownClass
from engine.size import GRAPPLE_SIZE_MODIFIER, size_modifiers
from models.characters import (
    Ability,
    ArmorCategory,
    ArmorPiece,
    BonusType,
    CharacterAttributes,
    ClassLevel,
    Modifier,
)
from models.derived import ArmorClass, AttackBonuses, CombatStats, SavingThrows
from models.rules import (
    BabProgression,
    ClassDefinition,
    RaceDefinition,
    RulesDataStore,
    SaveProgression,
)

# Base attack bonus by class level (index 0 = 1st level), from the SRD class tables
BAB_TABLES = {
    BabProgression.FULL: (1, 2, 3, 4, 5, 6, 7, 8, 9, 10,
                          11, 12, 13, 14, 15, 16, 17, 18, 19, 20),
    BabProgression.THREE_QUARTER: (0, 1, 2, 3, 3, 4, 5, 6, 6, 7,
                                   8, 9, 9, 10, 11, 12, 12, 13, 14, 15),
    BabProgression.HALF: (0, 1, 1, 2, 2, 3, 3, 4, 4, 5,
                          5, 6, 6, 7, 7, 8, 8, 9, 9, 10),
}

# Past the tables, keep accumulating at the same rate
BAB_RATES = {
    BabProgression.FULL: (1, 1),
    BabProgression.THREE_QUARTER: (3, 4),
    BabProgression.HALF: (1, 2),
}

SAVE_ABILITIES = {
    "fortitude": Ability.CONSTITUTION,
    "reflex": Ability.DEXTERITY,
    "will": Ability.WISDOM,
}


def resolve_class_levels(
    classes: list[ClassLevel], rules: RulesDataStore
) -> list[tuple[ClassDefinition, int]]:
    """Look up each class entry and merge repeated entries for one class.

    Order of first appearance is kept, so the first pair is the class taken
    at 1st character level.

    Raises:
        NegativeLevel: A level is zero or negative, or there are no classes.
        UnknownClass: A class id is not in the rules data store.
    """
    if not classes:
        raise NegativeLevel(None, 0)

    merged: dict[str, int] = {}
    for entry in classes:
        if entry.level <= 0:
            raise NegativeLevel(entry.class_id, entry.level)
        if entry.class_id not in rules.classes:
            raise UnknownClass(entry.class_id)
        merged[entry.class_id] = merged.get(entry.class_id, 0) + entry.level

    return [(rules.classes[class_id], level) for class_id, level in merged.items()]


def class_base_attack_bonus(progression: BabProgression, level: int) -> int:
    """BAB granted by ``level`` levels in a class with this progression."""
    if level <= 0:
        return 0
    table = BAB_TABLES[progression]
    if level <= len(table):
        return table[level - 1]
    num, den = BAB_RATES[progression]
    return level * num // den


def calculate_base_attack_bonus(class_levels: list[tuple[ClassDefinition, int]]) -> int:
    """Total BAB: each class at its own level, then summed."""
    return sum(class_base_attack_bonus(cls.bab, level) for cls, level in class_levels)


def attack_sequence(base_attack_bonus: int) -> list[int]:
    """Expand a BAB into one bonus per attack in a full round.

    Each extra attack is 5 lower and only granted while it stays at +1 or
    better. A BAB of 0 or less still gets its single attack.

    Args:
        base_attack_bonus: Total base attack bonus (e.g. 16).

    Returns:
        The attack bonuses in order (e.g. [16, 11, 6, 1]).
    """
    sequence = [base_attack_bonus]
    bonus = base_attack_bonus - ITERATIVE_ATTACK_STEP
    while bonus >= 1:
        sequence.append(bonus)
        bonus -= ITERATIVE_ATTACK_STEP
    return sequence


def base_save(progression: SaveProgression, level: int) -> int:
    """Base save bonus for ``level`` levels in one class."""
    if level <= 0:
        return 0
    if progression == SaveProgression.GOOD:
        return 2 + level // 2
    return level // 3


def calculate_full_hit_points(
    class_levels: list[tuple[ClassDefinition, int]],
    con_modifier: int,
    hp_bonus: int = 0,
) -> int:
    """Maximum possible HP: every hit die at its top face.

    Each level contributes at least 1 HP even with a CON penalty.

    Args:
        class_levels: Resolved (class, level) pairs.
        con_modifier: Constitution modifier.
        hp_bonus: Flat HP from feats or items (e.g. Toughness).

    Returns:
        The deterministic full HP figure.
    """
    total = 0
    for cls, level in class_levels:
        total += level * max(1, cls.hit_die + con_modifier)
    return max(1, total + hp_bonus)


def reduced_speed(speed: int) -> int:
    """Speed in medium or heavy armor (30 ft. -> 20 ft., 20 ft. -> 15 ft.)."""
    return (speed * 2 // 3 + 4) // 5 * 5


def calculate_speed(
    race: RaceDefinition, armor: ArmorPiece | None, modifiers: list[Modifier]
) -> int:
    speed = race.speed
    encumbering = armor is not None and armor.category in (ArmorCategory.MEDIUM, ArmorCategory.HEAVY)
    if encumbering and not race.speed_unaffected_by_armor:
        speed = reduced_speed(speed)
    return max(0, speed + stack_bonuses(select(modifiers, "speed")))


def _equipment_modifiers(armor: ArmorPiece | None, shield: ArmorPiece | None) -> list[Modifier]:
    mods = []
    if armor is not None:
        mods.append(Modifier(target="ac", value=armor.ac_bonus + armor.enhancement,
                             bonus_type=BonusType.ARMOR, source=armor.name))
    if shield is not None:
        mods.append(Modifier(target="ac", value=shield.ac_bonus + shield.enhancement,
                             bonus_type=BonusType.SHIELD, source=shield.name))
    return mods


def calculate_armor_class(
    dex_modifier: int,
    armor: ArmorPiece | None,
    shield: ArmorPiece | None,
    modifiers: list[Modifier],
) -> ArmorClass:
    """Calculate total, touch and flat-footed AC.

    The DEX bonus is capped by the lowest max-dex value across armor and
    shield. Worn armor and shield compete with other armor/shield bonuses
    (e.g. mage armor) under the normal stacking rules.

    Args:
        dex_modifier: Dexterity modifier.
        armor: Worn armor, if any.
        shield: Carried shield, if any.
        modifiers: All modifiers targeting ``ac`` (size included).

    Returns:
        ArmorClass with totals and breakdown.
    """
    worn = [piece for piece in (armor, shield) if piece is not None]
    caps = [piece.max_dex_bonus for piece in worn if piece.max_dex_bonus is not None]
    max_dex = min(caps) if caps else None
    dex_to_ac = dex_modifier if max_dex is None else min(dex_modifier, max_dex)

    resolved = resolve_by_type(select(modifiers, "ac") + _equipment_modifiers(armor, shield))
    total = BASE_ARMOR_CLASS + dex_to_ac + sum(resolved.values())

    touch = total - sum(
        resolved.get(t, 0)
        for t in (BonusType.ARMOR, BonusType.SHIELD, BonusType.NATURAL_ARMOR)
    )
    flat_footed = total - max(0, dex_to_ac) - max(0, resolved.get(BonusType.DODGE, 0))

    breakdown = {"base": BASE_ARMOR_CLASS, "dexterity": dex_to_ac}
    for bonus_type, value in resolved.items():
        breakdown[bonus_type.value] = value

    return ArmorClass(
        total=total,
        touch=touch,
        flat_footed=flat_footed,
        breakdown=breakdown,
        max_dex_bonus=max_dex,
        armor_check_penalty=sum(min(0, piece.armor_check_penalty) for piece in worn),
        arcane_spell_failure=sum(piece.arcane_spell_failure for piece in worn),
    )


def calculate_saving_throws(
    class_levels: list[tuple[ClassDefinition, int]],
    ability_mods: dict[Ability, int],
    modifiers: list[Modifier],
) -> SavingThrows:
    """Per-class base saves summed, plus ability modifier and typed bonuses."""
    totals = {}
    for save, ability in SAVE_ABILITIES.items():
        base = sum(base_save(getattr(cls.saves, save), level) for cls, level in class_levels)
        bonus = stack_bonuses(select(modifiers, save, "saves"))
        totals[save] = base + ability_mods[ability] + bonus
    return SavingThrows(**totals)


def calculate_attack_bonuses(
    base_attack_bonus: int,
    ability_mods: dict[Ability, int],
    race: RaceDefinition,
    modifiers: list[Modifier],
    melee_ability: Ability = Ability.STRENGTH,
) -> AttackBonuses:
    """Melee and ranged bonus per iterative attack, plus grapple."""
    sequence = attack_sequence(base_attack_bonus)
    size_mods = size_modifiers(race.size, "attack")
    melee_bonus = ability_mods[melee_ability] + stack_bonuses(
        select(modifiers, "attack", "melee") + size_mods
    )
    ranged_bonus = ability_mods[Ability.DEXTERITY] + stack_bonuses(
        select(modifiers, "attack", "ranged") + size_mods
    )
    grapple = (
        base_attack_bonus
        + ability_mods[Ability.STRENGTH]
        + GRAPPLE_SIZE_MODIFIER[race.size]
        + stack_bonuses(select(modifiers, "attack", "grapple"))
    )
    return AttackBonuses(
        melee=[b + melee_bonus for b in sequence],
        ranged=[b + ranged_bonus for b in sequence],
        grapple=grapple,
    )


def compute_combat_stats(
    attrs: CharacterAttributes,
    class_levels: list[tuple[ClassDefinition, int]],
    ability_mods: dict[Ability, int],
    race: RaceDefinition,
    modifiers: list[Modifier] | None = None,
    melee_ability: Ability = Ability.STRENGTH,
) -> CombatStats:
    """Compute every combat statistic for a character.

    Args:
        attrs: The character's chosen attributes (armor and shield are read
            from here).
        class_levels: Resolved (class, level) pairs.
        ability_mods: Final ability modifiers.
        race: The character's race definition.
        modifiers: Typed modifiers from race, feats and items. Defaults to
            the character's own ad hoc modifiers.
        melee_ability: Ability used for melee attack rolls.

    Returns:
        CombatStats for the character.

    Raises:
        NegativeLevel: A class has zero or negative levels.
        InvalidHitPoints: The hit point override is below the total level.
    """
    for cls, level in class_levels:
        if level <= 0:
            raise NegativeLevel(cls.id, level)
    if modifiers is None:
        modifiers = attrs.modifiers
    override = attrs.hit_points_override
    if override is not None and override < attrs.total_level:
        # Every level yields at least 1 HP
        raise InvalidHitPoints(override, attrs.total_level)

    full_hp = calculate_full_hit_points(
        class_levels,
        ability_mods[Ability.CONSTITUTION],
        stack_bonuses(select(modifiers, "hp")),
    )
    bab = calculate_base_attack_bonus(class_levels)
    ac_mods = select(modifiers, "ac") + size_modifiers(race.size, "ac")

    return CombatStats(
        full_hp=full_hp,
        max_hp=override if override is not None else full_hp,
        base_attack_bonus=bab,
        attack_sequence=attack_sequence(bab),
        attacks=calculate_attack_bonuses(bab, ability_mods, race, modifiers, melee_ability),
        armor_class=calculate_armor_class(
            ability_mods[Ability.DEXTERITY], attrs.armor, attrs.shield, ac_mods
        ),
        saving_throws=calculate_saving_throws(class_levels, ability_mods, modifiers),
        initiative=ability_mods[Ability.DEXTERITY] + stack_bonuses(select(modifiers, "initiative")),
        speed=calculate_speed(race, attrs.armor, modifiers),
    )
