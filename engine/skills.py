"""Skill totals, rank limits, synergies and the skill point budget."""

from __future__ import annotations

from config import FIRST_LEVEL_SKILL_MULTIPLIER, SYNERGY_BONUS, SYNERGY_RANKS
from engine.bonuses import select, skill_target, stack_bonuses
from engine.errors import RankOverflow, UnknownSkill
from engine.size import HIDE_SIZE_MODIFIER
from models.characters import Ability, BonusType, CharacterAttributes, Modifier
from models.derived import SkillPoints
from models.rules import ClassDefinition, RaceDefinition, Size, SkillDefinition


def class_skill_set(class_levels: list[tuple[ClassDefinition, int]]) -> frozenset[str]:
    """A skill is a class skill if any of the character's classes lists it."""
    skills: set[str] = set()
    for cls, _ in class_levels:
        skills |= cls.class_skills
    return frozenset(skills)


def max_ranks(total_level: int, class_skill: bool) -> int:
    """Maximum ranks at a character level: level+3, halved for cross-class."""
    if class_skill:
        return total_level + 3
    return (total_level + 3) // 2


def validate_ranks(
    skill_ranks: dict[str, int], total_level: int, class_skills: frozenset[str]
) -> None:
    """Raise RankOverflow for the first skill with too many ranks.

    Ranks are never clamped; the caller decides whether to reject the
    input or cap it.
    """
    for skill_id, invested in skill_ranks.items():
        limit = max_ranks(total_level, skill_id in class_skills)
        if invested > limit:
            raise RankOverflow(skill_id, invested, limit)


def check_ranks(
    skill_ranks: dict[str, int], total_level: int, class_skills: frozenset[str]
) -> tuple[bool, str]:
    """Non-raising variant of validate_ranks for form validation.

    Returns:
        (valid, error_message) tuple.
    """
    try:
        validate_ranks(skill_ranks, total_level, class_skills)
    except RankOverflow as e:
        return False, e.message
    return True, ""


def synergy_modifiers(
    skill_ranks: dict[str, int], skills: dict[str, SkillDefinition]
) -> list[Modifier]:
    """+2 to each synergy target of every skill with 5 or more ranks."""
    mods = []
    for skill_id, ranks in skill_ranks.items():
        if ranks < SYNERGY_RANKS or skill_id not in skills:
            continue
        for target in sorted(skills[skill_id].synergies):
            mods.append(Modifier(
                target=skill_target(target),
                value=SYNERGY_BONUS,
                bonus_type=BonusType.UNTYPED,
                source=f"{skill_id} synergy",
            ))
    return mods


def compute_skill_totals(
    attrs: CharacterAttributes,
    ability_mods: dict[Ability, int],
    class_skills: frozenset[str],
    armor_check_penalty: int,
    skills: dict[str, SkillDefinition],
    modifiers: list[Modifier] | None = None,
    size: Size = Size.MEDIUM,
) -> dict[str, int | None]:
    """Compute the total check bonus for every skill.

    Trained-only skills with no ranks come back as None: they cannot be
    attempted at all, so no number is reported.

    Args:
        attrs: The character's chosen attributes (ranks are read from here).
        ability_mods: Final ability modifiers.
        class_skills: Union of class skills across the character's classes.
        armor_check_penalty: Combined armor and shield penalty (zero or less).
        skills: Skill definitions keyed by id.
        modifiers: Typed modifiers from race, feats and items. Defaults to
            the character's own ad hoc modifiers.
        size: The character's size, for skills affected by size.

    Returns:
        Mapping of skill id to total bonus, or None if unusable.

    Raises:
        UnknownSkill: Ranks were invested in a skill that does not exist.
        RankOverflow: A skill has more ranks than the level allows.
    """
    for skill_id in attrs.skill_ranks:
        if skill_id not in skills:
            raise UnknownSkill(skill_id)
    validate_ranks(attrs.skill_ranks, attrs.total_level, class_skills)
    if modifiers is None:
        modifiers = attrs.modifiers
    modifiers = list(modifiers) + synergy_modifiers(attrs.skill_ranks, skills)

    totals: dict[str, int | None] = {}
    for skill_id, skill in sorted(skills.items()):
        ranks = attrs.skill_ranks.get(skill_id, 0)
        if skill.trained_only and ranks == 0:
            totals[skill_id] = None
            continue

        total = ranks + ability_mods[skill.ability]
        if skill.armor_check_penalty:
            total += armor_check_penalty
        if skill.size_modifier:
            total += HIDE_SIZE_MODIFIER[size]
        total += stack_bonuses(select(modifiers, skill_target(skill_id), "skills"))
        totals[skill_id] = total
    return totals


def skill_points_available(
    class_levels: list[tuple[ClassDefinition, int]],
    int_modifier: int,
    race: RaceDefinition,
) -> int:
    """Total skill points earned across all levels.

    Each level grants the class's points plus INT modifier (minimum 1) plus
    any racial bonus; the first character level, taken in the first listed
    class, grants four times that.
    """
    total = 0
    first = True
    for cls, level in class_levels:
        per_level = max(1, cls.skill_points + int_modifier) + race.bonus_skill_points
        if first:
            total += per_level * FIRST_LEVEL_SKILL_MULTIPLIER
            level -= 1
            first = False
        total += per_level * level
    return total


def skill_points_spent(skill_ranks: dict[str, int], class_skills: frozenset[str]) -> int:
    """Points spent on ranks; a cross-class rank costs two points."""
    return sum(
        ranks if skill_id in class_skills else ranks * 2
        for skill_id, ranks in skill_ranks.items()
    )


def compute_skill_points(
    attrs: CharacterAttributes,
    class_levels: list[tuple[ClassDefinition, int]],
    int_modifier: int,
    race: RaceDefinition,
    class_skills: frozenset[str],
) -> SkillPoints:
    return SkillPoints(
        available=skill_points_available(class_levels, int_modifier, race),
        spent=skill_points_spent(attrs.skill_ranks, class_skills),
    )
