"""Ability scores: racial deltas, level increases, magic and modifiers."""

from __future__ import annotations

from config import ABILITY_INCREASE_INTERVAL, MIN_ABILITY_SCORE
from engine.bonuses import ability_target, select, stack_bonuses
from engine.errors import InvalidAbilityScore, InvalidRace
from models.characters import Ability, AbilityScores, CharacterAttributes, Modifier
from models.derived import AbilityResult
from models.rules import RaceDefinition


def calculate_ability_modifier(score: int) -> int:
    """Calculate ability modifier from a score.

    Floor division, so odd scores below 10 round away from zero
    (7 gives -2, not -1).

    Args:
        score: The ability score (e.g. 16).

    Returns:
        The modifier (e.g. +3 for score 16).
    """
    return (score - 10) // 2


def validate_base_scores(attrs: CharacterAttributes) -> None:
    """Reject base scores below the minimum and surplus level increases.

    There is deliberately no upper bound: epic characters exceed 50.
    """
    for ability in Ability:
        score = attrs.ability_scores.get(ability)
        if score < MIN_ABILITY_SCORE:
            raise InvalidAbilityScore(ability.value, score, minimum=MIN_ABILITY_SCORE)

    allowed = attrs.total_level // ABILITY_INCREASE_INTERVAL
    if len(attrs.ability_increases) > allowed:
        raise InvalidAbilityScore(
            "ability_increases", len(attrs.ability_increases), maximum=allowed
        )


def compute_ability_modifiers(
    attrs: CharacterAttributes,
    race: RaceDefinition | None,
    modifiers: list[Modifier] | None = None,
) -> AbilityResult:
    """Compute final ability scores and modifiers for a character.

    Racial deltas are applied first and the result is clamped at 1; then
    level-based increases and typed modifiers (e.g. an enhancement belt)
    are added.

    Args:
        attrs: The character's chosen attributes.
        race: The character's race definition.
        modifiers: Typed modifiers from race, feats and items. Defaults to
            the character's own ad hoc modifiers.

    Returns:
        AbilityResult with final scores and modifiers.
    """
    if race is None or race.id != attrs.race:
        raise InvalidRace(attrs.race)
    validate_base_scores(attrs)
    if modifiers is None:
        modifiers = attrs.modifiers

    scores = {}
    for ability in Ability:
        score = attrs.ability_scores.get(ability) + race.ability_modifiers.get(ability, 0)
        score = max(MIN_ABILITY_SCORE, score)
        score += attrs.ability_increases.count(ability)
        score += stack_bonuses(select(modifiers, ability_target(ability)))
        scores[ability.value] = max(MIN_ABILITY_SCORE, score)

    final = AbilityScores(**scores)
    return AbilityResult(
        scores=final,
        modifiers={a: calculate_ability_modifier(final.get(a)) for a in Ability},
    )
