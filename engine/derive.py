"""Character derivation: the single entry point for computing a sheet.

``derive_character`` runs every rules module in a fixed order against one
character and returns a freshly built DerivedStatistics. It reads the
character and the rules data store and never writes to either, so it can
be called from any number of threads at once.
"""

from __future__ import annotations

from config import PRACTICAL_MAX_ABILITY_SCORE
from engine.abilities import compute_ability_modifiers
from engine.bonuses import validate_target
from engine.combat import compute_combat_stats, resolve_class_levels
from engine.errors import InvalidRace, UnknownFeat, UnknownSkill
from engine.progression import carrying_capacity, compute_experience
from engine.skills import class_skill_set, compute_skill_points, compute_skill_totals
from engine.spells import compute_spellcasting
from models.characters import Ability, CharacterAttributes, Modifier
from models.derived import DerivedStatistics
from models.rules import ClassDefinition, FeatDefinition, RaceDefinition, RulesDataStore


def resolve_references(
    attrs: CharacterAttributes, rules: RulesDataStore
) -> tuple[RaceDefinition, list[tuple[ClassDefinition, int]], list[FeatDefinition]]:
    """Check every id the character uses against the rules data store.

    Raises:
        UnknownReference: The first race, class, feat, skill or modifier
            target that does not exist.
        NegativeLevel: A class entry has no levels.
    """
    race = rules.races.get(attrs.race)
    if race is None:
        raise InvalidRace(attrs.race)
    class_levels = resolve_class_levels(attrs.classes, rules)

    feats = []
    for feat_id in attrs.feats:
        feat = rules.feats.get(feat_id)
        if feat is None:
            raise UnknownFeat(feat_id)
        feats.append(feat)

    for skill_id in attrs.skill_ranks:
        if skill_id not in rules.skills:
            raise UnknownSkill(skill_id)

    for mod in attrs.modifiers:
        validate_target(mod.target, rules.skills)

    return race, class_levels, feats


def collect_modifiers(
    attrs: CharacterAttributes, race: RaceDefinition, feats: list[FeatDefinition]
) -> list[Modifier]:
    """Racial, feat and ad hoc modifiers in one list."""
    modifiers = list(race.modifiers)
    for feat in feats:
        modifiers.extend(feat.modifiers)
    modifiers.extend(attrs.modifiers)
    return modifiers


def melee_attack_ability(feats: list[FeatDefinition], ability_mods: dict[Ability, int]) -> Ability:
    """Strength, unless a feat allows a better ability for melee attacks."""
    best = Ability.STRENGTH
    for feat in feats:
        alt = feat.melee_attack_ability
        if alt is not None and ability_mods[alt] > ability_mods[best]:
            best = alt
    return best


def derive_character(attrs: CharacterAttributes, rules: RulesDataStore) -> DerivedStatistics:
    """Compute every derived statistic for a character.

    Steps run in order and stop at the first error: resolve references,
    ability scores, combat statistics, skills, spellcasting, then the
    supplementary figures (skill points, experience, carrying capacity).

    Args:
        attrs: The character's chosen attributes. Not modified.
        rules: The loaded rules data store. Not modified.

    Returns:
        A new DerivedStatistics.

    Raises:
        DerivationError: Any rules violation; see engine.errors.
    """
    race, class_levels, feats = resolve_references(attrs, rules)
    modifiers = collect_modifiers(attrs, race, feats)
    total_level = attrs.total_level

    abilities = compute_ability_modifiers(attrs, race, modifiers)
    mods = abilities.modifiers

    combat = compute_combat_stats(
        attrs, class_levels, mods, race, modifiers, melee_attack_ability(feats, mods)
    )

    class_skills = class_skill_set(class_levels)
    skills = compute_skill_totals(
        attrs,
        mods,
        class_skills,
        combat.armor_class.armor_check_penalty,
        rules.skills,
        modifiers,
        race.size,
    )

    spellcasting = compute_spellcasting(class_levels, mods, abilities.scores)

    skill_points = compute_skill_points(
        attrs, class_levels, mods[Ability.INTELLIGENCE], race, class_skills
    )
    experience = compute_experience(total_level, class_levels, race)

    warnings = []
    for ability in Ability:
        score = abilities.scores.get(ability)
        if score > PRACTICAL_MAX_ABILITY_SCORE:
            warnings.append(
                f"{ability.value} {score} is above the non-epic practical cap of "
                f"{PRACTICAL_MAX_ABILITY_SCORE}"
            )
    if skill_points.spent > skill_points.available:
        warnings.append(
            f"Skill points overspent: {skill_points.spent} spent, "
            f"{skill_points.available} available"
        )
    if experience.multiclass_penalty:
        warnings.append(f"Multiclass XP penalty: -{experience.multiclass_penalty}%")

    return DerivedStatistics(
        total_level=total_level,
        size=race.size,
        ability_scores=abilities.scores,
        ability_modifiers=dict(mods),
        max_hp=combat.max_hp,
        full_hp=combat.full_hp,
        armor_class=combat.armor_class,
        base_attack_bonus=combat.base_attack_bonus,
        attack_sequence=combat.attack_sequence,
        attacks=combat.attacks,
        saving_throws=combat.saving_throws,
        initiative=combat.initiative,
        speed=combat.speed,
        skills=skills,
        skill_points=skill_points,
        spells_per_day=spellcasting.spells_per_day,
        domain_slots=spellcasting.domain_slots,
        spells_known=spellcasting.spells_known,
        spell_save_dc_base=spellcasting.save_dc_base,
        carrying_capacity=carrying_capacity(abilities.scores.strength, race.size),
        experience=experience,
        warnings=warnings,
    )
