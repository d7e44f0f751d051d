"""Derived statistics models: everything the engine computes."""

from pydantic import BaseModel

from models.characters import Ability, AbilityScores
from models.rules import Size


class AbilityResult(BaseModel):
    """Final ability scores and their modifiers."""
    scores: AbilityScores
    modifiers: dict[Ability, int]


class ArmorClass(BaseModel):
    """Armor class totals and the per-source breakdown."""
    total: int
    touch: int
    flat_footed: int
    breakdown: dict[str, int]           # "base", "dexterity", bonus types
    max_dex_bonus: int | None = None
    armor_check_penalty: int = 0
    arcane_spell_failure: int = 0       # Percent


class SavingThrows(BaseModel):
    """The three saving throw totals."""
    fortitude: int
    reflex: int
    will: int


class AttackBonuses(BaseModel):
    """Attack bonus per iterative attack."""
    melee: list[int]
    ranged: list[int]
    grapple: int


class CombatStats(BaseModel):
    """Everything the combat statistics module produces."""
    full_hp: int                        # Max possible HP, deterministic
    max_hp: int                         # Override when supplied, else full_hp
    base_attack_bonus: int
    attack_sequence: list[int]          # e.g. [11, 6, 1]
    attacks: AttackBonuses
    armor_class: ArmorClass
    saving_throws: SavingThrows
    initiative: int
    speed: int


class SkillPoints(BaseModel):
    """Skill point budget against points spent on ranks."""
    available: int
    spent: int


class SpellcastingStats(BaseModel):
    """Per-class spellcasting figures; classes are never merged."""
    spells_per_day: dict[str, dict[int, int]] = {}
    domain_slots: dict[str, dict[int, int]] = {}
    spells_known: dict[str, dict[int, int]] = {}
    save_dc_base: dict[str, int] = {}


class CarryingCapacity(BaseModel):
    """Load limits in pounds."""
    light: int
    medium: int
    heavy: int
    lift_over_head: int
    lift_off_ground: int
    push_or_drag: int


class Experience(BaseModel):
    """XP thresholds and the multiclass penalty."""
    current_level_xp: int
    next_level_xp: int
    multiclass_penalty: int = 0         # Percent


class DerivedStatistics(BaseModel):
    """The engine's complete output for one character."""
    total_level: int
    size: Size
    ability_scores: AbilityScores
    ability_modifiers: dict[Ability, int]
    max_hp: int
    full_hp: int
    armor_class: ArmorClass
    base_attack_bonus: int
    attack_sequence: list[int]
    attacks: AttackBonuses
    saving_throws: SavingThrows
    initiative: int
    speed: int
    skills: dict[str, int | None]       # None = cannot be used untrained
    skill_points: SkillPoints
    spells_per_day: dict[str, dict[int, int]]   # class id -> spell level -> slots
    domain_slots: dict[str, dict[int, int]] = {}
    spells_known: dict[str, dict[int, int]] = {}
    spell_save_dc_base: dict[str, int] = {}
    carrying_capacity: CarryingCapacity
    experience: Experience
    warnings: list[str] = []
