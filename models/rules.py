"""Static SRD rules tables: races, classes, skills and feats."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from models.characters import Ability, Modifier


class Size(str, Enum):
    """Creature size categories."""
    FINE = "fine"
    DIMINUTIVE = "diminutive"
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GARGANTUAN = "gargantuan"
    COLOSSAL = "colossal"


class BabProgression(str, Enum):
    """Base attack bonus progression tiers."""
    FULL = "full"
    THREE_QUARTER = "three-quarter"
    HALF = "half"


class SaveProgression(str, Enum):
    """Saving throw progression tiers."""
    GOOD = "good"
    POOR = "poor"


class SpellcastingType(str, Enum):
    """Recognised spellcasting styles."""
    NONE = "none"
    PREPARED = "prepared"
    SPONTANEOUS = "spontaneous"


class RaceDefinition(BaseModel):
    """A playable race."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    ability_modifiers: dict[Ability, int] = {}   # Signed deltas
    size: Size = Size.MEDIUM
    speed: int = 30                               # Base land speed in feet
    speed_unaffected_by_armor: bool = False       # Dwarves keep full speed
    special_abilities: frozenset[str] = frozenset()
    favored_class: str = "any"                    # "any" = highest-level class
    languages: frozenset[str] = frozenset()
    bonus_skill_points: int = 0                   # Per level, x4 at 1st
    modifiers: tuple[Modifier, ...] = ()          # Racial typed bonuses


class ClassSaves(BaseModel):
    """Save progression for each of the three saves."""
    model_config = ConfigDict(frozen=True)

    fortitude: SaveProgression = SaveProgression.POOR
    reflex: SaveProgression = SaveProgression.POOR
    will: SaveProgression = SaveProgression.POOR


class ClassDefinition(BaseModel):
    """A character class and its progression tables.

    ``spells_per_day`` maps class level to a list indexed by spell level.
    ``None`` means the spell level is not available yet; ``0`` means only
    bonus spells can fill it.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    hit_die: int
    bab: BabProgression
    saves: ClassSaves = ClassSaves()
    skill_points: int = 2
    class_skills: frozenset[str] = frozenset()
    # Kept as a string so a malformed table surfaces as an engine error
    spellcasting: str = SpellcastingType.NONE.value
    spellcasting_ability: Ability | None = None
    arcane: bool = False
    domain_spells: bool = False
    spells_per_day: dict[int, tuple[int | None, ...]] = {}
    spells_known: dict[int, tuple[int | None, ...]] = {}


class SkillDefinition(BaseModel):
    """A skill and how it is checked."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    ability: Ability
    trained_only: bool = False
    armor_check_penalty: bool = False
    size_modifier: bool = False               # Hide: larger creatures hide worse
    synergies: frozenset[str] = frozenset()   # Skills this one grants +2 to


class FeatDefinition(BaseModel):
    """A feat whose numeric effects are expressed as data."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    modifiers: tuple[Modifier, ...] = ()
    melee_attack_ability: Ability | None = None   # e.g. Weapon Finesse -> dex


class RulesDataStore(BaseModel):
    """All static tables, keyed by id. Read-only once loaded."""
    model_config = ConfigDict(frozen=True)

    races: dict[str, RaceDefinition] = {}
    classes: dict[str, ClassDefinition] = {}
    skills: dict[str, SkillDefinition] = {}
    feats: dict[str, FeatDefinition] = {}
