"""Character input models: what a player has chosen for a character."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, NonNegativeInt, PositiveInt, model_validator


class Ability(str, Enum):
    """The six abilities."""
    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    CONSTITUTION = "constitution"
    INTELLIGENCE = "intelligence"
    WISDOM = "wisdom"
    CHARISMA = "charisma"


class BonusType(str, Enum):
    """Named bonus types used for stacking resolution."""
    ENHANCEMENT = "enhancement"
    MORALE = "morale"
    SIZE = "size"
    DODGE = "dodge"                 # Stacks with itself
    ARMOR = "armor"
    SHIELD = "shield"
    NATURAL_ARMOR = "natural-armor"
    DEFLECTION = "deflection"
    CIRCUMSTANCE = "circumstance"
    UNTYPED = "untyped"             # Stacks with itself
    RACIAL = "racial"
    LUCK = "luck"
    COMPETENCE = "competence"
    INSIGHT = "insight"
    SACRED = "sacred"
    PROFANE = "profane"
    RESISTANCE = "resistance"


class Modifier(BaseModel):
    """A numeric bonus (or penalty) to one target statistic."""
    model_config = ConfigDict(frozen=True)

    target: str                     # e.g. "ac", "will", "skill:hide"
    value: int
    bonus_type: BonusType = BonusType.UNTYPED
    source: str = ""                # e.g. "ring of protection +1"


class AbilityScores(BaseModel):
    """The six core ability scores."""
    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    def get(self, ability: Ability) -> int:
        return getattr(self, ability.value)


class ArmorCategory(str, Enum):
    """Armor weight categories."""
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    SHIELD = "shield"


class ArmorPiece(BaseModel):
    """A worn suit of armor or a carried shield."""
    name: str
    category: ArmorCategory = ArmorCategory.LIGHT
    ac_bonus: int                       # Armor or shield bonus
    enhancement: int = 0                # Magic enhancement on the item
    max_dex_bonus: int | None = None    # None = no cap
    armor_check_penalty: int = 0        # Zero or negative
    arcane_spell_failure: int = 0       # Percent


class ClassLevel(BaseModel):
    """Levels taken in one class."""
    class_id: str
    level: int


class CharacterAttributes(BaseModel):
    """Everything the player has chosen; the engine never modifies it.

    ``classes`` is ordered: the first entry is the class taken at 1st
    character level.
    """
    name: str = ""
    race: str
    classes: list[ClassLevel]
    ability_scores: AbilityScores = AbilityScores()     # Before racial deltas
    ability_increases: list[Ability] = []               # One per 4 levels
    feats: list[str] = []
    skill_ranks: dict[str, NonNegativeInt] = {}
    armor: ArmorPiece | None = None
    shield: ArmorPiece | None = None
    modifiers: list[Modifier] = []
    hit_points_override: PositiveInt | None = None      # Rolled HP total

    @property
    def total_level(self) -> int:
        return sum(cl.level for cl in self.classes)

    @model_validator(mode="after")
    def check_equipment_slots(self) -> "CharacterAttributes":
        if self.armor is not None and self.armor.category == ArmorCategory.SHIELD:
            raise ValueError(f"'{self.armor.name}' is a shield and cannot be worn as armor")
        if self.shield is not None and self.shield.category != ArmorCategory.SHIELD:
            raise ValueError(
                f"'{self.shield.name}' is {self.shield.category.value} armor, not a shield"
            )
        return self
