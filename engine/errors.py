"""Structured errors raised by the derivation engine.

Every error carries the offending id or field so a caller can build its own
user-facing message; ``to_dict()`` gives a JSON-friendly form.
"""

from __future__ import annotations


class DerivationError(ValueError):
    """Base class for every rules violation the engine reports."""

    code = "derivation_error"

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message, **self.context}


class UnknownReference(DerivationError):
    """An id was not found in the rules data store."""

    code = "unknown_reference"
    kind = "reference"

    def __init__(self, ref_id: str, kind: str | None = None) -> None:
        kind = kind or self.kind
        super().__init__(f"Unknown {kind} '{ref_id}'", kind=kind, ref_id=ref_id)
        self.ref_id = ref_id


class InvalidRace(UnknownReference):
    kind = "race"


class UnknownClass(UnknownReference):
    kind = "class"


class UnknownSkill(UnknownReference):
    kind = "skill"


class UnknownFeat(UnknownReference):
    kind = "feat"


class UnknownModifierTarget(UnknownReference):
    kind = "modifier target"


class NegativeLevel(DerivationError):
    """A class entry has zero or negative levels, or no classes at all."""

    code = "negative_level"

    def __init__(self, class_id: str | None, level: int) -> None:
        if class_id is None:
            message = f"Total character level must be at least 1 (got {level})"
        else:
            message = f"Class '{class_id}' has level {level}; must be at least 1"
        super().__init__(message, class_id=class_id, level=level, minimum=1)
        self.class_id = class_id
        self.level = level


class InvalidAbilityScore(DerivationError):
    """An ability score (or the list of level increases) is malformed."""

    code = "invalid_ability_score"

    def __init__(self, field: str, value: int, minimum: int | None = None,
                 maximum: int | None = None) -> None:
        if maximum is None:
            message = f"{field} is {value}; must be at least {minimum}"
        else:
            message = f"{field} is {value}; must be at most {maximum}"
        super().__init__(message, field=field, value=value,
                         minimum=minimum, maximum=maximum)
        self.field = field
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class InvalidHitPoints(DerivationError):
    """A hit point override is lower than one hit point per level."""

    code = "invalid_hit_points"

    def __init__(self, value: int, minimum: int) -> None:
        super().__init__(
            f"hit_points_override is {value}; must be at least {minimum}",
            field="hit_points_override", value=value, minimum=minimum,
        )
        self.value = value
        self.minimum = minimum


class RankOverflow(DerivationError):
    """More ranks were invested in a skill than the level allows."""

    code = "rank_overflow"

    def __init__(self, skill_id: str, invested: int, max_ranks: int) -> None:
        super().__init__(
            f"Skill '{skill_id}' has {invested} ranks; maximum is {max_ranks}",
            skill_id=skill_id, invested=invested, max=max_ranks,
        )
        self.skill_id = skill_id
        self.invested = invested
        self.max = max_ranks


class UnknownSpellcastingType(DerivationError):
    """A class definition declares a spellcasting style the engine lacks."""

    code = "unknown_spellcasting_type"

    def __init__(self, class_id: str, spellcasting: str) -> None:
        super().__init__(
            f"Class '{class_id}' declares unknown spellcasting type '{spellcasting}'",
            class_id=class_id, spellcasting=spellcasting,
        )
        self.class_id = class_id
        self.spellcasting = spellcasting
