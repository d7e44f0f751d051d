"""Load the rules data store from JSON tables on disk.

This is the only module that touches the filesystem. The engine itself
receives the loaded store as an argument and never reads files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel

from config import RULES_DATA_DIR
from engine.bonuses import validate_target
from engine.errors import UnknownClass, UnknownSkill
from engine.spells import SPELLCASTING_TYPES
from models.rules import (
    ClassDefinition,
    FeatDefinition,
    RaceDefinition,
    RulesDataStore,
    SkillDefinition,
    SpellcastingType,
)

logger = logging.getLogger(__name__)

TABLES = {
    "races": RaceDefinition,
    "classes": ClassDefinition,
    "skills": SkillDefinition,
    "feats": FeatDefinition,
}


def _load_table(path: Path, model: type[BaseModel]) -> dict:
    """Read one JSON list of records and key it by id.

    Raises:
        FileNotFoundError: The table file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules table not found: {path}")
    with open(path) as f:
        data = json.load(f)

    table = {}
    for raw in data:
        record = model.model_validate(raw)
        if record.id in table:
            raise ValueError(f"Duplicate id '{record.id}' in {path.name}")
        table[record.id] = record
    logger.info("Loaded %d records from %s", len(table), path.name)
    return table


def check_integrity(rules: RulesDataStore) -> None:
    """Check cross references between tables.

    Raises:
        UnknownReference: A table refers to an id that no table defines.
    """
    skill_ids = set(rules.skills)

    for skill in rules.skills.values():
        for target in skill.synergies:
            if target not in skill_ids:
                raise UnknownSkill(target)

    for cls in rules.classes.values():
        for skill_id in cls.class_skills:
            if skill_id not in skill_ids:
                raise UnknownSkill(skill_id)
        if cls.spellcasting not in SPELLCASTING_TYPES:
            # Reported by the engine when a character uses the class
            logger.warning("Class '%s' has unknown spellcasting type '%s'",
                           cls.id, cls.spellcasting)
        elif cls.spellcasting != SpellcastingType.NONE.value and cls.spellcasting_ability is None:
            logger.warning("Spellcasting class '%s' has no casting ability; "
                           "no bonus spells will be granted", cls.id)

    for race in rules.races.values():
        if race.favored_class != "any" and race.favored_class not in rules.classes:
            raise UnknownClass(race.favored_class)
        for mod in race.modifiers:
            validate_target(mod.target, skill_ids)

    for feat in rules.feats.values():
        for mod in feat.modifiers:
            validate_target(mod.target, skill_ids)


def load_rules(data_dir: str | Path | None = None) -> RulesDataStore:
    """Load races, classes, skills and feats into a RulesDataStore.

    Args:
        data_dir: Directory holding races.json, classes.json, skills.json
            and feats.json. Defaults to config.RULES_DATA_DIR.

    Returns:
        The loaded, integrity-checked store.
    """
    directory = Path(data_dir or RULES_DATA_DIR)
    tables = {name: _load_table(directory / f"{name}.json", model)
              for name, model in TABLES.items()}
    rules = RulesDataStore(**tables)
    check_integrity(rules)
    logger.info(
        "Rules data ready: %d races, %d classes, %d skills, %d feats",
        len(rules.races), len(rules.classes), len(rules.skills), len(rules.feats),
    )
    return rules
