"""Engine-wide configuration constants for the character derivation engine."""

import os
from pathlib import Path

RULES_DATA_DIR = os.environ.get(
    "RULES_DATA_DIR", str(Path(__file__).parent / "engine" / "data")
)  # Directory holding races/classes/skills/feats JSON tables

BASE_ARMOR_CLASS = 10
MIN_ABILITY_SCORE = 1
PRACTICAL_MAX_ABILITY_SCORE = 50   # Non-epic play; never enforced as a hard cap
ABILITY_INCREASE_INTERVAL = 4      # +1 to one ability every 4 character levels

ITERATIVE_ATTACK_STEP = 5          # Each extra attack is at -5

MAX_SPELL_LEVEL = 9
SYNERGY_RANKS = 5                  # Ranks needed in a skill to grant synergy
SYNERGY_BONUS = 2
FIRST_LEVEL_SKILL_MULTIPLIER = 4
MULTICLASS_XP_PENALTY = 20         # Percent per offending class
