"""Tests for dice rolling used during character creation."""

import random

import pytest

from engine.dice import DiceResult, roll, roll_ability_score, roll_ability_scores, roll_hit_points
from engine.errors import UnknownClass
from engine.loader import load_rules
from models.characters import Ability, ClassLevel

RULES = load_rules()


class TestRoll:
    """Tests for the roll() function."""

    def test_basic_roll(self):
        """Roll 1d6 with a seeded RNG produces expected result."""
        rng = random.Random(42)
        result = roll("1d6", rng=rng)
        assert isinstance(result, DiceResult)
        assert len(result.rolls) == 1
        assert 1 <= result.rolls[0] <= 6
        assert result.modifier == 0
        assert result.total == result.rolls[0]

    def test_multiple_dice(self):
        """Roll 3d6 produces 3 individual rolls."""
        rng = random.Random(42)
        result = roll("3d6", rng=rng)
        assert len(result.rolls) == 3
        assert all(1 <= r <= 6 for r in result.rolls)
        assert result.total == sum(result.rolls)

    def test_negative_modifier(self):
        """Roll 1d8-2 subtracts modifier correctly."""
        rng = random.Random(42)
        result = roll("1d8-2", rng=rng)
        assert result.modifier == -2
        assert result.total == result.rolls[0] - 2

    def test_invalid_notation(self):
        """Invalid notation raises ValueError."""
        with pytest.raises(ValueError):
            roll("bad")
        with pytest.raises(ValueError):
            roll("d6")
        with pytest.raises(ValueError):
            roll("0d6")

    def test_seeded_determinism(self):
        """Same seed produces same results."""
        result1 = roll("4d6", rng=random.Random(123))
        result2 = roll("4d6", rng=random.Random(123))
        assert result1.rolls == result2.rolls


class TestRollAbilityScores:
    """Tests for 4d6-drop-lowest ability generation."""

    def test_range(self):
        rng = random.Random(7)
        for _ in range(200):
            assert 3 <= roll_ability_score(rng) <= 18

    def test_drops_lowest(self):
        check_rng = random.Random(99)
        dice = [check_rng.randint(1, 6) for _ in range(4)]
        assert roll_ability_score(random.Random(99)) == sum(dice) - min(dice)

    def test_all_six(self):
        scores = roll_ability_scores(random.Random(1))
        assert all(3 <= scores.get(a) <= 18 for a in Ability)

    def test_seeded(self):
        assert roll_ability_scores(random.Random(5)) == roll_ability_scores(random.Random(5))


class TestRollHitPoints:
    """Tests for roll_hit_points()."""

    def test_first_level_is_max(self):
        classes = [ClassLevel(class_id="fighter", level=1)]
        assert roll_hit_points(classes, RULES, con_modifier=2, rng=random.Random(3)) == 12

    def test_range(self):
        classes = [ClassLevel(class_id="fighter", level=3), ClassLevel(class_id="wizard", level=2)]
        for seed in range(50):
            hp = roll_hit_points(classes, RULES, con_modifier=1, rng=random.Random(seed))
            # 11 for the first level, then 2d10 + 2d4, each +1
            assert 11 + 4 + 4 <= hp <= 11 + 22 + 10

    def test_minimum_one_per_level(self):
        classes = [ClassLevel(class_id="wizard", level=4)]
        assert roll_hit_points(classes, RULES, con_modifier=-5, rng=random.Random(0)) == 4

    def test_unknown_class(self):
        with pytest.raises(UnknownClass):
            roll_hit_points([ClassLevel(class_id="psion", level=1)], RULES, 0)
