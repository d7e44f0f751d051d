"""Tests for spellcasting progression."""

import pytest

from engine.combat import resolve_class_levels
from engine.errors import UnknownSpellcastingType
from engine.loader import load_rules
from engine.spells import (
    bonus_spells,
    class_domain_slots,
    class_spell_slots,
    class_spells_known,
    compute_spell_slots,
    compute_spellcasting,
)
from models.characters import Ability, AbilityScores, ClassLevel
from models.rules import ClassDefinition

RULES = load_rules()


def _mods(int_=0, wis=0, cha=0) -> dict[Ability, int]:
    """Helper to build an ability modifier map for casters."""
    return {
        Ability.STRENGTH: 0,
        Ability.DEXTERITY: 0,
        Ability.CONSTITUTION: 0,
        Ability.INTELLIGENCE: int_,
        Ability.WISDOM: wis,
        Ability.CHARISMA: cha,
    }


def _levels(*classes: tuple[str, int]):
    return resolve_class_levels([ClassLevel(class_id=c, level=lvl) for c, lvl in classes], RULES)


class TestBonusSpells:
    """Tests for bonus_spells()."""

    def test_modifier_3_grants_levels_1_to_3(self):
        assert [bonus_spells(3, lvl) for lvl in range(0, 5)] == [0, 1, 1, 1, 0]

    def test_high_modifier(self):
        """Modifier +5: two 1st-level bonus spells, one each of 2nd-5th."""
        assert [bonus_spells(5, lvl) for lvl in range(1, 7)] == [2, 1, 1, 1, 1, 0]

    def test_no_bonus_for_cantrips(self):
        assert bonus_spells(10, 0) == 0

    def test_negative_modifier(self):
        assert bonus_spells(-1, 1) == 0


class TestClassSpellSlots:
    """Tests for class_spell_slots()."""

    def test_wizard_1(self):
        assert class_spell_slots(RULES.classes["wizard"], 1, 3) == {0: 3, 1: 2}

    def test_bonus_only_for_castable_levels(self):
        """A 1st-level wizard with Int 20 gets no 2nd-level slots."""
        slots = class_spell_slots(RULES.classes["wizard"], 1, 5)
        assert slots == {0: 3, 1: 3}

    def test_non_caster(self):
        assert class_spell_slots(RULES.classes["fighter"], 10, 5) == {}

    def test_paladin_before_spells(self):
        assert class_spell_slots(RULES.classes["paladin"], 3, 2) == {}

    def test_paladin_zero_entry_takes_bonus(self):
        assert class_spell_slots(RULES.classes["paladin"], 4, 1) == {1: 1}
        assert class_spell_slots(RULES.classes["paladin"], 4, 0) == {1: 0}

    def test_low_score_cannot_cast(self):
        """Int 11 only reaches 1st-level spells."""
        slots = class_spell_slots(RULES.classes["wizard"], 5, 0, ability_score=11)
        assert slots == {0: 4, 1: 3, 2: 0, 3: 0}

    def test_beyond_table_keeps_last_row(self):
        assert class_spell_slots(RULES.classes["sorcerer"], 25, 0) == \
            class_spell_slots(RULES.classes["sorcerer"], 20, 0)

    def test_unknown_spellcasting_type(self):
        psion = ClassDefinition(id="psion", hit_die=4, bab="half", spellcasting="psionic")
        with pytest.raises(UnknownSpellcastingType) as exc:
            class_spell_slots(psion, 1, 3)
        assert exc.value.class_id == "psion"
        assert exc.value.spellcasting == "psionic"


class TestComputeSpellSlots:
    """Tests for compute_spell_slots()."""

    def test_multiclass_kept_separate(self):
        """Wizard 3 / Cleric 3 slots equal pure Wizard 3 and pure Cleric 3."""
        mods = _mods(int_=2, wis=0)
        multi = compute_spell_slots(_levels(("wizard", 3), ("cleric", 3)), mods)
        pure_wizard = compute_spell_slots(_levels(("wizard", 3)), mods)
        pure_cleric = compute_spell_slots(_levels(("cleric", 3)), mods)
        assert multi["wizard"] == pure_wizard["wizard"]
        assert multi["cleric"] == pure_cleric["cleric"]
        assert multi["wizard"] != multi["cleric"]

    def test_non_caster_gets_empty_map(self):
        slots = compute_spell_slots(_levels(("fighter", 2), ("wizard", 1)), _mods(int_=1))
        assert slots["fighter"] == {}
        assert slots["wizard"] == {0: 3, 1: 2}

    def test_uses_class_casting_ability(self):
        slots = compute_spell_slots(_levels(("sorcerer", 1)), _mods(int_=5, cha=0))
        assert slots["sorcerer"] == {0: 5, 1: 3}


class TestSpellcastingExtras:
    """Tests for spells known, domain slots and save DCs."""

    def test_sorcerer_known(self):
        assert class_spells_known(RULES.classes["sorcerer"], 1) == {0: 4, 1: 2}

    def test_prepared_casters_know_nothing(self):
        assert class_spells_known(RULES.classes["wizard"], 5) == {}

    def test_cleric_domain_slots(self):
        assert class_domain_slots(RULES.classes["cleric"], 3) == {1: 1, 2: 1}
        assert class_domain_slots(RULES.classes["druid"], 3) == {}

    def test_compute_spellcasting(self):
        scores = AbilityScores(intelligence=16, wisdom=14)
        stats = compute_spellcasting(_levels(("wizard", 1), ("cleric", 1)), _mods(int_=3, wis=2),
                                     scores)
        assert stats.spells_per_day == {"wizard": {0: 3, 1: 2}, "cleric": {0: 3, 1: 2}}
        assert stats.domain_slots == {"cleric": {1: 1}}
        assert stats.save_dc_base == {"wizard": 13, "cleric": 12}
        assert stats.spells_known == {}

    def test_no_save_dc_before_first_spells(self):
        stats = compute_spellcasting(_levels(("paladin", 1), ("ranger", 3)), _mods(wis=2))
        assert stats.spells_per_day == {"paladin": {}, "ranger": {}}
        assert stats.save_dc_base == {}

    def test_save_dc_once_spells_begin(self):
        stats = compute_spellcasting(_levels(("paladin", 4)), _mods(wis=2))
        assert stats.save_dc_base == {"paladin": 12}
