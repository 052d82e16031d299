import pytest

from picbattle.passives import Passive, PassiveEffect, PassiveTrigger


def test_to_string_format():
    passive = Passive(PassiveTrigger.ON_WIN_PAPER, PassiveEffect.HEAL_SELF_FLAT, 5)
    assert passive.to_string() == "2,1,5,0"


@pytest.mark.parametrize(
    "passive",
    [
        Passive(PassiveTrigger.ON_HP_BELOW_PERCENT, PassiveEffect.INCREASE_ROCK_DMG_PERM, 4, 28),
        Passive(PassiveTrigger.ON_TIE, PassiveEffect.DAMAGE_OPPONENT_FLAT, 1),
        Passive(PassiveTrigger.AFTER_TAKING_HIT, PassiveEffect.DAMAGE_OPPONENT_PERCENT_CURRENT, 50),
        Passive(),
    ],
)
def test_round_trip(passive):
    assert Passive.from_string(passive.to_string()) == passive


def test_from_string_with_two_fields_defaults_rest():
    parsed = Passive.from_string("7,2")
    assert parsed == Passive(PassiveTrigger.ON_TIE, PassiveEffect.DAMAGE_OPPONENT_FLAT, 0, 0)


def test_from_string_too_short_gives_empty_passive():
    assert Passive.from_string("3") == Passive()
    assert Passive.from_string("") == Passive()


def test_from_string_skips_non_numeric_segments():
    parsed = Passive.from_string("x,1,abc,2,5,7")
    assert parsed == Passive(PassiveTrigger.ON_WIN_ROCK, PassiveEffect.DAMAGE_OPPONENT_FLAT, 5, 7)


def test_from_string_ignores_trailing_text_in_segment():
    parsed = Passive.from_string(" 9,1xyz,3,0")
    assert parsed.trigger is PassiveTrigger.ON_TURN_START
    assert parsed.effect is PassiveEffect.HEAL_SELF_FLAT
    assert parsed.value == 3


def test_from_string_unknown_ids_raise():
    with pytest.raises(ValueError):
        Passive.from_string("1,99,5,0")
    with pytest.raises(ValueError):
        Passive.from_string("42,1,5,0")


def test_triggered_flag_not_part_of_equality():
    first = Passive(PassiveTrigger.ON_TIE, PassiveEffect.HEAL_SELF_FLAT, 2)
    second = Passive(PassiveTrigger.ON_TIE, PassiveEffect.HEAL_SELF_FLAT, 2)
    second.triggered_this_turn = True
    assert first == second


def test_describe_flat_heal():
    passive = Passive(PassiveTrigger.ON_WIN_PAPER, PassiveEffect.HEAL_SELF_FLAT, 5)
    assert passive.describe() == "On winning with Paper: heal self for 5 HP."


def test_describe_threshold_uses_threshold():
    passive = Passive(PassiveTrigger.ON_HP_BELOW_PERCENT, PassiveEffect.INCREASE_ROCK_DMG_PERM, 4, 28)
    assert passive.describe() == "When HP is below 28%: permanently increase Rock damage by 4."


@pytest.mark.parametrize("trigger", list(PassiveTrigger))
@pytest.mark.parametrize("effect", list(PassiveEffect))
def test_describe_shape(trigger, effect):
    text = Passive(trigger, effect, 13, 17).describe()
    assert ": " in text
    assert text.endswith(".")
    assert "Unknown" not in text