import random

import pytest

from picbattle.ai import (
    AIDifficulty,
    choose_move,
    choose_move_easy,
    evaluate_passive_outcome,
    score_move_hard,
)
from picbattle.character import Character, Move, builtin_character
from picbattle.passives import Passive, PassiveEffect, PassiveTrigger


class ScriptedRng:
    """Returns queued numbers from randint and leaves order alone on shuffle."""

    def __init__(self, numbers):
        self._numbers = list(numbers)

    def randint(self, a, b):
        value = self._numbers.pop(0)
        return min(max(value, a), b)

    def shuffle(self, items):
        pass


def make(name="X", hp=10, r=0, p=0, s=0, passives=None):
    return Character(name, hp, r, p, s, passives or [])


def test_score_og_mirror_rock():
    og = builtin_character("OG")
    assert score_move_hard(Move.ROCK, og, builtin_character("OG")) == pytest.approx(-1.3)


@pytest.mark.parametrize("seed", range(10))
def test_hard_picks_best_scoring_move(seed):
    bot = builtin_character("Razor")
    player = builtin_character("Sunny")
    player.current_hp = 4
    move = choose_move(bot, player, AIDifficulty.HARD, random.Random(seed))
    best = max(score_move_hard(m, bot, player) for m in Move)
    assert score_move_hard(move, bot, player) == best


def test_hard_is_default_difficulty():
    bot = builtin_character("Duran")
    player = builtin_character("Helios")
    move = choose_move(bot, player, rng=random.Random(3))
    best = max(score_move_hard(m, bot, player) for m in Move)
    assert score_move_hard(move, bot, player) == best


def test_lethal_move_scores_higher():
    bot = make(r=1, s=5)
    weak = make(hp=10)
    weak.current_hp = 5
    healthy = make(hp=10)
    gap_weak = score_move_hard(Move.SCISSORS, bot, weak)
    gap_healthy = score_move_hard(Move.SCISSORS, bot, healthy)
    assert gap_weak > gap_healthy


@pytest.mark.parametrize("seed", range(20))
def test_easy_returns_valid_move(seed):
    move = choose_move(
        builtin_character("OG"), builtin_character("Philip"), AIDifficulty.EASY, random.Random(seed)
    )
    assert move in set(Move)


def test_easy_same_seed_same_move():
    bot, player = builtin_character("Helios"), builtin_character("Duran")
    first = [choose_move_easy(bot, player, random.Random(s)) for s in range(15)]
    second = [choose_move_easy(bot, player, random.Random(s)) for s in range(15)]
    assert first == second


def test_easy_random_branch_uses_second_draw():
    rng = ScriptedRng([10, 2])
    assert choose_move_easy(make(), make(), rng) == Move.PAPER


def test_easy_goes_for_the_kill():
    bot = make(s=5)
    player = make(hp=10)
    player.current_hp = 1
    assert choose_move_easy(bot, player, ScriptedRng([100, 100])) == Move.SCISSORS


def test_easy_prefers_passive_move():
    bot = make(passives=[Passive(PassiveTrigger.ON_WIN_ROCK, PassiveEffect.HEAL_SELF_FLAT, 1)])
    assert choose_move_easy(bot, make(), ScriptedRng([50, 90])) == Move.ROCK


def test_easy_sometimes_takes_runner_up():
    bot = make(passives=[Passive(PassiveTrigger.ON_WIN_ROCK, PassiveEffect.HEAL_SELF_FLAT, 1)])
    assert choose_move_easy(bot, make(), ScriptedRng([50, 10])) == Move.PAPER


def test_passive_outcome_heal_flat():
    passive = Passive(PassiveTrigger.ON_TIE, PassiveEffect.HEAL_SELF_FLAT, 5)
    assert evaluate_passive_outcome(passive, make(), make(), True) == pytest.approx(5.0)


@pytest.mark.parametrize("effect", list(PassiveEffect))
def test_passive_outcome_sign_flips(effect):
    passive = Passive(PassiveTrigger.ON_TIE, effect, 4)
    actor, opponent = make(hp=20), make(hp=20)
    mine = evaluate_passive_outcome(passive, actor, opponent, True)
    theirs = evaluate_passive_outcome(passive, actor, opponent, False)
    assert mine == pytest.approx(-theirs)


def test_passive_outcome_none_is_worthless():
    passive = Passive(PassiveTrigger.ON_TIE, PassiveEffect.NONE, 9)
    assert evaluate_passive_outcome(passive, make(), make(), True) == 0


def test_percent_heal_truncates():
    passive = Passive(PassiveTrigger.ON_TIE, PassiveEffect.HEAL_SELF_PERCENT_CURRENT, 50)
    actor = make(hp=15)
    assert evaluate_passive_outcome(passive, actor, make(), True) == pytest.approx(7.0)


def test_lethal_flat_damage_adds_bonus():
    passive = Passive(PassiveTrigger.ON_TIE, PassiveEffect.DAMAGE_OPPONENT_FLAT, 5)
    low, high = make(hp=3), make(hp=30)
    lethal = evaluate_passive_outcome(passive, make(), low, True)
    plain = evaluate_passive_outcome(passive, make(), high, True)
    assert lethal - plain == pytest.approx(20.0)


def test_permanent_buff_beats_next_attack_buff():
    perm = Passive(PassiveTrigger.ON_TIE, PassiveEffect.INCREASE_ROCK_DMG_PERM, 2)
    once = Passive(PassiveTrigger.ON_TIE, PassiveEffect.INCREASE_NEXT_ATTACK_FLAT, 2)
    assert evaluate_passive_outcome(perm, make(), make(), True) > evaluate_passive_outcome(
        once, make(), make(), True
    )