"""Move selection for computer-controlled fighters."""

from __future__ import annotations

import random
from enum import Enum
from typing import Protocol, Sequence

from picbattle.character import Character, Move, rps_winner
from picbattle.passives import Passive, PassiveEffect, PassiveTrigger

DAMAGE_DEALT_PER_HP = 1.0
LETHAL_BONUS = 100.0
DAMAGE_TAKEN_PER_HP = 1.2
DEATH_PENALTY = 120.0
TIE_OUTCOME_BASE = 0.0
MOVE_BASE_DAMAGE_BIAS = 0.1

PASSIVE_HEAL_MULT = 1.0
PASSIVE_DAMAGE_MULT = 1.1
PASSIVE_BUFF_MULT = 0.8
PASSIVE_PERM_BUFF_MULT = 1.5

_PERMANENT_BUFFS = {
    PassiveEffect.INCREASE_ROCK_DMG_PERM,
    PassiveEffect.INCREASE_PAPER_DMG_PERM,
    PassiveEffect.INCREASE_SCISSORS_DMG_PERM,
}


class _Random(Protocol):
    def randint(self, a: int, b: int) -> int: ...

    def shuffle(self, x: list) -> None: ...


class AIDifficulty(Enum):
    """How hard the computer opponent plays."""

    EASY = "Easy"
    HARD = "Hard"


_default_rng = random.Random()


def _percent_of(amount: int, percent: int) -> int:
    product = amount * percent
    quotient = abs(product) // 100
    return quotient if product >= 0 else -quotient


def _best_first(scored: Sequence[tuple[Move, float]], rng: _Random) -> list[tuple[Move, float]]:
    """Order by score, highest first, breaking ties at random."""
    shuffled = list(scored)
    rng.shuffle(shuffled)
    return sorted(shuffled, key=lambda choice: choice[1], reverse=True)


def choose_move(
    bot: Character,
    player: Character,
    difficulty: AIDifficulty = AIDifficulty.HARD,
    rng: _Random | None = None,
) -> Move:
    """Pick the bot's move against the player at the given difficulty."""
    rng = rng or _default_rng
    if difficulty is AIDifficulty.EASY:
        return choose_move_easy(bot, player, rng)
    scored = [(move, score_move_hard(move, bot, player)) for move in Move]
    return _best_first(scored, rng)[0][0]


def choose_move_easy(bot: Character, player: Character, rng: _Random | None = None) -> Move:
    """A loose, greedy choice that often plays at random."""
    rng = rng or _default_rng
    if rng.randint(1, 100) <= 33:
        return Move(rng.randint(1, 3))

    player_very_low = player.max_hp != 0 and player.current_hp / player.max_hp < 0.20
    scored: list[tuple[Move, float]] = []
    for move in Move:
        damage = bot.estimated_damage(move)
        score = damage * 0.5
        if player_very_low and damage > 0:
            if player.current_hp - damage <= 0:
                score += 50
            else:
                score += damage
        score += 3.0 * sum(1 for p in bot.passives if p.trigger == move)
        scored.append((move, score))

    ranked = _best_first(scored, rng)
    if rng.randint(1, 100) <= 25 and len(ranked) > 1:
        if ranked[0][1] - ranked[1][1] < 10.0:
            return ranked[1][0]
    return ranked[0][0]


def score_move_hard(bot_move: int, bot: Character, player: Character) -> float:
    """Sum of the outcomes of this move against each possible player move."""
    total = 0.0
    for player_move in Move:
        contribution = 0.0
        winner = rps_winner(bot_move, player_move)
        if winner == 1:
            dealt = bot.estimated_damage(bot_move)
            contribution += dealt * DAMAGE_DEALT_PER_HP
            if player.current_hp - dealt <= 0:
                contribution += LETHAL_BONUS
            for p in bot.passives:
                if p.trigger == bot_move or p.trigger is PassiveTrigger.AFTER_ANY_ATTACK:
                    contribution += evaluate_passive_outcome(p, bot, player, True)
            for p in player.passives:
                if p.trigger == player_move + 3:
                    contribution += evaluate_passive_outcome(p, player, bot, False)
        elif winner == 2:
            taken = player.estimated_damage(player_move)
            contribution -= taken * DAMAGE_TAKEN_PER_HP
            if bot.current_hp - taken <= 0:
                contribution -= DEATH_PENALTY
            for p in bot.passives:
                if p.trigger == bot_move + 3 or p.trigger is PassiveTrigger.AFTER_TAKING_HIT:
                    contribution += evaluate_passive_outcome(p, bot, player, True)
            for p in player.passives:
                if p.trigger == player_move or p.trigger is PassiveTrigger.AFTER_ANY_ATTACK:
                    contribution += evaluate_passive_outcome(p, player, bot, False)
        else:
            contribution += TIE_OUTCOME_BASE
            for p in bot.passives:
                if p.trigger is PassiveTrigger.ON_TIE:
                    contribution += evaluate_passive_outcome(p, bot, player, True)
            for p in player.passives:
                if p.trigger is PassiveTrigger.ON_TIE:
                    contribution += evaluate_passive_outcome(p, player, bot, False)
        total += contribution

    total += bot.base_damage(bot_move) * MOVE_BASE_DAMAGE_BIAS
    return total


def evaluate_passive_outcome(
    passive: Passive, actor: Character, opponent: Character, actor_is_self: bool
) -> float:
    """Worth of a passive firing for ``actor``; negated when the actor is the other side."""
    effect = passive.effect
    value = passive.value
    strength = 0.0
    if effect is PassiveEffect.HEAL_SELF_FLAT:
        strength = value * PASSIVE_HEAL_MULT
    elif effect is PassiveEffect.DAMAGE_OPPONENT_FLAT:
        strength = value * PASSIVE_DAMAGE_MULT
        if opponent.current_hp - value <= 0:
            strength += LETHAL_BONUS / 5.0
    elif effect is PassiveEffect.INCREASE_NEXT_ATTACK_FLAT:
        strength = value * PASSIVE_BUFF_MULT
    elif effect in _PERMANENT_BUFFS:
        strength = value * PASSIVE_PERM_BUFF_MULT
    elif effect is PassiveEffect.HEAL_SELF_PERCENT_CURRENT:
        strength = _percent_of(actor.current_hp, value) * PASSIVE_HEAL_MULT
    elif effect is PassiveEffect.DAMAGE_OPPONENT_PERCENT_CURRENT:
        amount = _percent_of(opponent.current_hp, value)
        strength = amount * PASSIVE_DAMAGE_MULT
        if opponent.current_hp - amount <= 0:
            strength += LETHAL_BONUS / 5.0
    return strength if actor_is_self else -strength