"""Fighters, their stats and the built-in roster."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from enum import IntEnum

from picbattle.passives import Passive, PassiveEffect, PassiveTrigger

BUILTIN = "BUILTIN"
CUSTOM = "CUSTOM"


class Move(IntEnum):
    """The three hands a fighter can throw."""

    ROCK = 1
    PAPER = 2
    SCISSORS = 3


_MOVE_NAMES = {Move.ROCK: "Rock", Move.PAPER: "Paper", Move.SCISSORS: "Scissors"}

_WIN_TRIGGERS = {
    PassiveTrigger.ON_WIN_ROCK: Move.ROCK,
    PassiveTrigger.ON_WIN_PAPER: Move.PAPER,
    PassiveTrigger.ON_WIN_SCISSORS: Move.SCISSORS,
}
_LOSE_TRIGGERS = {
    PassiveTrigger.ON_LOSE_ROCK: Move.ROCK,
    PassiveTrigger.ON_LOSE_PAPER: Move.PAPER,
    PassiveTrigger.ON_LOSE_SCISSORS: Move.SCISSORS,
}
_ALWAYS_TRIGGERS = {
    PassiveTrigger.ON_TURN_START,
    PassiveTrigger.AFTER_ANY_ATTACK,
    PassiveTrigger.AFTER_TAKING_HIT,
}


def _percent_of(amount: int, percent: int) -> int:
    """Integer percentage, truncated toward zero."""
    product = amount * percent
    quotient = abs(product) // 100
    return quotient if product >= 0 else -quotient


def move_name(move: int) -> str:
    """Display name of a move, or ``Unknown``."""
    return _MOVE_NAMES.get(move, "Unknown")


def rps_winner(first_move: int, second_move: int) -> int:
    """0 for a tie, 1 if the first move wins, 2 if the second wins."""
    if first_move == second_move:
        return 0
    if (first_move, second_move) in (
        (Move.ROCK, Move.SCISSORS),
        (Move.PAPER, Move.ROCK),
        (Move.SCISSORS, Move.PAPER),
    ):
        return 1
    return 2


@dataclass
class Character:
    """A fighter with hit points, per-move damage and passives."""

    name: str
    max_hp: int
    rock_damage: int
    paper_damage: int
    scissors_damage: int
    passives: list[Passive] = field(default_factory=list)
    character_type: str = CUSTOM
    current_hp: int = field(init=False)
    bonus_damage: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.current_hp = self.max_hp

    def reset_for_battle(self) -> None:
        """Restore full HP and drop any pending bonus damage."""
        self.current_hp = self.max_hp
        self.bonus_damage = 0

    def is_defeated(self) -> bool:
        return self.current_hp <= 0

    def take_damage(self, damage: int) -> None:
        self.current_hp = max(self.current_hp - damage, 0)

    def heal(self, amount: int) -> None:
        self.current_hp = min(self.current_hp + amount, self.max_hp)

    def base_damage(self, move: int) -> int:
        """Base damage of a move; 0 for anything that is not a move."""
        if move == Move.ROCK:
            return self.rock_damage
        if move == Move.PAPER:
            return self.paper_damage
        if move == Move.SCISSORS:
            return self.scissors_damage
        return 0

    def estimated_damage(self, move: int) -> int:
        """Damage the move would deal now, without using up the bonus."""
        return self.base_damage(move) + self.bonus_damage

    def calculate_damage(self, move: int) -> int:
        """Damage of the move; the one-off bonus is consumed."""
        damage = self.estimated_damage(move)
        self.bonus_damage = 0
        return damage

    def add_bonus_damage(self, amount: int) -> None:
        self.bonus_damage += amount

    def increase_base_damage(self, move: int, amount: int) -> None:
        """Permanently raise the base damage of one move."""
        if move == Move.ROCK:
            self.rock_damage += amount
        elif move == Move.PAPER:
            self.paper_damage += amount
        elif move == Move.SCISSORS:
            self.scissors_damage += amount

    def reset_turn_state(self) -> None:
        """Allow every passive to fire again this turn."""
        for passive in self.passives:
            passive.triggered_this_turn = False

    def move_description(self, move: int) -> str:
        if move not in _MOVE_NAMES:
            return "Unknown"
        return f"{move_name(move)} ({self.estimated_damage(move)} dmg)"

    def short_description(self) -> str:
        return (
            f"{self.name} ({self.max_hp} HP, R:{self.rock_damage} "
            f"P:{self.paper_damage} S:{self.scissors_damage})"
        )

    def full_description(self) -> str:
        lines = [self.short_description()]
        if self.passives:
            lines.append("  Passives:")
            lines.extend(f"    - {p.describe()}" for p in self.passives)
        return "\n".join(lines)

    def _apply_effect(self, passive: Passive, opponent: Character) -> list[str]:
        value = passive.value
        effect = passive.effect
        if effect is PassiveEffect.HEAL_SELF_FLAT:
            self.heal(value)
            return [f"  Healed {value} HP."]
        if effect is PassiveEffect.DAMAGE_OPPONENT_FLAT:
            opponent.take_damage(value)
            return [f"  Dealt {value} damage to {opponent.name}."]
        if effect is PassiveEffect.INCREASE_NEXT_ATTACK_FLAT:
            self.add_bonus_damage(value)
            return [f"  Next attack + {value} damage."]
        if effect is PassiveEffect.INCREASE_ROCK_DMG_PERM:
            self.increase_base_damage(Move.ROCK, value)
            return [f"  Rock damage permanently increased by {value}."]
        if effect is PassiveEffect.INCREASE_PAPER_DMG_PERM:
            self.increase_base_damage(Move.PAPER, value)
            return [f"  Paper damage permanently increased by {value}."]
        if effect is PassiveEffect.INCREASE_SCISSORS_DMG_PERM:
            self.increase_base_damage(Move.SCISSORS, value)
            return [f"  Scissors damage permanently increased by {value}."]
        if effect is PassiveEffect.HEAL_SELF_PERCENT_CURRENT:
            amount = _percent_of(self.current_hp, value)
            self.heal(amount)
            return [f"  Healed {amount} HP ({value}% of current HP)."]
        if effect is PassiveEffect.DAMAGE_OPPONENT_PERCENT_CURRENT:
            amount = _percent_of(opponent.current_hp, value)
            opponent.take_damage(amount)
            return [
                f"  Dealt {amount} damage to {opponent.name} "
                f"({value}% of their current HP)."
            ]
        return []

    def _hp_percent(self) -> int:
        if self.max_hp <= 0:
            return 0
        return int(self.current_hp / self.max_hp * 100)

    def _matches(self, passive: Passive, trigger: PassiveTrigger, move: int, did_win: bool) -> bool:
        if passive.trigger != trigger:
            return False
        if trigger in _WIN_TRIGGERS:
            return move == _WIN_TRIGGERS[trigger] and did_win
        if trigger in _LOSE_TRIGGERS:
            return move == _LOSE_TRIGGERS[trigger] and not did_win
        if trigger is PassiveTrigger.ON_TIE:
            return not did_win
        return trigger in _ALWAYS_TRIGGERS

    def apply_passives(
        self,
        trigger: PassiveTrigger,
        opponent: Character,
        move: int = 0,
        did_win: bool = False,
    ) -> list[str]:
        """Fire every passive matching the event; return the battle log lines."""
        messages: list[str] = []
        if trigger is PassiveTrigger.ON_HP_BELOW_PERCENT:
            for passive in self.passives:
                if passive.triggered_this_turn or passive.trigger is not trigger:
                    continue
                hp_percent = self._hp_percent()
                if 0 < hp_percent <= passive.threshold:
                    messages.append(f"{self.name}'s passive triggered ({passive.describe()})!")
                    passive.triggered_this_turn = True
                    messages.extend(self._apply_effect(passive, opponent))
            return messages

        for passive in self.passives:
            if passive.triggered_this_turn or not self._matches(passive, trigger, move, did_win):
                continue
            messages.append(f"{self.name}'s passive triggered ({passive.describe()})!")
            passive.triggered_this_turn = True
            messages.extend(self._apply_effect(passive, opponent))
            if opponent.is_defeated():
                messages.append(f"{opponent.name} was defeated by the passive effect!")
            if self.is_defeated():
                messages.append(f"{self.name} was defeated by their own passive effect!?")
        return messages

    def copy(self) -> Character:
        """Independent copy, including current state and passives."""
        return _copy.deepcopy(self)


def _og() -> Character:
    return Character("OG", 20, 1, 2, 3, [], BUILTIN)


def _helios() -> Character:
    return Character(
        "Helios", 25, 1, 0, 2,
        [Passive(PassiveTrigger.ON_WIN_PAPER, PassiveEffect.HEAL_SELF_FLAT, 5)],
        BUILTIN,
    )


def _duran() -> Character:
    return Character(
        "Duran", 15, 2, 1, 3,
        [Passive(PassiveTrigger.ON_WIN_SCISSORS, PassiveEffect.INCREASE_NEXT_ATTACK_FLAT, 3)],
        BUILTIN,
    )


def _philip() -> Character:
    return Character(
        "Philip", 18, 1, 2, 1,
        [Passive(PassiveTrigger.ON_TIE, PassiveEffect.DAMAGE_OPPONENT_FLAT, 1)],
        BUILTIN,
    )


def _razor() -> Character:
    return Character("Razor", 7, 3, 4, 5, [], BUILTIN)


def _sunny() -> Character:
    below = PassiveTrigger.ON_HP_BELOW_PERCENT
    return Character(
        "Sunny", 14, 1, 3, 2,
        [
            Passive(below, PassiveEffect.INCREASE_ROCK_DMG_PERM, 4, 28),
            Passive(below, PassiveEffect.INCREASE_PAPER_DMG_PERM, 2, 28),
            Passive(below, PassiveEffect.INCREASE_SCISSORS_DMG_PERM, 3, 28),
        ],
        BUILTIN,
    )


_BUILTINS = {
    "OG": _og,
    "Helios": _helios,
    "Duran": _duran,
    "Philip": _philip,
    "Razor": _razor,
    "Sunny": _sunny,
}


def builtin_character(name: str) -> Character:
    """A fresh built-in fighter by name; ``KeyError`` if there is none."""
    try:
        factory = _BUILTINS[name]
    except KeyError:
        raise KeyError(f"no built-in character named {name!r}") from None
    return factory()


def builtin_characters() -> list[Character]:
    """Fresh copies of every built-in fighter, in roster order."""
    return [factory() for factory in _BUILTINS.values()]