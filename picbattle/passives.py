"""Passive abilities: what sets them off, what they do, and their text form."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class PassiveTrigger(IntEnum):
    """Event that can set off a passive."""

    NONE = 0
    ON_WIN_ROCK = 1
    ON_WIN_PAPER = 2
    ON_WIN_SCISSORS = 3
    ON_LOSE_ROCK = 4
    ON_LOSE_PAPER = 5
    ON_LOSE_SCISSORS = 6
    ON_TIE = 7
    ON_HP_BELOW_PERCENT = 8
    ON_TURN_START = 9
    AFTER_ANY_ATTACK = 10
    AFTER_TAKING_HIT = 11


class PassiveEffect(IntEnum):
    """What a passive does once it fires."""

    NONE = 0
    HEAL_SELF_FLAT = 1
    DAMAGE_OPPONENT_FLAT = 2
    INCREASE_NEXT_ATTACK_FLAT = 3
    INCREASE_ROCK_DMG_PERM = 4
    INCREASE_PAPER_DMG_PERM = 5
    INCREASE_SCISSORS_DMG_PERM = 6
    HEAL_SELF_PERCENT_CURRENT = 7
    DAMAGE_OPPONENT_PERCENT_CURRENT = 8


_TRIGGER_TEXT = {
    PassiveTrigger.NONE: "No trigger",
    PassiveTrigger.ON_WIN_ROCK: "On winning with Rock",
    PassiveTrigger.ON_WIN_PAPER: "On winning with Paper",
    PassiveTrigger.ON_WIN_SCISSORS: "On winning with Scissors",
    PassiveTrigger.ON_LOSE_ROCK: "On losing to Rock",
    PassiveTrigger.ON_LOSE_PAPER: "On losing to Paper",
    PassiveTrigger.ON_LOSE_SCISSORS: "On losing to Scissors",
    PassiveTrigger.ON_TIE: "On a tie",
    PassiveTrigger.ON_TURN_START: "At the start of your turn",
    PassiveTrigger.AFTER_ANY_ATTACK: "After you attack",
    PassiveTrigger.AFTER_TAKING_HIT: "After taking damage",
}

_EFFECT_TEXT = {
    PassiveEffect.NONE: "no effect",
    PassiveEffect.HEAL_SELF_FLAT: "heal self for {v} HP",
    PassiveEffect.DAMAGE_OPPONENT_FLAT: "deal {v} damage to opponent",
    PassiveEffect.INCREASE_NEXT_ATTACK_FLAT: "increase next attack by {v} damage",
    PassiveEffect.INCREASE_ROCK_DMG_PERM: "permanently increase Rock damage by {v}",
    PassiveEffect.INCREASE_PAPER_DMG_PERM: "permanently increase Paper damage by {v}",
    PassiveEffect.INCREASE_SCISSORS_DMG_PERM: "permanently increase Scissors damage by {v}",
    PassiveEffect.HEAL_SELF_PERCENT_CURRENT: "heal self for {v}% of current HP",
    PassiveEffect.DAMAGE_OPPONENT_PERCENT_CURRENT: "deal {v}% of opponent's current HP as damage",
}


def _parse_int(text: str) -> int | None:
    """Read a leading 32-bit integer, ignoring trailing text; None if there is none."""
    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        return None
    return number


@dataclass
class Passive:
    """A passive ability attached to a character."""

    trigger: PassiveTrigger = PassiveTrigger.NONE
    effect: PassiveEffect = PassiveEffect.NONE
    value: int = 0
    threshold: int = 0
    triggered_this_turn: bool = field(default=False, compare=False)

    def to_string(self) -> str:
        """Serialise as ``TRIGGER_ID,EFFECT_ID,VALUE,THRESHOLD``."""
        return f"{int(self.trigger)},{int(self.effect)},{self.value},{self.threshold}"

    @classmethod
    def from_string(cls, text: str) -> Passive:
        """Parse the form written by :meth:`to_string`.

        Segments that hold no number are skipped. With fewer than two numbers
        an empty passive is returned. Unknown trigger or effect ids raise
        ``ValueError``.
        """
        numbers: list[int] = []
        for segment in text.split(","):
            if len(numbers) == 4:
                break
            number = _parse_int(segment)
            if number is not None:
                numbers.append(number)
        if len(numbers) < 2:
            return cls()
        numbers.extend([0] * (4 - len(numbers)))
        trigger_id, effect_id, value, threshold = numbers
        return cls(PassiveTrigger(trigger_id), PassiveEffect(effect_id), value, threshold)

    def describe(self) -> str:
        """Human-readable sentence for this passive."""
        if self.trigger is PassiveTrigger.ON_HP_BELOW_PERCENT:
            trigger_text = f"When HP is below {self.threshold}%"
        else:
            trigger_text = _TRIGGER_TEXT.get(self.trigger, "Unknown Trigger")
        template = _EFFECT_TEXT.get(self.effect)
        effect_text = template.format(v=self.value) if template else "Unknown Effect"
        return f"{trigger_text}: {effect_text}."