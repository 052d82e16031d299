"""The list of available fighters, its save file, and the character creator."""

from __future__ import annotations

import os
import re
from typing import Iterator

from picbattle.character import CUSTOM, BUILTIN, Character, builtin_characters
from picbattle.console import Console
from picbattle.passives import Passive, PassiveEffect, PassiveTrigger

SAVE_FILE = "characters.txt"
MAX_PASSIVES = 3

HEADER_LINES = (
    "# Format: TYPE;NAME;HP;ROCK;PAPER;SCISSORS;PASSIVE1_STR;PASSIVE2_STR;...",
    "# Passive Str: TRIGGER_ID,EFFECT_ID,VALUE,THRESHOLD",
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_PERCENT_EFFECTS = {
    PassiveEffect.HEAL_SELF_PERCENT_CURRENT,
    PassiveEffect.DAMAGE_OPPONENT_PERCENT_CURRENT,
}


def _parse_int(text: str) -> int:
    """Read a leading 32-bit integer, ignoring anything after it."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        raise OverflowError(f"number out of range: {text!r}")
    return number


def _header_text() -> str:
    return "".join(f"{line}\n" for line in HEADER_LINES)


class Roster:
    """Built-in and custom fighters, backed by a save file of custom ones."""

    def __init__(self, path: str | os.PathLike[str] = SAVE_FILE) -> None:
        self.path = os.fspath(path)
        self._characters: list[Character] = []

    def load(self) -> list[str]:
        """Reset to the built-ins and read custom fighters from the save file.

        A missing file is created with its header. Bad lines are skipped.
        Returns the messages describing what happened.
        """
        self._characters = builtin_characters()
        messages: list[str] = []
        try:
            with open(self.path, encoding="utf-8") as infile:
                lines = infile.read().splitlines()
        except FileNotFoundError:
            messages.append(
                f"No custom character file found ({self.path}). "
                "Starting with built-in characters."
            )
            try:
                with open(self.path, "w", encoding="utf-8") as outfile:
                    outfile.write(_header_text())
            except OSError:
                pass
            return messages

        for line in lines:
            if not line or line.startswith("#"):
                continue
            parts = line.split(";")
            if parts and parts[-1] == "":
                parts.pop()
            if len(parts) >= 6 and parts[0] == CUSTOM:
                character = self._parse_custom(line, parts, messages)
                if character is not None:
                    self._characters.append(character)
                    messages.append(f"Loaded custom character: {character.name}")
            elif not parts or parts[0] != BUILTIN:
                messages.append(
                    f"Skipping malformed line or non-custom character entry: {line}"
                )
        messages.append(
            f"Finished loading characters. Total characters: {len(self._characters)}"
        )
        return messages

    @staticmethod
    def _parse_custom(line: str, parts: list[str], messages: list[str]) -> Character | None:
        name = parts[1]
        try:
            hp, rock, paper, scissors = (_parse_int(part) for part in parts[2:6])
        except OverflowError as exc:
            messages.append(f"Error parsing line (number out of range): {line} Why: {exc}")
            return None
        except ValueError as exc:
            messages.append(f"Error parsing line (invalid number): {line} Why: {exc}")
            return None
        try:
            passives = [Passive.from_string(part) for part in parts[6:] if part]
        except ValueError:
            messages.append(f"Unknown error parsing line: {line}")
            return None
        return Character(name, hp, rock, paper, scissors, passives, CUSTOM)

    def save(self) -> None:
        """Write every custom fighter to the save file; ``OSError`` on failure."""
        rows = []
        for character in self.custom_characters():
            fields = [
                character.character_type,
                character.name,
                str(character.max_hp),
                str(character.rock_damage),
                str(character.paper_damage),
                str(character.scissors_damage),
            ]
            fields.extend(passive.to_string() for passive in character.passives)
            rows.append(";".join(fields) + "\n")
        with open(self.path, "w", encoding="utf-8") as outfile:
            outfile.write(_header_text())
            outfile.writelines(rows)

    def find(self, name: str) -> Character | None:
        """The fighter with this name, or None."""
        return next((c for c in self._characters if c.name == name), None)

    def add(self, character: Character) -> None:
        """Append a fighter; ``ValueError`` if the name is already taken."""
        if self.find(character.name) is not None:
            raise ValueError(f"a character named {character.name!r} already exists")
        self._characters.append(character)

    def remove(self, name: str) -> Character:
        """Remove and return the custom fighter with this name; ``KeyError`` if none."""
        for character in self._characters:
            if character.name == name and character.character_type == CUSTOM:
                self._characters.remove(character)
                return character
        raise KeyError(f"no custom character named {name!r}")

    def custom_characters(self) -> list[Character]:
        """Custom fighters in roster order."""
        return [c for c in self._characters if c.character_type == CUSTOM]

    def __iter__(self) -> Iterator[Character]:
        return iter(self._characters)

    def __len__(self) -> int:
        return len(self._characters)


def passive_options_text() -> str:
    """The menu of trigger and effect ids offered by the character creator."""
    T, E = PassiveTrigger, PassiveEffect
    triggers = [
        (T.ON_WIN_ROCK, "On winning with Rock"),
        (T.ON_WIN_PAPER, "On winning with Paper"),
        (T.ON_WIN_SCISSORS, "On winning with Scissors"),
        (T.ON_LOSE_ROCK, "On losing to Rock"),
        (T.ON_LOSE_PAPER, "On losing to Paper"),
        (T.ON_LOSE_SCISSORS, "On losing to Scissors"),
        (T.ON_TIE, "On a tie"),
        (T.ON_HP_BELOW_PERCENT, "When HP is below a % threshold"),
        (T.ON_TURN_START, "At the start of your turn"),
        (T.AFTER_ANY_ATTACK, "After you attack (win or lose)"),
        (T.AFTER_TAKING_HIT, "After taking damage"),
    ]
    effects = [
        (E.HEAL_SELF_FLAT, "Heal self (flat amount)"),
        (E.DAMAGE_OPPONENT_FLAT, "Damage opponent (flat amount)"),
        (E.INCREASE_NEXT_ATTACK_FLAT, "Increase next attack damage (flat amount)"),
        (E.INCREASE_ROCK_DMG_PERM, "Permanently increase Rock damage"),
        (E.INCREASE_PAPER_DMG_PERM, "Permanently increase Paper damage"),
        (E.INCREASE_SCISSORS_DMG_PERM, "Permanently increase Scissors damage"),
        (E.HEAL_SELF_PERCENT_CURRENT, "Heal self (% of current HP)"),
        (E.DAMAGE_OPPONENT_PERCENT_CURRENT, "Damage opponent (% of their current HP)"),
    ]
    lines = ["", "--- Passive Triggers ---"]
    lines.extend(f"{int(t)}: {text}" for t, text in triggers)
    lines.extend(["", "--- Passive Effects ---"])
    lines.extend(f"{int(e)}: {text}" for e, text in effects)
    lines.append(
        f"Enter {int(T.NONE)} for trigger or {int(E.NONE)} for effect to skip adding a passive."
    )
    return "\n".join(lines)


def _save_and_report(roster: Roster, console: Console) -> None:
    try:
        roster.save()
    except OSError:
        console.say(f"Error: Could not open {roster.path} for writing!")
    else:
        console.say(f"Custom characters saved to {roster.path}")


def _ask_passive(console: Console) -> Passive | None | bool:
    """One passive from the user; None to skip it, False to stop adding."""
    console.say(passive_options_text())
    trigger = PassiveTrigger(
        console.ask_int("Choose Trigger ID: ", 0, int(PassiveTrigger.AFTER_TAKING_HIT))
    )
    if trigger is PassiveTrigger.NONE:
        console.say("Skipping remaining passives.")
        return False
    effect = PassiveEffect(
        console.ask_int(
            "Choose Effect ID: ", 0, int(PassiveEffect.DAMAGE_OPPONENT_PERCENT_CURRENT)
        )
    )
    if effect is PassiveEffect.NONE:
        console.say("Skipping this passive.")
        return None
    if effect in _PERCENT_EFFECTS:
        value = console.ask_int("Enter Percentage Value (1-100): ", 1, 100)
    else:
        value = console.ask_int("Enter Flat Value (1-50): ", 1, 50)
    threshold = 0
    if trigger is PassiveTrigger.ON_HP_BELOW_PERCENT:
        threshold = console.ask_int("Enter HP Threshold Percentage (1-99): ", 1, 99)
    return Passive(trigger, effect, value, threshold)


def create_character(roster: Roster, console: Console) -> Character | None:
    """Walk the user through building a custom fighter, add it and save.

    Returns the new fighter, or None when the name is already taken.
    """
    console.clear()
    console.say("=== Create New Character ===\n")
    name = console.ask_string("Enter character name: ")
    if roster.find(name) is not None:
        console.say("Error: A character with this name already exists.")
        console.pause("Press Enter to return to the menu...")
        return None

    hp = console.ask_int("Enter Max HP (1-100): ", 1, 100)
    rock = console.ask_int("Enter Rock Damage (0-10): ", 0, 10)
    paper = console.ask_int("Enter Paper Damage (0-10): ", 0, 10)
    scissors = console.ask_int("Enter Scissors Damage (0-10): ", 0, 10)

    passives: list[Passive] = []
    console.say(f"\n--- Add Passives (up to {MAX_PASSIVES}, enter 0 for trigger to skip) ---")
    for slot in range(1, MAX_PASSIVES + 1):
        console.say(f"\n-- Passive {slot} --")
        passive = _ask_passive(console)
        if passive is False:
            break
        if passive is None:
            continue
        passives.append(passive)
        console.say(f"Added Passive: {passive.describe()}")
        if slot < MAX_PASSIVES:
            answer = console.ask_string("Add another passive? (y/n): ")
            if answer[0].lower() != "y":
                break

    character = Character(name, hp, rock, paper, scissors, passives, CUSTOM)
    roster.add(character)
    console.say(f"\nCharacter '{name}' created successfully!")
    _save_and_report(roster, console)
    console.pause("Press Enter to return to the menu...")
    return character


def view_characters(roster: Roster, console: Console) -> None:
    """List every fighter with its full description."""
    console.clear()
    console.say("=== Available Characters ===\n")
    if len(roster) == 0:
        console.say("No characters available. Load or create some first.")
    else:
        for number, character in enumerate(roster, start=1):
            console.say(
                f"{number}. [{character.character_type}] {character.full_description()}\n"
            )
    console.pause("Press Enter to return to the menu...")


def delete_character(roster: Roster, console: Console) -> Character | None:
    """Let the user pick a custom fighter to delete; return it, or None if cancelled."""
    console.clear()
    console.say("=== Delete Custom Character ===\n")
    console.say("Select a custom character to delete:")
    console.say("0. Cancel")
    customs = roster.custom_characters()
    for number, character in enumerate(customs, start=1):
        console.say(f"{number}. {character.name}")

    if not customs:
        console.say("\nNo custom characters to delete.")
        console.pause("Press Enter to return to the menu...")
        return None

    choice = console.ask_int("Enter choice: ", 0, len(customs))
    removed = None
    if choice == 0:
        console.say("Deletion cancelled.")
    else:
        removed = roster.remove(customs[choice - 1].name)
        console.say(f"Character '{removed.name}' deleted.")
        _save_and_report(roster, console)
    console.pause("Press Enter to return to the menu...")
    return removed