"""Gauntlet mode: beat a run of opponents in a row to unlock new fighters."""

from __future__ import annotations

import os
import random

from picbattle.ai import AIDifficulty, choose_move
from picbattle.character import (
    BUILTIN,
    CUSTOM,
    Character,
    Move,
    builtin_character,
    move_name,
    rps_winner,
)
from picbattle.console import Console
from picbattle.game import resolve_round, start_of_turn
from picbattle.roster import Roster

GAUNTLET_UNLOCKS_FILE = "gauntlet_unlocks.txt"
OPPONENTS_TO_BEAT = 5
STARTING_CHARACTER = "OG"
UNLOCK_ORDER = ("OG", "Helios", "Duran", "Philip", "Razor", "Sunny")


def _fresh_copy(prototype: Character) -> Character:
    """A new fighter for a run: built-ins are rebuilt, customs are copied."""
    try:
        return builtin_character(prototype.name)
    except KeyError:
        return prototype.copy()


def _either_defeated(first: Character, second: Character) -> bool:
    return first.is_defeated() or second.is_defeated()


def _battle_status_text(player: Character, opponent: Character) -> str:
    return "\n".join(
        [
            "",
            "--- Gauntlet Battle Status --- ",
            f"{player.name} (Player): {player.current_hp}/{player.max_hp} HP",
            f"{opponent.name} (Opponent): {opponent.current_hp}/{opponent.max_hp} HP",
            "-----------------------------",
            "",
        ]
    )


class GauntletGame:
    """A run of consecutive battles against hard computer opponents."""

    def __init__(
        self,
        roster: Roster,
        console: Console | None = None,
        unlocks_path: str | os.PathLike[str] = GAUNTLET_UNLOCKS_FILE,
        rng: random.Random | None = None,
    ) -> None:
        self.roster = roster
        self.console = console or Console()
        self.unlocks_path = os.fspath(unlocks_path)
        self.rng = rng or random.Random()
        self.player: Character | None = None
        self.unlocked: list[str] = []
        self.wins_in_current_run = 0
        self.load_unlocks()

    def load_unlocks(self) -> list[str]:
        """Read the unlocked fighter names; the starting fighter is always unlocked."""
        names: list[str] = []
        try:
            with open(self.unlocks_path, encoding="utf-8") as infile:
                names = [line for line in infile.read().splitlines() if line]
        except OSError:
            names = []
        self.unlocked = names
        if STARTING_CHARACTER not in self.unlocked:
            self.unlocked.append(STARTING_CHARACTER)
            self.save_unlocks()
        self.unlocked.sort()
        return list(self.unlocked)

    def save_unlocks(self) -> None:
        """Write the unlocked fighter names, one per line."""
        try:
            with open(self.unlocks_path, "w", encoding="utf-8") as outfile:
                outfile.writelines(f"{name}\n" for name in self.unlocked)
        except OSError:
            self.console.say(f"Error: Could not open {self.unlocks_path} for writing!")

    def select_player(self) -> bool:
        """Let the user pick one of the unlocked fighters for this run."""
        self.console.clear()
        self.console.say("=== Gauntlet Mode - Select Your Fighter ===")
        if not self.unlocked:
            self.console.say(
                "No characters unlocked for Gauntlet Mode. "
                "(This shouldn't happen, OG is default)."
            )
            self.console.pause("Press Enter to return to menu...")
            return False

        self.console.say("Available characters:")
        selectable: list[Character] = []
        for name in self.unlocked:
            prototype = self.roster.find(name)
            number = len(selectable) + 1
            if prototype is None:
                self.console.say(f"{number}. {name} (Error: Data not found, cannot select)")
                continue
            self.console.say(f"{number}. {prototype.short_description()}")
            selectable.append(prototype)

        if not selectable:
            self.console.say("No valid characters found for selection.")
            self.console.pause("Press Enter to return...")
            return False

        choice = self.console.ask_int("Choose your character: ", 1, len(selectable))
        self.player = _fresh_copy(selectable[choice - 1])
        self.player.reset_for_battle()
        self.console.say(f"You chose: {self.player.name}")
        self.console.pause("Press Enter to start the Gauntlet...")
        return True

    def generate_opponent_order(self) -> list[Character]:
        """Shuffled opponent prototypes for the run, repeating if there are too few."""
        characters = list(self.roster)
        player_name = self.player.name if self.player is not None else None

        def others(kind: str) -> list[Character]:
            if self.player is None:
                return []
            return [
                c for c in characters
                if c.name != player_name and c.character_type == kind
            ]

        candidates = others(BUILTIN)
        if len(candidates) < OPPONENTS_TO_BEAT:
            candidates.extend(c for c in others(CUSTOM) if c not in candidates)

        if not candidates:
            if self.player is not None:
                first_other = next((c for c in characters if c.name != player_name), None)
                if first_other is not None:
                    candidates.append(first_other)
            if not candidates and characters:
                candidates.append(characters[0])
                self.console.say(
                    "Warning: Not enough distinct opponents. "
                    "You might fight yourself or clones."
                )

        if not candidates:
            self.console.say(
                "Error: No potential opponents found for the gauntlet! "
                "This should not happen."
            )
            return []

        self.rng.shuffle(candidates)
        return [candidates[i % len(candidates)] for i in range(OPPONENTS_TO_BEAT)]

    def run_battle(self, opponent_proto: Character) -> bool:
        """Fight a fresh copy of the opponent; True if the player survives."""
        if self.player is None:
            raise RuntimeError("no player selected for the gauntlet")
        player = self.player
        opponent = _fresh_copy(opponent_proto)
        opponent.reset_for_battle()
        console = self.console

        console.say(f"\n--- Battle Start! Player vs {opponent.name} ---")
        while not _either_defeated(player, opponent):
            console.clear()
            for line in start_of_turn(player, opponent):
                console.say(line)
            if _either_defeated(player, opponent):
                break

            console.say(_battle_status_text(player, opponent))
            console.say(f"Your move, {player.name}:")
            for move in Move:
                console.say(f"{int(move)}. {player.move_description(move)}")
            player_move = console.ask_int("Enter choice (1-3): ", 1, 3)

            console.say(f"{opponent.name} is thinking...")
            opponent_move = choose_move(opponent, player, AIDifficulty.HARD, self.rng)

            console.clear()
            console.say(_battle_status_text(player, opponent))
            console.say(f"{player.name} chose: {move_name(player_move)}")
            console.say(f"{opponent.name} chose: {move_name(opponent_move)}\n")

            winner = rps_winner(player_move, opponent_move)
            if winner == 0:
                console.say("It's a tie!")
            elif winner == 1:
                damage = player.estimated_damage(player_move)
                console.say(
                    f"You win the round! {opponent.name} takes {damage} damage."
                )
            else:
                damage = opponent.estimated_damage(opponent_move)
                console.say(f"{opponent.name} wins the round! You take {damage} damage.")
            for line in resolve_round(player, opponent, player_move, opponent_move).messages:
                console.say(line)

            if _either_defeated(player, opponent):
                break
            console.pause("\nPress Enter for next turn...")

        console.clear()
        console.say(_battle_status_text(player, opponent))
        if player.is_defeated():
            console.say(f"{player.name} has been defeated by {opponent.name}!")
            return False
        console.say(f"{opponent.name} has been defeated!")
        return True

    def attempt_unlock_next(self) -> str | None:
        """Unlock the next fighter in the canonical order; return its name, or None."""
        last_unlocked = next(
            (name for name in reversed(UNLOCK_ORDER) if name in self.unlocked),
            STARTING_CHARACTER,
        )
        after_last = UNLOCK_ORDER[UNLOCK_ORDER.index(last_unlocked) + 1:]
        next_name = next((name for name in after_last if name not in self.unlocked), None)

        if next_name is None:
            self.console.say(
                "\nAll available built-in characters have been unlocked for Gauntlet Mode!"
            )
            return None

        prototype = self.roster.find(next_name)
        if prototype is None or prototype.character_type != BUILTIN:
            self.console.say(
                f"\nTried to unlock '{next_name}' but it's not a recognized "
                "built-in character."
            )
            return None

        self.unlocked = sorted(set(self.unlocked) | {next_name})
        self.save_unlocks()
        self.console.say(
            "\nCongratulations! You've unlocked a new character for Gauntlet Mode: "
            f"{next_name}!"
        )
        return next_name

    def play(self) -> int:
        """Run a whole gauntlet; return how many opponents were defeated."""
        console = self.console
        console.clear()
        console.say("=== Welcome to the Gauntlet! ===")
        console.say(f"Defeat {OPPONENTS_TO_BEAT} consecutive opponents to win.")
        console.say("Only OG is available initially. Win to unlock more fighters!")

        self.load_unlocks()
        self.player = None
        self.wins_in_current_run = 0
        if not self.select_player() or self.player is None:
            return 0
        player = self.player

        opponents = self.generate_opponent_order()
        if len(opponents) < OPPONENTS_TO_BEAT:
            console.say(
                "Not enough unique opponents to start the Gauntlet "
                f"(Need at least {OPPONENTS_TO_BEAT} distinct types potentially)."
            )
            console.say(f"Current available opponents for order: {len(opponents)}")
            console.pause("Press Enter to return to menu...")
            return 0

        victorious = True
        for round_number, opponent in enumerate(opponents, start=1):
            console.say(
                f"\n--- Gauntlet: Round {round_number} of {OPPONENTS_TO_BEAT} ---"
            )
            if not self.run_battle(opponent):
                victorious = False
                console.say("\nYour Gauntlet run ends here.")
                break
            self.wins_in_current_run += 1
            console.say(
                f"\nVictory in round {round_number}! "
                f"Your HP: {player.current_hp}/{player.max_hp}"
            )
            if round_number < OPPONENTS_TO_BEAT:
                heal = player.max_hp // 2
                player.heal(heal)
                console.say(
                    f"You recovered {heal} HP between rounds. "
                    f"Current HP: {player.current_hp}/{player.max_hp}"
                )
                console.pause("Press Enter for the next opponent...")

        if victorious:
            console.say("\n****************************************")
            console.say("* CONGRATULATIONS! You beat the Gauntlet! *")
            console.say("****************************************")
            self.attempt_unlock_next()
        else:
            console.say("\nBetter luck next time!")

        console.say(f"You defeated {self.wins_in_current_run} opponents.")
        console.pause("Press Enter to return to the main menu...")
        return self.wins_in_current_run