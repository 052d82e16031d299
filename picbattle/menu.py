"""Main menu of the game and the command that starts it."""

from __future__ import annotations

import argparse
import os
import random
from pathlib import Path

from picbattle.ai import AIDifficulty
from picbattle.console import Console
from picbattle.game import Game
from picbattle.gauntlet import GAUNTLET_UNLOCKS_FILE, GauntletGame
from picbattle.roster import SAVE_FILE, Roster, create_character, delete_character, view_characters

_BANNER = "=================================="


class MainMenu:
    """Top-level menu: battles, gauntlet, character creator and settings."""

    def __init__(
        self,
        console: Console | None = None,
        directory: str | os.PathLike[str] = ".",
        rng: random.Random | None = None,
    ) -> None:
        self.console = console or Console()
        self.directory = Path(directory)
        self.rng = rng or random.Random()
        self.roster = Roster(self.directory / SAVE_FILE)
        self.game = Game(self.roster, self.console, self.rng)
        self.gauntlet = GauntletGame(
            self.roster, self.console, self.directory / GAUNTLET_UNLOCKS_FILE, self.rng
        )
        self.exit_game = False
        for line in self.roster.load():
            self.console.say(line)

    def _show_menu(self) -> None:
        console = self.console
        console.clear()
        console.say(_BANNER)
        console.say("=           PIC BATTLE           =")
        console.say(_BANNER)
        console.say("")
        console.say(f"1. Start Battle (AI: {self.game.ai_difficulty.value})")
        console.say("2. Debug Mode Battle")
        console.say("3. Gauntlet Mode (AI: Hard)")
        console.say("4. Character Creator")
        console.say("5. Set AI Difficulty")
        console.say("6. Exit")
        console.say("")

    def _show_creator_menu(self) -> None:
        console = self.console
        console.clear()
        console.say(_BANNER)
        console.say("=       CHARACTER CREATOR        =")
        console.say(_BANNER)
        console.say("")
        console.say("1. Create New Character")
        console.say("2. View All Characters")
        console.say("3. Delete Custom Character")
        console.say("4. Back to Main Menu")
        console.say("")

    def run_creator(self) -> None:
        """Loop over the character creator menu until the user goes back."""
        actions = {
            1: create_character,
            2: view_characters,
            3: delete_character,
        }
        while True:
            self._show_creator_menu()
            choice = self.console.ask_int("Enter your choice: ", 1, 4)
            if choice == 4:
                return
            actions[choice](self.roster, self.console)

    def choose_difficulty(self) -> AIDifficulty:
        """Ask for the AI difficulty of regular battles and set it."""
        console = self.console
        console.clear()
        console.say("--- Set AI Difficulty ---")
        console.say("1. Easy AI")
        console.say("2. Hard AI")
        choice = console.ask_int("Choose difficulty for regular battles: ", 1, 2)
        self.game.ai_difficulty = AIDifficulty.EASY if choice == 1 else AIDifficulty.HARD
        console.say(f"AI difficulty set to {self.game.ai_difficulty.value}.")
        console.pause("Press Enter to continue...")
        return self.game.ai_difficulty

    def _save(self) -> None:
        try:
            self.roster.save()
        except OSError:
            self.console.say(f"Error: Could not open {self.roster.path} for writing!")
        else:
            self.console.say(f"Custom characters saved to {self.roster.path}")

    def run(self) -> None:
        """Show the main menu until the user chooses to exit."""
        self.exit_game = False
        while not self.exit_game:
            self._show_menu()
            choice = self.console.ask_int("Enter your choice: ", 1, 6)
            if choice == 1:
                self.game.debug_mode = False
                self.game.play()
            elif choice == 2:
                self.game.debug_mode = True
                self.game.play()
            elif choice == 3:
                self.gauntlet.play()
            elif choice == 4:
                self.run_creator()
            elif choice == 5:
                self.choose_difficulty()
            else:
                self.exit_game = True
                self.console.say("\nSaving characters and exiting...")
                self._save()
                self.console.say("GAME OVER!")


def main(argv: list[str] | None = None) -> int:
    """Start the game from the command line."""
    parser = argparse.ArgumentParser(
        prog="picbattle", description="Rock-paper-scissors battles with passives."
    )
    parser.add_argument(
        "--directory",
        default=".",
        help="directory holding the character and unlock files (default: current)",
    )
    args = parser.parse_args(argv)
    directory = Path(args.directory)
    directory.mkdir(parents=True, exist_ok=True)
    console = Console()
    try:
        MainMenu(console, directory).run()
    except (EOFError, KeyboardInterrupt):
        console.say("")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())