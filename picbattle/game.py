"""A single battle between the player and a computer-controlled fighter."""

from __future__ import annotations

import random
from typing import NamedTuple

from picbattle.ai import AIDifficulty, choose_move
from picbattle.character import Character, Move, move_name, rps_winner
from picbattle.console import Console
from picbattle.passives import PassiveTrigger
from picbattle.roster import Roster


class _RoundOutcome(NamedTuple):
    """Result of one exchange: who won, the hit's damage and the passive log."""

    winner: int
    damage: int
    messages: list[str]


def _either_defeated(first: Character, second: Character) -> bool:
    return first.is_defeated() or second.is_defeated()


def start_of_turn(player: Character, opponent: Character) -> list[str]:
    """Reset turn state and fire start-of-turn and low-HP passives for both sides.

    Stops as soon as either fighter is defeated. Returns the log lines.
    """
    player.reset_turn_state()
    opponent.reset_turn_state()
    messages: list[str] = []
    steps = (
        (player, opponent, PassiveTrigger.ON_TURN_START),
        (opponent, player, PassiveTrigger.ON_TURN_START),
        (player, opponent, PassiveTrigger.ON_HP_BELOW_PERCENT),
        (opponent, player, PassiveTrigger.ON_HP_BELOW_PERCENT),
    )
    for actor, target, trigger in steps:
        messages.extend(actor.apply_passives(trigger, target))
        if _either_defeated(player, opponent):
            break
    return messages


def _resolve_hit(
    winner: Character, loser: Character, winning_move: int, losing_move: int
) -> _RoundOutcome:
    damage = winner.calculate_damage(winning_move)
    old_hp = loser.current_hp
    loser.take_damage(damage)
    messages: list[str] = []
    steps = (
        (winner, loser, PassiveTrigger(winning_move), winning_move, True),
        (winner, loser, PassiveTrigger.AFTER_ANY_ATTACK, 0, False),
        (loser, winner, PassiveTrigger(losing_move + 3), losing_move, False),
        (loser, winner, PassiveTrigger.AFTER_TAKING_HIT, 0, False),
    )
    for actor, target, trigger, move, did_win in steps:
        messages.extend(actor.apply_passives(trigger, target, move, did_win))
        if _either_defeated(winner, loser):
            return _RoundOutcome(0, damage, messages)
    if loser.current_hp != old_hp:
        messages.extend(loser.apply_passives(PassiveTrigger.ON_HP_BELOW_PERCENT, winner))
    return _RoundOutcome(0, damage, messages)


def resolve_round(
    player: Character, opponent: Character, player_move: int, opponent_move: int
) -> _RoundOutcome:
    """Play out one exchange of moves and every passive it sets off.

    ``winner`` is 0 for a tie, 1 if the player won, 2 if the opponent won;
    ``damage`` is the hit the winner dealt (0 on a tie).
    """
    winner = rps_winner(player_move, opponent_move)
    if winner == 0:
        messages = player.apply_passives(PassiveTrigger.ON_TIE, opponent, 0, False)
        if not _either_defeated(player, opponent):
            messages.extend(opponent.apply_passives(PassiveTrigger.ON_TIE, player, 0, False))
        return _RoundOutcome(0, 0, messages)
    if winner == 1:
        hit = _resolve_hit(player, opponent, player_move, opponent_move)
    else:
        hit = _resolve_hit(opponent, player, opponent_move, player_move)
    return _RoundOutcome(winner, hit.damage, hit.messages)


class Game:
    """A regular or debug battle against the computer."""

    def __init__(
        self,
        roster: Roster,
        console: Console | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.roster = roster
        self.console = console or Console()
        self.rng = rng or random.Random()
        self.player: Character | None = None
        self.bot: Character | None = None
        self.debug_mode = False
        self.ai_difficulty = AIDifficulty.HARD

    def _select_character(self, prompt: str) -> Character | None:
        self.console.say(prompt)
        characters = list(self.roster)
        if not characters:
            self.console.say("Error: No characters available to select!")
            return None
        for number, character in enumerate(characters, start=1):
            self.console.say(f"{number}. {character.short_description()}")
        choice = self.console.ask_int("Enter choice: ", 1, len(characters))
        return characters[choice - 1]

    def _begin(self, intro: str, closing: str) -> bool:
        assert self.player is not None and self.bot is not None
        self.console.say(intro)
        self.player.reset_for_battle()
        self.bot.reset_for_battle()
        self.console.say(closing)
        self.console.pause("Press Enter to start...")
        return True

    def initialize(self) -> bool:
        """Let the user pick a fighter; the bot gets a random different one."""
        self.console.clear()
        self.console.say("=== PIC BATTLE ===\n")
        self.player = self._select_character("Select your Fighter!")
        if self.player is None:
            return False

        characters = list(self.roster)
        if len(characters) <= 1:
            self.console.say("Not enough unique characters for the bot to choose! Bot will be the same.")
            self.bot = self.player
        else:
            candidates = [c for c in characters if c is not self.player]
            if candidates:
                self.bot = self.rng.choice(candidates)
            else:
                self.console.say("Only one character available. Bot will be the same as player.")
                self.bot = self.player

        return self._begin(
            f"\nYou chose: {self.player.name}\nEnemy chose: {self.bot.name}\n",
            "Let the battle commence!",
        )

    def initialize_debug(self) -> bool:
        """Let the user pick both fighters."""
        self.console.clear()
        self.console.say("=== DEBUG MODE: PIC BATTLE ===\n")
        self.player = self._select_character("Select Player's Fighter!")
        if self.player is None:
            return False
        self.bot = self._select_character("Select Bot's Fighter!")
        if self.bot is None:
            return False
        return self._begin(
            f"\nPlayer is: {self.player.name}\nBot is: {self.bot.name}\n",
            "Let the debug battle commence!",
        )

    def status_text(self) -> str:
        """Both fighters' HP and passives."""
        lines = ["", "===== STATUS ====="]
        for label, character, missing in (
            ("", self.player, "Player not selected."),
            ("bot", self.bot, "Bot not selected."),
        ):
            if label == "bot":
                lines.append("")
            if character is None:
                lines.append(missing)
                continue
            title = f"Bot ({character.name})" if label == "bot" else character.name
            lines.append(f"{title}: {character.current_hp}/{character.max_hp} HP")
            if character.passives:
                lines.append("  Passives:")
                lines.extend(f"    - {p.describe()}" for p in character.passives)
        lines.append("=================")
        lines.append("")
        return "\n".join(lines)

    def _ask_bot_move(self) -> int:
        assert self.player is not None and self.bot is not None
        bot = self.bot
        if not self.debug_mode:
            self.console.say(f"Bot ({bot.name}) is thinking...")
            return choose_move(bot, self.player, self.ai_difficulty, self.rng)
        self.console.say(
            f"\nDEBUG MODE: Bot is {bot.name}. Choose Bot's move (or 4 for AI):"
        )
        for move in Move:
            self.console.say(f"{int(move)}. {bot.move_description(move)}")
        self.console.say(f"4. Let AI ({self.ai_difficulty.value}) choose for Bot")
        choice = self.console.ask_int("Enter Bot's choice (1-4): ", 1, 4)
        if choice != 4:
            return choice
        move = choose_move(bot, self.player, self.ai_difficulty, self.rng)
        self.console.say(f"AI for {bot.name} chose: {move_name(move)}")
        self.console.pause("Press Enter to see result...")
        return move

    def play_round(self) -> _RoundOutcome | None:
        """Play one turn; None if it ended before moves were chosen."""
        self.console.clear()
        if self.player is None or self.bot is None:
            self.console.say("Error: Player or Bot not initialized for the round.")
            return None
        player, bot = self.player, self.bot

        for line in start_of_turn(player, bot):
            self.console.say(line)
        if _either_defeated(player, bot):
            return None

        self.console.say(self.status_text())
        self.console.say("Choose your move:")
        for move in Move:
            self.console.say(f"{int(move)}. {player.move_description(move)}")
        player_move = self.console.ask_int("Enter choice (1-3): ", 1, 3)
        bot_move = self._ask_bot_move()

        self.console.clear()
        self.console.say(self.status_text())
        self.console.say(f"\nYou ({player.name}) chose: {move_name(player_move)}")
        self.console.say(f"Bot ({bot.name}) chose: {move_name(bot_move)}\n")

        winner = rps_winner(player_move, bot_move)
        if winner == 0:
            self.console.say("It's a tie!")
        elif winner == 1:
            damage = player.estimated_damage(player_move)
            self.console.say(
                f"You win this round! Bot ({bot.name}) takes {damage} damage."
            )
        else:
            damage = bot.estimated_damage(bot_move)
            self.console.say(
                f"Bot wins this round! You ({player.name}) take {damage} damage."
            )
        outcome = resolve_round(player, bot, player_move, bot_move)
        for line in outcome.messages:
            self.console.say(line)
        return outcome

    def is_game_over(self) -> bool:
        if self.player is None or self.bot is None:
            return True
        return _either_defeated(self.player, self.bot)

    def winner_text(self) -> str:
        """Announcement of how the battle ended."""
        if self.player is None or self.bot is None:
            return "\nGame ended prematurely due to character selection issue."
        if self.player.is_defeated() and self.bot.is_defeated():
            return "\nDOUBLE K.O.! Both fighters are defeated."
        if self.player.is_defeated():
            return (
                f"\nDEFEAT! Bot ({self.bot.name}) wins with "
                f"{self.bot.current_hp} HP remaining."
            )
        return (
            f"\nVICTORY! You ({self.player.name}) won with {self.player.current_hp} "
            f"HP remaining. Bot ({self.bot.name}) is defeated."
        )

    def play(self) -> None:
        """Set up a battle and play rounds until one side falls."""
        initialized = self.initialize_debug() if self.debug_mode else self.initialize()
        if not initialized or self.player is None or self.bot is None:
            self.console.say("Failed to initialize game. Returning to menu.")
            self.console.pause("Press Enter to continue...")
            return

        while not self.is_game_over():
            self.play_round()
            if self.is_game_over():
                break
            self.console.pause("\nPress Enter to continue to the next round...")

        self.console.clear()
        self.console.say(self.status_text())
        self.console.say(self.winner_text())
        self.console.say("\nBattle finished!")
        self.console.pause("Press Enter to return to main menu...")