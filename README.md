# picbattle

A turn-based rock-paper-scissors battle game for the terminal.

Each fighter has hit points and a damage value for each of Rock, Paper and
Scissors. Every round both sides pick a move. The winner of the exchange hits
the loser with the damage of the move they picked. Fighters can also carry
passives: effects that fire on a trigger, such as winning with Paper, a tie,
the start of a turn, or HP falling to a threshold.

## Installing

```
pip install .
```

## Playing

```
picbattle
```

By default the save files are read from and written to the current directory.
Use `--directory` to keep them somewhere else (the directory is created if
needed):

```
picbattle --directory saves
```

The main menu offers:

1. **Start Battle**: pick a fighter and face a random different opponent driven by the AI.
2. **Debug Mode Battle**: pick both fighters and choose the bot's move yourself each round, or hand it to the AI.
3. **Gauntlet Mode**: beat five opponents in a row with one fighter. Between fights you recover half your maximum HP. Clearing the gauntlet unlocks the next built-in fighter for this mode, in the order OG, Helios, Duran, Philip, Razor, Sunny. Only OG is unlocked at the start.
4. **Character Creator**: create, view and delete custom fighters. A custom fighter has 1–100 HP, 0–10 damage per move, and up to three passives. Names must be unique and may not contain semicolons.
5. **Set AI Difficulty**: Easy or Hard, for regular battles. The gauntlet always uses Hard.
6. **Exit**: saves custom characters and quits.

Custom characters are stored in `characters.txt` and gauntlet progress in
`gauntlet_unlocks.txt`. If `characters.txt` is missing it is created with a
header. The screen is cleared between views only when output goes to a terminal.

## Built-in fighters

| Name   | HP | Rock | Paper | Scissors | Passive |
|--------|----|------|-------|----------|---------|
| OG     | 20 | 1    | 2     | 3        | none |
| Helios | 25 | 1    | 0     | 2        | winning with Paper heals 5 HP |
| Duran  | 15 | 2    | 1     | 3        | winning with Scissors adds 3 to the next attack |
| Philip | 18 | 1    | 2     | 1        | a tie deals 1 damage to the opponent |
| Razor  | 7  | 3    | 4     | 5        | none |
| Sunny  | 14 | 1    | 3     | 2        | while HP is at or below 28% (and above 0), each check permanently adds +4 Rock, +2 Paper and +3 Scissors |

## Using it as a library

The pieces of the game can also be used from your own code:

```python
import random

from picbattle.ai import AIDifficulty, choose_move
from picbattle.character import Move, builtin_character, move_name
from picbattle.game import resolve_round

bot = builtin_character("Duran")
player = builtin_character("Helios")

bot_move = choose_move(bot, player, AIDifficulty.HARD, random.Random())
print(move_name(bot_move))

outcome = resolve_round(player, bot, Move.PAPER, bot_move)
print(outcome.winner, outcome.damage)   # 0 tie, 1 player, 2 bot
for line in outcome.messages:
    print(line)
```

Other useful pieces:

- `picbattle.character`: `Character`, `Move`, `rps_winner`, `move_name`,
  `builtin_character`, `builtin_characters`.
- `picbattle.passives`: `Passive`, `PassiveTrigger`, `PassiveEffect`.
- `picbattle.roster`: `Roster` (load, save, find, add, remove fighters).
- `picbattle.console`: `Console`, which takes an input function and an output
  stream, so games can be driven without a terminal.
- `picbattle.game.Game`, `picbattle.gauntlet.GauntletGame` and
  `picbattle.menu.MainMenu` for the interactive modes.

Custom character lines in `characters.txt` have this shape:

```
CUSTOM;NAME;HP;ROCK;PAPER;SCISSORS;TRIGGER,EFFECT,VALUE,THRESHOLD;...
```

`Passive.from_string` and `Passive.to_string` read and write the passive fields.

## Running the tests

```
pip install ".[test]"
pytest
```