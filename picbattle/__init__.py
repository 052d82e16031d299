"""A terminal rock-paper-scissors battle game with passives, AI opponents and a gauntlet."""

__version__ = "1.0.0"