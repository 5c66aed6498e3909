"""PokeArena - turn-based Pokemon battles against a CPU trainer."""

__version__ = "0.1.0"
