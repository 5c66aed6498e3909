"""Configuration management for PokeArena."""

import os
from pathlib import Path

from pydantic import BaseModel


class Config(BaseModel):
    """Application configuration."""

    # Paths
    data_dir: Path = Path.home() / ".pokearena"
    cache_dir: Path = Path.home() / ".pokearena" / "cache"

    # PokeAPI settings
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    request_timeout: float = 10.0

    # Battle settings
    default_level: int = 50
    max_team_size: int = 6
    max_moves: int = 4

    # Presentation
    message_delay: float = 1.0  # Seconds between replayed turn events
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Build a config, overriding defaults from POKEARENA_* variables."""
        overrides: dict = {}
        if url := os.environ.get("POKEARENA_POKEAPI_URL"):
            overrides["pokeapi_base_url"] = url.rstrip("/")
        if cache := os.environ.get("POKEARENA_CACHE_DIR"):
            overrides["cache_dir"] = Path(cache).expanduser()
        if delay := os.environ.get("POKEARENA_MESSAGE_DELAY"):
            overrides["message_delay"] = float(delay)
        if level := os.environ.get("POKEARENA_LOG_LEVEL"):
            overrides["log_level"] = level.upper()
        return cls(**overrides)

    def ensure_dirs(self) -> None:
        """Create necessary directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.cache_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
config = Config.from_env()
