"""Environment-level configuration for the bakery console game.

Where the decks live, which seed to deal with and how chatty the logs
are. Command-line flags take precedence over these values.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from .bakery.decks import DATA_DIR

DEFAULT_SEED = 10


@dataclass
class BakerySettings:
    """Environment / deployment settings."""

    data_dir: Path = DATA_DIR
    seed: int = DEFAULT_SEED
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "BakerySettings":
        """Build settings from environment variables."""
        seed = os.getenv("MAGIC_BAKERY_SEED")
        return cls(
            data_dir=Path(os.getenv("MAGIC_BAKERY_DATA_DIR") or DATA_DIR),
            seed=int(seed) if seed else DEFAULT_SEED,
            log_level=(os.getenv("MAGIC_BAKERY_LOG_LEVEL") or "WARNING").upper(),
        )


def get_settings() -> BakerySettings:
    """Convenience accessor for environment settings."""
    return BakerySettings.from_env()
