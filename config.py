# config.py
"""
Centralized parser configuration.
Callers either pass a ParserConfig explicitly or rely on the SETTINGS singleton.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any

from exceptions import ConfigError


@dataclass
class ParserConfig:
    # Source decoding
    encoding: str = "utf-8"
    # Undecodable bytes become U+FFFD so one bad byte cannot lose the report
    errors: str = "replace"

    # Close an iteration block that has no "Design change:" line at the
    # line before the next "Iteration:" marker instead of at its own marker.
    extend_open_blocks: bool = False

    # Logging
    log_dir: str = "logs"
    log_level: str = "INFO"

    def update(self, **kwargs) -> None:
        """
        Programmatic override of fields, with safety for unknown keys.
        Example:
            SETTINGS.update(extend_open_blocks=True)
        """
        for k, v in kwargs.items():
            if hasattr(self, k):
                setattr(self, k, v)
            else:
                raise ConfigError(f"Unknown config field: {k}")

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Singleton instance
SETTINGS = ParserConfig()


__all__ = [
    "ParserConfig",
    "SETTINGS",
]
