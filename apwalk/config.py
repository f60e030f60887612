# apwalk/config.py
"""
Walker configuration.

Loaded from YAML:

    max_items: 40
    timeout: 5
    user_agent: "my-reader/1.0"
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from . import __version__

ACTIVITY_STREAMS_ACCEPT = [
    "application/activity+json",
    'application/ld+json; profile="https://www.w3.org/ns/activitystreams"',
    "application/json",
]


@dataclass
class WalkerConfig:
    """
    Settings shared by the CLI and the HTTP resolver.

    Attributes:
        max_items: Default activity budget for a walk
        timeout: Total timeout for one fetch, in seconds
        user_agent: User-Agent header sent with every fetch
        accept: Media types sent in the Accept header
    """
    max_items: int = 20
    timeout: float = 10.0
    user_agent: str = f"apwalk/{__version__}"
    accept: List[str] = field(default_factory=lambda: list(ACTIVITY_STREAMS_ACCEPT))

    def __post_init__(self):
        if isinstance(self.max_items, bool) or not isinstance(self.max_items, int) or self.max_items < 0:
            raise ValueError(f"max_items must be a non-negative integer, got {self.max_items!r}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ValueError(f"timeout must be a positive number, got {self.timeout!r}")
        if not isinstance(self.user_agent, str):
            raise ValueError(f"user_agent must be a string, got {self.user_agent!r}")
        if isinstance(self.accept, str):
            self.accept = [self.accept]
        if not isinstance(self.accept, list) or not all(isinstance(a, str) for a in self.accept):
            raise ValueError(f"accept must be a string or a list of strings, got {self.accept!r}")

    @property
    def accept_header(self) -> str:
        return ", ".join(self.accept)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "max_items": self.max_items,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
            "accept": list(self.accept),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WalkerConfig":
        defaults = cls()
        return cls(
            max_items=data.get("max_items", defaults.max_items),
            timeout=data.get("timeout", defaults.timeout),
            user_agent=data.get("user_agent", defaults.user_agent),
            accept=data.get("accept", defaults.accept),
        )

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "WalkerConfig":
        """Parse configuration from a YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid configuration: {e}") from e
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | str) -> "WalkerConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            return cls.from_yaml(f.read())
