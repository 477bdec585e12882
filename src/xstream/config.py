"""
Configuration management for xstream operations.
"""

from typing import Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class BucketMode(Enum):
    """How a TokenBucket indexes its namespaces."""
    FLAT = "flat"      # namespace -> key/value map only
    TREE = "tree"      # map plus parent/child index
    HYBRID = "hybrid"  # same storage as TREE, the default for operators


class TX(Enum):
    """Markers for the escape/encode steps of a transform chain."""
    ENCODE = "encode"
    DECODE = "decode"
    QUOTES = "quotes"
    HTML = "html"
    ALL = "all"


@dataclass
class XStreamConfig:
    """Global configuration for xstream operations."""

    # Parsing
    default_mode: BucketMode = BucketMode.HYBRID

    # Rendering
    token_separator: str = "; "
    line_separator: str = "\n"
    quote_char: str = '"'

    # Transform chains
    sensitive_keys: Tuple[str, ...] = field(
        default_factory=lambda: ("pass", "password", "secret", "token", "key")
    )
    mask: str = "***"

    # Diagnostics
    log_rejections: bool = True

    _instance: Optional['XStreamConfig'] = None

    @classmethod
    def get_instance(cls) -> 'XStreamConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if not hasattr(instance, key):
                continue
            if key == "default_mode" and isinstance(value, str):
                value = BucketMode(value)
            elif key == "sensitive_keys":
                value = tuple(value)
            setattr(instance, key, value)

    @classmethod
    def reset(cls) -> None:
        """Drop back to the built-in defaults."""
        instance = cls.get_instance()
        for name, default in cls().__dict__.items():
            if not name.startswith("_"):
                setattr(instance, name, default)


# Global configuration instance
config = XStreamConfig.get_instance()
