"""
Random token stream generation for fixtures and demos.

Every function takes an optional random.Random so results can be made
reproducible; without one a fresh unseeded generator is used.
"""

import random
import string
from enum import Enum
from typing import Optional

PREFIXES = (
    "meta", "sec", "admin", "data", "tmpl", "config", "db", "auth", "user", "sys",
    "app", "api", "cache", "log", "debug", "prod", "dev", "test", "temp", "local",
)

KEY_NAMES = (
    "key", "user", "colors", "slot", "host", "port", "name", "value", "id", "token",
    "pass", "secret", "url", "path", "file", "dir", "mode", "type", "format", "size",
    "count", "max", "min", "limit", "timeout", "retry", "version", "status", "state",
)

VALUE_WORDS = (
    "localhost", "admin", "enabled", "disabled", "active", "inactive", "primary", "secondary",
    "production", "development", "staging", "test", "default", "custom", "auto", "manual",
    "true", "false", "yes", "no", "on", "off", "high", "medium", "low", "normal",
)


class ValueKind(Enum):
    """Kinds of generated values."""
    ALNUM = "alnum"
    ALPHA = "alpha"
    HEX = "hex"
    NUMBER = "number"
    WORD = "word"
    LITERAL = "literal"


def gen_value(kind: ValueKind = ValueKind.WORD,
              length: int = 8,
              low: int = 1,
              high: int = 9999,
              literal: str = "",
              rng: Optional[random.Random] = None) -> str:
    """Generate a single value of the given kind."""
    rng = rng or random.Random()

    if kind == ValueKind.ALNUM:
        return "".join(rng.choice(string.ascii_letters + string.digits) for _ in range(length))
    elif kind == ValueKind.ALPHA:
        return "".join(rng.choice(string.ascii_letters) for _ in range(length))
    elif kind == ValueKind.HEX:
        return "".join(rng.choice("0123456789abcdef") for _ in range(length))
    elif kind == ValueKind.NUMBER:
        return str(rng.randint(low, high))
    elif kind == ValueKind.LITERAL:
        return literal
    return rng.choice(VALUE_WORDS)


def gen_token(prefix: Optional[str] = None,
              key: Optional[str] = None,
              value: Optional[str] = None,
              rng: Optional[random.Random] = None) -> str:
    """Generate a namespace-prefixed token, filling unset parts at random."""
    rng = rng or random.Random()
    prefix = prefix or rng.choice(PREFIXES)
    key = key or rng.choice(KEY_NAMES)
    value = gen_value(rng=rng) if value is None else value
    return f'{prefix}:{key}="{value}"'


def gen_flat_token(key: Optional[str] = None,
                   value: Optional[str] = None,
                   rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    key = key or rng.choice(KEY_NAMES)
    value = gen_value(rng=rng) if value is None else value
    return f'{key}="{value}"'


def gen_ns_token(namespace: Optional[str] = None, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return f"ns={namespace or rng.choice(PREFIXES)}"


def _random_value(rng: random.Random) -> str:
    kind = rng.choice((ValueKind.ALNUM, ValueKind.HEX, ValueKind.WORD, ValueKind.NUMBER))
    if kind == ValueKind.ALNUM:
        return gen_value(kind, length=rng.randint(6, 15), rng=rng)
    if kind == ValueKind.HEX:
        return gen_value(kind, length=rng.randint(8, 23), rng=rng)
    return gen_value(kind, rng=rng)


def gen_token_stream(count: int, flat_ratio: float = 0.3, rng: Optional[random.Random] = None) -> str:
    """
    Generate count tokens, roughly flat_ratio of them unprefixed.

    Args:
        count: Number of tokens
        flat_ratio: Probability that a token carries no namespace prefix
        rng: Random source

    Returns:
        Token stream text joined with "; "
    """
    rng = rng or random.Random()
    tokens = []
    for _ in range(count):
        value = _random_value(rng)
        if rng.random() < flat_ratio:
            tokens.append(gen_flat_token(value=value, rng=rng))
        else:
            tokens.append(gen_token(value=value, rng=rng))
    return "; ".join(tokens)


def gen_config_stream(rng: Optional[random.Random] = None) -> str:
    """A config-style stream: global settings, then db and auth sections."""
    rng = rng or random.Random()
    tokens = [
        gen_flat_token("host", "localhost"),
        gen_flat_token("port", gen_value(ValueKind.NUMBER, low=8000, high=9000, rng=rng)),
        gen_flat_token("debug", gen_value(ValueKind.WORD, rng=rng)),
        gen_ns_token("db"),
        gen_flat_token("host", "db.example.com"),
        gen_flat_token("user", gen_value(ValueKind.ALPHA, length=8, rng=rng)),
        gen_flat_token("pass", gen_value(ValueKind.HEX, length=32, rng=rng)),
        gen_ns_token("auth"),
        gen_flat_token("secret", gen_value(ValueKind.HEX, length=64, rng=rng)),
        gen_flat_token("timeout", gen_value(ValueKind.NUMBER, low=300, high=3600, rng=rng)),
    ]
    return "; ".join(tokens)
