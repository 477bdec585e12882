"""
Fork: split a token stream into per-namespace channel streams.
"""

import re
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Pattern as RegexPattern

from xstream.config import BucketMode, config
from xstream.types import GLOBAL, InvalidPatternError, TokenBucket, XStreamError

logger = logging.getLogger(__name__)


class ForkSelector(ABC):
    """Chooses which namespaces of a bucket become channels."""

    @abstractmethod
    def select(self, bucket: TokenBucket) -> List[str]:
        """Return namespace names in emission order."""
        pass


class Exact(ForkSelector):
    """Named namespaces, in the order given. A repeated name keeps its first position."""

    def __init__(self, *names: str):
        self.names = list(dict.fromkeys(names))

    def select(self, bucket: TokenBucket) -> List[str]:
        return [name for name in self.names if name in bucket]


class All(ForkSelector):
    """Every namespace present, including global."""

    def select(self, bucket: TokenBucket) -> List[str]:
        return bucket.namespaces()


class Pattern(ForkSelector):
    """Namespaces matching a regular expression anywhere in their name."""

    def __init__(self, regex: str):
        self.regex = regex

    def select(self, bucket: TokenBucket) -> List[str]:
        compiled = compile_pattern(self.regex)
        return [name for name in bucket.namespaces() if compiled.search(name)]


class Under(ForkSelector):
    """A namespace and everything below it ("api" matches "api.v1")."""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def select(self, bucket: TokenBucket) -> List[str]:
        return [
            name for name in bucket.namespaces()
            if name == self.prefix or name.startswith(self.prefix + ".")
        ]


def compile_pattern(regex: str) -> RegexPattern:
    """Compile a namespace pattern, raising InvalidPatternError on bad syntax."""
    try:
        return re.compile(regex)
    except re.error as e:
        raise InvalidPatternError(regex, str(e)) from e


def format_channel(namespace: str, values: Dict[str, str]) -> str:
    """Render one namespace's pairs as a token stream."""
    q = config.quote_char
    if namespace == GLOBAL:
        tokens = [f'{key}={q}{value}{q}' for key, value in values.items()]
    else:
        tokens = [f'{namespace}:{key}={q}{value}{q}' for key, value in values.items()]
    return config.token_separator.join(tokens)


def fork_channels(text: str, selector: ForkSelector) -> Dict[str, str]:
    """
    Fork text into a {namespace: tokens} mapping.

    Malformed input or a bad pattern yields an empty mapping.
    """
    try:
        bucket = TokenBucket.from_str(text, BucketMode.HYBRID)
        names = selector.select(bucket)
    except XStreamError as e:
        if config.log_rejections:
            logger.debug(f"fork rejected input: {e}")
        return {}

    channels = {}
    for name in names:
        values = bucket.data.get(name)
        if values:
            channels[name] = format_channel(name, values)
    return channels


def fork(text: str, selector: ForkSelector) -> str:
    """
    Split a stream into "namespace: tokens" lines.

    Args:
        text: Token stream text
        selector: Exact, All, Pattern or Under

    Returns:
        One line per selected non-empty namespace, or "" if nothing matched
        or the input could not be parsed
    """
    channels = fork_channels(text, selector)
    return config.line_separator.join(f"{name}: {tokens}" for name, tokens in channels.items())


def fork_by_namespace(text: str, channels: List[str]) -> Dict[str, str]:
    return fork_channels(text, Exact(*channels))


def fork_all_namespaces(text: str) -> Dict[str, str]:
    return fork_channels(text, All())


def fork_by_pattern(text: str, pattern: str) -> Dict[str, str]:
    return fork_channels(text, Pattern(pattern))


def fork_under(text: str, prefix: str) -> Dict[str, str]:
    return fork_channels(text, Under(prefix))
