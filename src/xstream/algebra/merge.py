"""
Merge: recombine forked channel lines (or bare streams) into one stream.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional

from xstream.config import config
from xstream.types import GLOBAL, is_token_streamable, split_tokens

logger = logging.getLogger(__name__)


class Channel(NamedTuple):
    """One input line: its "namespace: " label (if any) and its tokens."""
    label: Optional[str]
    tokens: List[str]


def split_label(line: str):
    """Split "ns: tokens" into (ns, tokens); bare streams get no label."""
    head, sep, body = line.partition(": ")
    if sep and head and not any(ch.isspace() or ch in "=;" for ch in head):
        return head, body
    return None, line


def token_key(token: str) -> str:
    return token.partition("=")[0]


def token_namespace(token: str) -> str:
    key_part = token_key(token)
    if ":" in key_part:
        return key_part.partition(":")[0]
    return GLOBAL


def read_channels(lines: Iterable[str]) -> List[Channel]:
    """Grammar-check each line, skipping the ones that fail."""
    channels = []
    for line in lines:
        label, body = split_label(line.strip())
        if not body.strip():
            continue
        if not is_token_streamable(body):
            if config.log_rejections:
                logger.debug(f"merge skipped malformed line: {line!r}")
            continue
        channels.append(Channel(label, split_tokens(body)))
    return channels


class MergeStrategy(ABC):
    """How channel token lists are combined."""

    @abstractmethod
    def combine(self, channels: List[Channel]) -> str:
        pass

    @staticmethod
    def _flatten(channels: List[Channel]) -> List[str]:
        return [token for channel in channels for token in channel.tokens]


class Concat(MergeStrategy):
    """Line order, then token order."""

    def combine(self, channels: List[Channel]) -> str:
        return config.token_separator.join(self._flatten(channels))


class Interleave(MergeStrategy):
    """Round-robin: token i of every line that has one, for i = 0, 1, ..."""

    def combine(self, channels: List[Channel]) -> str:
        longest = max((len(channel.tokens) for channel in channels), default=0)
        result = []
        for i in range(longest):
            for channel in channels:
                if i < len(channel.tokens):
                    result.append(channel.tokens[i])
        return config.token_separator.join(result)


class Priority(MergeStrategy):
    """Listed namespaces first, then the rest alphabetically."""

    def __init__(self, *names: str):
        self.names = list(names)

    def combine(self, channels: List[Channel]) -> str:
        by_namespace: Dict[str, List[str]] = {}
        for token in self._flatten(channels):
            by_namespace.setdefault(token_namespace(token), []).append(token)

        result = []
        for name in self.names:
            result.extend(by_namespace.pop(name, []))
        for name in sorted(by_namespace):
            result.extend(by_namespace[name])
        return config.token_separator.join(result)


class Sort(MergeStrategy):
    """All tokens, stably sorted by the text before '='."""

    def combine(self, channels: List[Channel]) -> str:
        return config.token_separator.join(sorted(self._flatten(channels), key=token_key))


class Dedupe(MergeStrategy):
    """Drop token strings identical to one already emitted."""

    def combine(self, channels: List[Channel]) -> str:
        seen = set()
        result = []
        for token in self._flatten(channels):
            if token not in seen:
                seen.add(token)
                result.append(token)
        return config.token_separator.join(result)


class ByNamespace(MergeStrategy):
    """Regroup lines sharing a label, keeping the forked line format."""

    def combine(self, channels: List[Channel]) -> str:
        groups: Dict[str, List[str]] = {}
        for channel in channels:
            groups.setdefault(channel.label or GLOBAL, []).extend(channel.tokens)
        return config.line_separator.join(
            f"{name}: {config.token_separator.join(tokens)}"
            for name, tokens in groups.items()
        )


def merge(text: str, strategy: MergeStrategy) -> str:
    """
    Merge forked text ("namespace: tokens" lines) or a bare stream.

    Args:
        text: Newline-separated lines
        strategy: Concat, Interleave, Priority, Sort, Dedupe or ByNamespace

    Returns:
        The merged stream; malformed lines are skipped
    """
    return strategy.combine(read_channels(text.split(config.line_separator)))


def merge_streams(streams: Iterable[str], strategy: MergeStrategy) -> str:
    """Merge separate streams, one channel each."""
    return strategy.combine(read_channels(streams))


def merge_concat(streams: Iterable[str]) -> str:
    return merge_streams(streams, Concat())


class CollisionPolicy(Enum):
    """What to do when two streams carry the same key."""
    KEEP_FIRST = "keep_first"
    KEEP_LAST = "keep_last"
    ANNOTATE = "annotate"


def merge_with_collision_policy(streams: Iterable[str], policy: CollisionPolicy) -> str:
    """
    Concatenate streams, resolving duplicate keys.

    Keys are compared on the full text before '=' (namespace prefix
    included). KEEP_LAST replaces the first occurrence in place; ANNOTATE
    keeps every token and puts dupe:<key>="true" before each duplicate.
    """
    positions: Dict[str, int] = {}
    result: List[str] = []

    for channel in read_channels(streams):
        for token in channel.tokens:
            key = token_key(token)
            if key not in positions:
                positions[key] = len(result)
                result.append(token)
            elif policy == CollisionPolicy.KEEP_LAST:
                result[positions[key]] = token
            elif policy == CollisionPolicy.ANNOTATE:
                result.append(f'dupe:{key}="true"')
                result.append(token)

    return config.token_separator.join(result)
