"""
Gate: pass, block or reshape a stream based on a condition.

Bucket-based gates parse their input fully. An empty result means the
stream was blocked, whether by the condition or by malformed input.
Token enumeration is deterministic: sorted namespace, then sorted key.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from xstream.config import BucketMode, config
from xstream.types import Token, TokenBucket, XStreamError

logger = logging.getLogger(__name__)

BLOCKED = ""


def _parse(text: str) -> Optional[TokenBucket]:
    try:
        return TokenBucket.from_str(text, BucketMode.HYBRID)
    except XStreamError as e:
        if config.log_rejections:
            logger.debug(f"gate blocked malformed input: {e}")
        return None


def _join(tokens: List[Token]) -> str:
    return config.token_separator.join(token.render(config.quote_char) for token in tokens)


class GateCondition(ABC):
    """A predicate or transform applied to a parsed stream."""

    def apply(self, text: str) -> str:
        bucket = _parse(text)
        if bucket is None:
            return BLOCKED
        return self.evaluate(text, bucket)

    @abstractmethod
    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        """Return the output for a successfully parsed input."""
        pass


class MinTokens(GateCondition):
    """Pass unchanged if the stream holds at least n tokens."""

    def __init__(self, n: int):
        self.n = n

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        return text if bucket.token_count >= self.n else BLOCKED


class MaxTokens(GateCondition):
    """Pass unchanged up to n tokens, otherwise truncate to exactly n."""

    def __init__(self, n: int):
        self.n = n

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        if bucket.token_count <= self.n:
            return text
        return _join(bucket.to_tokens()[:max(self.n, 0)])


class TokenCount(GateCondition):
    """Pass unchanged only if the stream holds exactly n tokens."""

    def __init__(self, n: int):
        self.n = n

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        return text if bucket.token_count == self.n else BLOCKED


class RequireNamespace(GateCondition):

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        return text if self.name in bucket else BLOCKED


class ContainsValue(GateCondition):

    def __init__(self, value: str):
        self.value = value

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        found = any(value == self.value for _, _, value in bucket.iter_pairs())
        return text if found else BLOCKED


class Sync(GateCondition):
    """
    Interleave with another stream once both hold at least min tokens.

    Output is a0, b0, a1, b1, ... for min(len(a), len(b)) pairs.
    """

    def __init__(self, other: str, min_tokens: int):
        self.other = other
        self.min_tokens = min_tokens

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        other = _parse(self.other)
        if other is None:
            return BLOCKED
        if bucket.token_count < self.min_tokens or other.token_count < self.min_tokens:
            return BLOCKED

        result = []
        for a, b in zip(bucket.to_tokens(), other.to_tokens()):
            result.extend((a, b))
        return _join(result)


class Balance(GateCondition):
    """Take the same number of tokens from the input and every other stream."""

    def __init__(self, *streams: str):
        self.streams = list(streams)

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        buckets = [bucket]
        for stream in self.streams:
            parsed = _parse(stream)
            if parsed is None:
                return BLOCKED
            buckets.append(parsed)

        size = min(b.token_count for b in buckets)
        result = []
        for b in buckets:
            result.extend(b.to_tokens()[:size])
        return _join(result)


class Wait(GateCondition):
    """Pass the input unchanged once it and every other stream hold min tokens."""

    def __init__(self, min_tokens: int, *streams: str):
        self.min_tokens = min_tokens
        self.streams = list(streams)

    def evaluate(self, text: str, bucket: TokenBucket) -> str:
        if bucket.token_count < self.min_tokens:
            return BLOCKED
        for stream in self.streams:
            parsed = _parse(stream)
            if parsed is None or parsed.token_count < self.min_tokens:
                return BLOCKED
        return text


def gate(text: str, condition: GateCondition) -> str:
    """Apply a gate condition; "" means blocked."""
    return condition.apply(text)
