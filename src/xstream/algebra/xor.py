"""
XOR-family gates.

These work on raw token strings: streams are grammar-checked, split on ';'
and trimmed, but never parsed into buckets, so any decoration inside the
values comes through untouched.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from xstream.config import config
from xstream.types import is_token_streamable, split_tokens

logger = logging.getLogger(__name__)


@dataclass
class GateState:
    """Which input supplied each output position of an XOR gate."""
    current_stream: int = 0
    tokens_processed: int = 0
    switches: List[Tuple[int, str]] = field(default_factory=list)


def _valid_token_lists(streams: Sequence[str]) -> List[List[str]]:
    token_lists = []
    for stream in streams:
        if is_token_streamable(stream):
            token_lists.append(split_tokens(stream))
        elif config.log_rejections:
            logger.debug(f"xor gate dropped malformed stream: {stream!r}")
    return token_lists


def xor_gate_with_state(stream_a: str, stream_b: str) -> Tuple[str, GateState]:
    """
    Alternate between two streams, recording where each token came from.

    Output position 2k is token k of stream_a, 2k+1 is token k of stream_b,
    skipping whichever side has run out. Both streams must be well-formed.
    """
    state = GateState()
    if not (is_token_streamable(stream_a) and is_token_streamable(stream_b)):
        return "", state

    tokens_a = split_tokens(stream_a)
    tokens_b = split_tokens(stream_b)
    result = []

    for k in range(max(len(tokens_a), len(tokens_b))):
        if k < len(tokens_a):
            result.append(tokens_a[k])
            state.switches.append((len(result) - 1, "A"))
            state.current_stream = 0
        if k < len(tokens_b):
            result.append(tokens_b[k])
            state.switches.append((len(result) - 1, "B"))
            state.current_stream = 1
        state.tokens_processed += 1

    return config.token_separator.join(result), state


def xor_gate(stream_a: str, stream_b: str) -> str:
    output, _ = xor_gate_with_state(stream_a, stream_b)
    return output


def multi_xor_gate(streams: Sequence[str]) -> str:
    """
    Round-robin one token per stream per step.

    When the stream whose turn it is has run out, the next stream (wrapping)
    that still has tokens supplies one instead. Malformed streams are dropped.
    """
    token_lists = _valid_token_lists(streams)
    if not token_lists:
        return ""

    total = sum(len(tokens) for tokens in token_lists)
    positions = [0] * len(token_lists)
    result = []
    turn = 0

    while len(result) < total:
        for offset in range(len(token_lists)):
            index = (turn + offset) % len(token_lists)
            if positions[index] < len(token_lists[index]):
                result.append(token_lists[index][positions[index]])
                positions[index] += 1
                break
        turn += 1

    return config.token_separator.join(result)


def timed_gate(streams: Sequence[str], switch_every: int) -> str:
    """
    Take switch_every tokens from a stream, then move on to the next one.

    Each stream keeps its own position, so no token is repeated. A stream
    that runs out is skipped without using up a step: every token of every
    well-formed stream is emitted exactly once.
    """
    token_lists = _valid_token_lists(streams)
    if not token_lists or switch_every <= 0:
        return ""

    total = sum(len(tokens) for tokens in token_lists)
    positions = [0] * len(token_lists)
    result = []
    current = 0
    taken = 0

    while len(result) < total:
        if taken >= switch_every or positions[current] >= len(token_lists[current]):
            current = (current + 1) % len(token_lists)
            taken = 0
            continue
        result.append(token_lists[current][positions[current]])
        positions[current] += 1
        taken += 1

    return config.token_separator.join(result)
