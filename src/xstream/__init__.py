"""
XStream: namespace-aware token streams.

A token stream is a single line of key="value" pairs, optionally grouped
into dotted namespaces (ns:key="value", or ns=name switches). This package
parses such streams into namespace buckets and provides a small stream
algebra (fork, merge, gate) to split, recombine and flow-control them.
"""

from xstream.config import XStreamConfig, BucketMode, TX
from xstream.types import (
    XStreamError,
    EmptyInputError,
    ParseError,
    InvalidNamespaceError,
    InvalidPatternError,
    AdapterError,
    Namespace,
    Token,
    TokenBucket,
    tokenize,
    validate,
    is_token_streamable,
    parse,
    render,
)
from xstream.algebra import (
    Exact,
    All,
    Pattern,
    Under,
    fork,
    Concat,
    Interleave,
    Priority,
    Sort,
    Dedupe,
    ByNamespace,
    CollisionPolicy,
    merge,
    merge_streams,
    merge_with_collision_policy,
    MinTokens,
    MaxTokens,
    TokenCount,
    RequireNamespace,
    ContainsValue,
    Sync,
    Balance,
    Wait,
    gate,
    GateState,
    xor_gate,
    xor_gate_with_state,
    multi_xor_gate,
    timed_gate,
)
from xstream.streams import TokenStream, Pipeline, transform, pipeline
from xstream.adapters import from_json, from_csv, to_json

__version__ = "0.1.0"
__author__ = "XStream Contributors"
__license__ = "MIT"

__all__ = [
    "XStreamConfig",
    "BucketMode",
    "TX",
    "XStreamError",
    "EmptyInputError",
    "ParseError",
    "InvalidNamespaceError",
    "InvalidPatternError",
    "AdapterError",
    "Namespace",
    "Token",
    "TokenBucket",
    "tokenize",
    "validate",
    "is_token_streamable",
    "parse",
    "render",
    "Exact",
    "All",
    "Pattern",
    "Under",
    "fork",
    "Concat",
    "Interleave",
    "Priority",
    "Sort",
    "Dedupe",
    "ByNamespace",
    "CollisionPolicy",
    "merge",
    "merge_streams",
    "merge_with_collision_policy",
    "MinTokens",
    "MaxTokens",
    "TokenCount",
    "RequireNamespace",
    "ContainsValue",
    "Sync",
    "Balance",
    "Wait",
    "gate",
    "GateState",
    "xor_gate",
    "xor_gate_with_state",
    "multi_xor_gate",
    "timed_gate",
    "TokenStream",
    "transform",
    "Pipeline",
    "pipeline",
    "from_json",
    "from_csv",
    "to_json",
]
