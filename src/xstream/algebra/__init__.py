"""Stream algebra: fork, merge and gate operators over token streams."""

from xstream.algebra.fork import (
    ForkSelector,
    Exact,
    All,
    Pattern,
    Under,
    fork,
    fork_channels,
    fork_by_namespace,
    fork_all_namespaces,
    fork_by_pattern,
    fork_under,
    compile_pattern,
)
from xstream.algebra.merge import (
    MergeStrategy,
    Concat,
    Interleave,
    Priority,
    Sort,
    Dedupe,
    ByNamespace,
    CollisionPolicy,
    merge,
    merge_streams,
    merge_concat,
    merge_with_collision_policy,
)
from xstream.algebra.gate import (
    GateCondition,
    MinTokens,
    MaxTokens,
    TokenCount,
    RequireNamespace,
    ContainsValue,
    Sync,
    Balance,
    Wait,
    gate,
)
from xstream.algebra.xor import (
    GateState,
    xor_gate,
    xor_gate_with_state,
    multi_xor_gate,
    timed_gate,
)

__all__ = [
    "ForkSelector",
    "Exact",
    "All",
    "Pattern",
    "Under",
    "fork",
    "fork_channels",
    "fork_by_namespace",
    "fork_all_namespaces",
    "fork_by_pattern",
    "fork_under",
    "compile_pattern",
    "MergeStrategy",
    "Concat",
    "Interleave",
    "Priority",
    "Sort",
    "Dedupe",
    "ByNamespace",
    "CollisionPolicy",
    "merge",
    "merge_streams",
    "merge_concat",
    "merge_with_collision_policy",
    "GateCondition",
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
]
