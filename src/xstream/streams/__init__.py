"""Transformation chains and operators over token stream text."""

from xstream.streams.stream import TokenStream, Pipeline, transform, pipeline
from xstream.streams.operators import (
    StreamOperator,
    TokenCountOperator,
    ExtractKeysOperator,
    ExtractValuesOperator,
    FilterTokensOperator,
    ExtractNamespacesOperator,
    FilterByNamespaceOperator,
    PatternFilterOperator,
    SortTokensOperator,
    TokenValidateOperator,
    TokensToLinesOperator,
    LinesToTokensOperator,
    TranslateOperator,
    RegexOperator,
    ValueMapOperator,
    FunctionOperator,
    ForkOperator,
    MergeOperator,
    GateOperator,
    LineGateOperator,
)

__all__ = [
    "TokenStream",
    "transform",
    "Pipeline",
    "pipeline",
    "StreamOperator",
    "TokenCountOperator",
    "ExtractKeysOperator",
    "ExtractValuesOperator",
    "FilterTokensOperator",
    "ExtractNamespacesOperator",
    "FilterByNamespaceOperator",
    "PatternFilterOperator",
    "SortTokensOperator",
    "TokenValidateOperator",
    "TokensToLinesOperator",
    "LinesToTokensOperator",
    "TranslateOperator",
    "RegexOperator",
    "ValueMapOperator",
    "FunctionOperator",
    "ForkOperator",
    "MergeOperator",
    "GateOperator",
    "LineGateOperator",
]
