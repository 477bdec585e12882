"""Token, namespace and bucket types for token streams."""

from xstream.config import BucketMode
from xstream.types.errors import (
    XStreamError,
    EmptyInputError,
    ParseError,
    InvalidNamespaceError,
    InvalidPatternError,
    AdapterError,
)
from xstream.types.namespace import Namespace, GLOBAL
from xstream.types.token import (
    Token,
    tokenize,
    validate,
    is_token_streamable,
    render,
    split_tokens,
    strip_quotes,
)
from xstream.types.bucket import TokenBucket, collect_tokens, parse

__all__ = [
    "BucketMode",
    "XStreamError",
    "EmptyInputError",
    "ParseError",
    "InvalidNamespaceError",
    "InvalidPatternError",
    "AdapterError",
    "Namespace",
    "GLOBAL",
    "Token",
    "tokenize",
    "validate",
    "is_token_streamable",
    "render",
    "split_tokens",
    "strip_quotes",
    "TokenBucket",
    "collect_tokens",
    "parse",
]
