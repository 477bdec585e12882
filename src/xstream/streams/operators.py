"""
Stream operators for token stream text.
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional, Union

from xstream.config import config
from xstream.types import GLOBAL, is_token_streamable, split_tokens, strip_quotes
from xstream.algebra.fork import ForkSelector, fork
from xstream.algebra.merge import MergeStrategy, merge, split_label
from xstream.algebra.gate import GateCondition, gate


class StreamOperator(ABC):
    """Base class for stream operators."""

    @abstractmethod
    def apply(self, text: str) -> str:
        """Apply operator to stream text."""
        pass


class TokenCountOperator(StreamOperator):
    """Number of non-empty tokens, as text."""

    def apply(self, text: str) -> str:
        return str(len(split_tokens(text)))


class ExtractKeysOperator(StreamOperator):
    """One key per line, namespace prefix included."""

    def apply(self, text: str) -> str:
        return "\n".join(token.partition("=")[0].strip() for token in split_tokens(text))


class ExtractValuesOperator(StreamOperator):
    """One unquoted value per line."""

    def apply(self, text: str) -> str:
        return "\n".join(
            strip_quotes(token.partition("=")[2])
            for token in split_tokens(text)
            if "=" in token
        )


class FilterTokensOperator(StreamOperator):
    """Keep tokens whose text contains needle."""

    def __init__(self, needle: str):
        self.needle = needle

    def apply(self, text: str) -> str:
        kept = [token for token in split_tokens(text) if self.needle in token]
        return config.token_separator.join(kept)


class ExtractNamespacesOperator(StreamOperator):
    """Namespaces named by ns= switches or prefixes, sorted, one per line."""

    def apply(self, text: str) -> str:
        found = set()
        for token in split_tokens(text):
            key, _, value = token.partition("=")
            if key == "ns":
                found.add(strip_quotes(value))
            elif ":" in key:
                found.add(key.partition(":")[0])
        return "\n".join(sorted(found))


class FilterByNamespaceOperator(StreamOperator):
    """
    Keep the tokens that land in one namespace.

    Follows ns= switches textually; the switch into the namespace is kept
    so the result still parses into the same namespace.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace

    def apply(self, text: str) -> str:
        current = GLOBAL
        result = []
        for token in split_tokens(text):
            key, _, value = token.partition("=")
            if key == "ns":
                current = strip_quotes(value)
                if current == self.namespace:
                    result.append(token)
            elif ":" in key:
                if key.partition(":")[0] == self.namespace:
                    result.append(token)
            elif current == self.namespace:
                result.append(token)
        return config.token_separator.join(result)


class PatternFilterOperator(StreamOperator):
    """Keep (or drop) tokens matching a regular expression."""

    def __init__(self, pattern: str, keep: bool = True):
        self.pattern = re.compile(pattern)
        self.keep = keep

    def apply(self, text: str) -> str:
        kept = [
            token for token in split_tokens(text)
            if bool(self.pattern.search(token)) == self.keep
        ]
        return config.token_separator.join(kept)


class SortTokensOperator(StreamOperator):
    """Tokens in plain lexicographic order."""

    def apply(self, text: str) -> str:
        return config.token_separator.join(sorted(split_tokens(text)))


class TokenValidateOperator(StreamOperator):

    def apply(self, text: str) -> str:
        return "valid" if is_token_streamable(text) else "invalid"


class TokensToLinesOperator(StreamOperator):

    def apply(self, text: str) -> str:
        return "\n".join(split_tokens(text))


class LinesToTokensOperator(StreamOperator):

    def apply(self, text: str) -> str:
        lines = [line.strip() for line in text.splitlines()]
        return config.token_separator.join(line for line in lines if line)


class TranslateOperator(StreamOperator):
    """Replace every literal occurrence of old with new."""

    def __init__(self, old: str, new: str):
        self.old = old
        self.new = new

    def apply(self, text: str) -> str:
        return text.replace(self.old, self.new)


class RegexOperator(StreamOperator):
    """Regular-expression substitution over the whole text."""

    def __init__(self, pattern: str, replacement: Union[str, Callable[[re.Match], str]]):
        self.pattern = re.compile(pattern)
        self.replacement = replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class ValueMapOperator(StreamOperator):
    """Rewrite each token's unquoted value and wrap it in quote.

    Namespace switches (ns=...) are left alone. With keys given, only tokens
    whose bare key (namespace prefix removed) is listed are rewritten.
    Forked text is handled line by line; "namespace: " labels are kept as is.
    """

    def __init__(self,
                 func: Callable[[str], str],
                 keys: Optional[Iterable[str]] = None,
                 quote: str = '"'):
        self.func = func
        self.keys = set(keys) if keys is not None else None
        self.quote = quote

    def _wants(self, key: str) -> bool:
        key = key.strip()
        if key == "ns":
            return False
        return self.keys is None or key.rpartition(":")[2] in self.keys

    def _map_line(self, line: str) -> str:
        pieces = []
        for piece in line.split(";"):
            key, sep, value = piece.partition("=")
            if sep and self._wants(key):
                piece = f"{key}={self.quote}{self.func(strip_quotes(value))}{self.quote}"
            pieces.append(piece)
        return ";".join(pieces)

    def apply(self, text: str) -> str:
        lines = []
        for line in text.split(config.line_separator):
            label, body = split_label(line)
            if label is None:
                lines.append(self._map_line(line))
            else:
                lines.append(f"{label}: {self._map_line(body)}")
        return config.line_separator.join(lines)


class FunctionOperator(StreamOperator):
    """Run an arbitrary text -> text function as a chain step."""

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def apply(self, text: str) -> str:
        return self.func(text)


class ForkOperator(StreamOperator):

    def __init__(self, selector: ForkSelector):
        self.selector = selector

    def apply(self, text: str) -> str:
        return fork(text, self.selector)


class MergeOperator(StreamOperator):

    def __init__(self, strategy: MergeStrategy):
        self.strategy = strategy

    def apply(self, text: str) -> str:
        return merge(text, self.strategy)


class GateOperator(StreamOperator):

    def __init__(self, condition: GateCondition):
        self.condition = condition

    def apply(self, text: str) -> str:
        return gate(text, self.condition)


class LineGateOperator(StreamOperator):
    """Keep forked lines holding at least min_tokens tokens."""

    def __init__(self, min_tokens: int):
        self.min_tokens = min_tokens

    def apply(self, text: str) -> str:
        kept = []
        for line in text.split(config.line_separator):
            _, body = split_label(line.strip())
            if body.strip() and len(split_tokens(body)) >= self.min_tokens:
                kept.append(line)
        return config.line_separator.join(kept)
