"""
Lazy transformation chains over token stream text.
"""

import base64
import binascii
import re
from typing import Callable, Iterable, List, Optional, Tuple, Union
from urllib.parse import quote, unquote

from xstream.config import TX, BucketMode, config
from xstream.types import Token, TokenBucket, is_token_streamable, split_tokens, tokenize, validate
from xstream.algebra.fork import Exact, ForkSelector
from xstream.algebra.merge import MergeStrategy
from xstream.algebra.gate import GateCondition
from xstream.streams.operators import (
    StreamOperator,
    TranslateOperator,
    RegexOperator,
    ValueMapOperator,
    FunctionOperator,
    PatternFilterOperator,
    SortTokensOperator,
    ExtractKeysOperator,
    ExtractValuesOperator,
    FilterTokensOperator,
    FilterByNamespaceOperator,
    ForkOperator,
    MergeOperator,
    GateOperator,
    LineGateOperator,
)

# Start of a token: beginning of text or just after ';', plus any leading space
_TOKEN_START = r"(^|;)(\s*)"


def _b64_encode(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def _b64_decode(value: str) -> str:
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value


_UNICODE_ESCAPE = re.compile(r"\\u\{([0-9a-fA-F]{1,6})\}")


def _unicode_encode(value: str) -> str:
    return "".join(ch if ord(ch) < 128 else f"\\u{{{ord(ch):x}}}" for ch in value)


def _unicode_decode(value: str) -> str:
    def replace(match):
        code = int(match.group(1), 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    return _UNICODE_ESCAPE.sub(replace, value)


class TokenStream:
    """
    A lazy chain of text transformations over a token stream.

    Every step returns a new TokenStream; nothing runs until to_string().
    """

    def __init__(self, content: str):
        """
        Initialize stream.

        Args:
            content: Token stream text (or forked "namespace: tokens" lines)
        """
        if not isinstance(content, str):
            raise TypeError("Content must be a string")
        self._content = content
        self._operators: List[StreamOperator] = []

    def _with(self, operator: StreamOperator) -> 'TokenStream':
        new_stream = TokenStream(self._content)
        new_stream._operators = self._operators.copy()
        new_stream._operators.append(operator)
        return new_stream

    def apply(self, operator: StreamOperator) -> 'TokenStream':
        """Append a custom operator."""
        return self._with(operator)

    # Textual rewrites

    def translate(self, old: str, new: str) -> 'TokenStream':
        return self._with(TranslateOperator(old, new))

    def translate_many(self, pairs: Iterable[Tuple[str, str]]) -> 'TokenStream':
        stream = self
        for old, new in pairs:
            stream = stream.translate(old, new)
        return stream

    def regex(self, pattern: str, replacement: str) -> 'TokenStream':
        return self._with(RegexOperator(pattern, replacement))

    def translate_if_starts(self, old: str, new: str) -> 'TokenStream':
        """Replace old with new only where the text begins with it."""
        return self._with(RegexOperator(r"\A" + re.escape(old), lambda _: new))

    def custom(self, func: Callable[[str], str]) -> 'TokenStream':
        """Append an arbitrary text -> text function."""
        return self._with(FunctionOperator(func))

    def swap_quotes(self) -> 'TokenStream':
        """Double quotes become single and vice versa."""
        return self.translate_many([('"', "\x00"), ("'", '"'), ("\x00", "'")])

    def double_quotes(self) -> 'TokenStream':
        return self.translate("'", '"')

    def single_quotes(self) -> 'TokenStream':
        return self.translate('"', "'")

    def strip_quotes(self) -> 'TokenStream':
        return self.translate('"', "").translate("'", "")

    def add_quotes(self, quote: Optional[str] = None) -> 'TokenStream':
        """Wrap every value in quote (default: the configured quote_char)."""
        return self._with(ValueMapOperator(lambda v: v, quote=quote or config.quote_char))

    def rename_namespace(self, old: str, new: str) -> 'TokenStream':
        """Rename a namespace (and its descendants) in switches and prefixes."""
        name = re.escape(old)
        switch = _TOKEN_START + r"ns=([\"']?)" + name + r"(?=[.;\"'\s]|$)"
        prefix = _TOKEN_START + name + r"(?=(\.[^=;:]*)?:)"
        return (self
                ._with(RegexOperator(switch, lambda m: f"{m.group(1)}{m.group(2)}ns={m.group(3)}{new}"))
                ._with(RegexOperator(prefix, lambda m: f"{m.group(1)}{m.group(2)}{new}")))

    def prefix_namespaces(self, prefix: str) -> 'TokenStream':
        """
        Move every namespace under prefix (db -> prefix.db).

        Applies to ns= switches and token prefixes; switches back to global
        and unprefixed tokens before the first switch stay in global.
        """
        switch = _TOKEN_START + r"ns=([\"']?)(?!global(?=[;\"'\s]|$))(?=[^;\"'\s])"
        prefixed = _TOKEN_START + r"(?=[^=;:\s]+:[^=;\s]*=)"
        return (self
                ._with(RegexOperator(switch, lambda m: f"{m.group(1)}{m.group(2)}ns={m.group(3)}{prefix}."))
                ._with(RegexOperator(prefixed, lambda m: f"{m.group(1)}{m.group(2)}{prefix}.")))

    def rename_key(self, old: str, new: str) -> 'TokenStream':
        """Rename a key in every namespace."""
        pattern = _TOKEN_START + r"((?:[^=;:\s]+:)?)" + re.escape(old) + r"(?==)"
        return self._with(RegexOperator(
            pattern, lambda m: f"{m.group(1)}{m.group(2)}{m.group(3)}{new}"))

    def mask_sensitive(self, keys: Optional[Iterable[str]] = None) -> 'TokenStream':
        """Replace the values of sensitive keys with the configured mask."""
        keys = config.sensitive_keys if keys is None else keys
        return self._with(ValueMapOperator(lambda _: config.mask, keys=keys))

    # Layout

    def compact(self) -> 'TokenStream':
        return self.regex(r";[ \t]+", ";")

    def expand(self) -> 'TokenStream':
        return self.regex(r";\s*(?=\S)", "; ")

    def multiline(self) -> 'TokenStream':
        return self.regex(r";[ \t]*(?=\S)", ";\n")

    def singleline(self) -> 'TokenStream':
        return self.regex(r";?\n", "; ")

    # Token selection

    def keep_matching(self, pattern: str) -> 'TokenStream':
        return self._with(PatternFilterOperator(pattern, keep=True))

    def remove_matching(self, pattern: str) -> 'TokenStream':
        return self._with(PatternFilterOperator(pattern, keep=False))

    def filter_tokens(self, needle: str) -> 'TokenStream':
        return self._with(FilterTokensOperator(needle))

    def filter_namespace(self, namespace: str) -> 'TokenStream':
        return self._with(FilterByNamespaceOperator(namespace))

    def sort(self) -> 'TokenStream':
        return self._with(SortTokensOperator())

    def keys(self) -> 'TokenStream':
        return self._with(ExtractKeysOperator())

    def values(self) -> 'TokenStream':
        return self._with(ExtractValuesOperator())

    # Value transforms

    def upper(self) -> 'TokenStream':
        return self._with(ValueMapOperator(str.upper))

    def lower(self) -> 'TokenStream':
        return self._with(ValueMapOperator(str.lower))

    def escape(self, what: TX) -> 'TokenStream':
        if what == TX.QUOTES:
            return self.translate('"', '\\"')
        if what == TX.HTML:
            return self.translate_many([
                ("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"), ('"', "&quot;"),
            ])
        if what == TX.ALL:
            return self.translate_many([
                ("\\", "\\\\"), ('"', '\\"'), ("\n", "\\n"), ("\r", "\\r"), ("\t", "\\t"),
            ])
        return self

    def unescape(self, what: TX) -> 'TokenStream':
        if what == TX.QUOTES:
            return self.translate('\\"', '"')
        if what == TX.HTML:
            return self.translate_many([
                ("&quot;", '"'), ("&lt;", "<"), ("&gt;", ">"), ("&amp;", "&"),
            ])
        if what == TX.ALL:
            return self.translate_many([
                ("\\n", "\n"), ("\\r", "\r"), ("\\t", "\t"), ('\\"', '"'), ("\\\\", "\\"),
            ])
        return self

    def base64(self, op: TX) -> 'TokenStream':
        if op == TX.ENCODE:
            return self._with(ValueMapOperator(_b64_encode))
        if op == TX.DECODE:
            return self._with(ValueMapOperator(_b64_decode))
        return self

    def url(self, op: TX) -> 'TokenStream':
        if op == TX.ENCODE:
            return self._with(ValueMapOperator(lambda v: quote(v, safe="")))
        if op == TX.DECODE:
            return self._with(ValueMapOperator(unquote))
        return self

    def unicode(self, op: TX) -> 'TokenStream':
        """Non-ASCII characters in values to and from \\u{hex} escapes."""
        if op == TX.ENCODE:
            return self._with(ValueMapOperator(_unicode_encode))
        if op == TX.DECODE:
            return self._with(ValueMapOperator(_unicode_decode))
        return self

    def transform_values(self, pattern: str, replacement: str) -> 'TokenStream':
        """Regex substitution applied to values only, never to keys."""
        compiled = re.compile(pattern)
        return self._with(ValueMapOperator(lambda v: compiled.sub(replacement, v)))

    # Stream algebra

    def fork(self, selector: ForkSelector) -> 'TokenStream':
        return self._with(ForkOperator(selector))

    def merge(self, strategy: MergeStrategy) -> 'TokenStream':
        return self._with(MergeOperator(strategy))

    def gate(self, condition: GateCondition) -> 'TokenStream':
        return self._with(GateOperator(condition))

    def gate_min_tokens(self, min_tokens: int) -> 'TokenStream':
        """Drop forked lines with fewer than min_tokens tokens."""
        return self._with(LineGateOperator(min_tokens))

    # Terminal operators

    def to_string(self) -> str:
        """Run the chain and return the resulting text."""
        text = self._content
        for op in self._operators:
            text = op.apply(text)
        return text

    def validate(self) -> bool:
        """True if the result is still a well-formed token stream."""
        return is_token_streamable(self.to_string())

    def count(self) -> int:
        return len(split_tokens(self.to_string()))

    def tokenize(self) -> List[Token]:
        return tokenize(self.to_string())

    def parse(self, mode: Optional[BucketMode] = None) -> TokenBucket:
        return TokenBucket.from_str(self.to_string(), mode or config.default_mode)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"TokenStream({self._content!r}, operators={len(self._operators)})"


def transform(content: str) -> TokenStream:
    """Start a transformation chain."""
    return TokenStream(content)


class Pipeline:
    """
    A reusable fork / gate / merge recipe.

    Unlike TokenStream, a pipeline holds no input: build it once, then call
    execute() on as many streams as needed.
    """

    def __init__(self):
        self._operators: List[StreamOperator] = []

    def _with(self, operator: StreamOperator) -> 'Pipeline':
        new_pipeline = Pipeline()
        new_pipeline._operators = self._operators.copy()
        new_pipeline._operators.append(operator)
        return new_pipeline

    def fork(self, selector: Union[ForkSelector, Iterable[str]]) -> 'Pipeline':
        """Fork by a selector, or by a list of namespace names."""
        if not isinstance(selector, ForkSelector):
            selector = Exact(*selector)
        return self._with(ForkOperator(selector))

    def gate(self, condition: Union[GateCondition, int]) -> 'Pipeline':
        """Gate with a condition, or keep forked lines with at least n tokens."""
        if isinstance(condition, GateCondition):
            return self._with(GateOperator(condition))
        return self._with(LineGateOperator(condition))

    def merge(self, strategy: MergeStrategy) -> 'Pipeline':
        return self._with(MergeOperator(strategy))

    def apply(self, operator: StreamOperator) -> 'Pipeline':
        return self._with(operator)

    def execute(self, text: str) -> str:
        """
        Run every step over text.

        Raises:
            XStreamError: If text is not a well-formed token stream
        """
        validate(text)
        for op in self._operators:
            text = op.apply(text)
        return text

    def __len__(self) -> int:
        return len(self._operators)

    def __repr__(self) -> str:
        return f"Pipeline(steps={len(self._operators)})"


def pipeline() -> Pipeline:
    """Start an empty pipeline."""
    return Pipeline()
