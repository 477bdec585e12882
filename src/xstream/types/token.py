"""
Tokenizer for the token stream grammar.

A stream is a ';'-separated list of tokens:

    key="value"; ns:key="value"; ns=switch;

Tokenizing is all-or-nothing: the first grammar violation raises ParseError
naming the offending token, and no tokens are returned.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from xstream.types.errors import ParseError, XStreamError
from xstream.types.namespace import Namespace

SEPARATOR = ";"


@dataclass(frozen=True)
class Token:
    """One key=value unit, optionally namespace-prefixed."""
    namespace: Optional[Namespace]
    key: str
    value: str

    @property
    def is_switch(self) -> bool:
        """True for an unprefixed ns=<name> namespace switch."""
        return self.namespace is None and self.key == "ns"

    def render(self, quote: str = '"') -> str:
        if self.namespace is None:
            return f"{self.key}={quote}{self.value}{quote}"
        return f"{self.namespace}:{self.key}={quote}{self.value}{quote}"

    def __str__(self) -> str:
        return self.render()


def strip_quotes(text: str) -> str:
    """Unwrap a value fully wrapped in matching single or double quotes."""
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text


def split_tokens(text: str) -> List[str]:
    """Split on ';', trim each slice and drop the empty ones."""
    return [part.strip() for part in text.split(SEPARATOR) if part.strip()]


def _parse_token(token_str: str) -> Token:
    if token_str != token_str.rstrip():
        raise ParseError("trailing spaces not allowed", token_str.rstrip())

    key_part, sep, value_part = token_str.partition("=")
    if not sep:
        raise ParseError("missing '=' separator", token_str)

    if key_part != key_part.rstrip():
        raise ParseError("space before '=' not allowed", token_str)
    if value_part != value_part.lstrip():
        raise ParseError("space after '=' not allowed", token_str)

    key_part = key_part.strip()
    value = strip_quotes(value_part)

    if not key_part:
        raise ParseError("empty key", token_str)

    ns_str, colon, key = key_part.partition(":")
    if colon:
        if " " in ns_str:
            raise ParseError(f"spaces not allowed in namespace '{ns_str}'", token_str)
        if " " in key:
            raise ParseError(f"spaces not allowed in key '{key}'", token_str)
        return Token(Namespace.from_string(ns_str), key, value)

    if " " in key_part:
        raise ParseError(f"spaces not allowed in key '{key_part}'", token_str)
    return Token(None, key_part, value)


def tokenize(text: str) -> List[Token]:
    """
    Turn a raw token stream into an ordered list of tokens.

    Args:
        text: Token stream text

    Returns:
        Tokens in input order (empty for "" or ";;;")

    Raises:
        ParseError: On the first malformed token
        InvalidNamespaceError: If a namespace prefix is empty or holds whitespace
    """
    tokens = []
    for token_str in text.split(SEPARATOR):
        # A space after ';' is fine, a space before it is not
        token_str = token_str.lstrip()
        if not token_str:
            continue
        tokens.append(_parse_token(token_str))
    return tokens


def validate(text: str) -> None:
    """Raise the error tokenize() would raise, if any."""
    tokenize(text)


def is_token_streamable(text: str) -> bool:
    """Check the grammar without building a bucket."""
    try:
        tokenize(text)
    except XStreamError:
        return False
    return True


def render(source: Union['TokenBucket', Iterable[Token]], separator: str = "; ") -> str:
    """Render a bucket or a token list back into token stream text."""
    if hasattr(source, "to_tokens"):
        source = source.to_tokens()
    return separator.join(token.render() for token in source)
