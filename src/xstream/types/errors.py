"""
Error types raised while tokenizing and collecting token streams.
"""

from typing import Optional


class XStreamError(Exception):
    """Base class for all xstream errors."""
    pass


class EmptyInputError(XStreamError):
    """Input string is empty or whitespace-only."""

    def __init__(self):
        super().__init__("Input string is empty")


class ParseError(XStreamError):
    """
    A token stream violated the grammar.

    Attributes:
        reason: What was wrong ("missing '=' separator", "empty key", ...)
        fragment: The offending token text, if there is one
    """

    def __init__(self, reason: str, fragment: Optional[str] = None):
        self.reason = reason
        self.fragment = fragment
        if fragment is None:
            message = f"Parse error: {reason}"
        else:
            message = f"Malformed token '{fragment}': {reason}"
        super().__init__(message)


class InvalidNamespaceError(XStreamError):
    """Namespace string is empty or contains whitespace."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        super().__init__(f"Invalid namespace: '{namespace}'")


class InvalidPatternError(XStreamError):
    """Namespace pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")


class AdapterError(XStreamError):
    """JSON/CSV conversion failed."""
    pass
