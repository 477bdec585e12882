"""
Hierarchical dotted namespaces (a.b.c).
"""

from typing import Iterable, List, Optional, Tuple

from xstream.types.errors import InvalidNamespaceError

DELIMITER = "."
GLOBAL = "global"


class Namespace:
    """An ordered, non-empty sequence of non-empty path segments joined by '.'."""

    __slots__ = ("_parts",)

    def __init__(self, parts: Iterable[str]):
        parts = tuple(parts)
        if not parts:
            raise InvalidNamespaceError("")
        for part in parts:
            if not part or any(ch.isspace() for ch in part):
                raise InvalidNamespaceError(DELIMITER.join(parts))
        self._parts: Tuple[str, ...] = parts

    @classmethod
    def from_string(cls, text: str) -> 'Namespace':
        """Split a dotted string into a namespace."""
        if not text:
            raise InvalidNamespaceError(text)
        return cls(text.split(DELIMITER))

    @classmethod
    def global_(cls) -> 'Namespace':
        return cls((GLOBAL,))

    @property
    def parts(self) -> List[str]:
        return list(self._parts)

    @property
    def depth(self) -> int:
        return len(self._parts)

    @property
    def is_global(self) -> bool:
        return str(self) == GLOBAL

    def parent(self) -> Optional['Namespace']:
        """Namespace one level up, or None for a top-level namespace."""
        if len(self._parts) == 1:
            return None
        return Namespace(self._parts[:-1])

    def ancestors(self) -> List[str]:
        """Every proper dotted prefix, shortest first."""
        return [DELIMITER.join(self._parts[:i]) for i in range(1, len(self._parts))]

    def is_under(self, prefix: str) -> bool:
        """True if this namespace equals prefix or sits below it."""
        name = str(self)
        return name == prefix or name.startswith(prefix + DELIMITER)

    def __str__(self) -> str:
        return DELIMITER.join(self._parts)

    def __repr__(self) -> str:
        return f"Namespace('{self}')"

    def __eq__(self, other) -> bool:
        if isinstance(other, Namespace):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))
