"""
TokenBucket: the namespace-indexed form of a token stream.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from xstream.config import BucketMode, config
from xstream.types.errors import EmptyInputError, ParseError
from xstream.types.namespace import GLOBAL, Namespace
from xstream.types.token import Token, tokenize

ROOT = ""


class TokenBucket:
    """
    Tokens grouped by namespace, with an optional parent/child index.

    Buckets are filled once, while collecting a token list, and are treated
    as read-only afterwards. Query methods hand out copies.
    """

    def __init__(self, mode: BucketMode = BucketMode.HYBRID):
        self.mode = mode
        self.data: Dict[str, Dict[str, str]] = {}
        self.tree: Optional[Dict[str, Set[str]]] = None
        if mode != BucketMode.FLAT:
            self.tree = {}
        self._indexed: Set[str] = set()

    @classmethod
    def from_tokens(cls, tokens: Sequence[Token], mode: BucketMode = BucketMode.HYBRID) -> 'TokenBucket':
        return collect_tokens(tokens, mode)

    @classmethod
    def from_str(cls, text: str, mode: BucketMode = BucketMode.HYBRID) -> 'TokenBucket':
        """
        Parse token stream text into a bucket.

        Raises:
            EmptyInputError: If text is empty or whitespace-only
            ParseError: If the stream is malformed or holds no tokens
            InvalidNamespaceError: If an ns= switch names an invalid namespace
        """
        if not text.strip():
            raise EmptyInputError()

        tokens = tokenize(text)
        if not tokens:
            raise ParseError("No valid tokens found")

        return cls.from_tokens(tokens, mode)

    def _insert(self, namespace: Namespace, key: str, value: str) -> None:
        name = str(namespace)
        self.data.setdefault(name, {})[key] = value

        if self.tree is not None and name not in self._indexed:
            self._index(namespace)
            self._indexed.add(name)

    def _index(self, namespace: Namespace) -> None:
        parent = ROOT
        for path in namespace.ancestors() + [str(namespace)]:
            self.tree.setdefault(parent, set()).add(path)
            parent = path

    # Queries

    def get_namespace(self, name: str) -> Optional[Dict[str, str]]:
        """Key/value map of a namespace, exact match only."""
        values = self.data.get(name)
        return dict(values) if values is not None else None

    def get_children(self, name: str) -> Set[str]:
        """Direct descendants of name ("" for the root)."""
        if self.tree is None:
            return set()
        return set(self.tree.get(name, ()))

    def get_all_under(self, prefix: str) -> Set[str]:
        """Every stored namespace that starts with prefix, except prefix itself."""
        return {ns for ns in self.data if ns.startswith(prefix) and ns != prefix}

    def get_siblings(self, name: str) -> Set[str]:
        parent, _, _ = name.rpartition(".")
        return self.get_children(parent) - {name}

    def namespaces(self) -> List[str]:
        return sorted(self.data)

    @property
    def token_count(self) -> int:
        return sum(len(values) for values in self.data.values())

    def iter_pairs(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (namespace, key, value) sorted by namespace, then key."""
        for name in sorted(self.data):
            values = self.data[name]
            for key in sorted(values):
                yield name, key, values[key]

    def to_tokens(self) -> List[Token]:
        """Tokens in iter_pairs() order; global tokens carry no prefix."""
        return [
            Token(None if name == GLOBAL else Namespace.from_string(name), key, value)
            for name, key, value in self.iter_pairs()
        ]

    def __contains__(self, name: str) -> bool:
        return name in self.data

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"TokenBucket(mode={self.mode.name}, namespaces={self.namespaces()})"


def collect_tokens(tokens: Sequence[Token], mode: BucketMode = BucketMode.HYBRID) -> TokenBucket:
    """Run the namespace-switch state machine over tokens."""
    bucket = TokenBucket(mode)
    active = Namespace.global_()

    for token in tokens:
        if token.is_switch:
            active = Namespace.from_string(token.value)
            continue
        bucket._insert(token.namespace or active, token.key, token.value)

    return bucket


def parse(text: str, mode: Optional[BucketMode] = None) -> TokenBucket:
    """Parse text with the configured default mode."""
    return TokenBucket.from_str(text, mode or config.default_mode)
