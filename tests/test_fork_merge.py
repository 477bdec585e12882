#!/usr/bin/env python3
"""
Tests for fork and merge.
"""

import unittest
from xstream import (
    XStreamConfig,
    InvalidPatternError,
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
    tokenize,
)
from xstream.algebra import fork_channels, fork_by_namespace, fork_under, compile_pattern


STREAM = 'ui:theme="dark"; ui:lang="en"; db:host="localhost"'


class TestFork(unittest.TestCase):
    """Test splitting streams into namespace channels."""

    def tearDown(self):
        XStreamConfig.reset()

    def test_fork_all(self):
        """Test that All() emits every namespace in sorted order."""
        result = fork(STREAM, All())
        self.assertEqual(
            result,
            'db: db:host="localhost"\n'
            'ui: ui:theme="dark"; ui:lang="en"'
        )

    def test_fork_exact_keeps_order(self):
        result = fork(STREAM, Exact("ui", "db"))
        lines = result.split("\n")
        self.assertEqual(lines[0], 'ui: ui:theme="dark"; ui:lang="en"')
        self.assertEqual(lines[1], 'db: db:host="localhost"')

    def test_fork_missing_namespace(self):
        """A namespace with no tokens gets no line."""
        self.assertEqual(fork('p:a=1; p:b=2', Exact("p", "q")), 'p: p:a="1"; p:b="2"')
        self.assertEqual(fork(STREAM, Exact("missing")), "")
        self.assertEqual(fork_by_namespace(STREAM, ["db", "missing"]), {"db": 'db:host="localhost"'})

    def test_fork_exact_repeated_names(self):
        """A repeated name is forked once, at its first position."""
        self.assertEqual(Exact("db", "ui", "db").names, ["db", "ui"])
        self.assertEqual(
            fork(STREAM, Exact("db", "ui", "db")),
            'db: db:host="localhost"\nui: ui:theme="dark"; ui:lang="en"'
        )

    def test_fork_global(self):
        """Global tokens are forked without a prefix."""
        self.assertEqual(fork('a=1; x:b=2', All()), 'global: a="1"\nx: x:b="2"')

    def test_fork_pattern_and_under(self):
        """Test regex and subtree selectors."""
        text = 'api.v1:a=1; apix:b=2; db:c=3; api:d=4'

        self.assertEqual(list(fork_channels(text, Pattern("^api"))), ["api", "api.v1", "apix"])
        self.assertEqual(list(fork_channels(text, Pattern("v1$"))), ["api.v1"])
        self.assertEqual(list(fork_channels(text, Under("api"))), ["api", "api.v1"])

    def test_fork_invalid_pattern(self):
        """A bad regex yields nothing rather than raising."""
        self.assertEqual(fork(STREAM, Pattern("(")), "")
        with self.assertRaises(InvalidPatternError):
            compile_pattern("(")

    def test_fork_malformed_input(self):
        with self.assertLogs("xstream.algebra.fork", level="DEBUG"):
            self.assertEqual(fork("a=1; broken", All()), "")
        self.assertEqual(fork("", All()), "")

    def test_forked_lines_are_streams(self):
        """Every forked channel parses back to its own namespace."""
        for name, tokens in fork_channels(STREAM, All()).items():
            self.assertTrue(all(token.namespace == name for token in tokenize(tokens)))


class TestMerge(unittest.TestCase):
    """Test merge strategies."""

    FORKED = 'ui: ui:a="1"; ui:b="2"\ndb: db:c="3"'

    def tearDown(self):
        XStreamConfig.reset()

    def test_concat(self):
        self.assertEqual(merge(self.FORKED, Concat()), 'ui:a="1"; ui:b="2"; db:c="3"')

    def test_interleave(self):
        """Test round-robin merging."""
        self.assertEqual(merge(self.FORKED, Interleave()), 'ui:a="1"; db:c="3"; ui:b="2"')

    def test_priority(self):
        self.assertEqual(merge(self.FORKED, Priority("db")), 'db:c="3"; ui:a="1"; ui:b="2"')

    def test_priority_rest_alphabetical(self):
        text = 'z:a=1\nb=2\nm:c=3'
        self.assertEqual(merge(text, Priority("m")), 'm:c=3; b=2; z:a=1')

    def test_sort(self):
        """Sort orders by the text before '='."""
        result = merge('b="2"; a="1"\nc="3"', Sort())
        self.assertEqual(result, 'a="1"; b="2"; c="3"')

        keys = [t.partition("=")[0] for t in merge(self.FORKED, Sort()).split("; ")]
        self.assertEqual(keys, sorted(keys))

    def test_dedupe(self):
        result = merge('a="1"; b="2"\na="1"; c="3"', Dedupe())
        self.assertEqual(result, 'a="1"; b="2"; c="3"')

        forked = 'x: shared="1"; x:a="2"\ny: shared="1"; y:b="3"'
        self.assertEqual(merge(forked, Dedupe()), 'shared="1"; x:a="2"; y:b="3"')

    def test_fork_under(self):
        self.assertEqual(fork_under('api.v1:a=1; api:b=2; apix:c=3', "api"),
                         {"api": 'api:b="2"', "api.v1": 'api.v1:a="1"'})

    def test_by_namespace(self):
        """Lines with the same label are regrouped."""
        text = 'ui: ui:a="1"\ndb: db:b="2"\nui: ui:c="3"'
        self.assertEqual(merge(text, ByNamespace()), 'ui: ui:a="1"; ui:c="3"\ndb: db:b="2"')

    def test_invalid_lines_skipped(self):
        with self.assertLogs("xstream.algebra.merge", level="DEBUG"):
            self.assertEqual(merge('a="1"\nbroken\nb="2"', Concat()), 'a="1"; b="2"')

    def test_fork_then_merge(self):
        """Fork followed by merge keeps every token."""
        merged = merge(fork(STREAM, All()), Concat())
        self.assertEqual(sorted(merged.split("; ")), sorted(t.strip() for t in STREAM.split(";")))

    def test_merge_streams(self):
        self.assertEqual(merge_streams(["a=1", "b=2; c=3"], Interleave()), "a=1; b=2; c=3")

    def test_custom_separator(self):
        XStreamConfig.set_defaults(token_separator=";")
        self.assertEqual(merge_streams(["a=1", "b=2"], Concat()), "a=1;b=2")


class TestCollisionPolicy(unittest.TestCase):
    """Test duplicate key handling."""

    STREAMS = ['a="1"; b="2"', 'a="3"']

    def test_keep_first(self):
        self.assertEqual(merge_with_collision_policy(self.STREAMS, CollisionPolicy.KEEP_FIRST), 'a="1"; b="2"')

    def test_keep_last(self):
        self.assertEqual(merge_with_collision_policy(self.STREAMS, CollisionPolicy.KEEP_LAST), 'a="3"; b="2"')

    def test_annotate(self):
        result = merge_with_collision_policy(self.STREAMS, CollisionPolicy.ANNOTATE)
        self.assertEqual(result, 'a="1"; b="2"; dupe:a="true"; a="3"')
        self.assertEqual(len(tokenize(result)), 4)

    def test_namespaced_keys_differ(self):
        result = merge_with_collision_policy(['db:a=1', 'a=2'], CollisionPolicy.KEEP_FIRST)
        self.assertEqual(result, "db:a=1; a=2")


if __name__ == "__main__":
    unittest.main()
