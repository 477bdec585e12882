#!/usr/bin/env python3
"""
Tests for gate conditions and the XOR-family gates.
"""

import unittest
from xstream import (
    MinTokens,
    MaxTokens,
    TokenCount,
    RequireNamespace,
    ContainsValue,
    Sync,
    Balance,
    Wait,
    gate,
    xor_gate,
    xor_gate_with_state,
    multi_xor_gate,
    timed_gate,
)


class TestGateConditions(unittest.TestCase):
    """Test bucket-based gates."""

    def test_min_tokens(self):
        stream = "a=1; b=2; c=3"
        self.assertEqual(gate(stream, MinTokens(2)), stream)
        self.assertEqual(gate(stream, MinTokens(3)), stream)
        self.assertEqual(gate(stream, MinTokens(4)), "")

        self.assertEqual(gate("a=1; b=2", MinTokens(3)), "")
        self.assertEqual(gate("a=1; b=2; c=3; d=4", MinTokens(3)), "a=1; b=2; c=3; d=4")

    def test_max_tokens(self):
        """Test truncation in sorted order."""
        stream = "e=5; d=4; c=3; b=2; a=1"
        self.assertEqual(gate(stream, MaxTokens(3)), 'a="1"; b="2"; c="3"')
        self.assertEqual(gate(stream, MaxTokens(5)), stream)
        self.assertEqual(gate(stream, MaxTokens(0)), "")

    def test_max_tokens_across_namespaces(self):
        stream = 'z:k=1; a=2; m:k=3'
        self.assertEqual(gate(stream, MaxTokens(2)), 'a="2"; m:k="3"')

    def test_token_count(self):
        self.assertEqual(gate("a=1; b=2", TokenCount(2)), "a=1; b=2")
        self.assertEqual(gate("a=1; b=2", TokenCount(3)), "")
        # Overwritten keys count once
        self.assertEqual(gate("a=1; a=2", TokenCount(1)), "a=1; a=2")

    def test_require_namespace(self):
        self.assertEqual(gate('db:host="h"', RequireNamespace("db")), 'db:host="h"')
        self.assertEqual(gate("a=1", RequireNamespace("db")), "")
        self.assertEqual(gate("a=1", RequireNamespace("global")), "a=1")

    def test_contains_value(self):
        self.assertEqual(gate('user="admin"', ContainsValue("admin")), 'user="admin"')
        self.assertEqual(gate('user="admin"', ContainsValue("root")), "")

    def test_sync(self):
        """Test pairwise interleaving once both sides are ready."""
        self.assertEqual(
            gate("a=1; b=2", Sync("x=1; y=2", 2)),
            'a="1"; x="1"; b="2"; y="2"'
        )
        self.assertEqual(gate("a=1; b=2", Sync("x=1", 1)), 'a="1"; x="1"')
        self.assertEqual(gate("a=1; b=2", Sync("x=1; y=2", 3)), "")
        self.assertEqual(gate("a=1", Sync("broken", 0)), "")

    def test_balance(self):
        """Every stream contributes the same number of tokens."""
        self.assertEqual(gate("a=1; b=2", Balance("x=1")), 'a="1"; x="1"')
        self.assertEqual(gate("a=1; b=2", Balance("x=1; y=2", "p=1; q=2; r=3")),
                         'a="1"; b="2"; x="1"; y="2"; p="1"; q="2"')
        self.assertEqual(gate("a=1", Balance("oops")), "")

    def test_wait(self):
        self.assertEqual(gate("a=1; b=2", Wait(2, "x=1; y=2")), "a=1; b=2")
        self.assertEqual(gate("a=1; b=2", Wait(2, "x=1")), "")
        self.assertEqual(gate("a=1", Wait(2, "x=1; y=2")), "")
        self.assertEqual(gate("a=1", Wait(1)), "a=1")

    def test_malformed_blocks(self):
        """Malformed input is blocked, never raised."""
        with self.assertLogs("xstream.algebra.gate", level="DEBUG"):
            self.assertEqual(gate("a=1; broken", MinTokens(0)), "")
        self.assertEqual(gate("", MaxTokens(5)), "")
        self.assertEqual(gate(";;;", TokenCount(0)), "")


class TestXorGates(unittest.TestCase):
    """Test XOR, multi-XOR and timed gates."""

    def test_xor_alternates(self):
        self.assertEqual(xor_gate("a=1;a=2", "b=1"), "a=1; b=1; a=2")
        self.assertEqual(xor_gate("a=1", "b=1; b=2; b=3"), "a=1; b=1; b=2; b=3")

    def test_xor_keeps_raw_tokens(self):
        self.assertEqual(xor_gate("a='x'", 'b="y"'), "a='x'; b=\"y\"")

    def test_xor_with_state(self):
        """Test the position log."""
        output, state = xor_gate_with_state("a=1;a=2", "b=1")

        self.assertEqual(output, "a=1; b=1; a=2")
        self.assertEqual(state.switches, [(0, "A"), (1, "B"), (2, "A")])
        self.assertEqual(state.tokens_processed, 2)
        self.assertEqual(state.current_stream, 0)

    def test_xor_malformed(self):
        output, state = xor_gate_with_state("a=1", "b =1")
        self.assertEqual(output, "")
        self.assertEqual(state.switches, [])
        self.assertEqual(xor_gate("broken", "b=1"), "")

    def test_xor_empty(self):
        self.assertEqual(xor_gate("", ""), "")
        self.assertEqual(xor_gate("", "b=1"), "b=1")

    def test_multi_xor(self):
        """Exhausted streams hand their turn to the next one."""
        result = multi_xor_gate(["a=1; a=2", "b=1", "c=1; c=2; c=3"])
        self.assertEqual(result, "a=1; b=1; c=1; a=2; c=2; c=3")

    def test_multi_xor_drops_malformed(self):
        with self.assertLogs("xstream.algebra.xor", level="DEBUG"):
            self.assertEqual(multi_xor_gate(["a=1", "bad", "c=1"]), "a=1; c=1")
        self.assertEqual(multi_xor_gate([]), "")

    def test_timed(self):
        """Test switching every n tokens."""
        result = timed_gate(["a=1; a=2; a=3", "b=1; b=2; b=3"], 2)
        self.assertEqual(result, "a=1; a=2; b=1; b=2; a=3; b=3")

    def test_timed_uneven(self):
        """Every token comes out exactly once."""
        result = timed_gate(["a=1", "b=1; b=2; b=3"], 2)
        self.assertEqual(result, "a=1; b=1; b=2; b=3")

        result = timed_gate(["a=1; a=2; a=3; a=4", "b=1", "c=1; c=2"], 1)
        self.assertEqual(result, "a=1; b=1; c=1; a=2; c=2; a=3; a=4")

    def test_timed_invalid(self):
        self.assertEqual(timed_gate(["a=1"], 0), "")
        self.assertEqual(timed_gate(["bad"], 2), "")


if __name__ == "__main__":
    unittest.main()
