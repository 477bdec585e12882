#!/usr/bin/env python3
"""
Basic usage examples for XStream.
"""

import random
from xstream import (
    TokenBucket,
    BucketMode,
    XStreamConfig,
    All,
    Exact,
    Interleave,
    Sort,
    MinTokens,
    MaxTokens,
    fork,
    merge,
    gate,
    xor_gate,
    timed_gate,
    transform,
    from_json,
    to_json,
    is_token_streamable,
)
from xstream.gen import gen_config_stream


def example_parsing():
    """Example: Parse a stream into namespace buckets."""
    print("\n=== Parsing Example ===")

    stream = 'host="localhost"; port="8080"; ns=db; user="admin"; pass="secret"; cache.redis:ttl="60"'
    bucket = TokenBucket.from_str(stream, BucketMode.HYBRID)

    for namespace in bucket.namespaces():
        print(f"{namespace}: {bucket.get_namespace(namespace)}")
    print(f"Root children: {sorted(bucket.get_children(''))}")


def example_fork_merge():
    """Example: Split a stream by namespace and put it back together."""
    print("\n=== Fork / Merge Example ===")

    stream = 'ui:theme="dark"; ui:lang="en"; db:host="localhost"; log:level="info"'

    forked = fork(stream, All())
    print("Forked:")
    print(forked)

    print(f"Only ui and db:\n{fork(stream, Exact('ui', 'db'))}")
    print(f"Interleaved: {merge(forked, Interleave())}")
    print(f"Sorted: {merge(forked, Sort())}")


def example_gates():
    """Example: Flow control with gates."""
    print("\n=== Gate Example ===")

    stream = 'a="1"; b="2"; c="3"; d="4"; e="5"'
    print(f"MinTokens(3): {gate(stream, MinTokens(3))!r}")
    print(f"MinTokens(9): {gate(stream, MinTokens(9))!r}")
    print(f"MaxTokens(3): {gate(stream, MaxTokens(3))!r}")

    print(f"XOR: {xor_gate('a=1; a=2; a=3', 'b=1; b=2')}")
    print(f"Timed: {timed_gate(['a=1; a=2; a=3', 'b=1; b=2; b=3'], 2)}")


def example_transform():
    """Example: Transformation chains."""
    print("\n=== Transform Example ===")

    config_stream = gen_config_stream(random.Random(7))
    print(f"Generated: {config_stream}")

    masked = transform(config_stream).mask_sensitive().single_quotes().to_string()
    print(f"Masked:    {masked}")
    print(f"Still valid: {is_token_streamable(masked)}")

    pipeline = (transform('ui:theme="dark"; ui:size="large"; db:host="localhost"')
                .fork(Exact("ui", "db"))
                .gate_min_tokens(2)
                .merge(Sort()))
    print(f"Pipeline: {pipeline}")


def example_json():
    """Example: JSON round trip."""
    print("\n=== JSON Example ===")

    stream = from_json('{"host": "localhost", "port": 8080, "db": {"user": "admin"}}')
    print(f"From JSON: {stream}")
    print(to_json(stream))


def main():
    """Run all examples."""
    print("=== XStream Examples ===")

    XStreamConfig.set_defaults(default_mode="hybrid")

    example_parsing()
    example_fork_merge()
    example_gates()
    example_transform()
    example_json()

    print("\n=== All examples completed! ===")


if __name__ == "__main__":
    main()
