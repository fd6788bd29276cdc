"""
Test data generators for source map benchmarks.

Creates JSON documents shaped like the files source maps are used on:
- Small API payloads
- Wide arrays of records
- Deeply nested configuration trees
- Indented multi-line documents (line/column bookkeeping)
"""

import json
import random
import string
from typing import Any

# Fixed seed keeps benchmark groups comparable between runs
_SEED = 20240115


def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "record_array": _generate_record_array,
        "nested_config": _generate_nested_config,
        "indented_document": _generate_indented_document,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


def _generate_small_object(rng: random.Random) -> str:
    """Generates a small JSON object (< 1KB) with basic key-value pairs."""
    data = {
        "id": rng.randint(10000, 99999),
        "name": _random_string(rng, 12),
        "active": True,
        "balance": round(rng.uniform(0, 5000), 2),
        "tags": [_random_string(rng, 5) for _ in range(4)],
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }
    return json.dumps(data)


def _generate_record_array(rng: random.Random) -> str:
    """Generates a wide array of flat records."""
    records = [
        {
            "index": i,
            "label": _random_string(rng, rng.randint(5, 20)),
            "score": round(rng.uniform(0, 100), 3),
            "flag": rng.choice([True, False, None]),
            "path": f"/srv/{_random_string(rng, 6)}/{i}",
        }
        for i in range(300)
    ]
    return json.dumps(records)


def _generate_nested_config(rng: random.Random) -> str:
    """Generates a configuration tree several levels deep."""

    def create_section(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10), "enabled": True}

        return {
            "level": depth,
            "name": _random_string(rng, 8),
            "children": [create_section(depth - 1) for _ in range(2)],
            "defaults": create_section(depth - 1),
        }

    return json.dumps(create_section(7))


def _generate_indented_document(rng: random.Random) -> str:
    """Generates a pretty-printed document with escapes and unicode."""
    data = {
        f"service_{i}": {
            "description": f"Handles {_random_string(rng, 12)}\n\t\"quoted\"",
            "owner": "ops\u00e9quipe",
            "ports": [rng.randint(1024, 65535) for _ in range(3)],
            "weights": [round(rng.random(), 4) for _ in range(5)],
        }
        for i in range(60)
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
