#!/usr/bin/env python3
"""Benchmark category deletion: seed a challenge category, time its DELETE.

The DELETE purges challengeItems (and their difficulty levels) in batches of
PURGE_BATCH_SIZE before removing the category, so its latency grows with the
number of seeded items.

Usage:
  export API_URL=http://localhost:8000
  uv run python scripts/bench_purge.py [--items 500] [--with-difficulty]
"""
from __future__ import annotations

import argparse
import os
import sys
import time
import uuid

import httpx


def seed_category(
    client: httpx.Client,
    api_url: str,
    items: int,
    with_difficulty: bool,
) -> str:
    category_id = f"bench-{uuid.uuid4().hex[:8]}"
    r = client.post(
        f"{api_url}/v1/challenges",
        json={"id": category_id, "title": "Bench", "description": "Purge benchmark", "category": "bench"},
    )
    r.raise_for_status()

    for i in range(items):
        r = client.post(
            f"{api_url}/v1/challenges/{category_id}/items",
            json={"title": f"Item {i}", "description": "Seeded item", "timeLimit": 60},
        )
        r.raise_for_status()
        if with_difficulty:
            item_id = r.json()["id"]
            r = client.post(
                f"{api_url}/v1/challenges/{category_id}/items/{item_id}/difficulty",
                json={"difficultyLevel": "easy", "gallery": [f"https://example.com/{i}.png"]},
            )
            r.raise_for_status()
    return category_id


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark category purge")
    parser.add_argument("--items", type=int, default=250, help="Challenge items to seed")
    parser.add_argument("--with-difficulty", action="store_true", help="Give every item a difficulty level")
    parser.add_argument("--output", type=str, default="/results/bench_purge.txt", help="Output file path")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")

    with httpx.Client(timeout=120.0) as client:
        print(f"Seeding category with {args.items} items...")
        t0 = time.perf_counter()
        category_id = seed_category(client, api_url, args.items, args.with_difficulty)
        seed_elapsed = time.perf_counter() - t0

        print(f"Deleting category {category_id}...")
        t0 = time.perf_counter()
        r = client.delete(f"{api_url}/v1/challenges/{category_id}")
        delete_elapsed = time.perf_counter() - t0
        if r.status_code != 200:
            print(f"Delete failed: {r.status_code} {r.text}")
            return 1

        r = client.get(f"{api_url}/v1/challenges/{category_id}/items")
        leftover = 0 if r.status_code == 404 else len(r.json())

    summary = (
        f"Purge benchmark (items={args.items}, difficulty={args.with_difficulty})\n"
        f"  Seed: {seed_elapsed:.2f} s\n"
        f"  Delete: {delete_elapsed * 1000:.1f} ms\n"
        f"  Leftover items: {leftover}\n"
    )
    print(summary)

    try:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(summary)
        print(f"Wrote {args.output}")
    except OSError:
        pass

    return 0 if leftover == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
