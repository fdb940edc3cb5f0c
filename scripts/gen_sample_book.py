#!/usr/bin/env python3
"""Synthetic price-book generator.

Writes a price-book export in the positional layout the loader expects:
- Lines 1-3: banner (ignored by the loader)
- Line 4+: comma-separated item lines, a trailing empty terminator column

Optionally sprinkles in duplicate identifiers and short lines so the
rejection diagnostics have something to report.
"""
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from planogrammer.models.record import RECORD_SCHEMA

LINE_WIDTH = 62
BRANDS = ["acme", "globex", "initech", "umbrella", "stark", "wayne"]
NAMES = ["cola", "chips", "cookies", "gum", "water", "jerky", "mints", "soda"]
SIZES = ["12oz", "16oz", "20oz", "1l", "2oz", "3.5oz"]


def generate_line(index: int, rng: random.Random, subclasses: int) -> str:
    cols = [""] * LINE_WIDTH
    cols[RECORD_SCHEMA["brand"]] = rng.choice(BRANDS).upper()
    cols[RECORD_SCHEMA["name"]] = f"{rng.choice(NAMES).upper()}  {index}"
    cols[RECORD_SCHEMA["pack"]] = str(rng.choice([1, 6, 12, 24]))
    cols[RECORD_SCHEMA["size"]] = rng.choice(SIZES)
    cols[RECORD_SCHEMA["item_code"]] = f"{1000000 + index}"
    cols[RECORD_SCHEMA["restricted"]] = "*" if rng.random() < 0.05 else ""
    cols[RECORD_SCHEMA["upc"]] = f"{rng.randrange(10**11, 10**12)}"
    sub = rng.randrange(subclasses)
    cols[RECORD_SCHEMA["item_class"]] = f"C{sub // 4}"
    cols[RECORD_SCHEMA["subclass"]] = f"S{sub}"
    return ",".join(cols + [""])


def generate_book(items: int, *, subclasses: int = 20, noise: float = 0.0, seed: int = 42) -> str:
    rng = random.Random(seed)
    lines = [
        "PRICE BOOK EXPORT",
        "STORE,0001",
        f"ITEMS,{items}",
    ]
    for i in range(items):
        line = generate_line(i, rng, subclasses)
        lines.append(line)
        if noise and rng.random() < noise:
            # either repeat the line (duplicate) or cut it short
            lines.append(line if rng.random() < 0.5 else ",".join(line.split(",")[:8]))
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a synthetic price-book export")
    p.add_argument("output", type=Path, help="Destination file")
    p.add_argument("--items", type=int, default=1000, help="Number of item lines (default 1000)")
    p.add_argument("--subclasses", type=int, default=20, help="Distinct subclasses (default 20)")
    p.add_argument("--noise", type=float, default=0.0, help="Share of extra duplicate/short lines (0-1)")
    p.add_argument("--seed", type=int, default=42)
    args = p.parse_args(argv)

    if args.items < 0 or args.subclasses < 1 or not 0.0 <= args.noise <= 1.0:
        print("invalid arguments", file=sys.stderr)
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(
        generate_book(args.items, subclasses=args.subclasses, noise=args.noise, seed=args.seed),
        encoding="utf-8",
    )
    print(f"wrote {args.items} items to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
