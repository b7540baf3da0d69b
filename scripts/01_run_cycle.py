"""
scripts/01_run_cycle.py
Parse module (and optional history) files, run one generation cycle and
write the result bundle as JSON.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from oraculo.parsers.hit_loader import load_hits
from oraculo.parsers.module_parser import ModuleParser, read_groups
from oraculo.pipeline.generation_cycle import run_generation_cycle
from oraculo.utils.config import DEFAULT_ENTROPY, RANDOM_SEED
from oraculo.utils.logger import get_logger

log = get_logger("run_cycle")


def main():
    parser = argparse.ArgumentParser(description="Run one generation cycle")
    parser.add_argument("--modules", required=True, help="Text file of 7-line groups separated by blank lines")
    parser.add_argument("--history", default=None, help="Optional history file, same format")
    parser.add_argument("--hits", default=None, help="Optional hits JSON")
    parser.add_argument("--entropy", type=float, default=DEFAULT_ENTROPY)
    parser.add_argument("--seed", type=int, default=RANDOM_SEED)
    parser.add_argument("--output", default=None, help="Write JSON here instead of stdout")
    args = parser.parse_args()

    module_parser = ModuleParser()
    parsed = module_parser.parse(read_groups(args.modules))
    history = module_parser.parse(read_groups(args.history)).modules if args.history else []
    hits = load_hits(args.hits) if args.hits else []

    for err in parsed.errors:
        log.warning(err)

    rng = np.random.default_rng(args.seed)
    bundle = run_generation_cycle(parsed.modules, history, hits, [], entropy=args.entropy, rng=rng)

    for line in bundle.summary_lines():
        log.info(f"  {line}")

    payload = {"errors": parsed.errors, **bundle.to_dict()}
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        log.info(f"Cycle written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
