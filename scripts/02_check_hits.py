"""
scripts/02_check_hits.py
Check a generation JSON against the actual drawn module and write the hits
JSON consumed by 01_run_cycle.py --hits.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from oraculo.parsers.module_parser import ModuleParser, read_groups
from oraculo.pipeline.hit_checker import check_hits
from oraculo.utils.logger import get_logger

log = get_logger("check_hits")


def main():
    parser = argparse.ArgumentParser(description="Check generated rows against a draw")
    parser.add_argument("--generation", required=True, help="JSON written by 01_run_cycle.py")
    parser.add_argument("--draw", required=True, help="Text file with the drawn 7-line module")
    parser.add_argument("--output", default=None)
    args = parser.parse_args()

    gen_path = Path(args.generation)
    if not gen_path.exists():
        raise FileNotFoundError(f"Generation file not found: {gen_path}")
    with open(gen_path, "r", encoding="utf-8") as f:
        generation = json.load(f)

    parsed = ModuleParser().parse(read_groups(args.draw))
    for err in parsed.errors:
        log.warning(err)
    if not parsed.modules:
        log.error(f"No draw found in {args.draw}")
        sys.exit(1)

    outcome = check_hits(generation["result"], parsed.modules[0])
    if not outcome["success"]:
        sys.exit(1)

    payload = {
        "hits": [h.to_dict() for h in outcome["hits"]],
        "levels": outcome["levels"],
        "hit_count": outcome["hit_count"],
    }
    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        log.info(f"Hits written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
