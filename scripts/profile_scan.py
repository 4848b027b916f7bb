from __future__ import annotations

import argparse
import cProfile
import json
import pstats
import sys
import tempfile
import time
from pathlib import Path


def _build_navigator():
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))

    from review_mode.navigator import ReviewNavigator

    return ReviewNavigator()


def _populate(directory: Path, sets: int, slots: list[str], noise: int) -> list[Path]:
    for i in range(1, sets + 1):
        for tail in slots:
            (directory / f"shot_{i:05d}{tail}").write_bytes(b"")
    for i in range(noise):
        (directory / f"noise_{i}.txt").write_bytes(b"")
    return [directory / f"shot_00001{tail}" for tail in slots]


def main() -> int:
    parser = argparse.ArgumentParser(description="Profile ReviewNavigator activation and a full walk.")
    parser.add_argument("--sets", type=int, default=5000, help="Number of synthetic file-sets to create")
    parser.add_argument("--noise", type=int, default=2000, help="Number of unrelated files to add")
    parser.add_argument("--walk", type=int, default=200, help="Number of next() steps to time after activation")
    parser.add_argument("--profile", action="store_true", help="Enable cProfile and print top cumulative functions")
    parser.add_argument("--stats", type=int, default=30, help="Number of cProfile rows to print")
    parser.add_argument("--sort", default="cumulative", help="cProfile sort key (default: cumulative)")
    parser.add_argument("--json-out", type=Path, default=None, help="Optional JSON output path for benchmark metrics")
    args = parser.parse_args()

    slots = ["_diffuse.jpg", "_specular.jpg", "_normal.png"]
    navigator = _build_navigator()

    with tempfile.TemporaryDirectory(prefix="review_mode_profile_") as tmp:
        directory = Path(tmp)
        loaded = _populate(directory, args.sets, slots, args.noise)
        print(f"directory={directory}")
        print(f"entries={args.sets * len(slots) + args.noise}")

        prof = cProfile.Profile() if args.profile else None
        if prof is not None:
            prof.enable()

        start = time.perf_counter()
        navigator.activate([str(p) for p in loaded])
        activate_seconds = time.perf_counter() - start

        start = time.perf_counter()
        for _ in range(args.walk):
            navigator.next()
        walk_seconds = time.perf_counter() - start

        if prof is not None:
            prof.disable()

    index, total = navigator.position
    ms_per_step = (walk_seconds * 1000.0) / args.walk if args.walk else 0.0
    print(f"sets_found={total}")
    print(f"final_index={index}")
    print(f"activate_seconds={activate_seconds:.3f}")
    print(f"ms_per_step={ms_per_step:.2f}")

    metrics = {
        "version": 1,
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "sets": int(args.sets),
        "noise": int(args.noise),
        "sets_found": total,
        "activate_seconds": round(activate_seconds, 6),
        "walk_steps": int(args.walk),
        "ms_per_step": round(ms_per_step, 6),
    }
    if args.json_out is not None:
        out_path = args.json_out.resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(metrics, indent=2), encoding="utf-8")
        print(f"json_out={out_path}")

    if prof is not None:
        stats = pstats.Stats(prof)
        stats.sort_stats(args.sort).print_stats(args.stats)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
