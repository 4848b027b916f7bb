"""Generate dummy test data for Review Mode.

This script creates a ``shots`` directory populated with a few image
sets that follow a shared naming convention, plus some files that
must not be picked up.  Running this script is idempotent – an
existing ``shots`` directory is removed and recreated.

Usage::

    python generate_test_data.py --output /path/to/test_root

This will produce the following structure::

    test_root/
      shots/
        shot_1_diffuse.jpg      shot_1_specular.jpg      shot_1_normal.png
        shot_2_diffuse.jpg      shot_2_specular.jpg      shot_2_normal.png
        shot_10_diffuse.jpg     shot_10_specular.jpg                       (normal missing)
        shot_11_diffuse.jpg                                                (single slot)
        shot_001_diffuse.jpg    shot_001_specular.jpg                      (padding variant)
        notes.txt
        .DS_Store

Open ``shot_1_diffuse.jpg``, ``shot_1_specular.jpg`` and
``shot_1_normal.png`` in the viewer (or pass them to
``python -m review_mode.cli scan``) to review the sets.
"""

import argparse
import shutil
from pathlib import Path


def create_file(path: Path, size: int = 128) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        f.write(b"\0" * size)


def generate(output: Path) -> None:
    shots = output / "shots"
    if shots.exists():
        shutil.rmtree(shots)
    shots.mkdir(parents=True)
    # Complete sets
    for radix in ("shot_1", "shot_2"):
        create_file(shots / f"{radix}_diffuse.jpg")
        create_file(shots / f"{radix}_specular.jpg")
        create_file(shots / f"{radix}_normal.png")
    # Partial set: still qualifies with the default threshold of 2 slots
    create_file(shots / "shot_10_diffuse.jpg")
    create_file(shots / "shot_10_specular.jpg")
    # Single slot: filtered out
    create_file(shots / "shot_11_diffuse.jpg")
    # Same number, different padding: a separate set
    create_file(shots / "shot_001_diffuse.jpg")
    create_file(shots / "shot_001_specular.jpg")
    # Noise
    create_file(shots / "notes.txt")
    create_file(shots / ".DS_Store")


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate test data for Review Mode")
    parser.add_argument("--output", type=Path, default=Path("."), help="Directory to place test data")
    args = parser.parse_args()
    generate(args.output.resolve())
    print(f"Test data generated under {args.output.resolve()}")


if __name__ == "__main__":
    main()
