from __future__ import annotations

from pathlib import Path

import pytest

from review_mode.errors import ScanError
from review_mode.patterns import PatternSet, build_pattern_set
from review_mode.radix import extract_radix
from review_mode.scanner import DirectoryIndex, scan_directory, scan_radixes


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_bytes(b"")


def _patterns(directory: Path, *names: str) -> PatternSet:
    return build_pattern_set(extract_radix([str(directory / name) for name in names]))


def _scan(directory: Path, patterns: PatternSet, min_slots_matched: int = 2) -> list[str]:
    return scan_radixes(DirectoryIndex.read(directory), patterns, min_slots_matched)


def test_scan_finds_radixes_same_extension(tmp_path: Path) -> None:
    for radix in ("shot_001", "shot_002", "shot_003"):
        _touch(tmp_path, f"{radix}_diffuse.jpg", f"{radix}_specular.jpg")
    _touch(tmp_path, "unrelated.txt")
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    assert _scan(tmp_path, patterns) == ["shot_001", "shot_002", "shot_003"]


def test_scan_finds_radixes_mixed_extensions(tmp_path: Path) -> None:
    for radix in ("shot_001", "shot_002", "shot_003"):
        _touch(tmp_path, f"{radix}.jpg", f"{radix}_diffuse.tiff", f"{radix}_specular.jpeg")
    _touch(tmp_path, "unrelated.txt")
    patterns = _patterns(tmp_path, "shot_001.jpg", "shot_001_diffuse.tiff", "shot_001_specular.jpeg")
    assert _scan(tmp_path, patterns) == ["shot_001", "shot_002", "shot_003"]


def test_scan_bare_radix_slot_beside_same_extension_slot(tmp_path: Path) -> None:
    for radix in ("shot_001", "shot_002"):
        _touch(tmp_path, f"{radix}.jpg", f"{radix}_x.jpg")
    _touch(tmp_path, "shot_003_x.jpg")
    patterns = _patterns(tmp_path, "shot_001.jpg", "shot_001_x.jpg")
    index = DirectoryIndex.read(tmp_path)
    assert index.assign(patterns)["shot_003_x.jpg"] == (1, "shot_003")
    assert scan_radixes(index, patterns) == ["shot_001", "shot_002"]
    assert scan_radixes(index, patterns, min_slots_matched=1) == ["shot_001", "shot_002", "shot_003"]


def test_scan_uses_natural_order(tmp_path: Path) -> None:
    for radix in ("shot_10", "shot_2", "shot_1"):
        _touch(tmp_path, f"{radix}_a.jpg", f"{radix}_b.jpg")
    patterns = _patterns(tmp_path, "shot_1_a.jpg", "shot_1_b.jpg")
    assert _scan(tmp_path, patterns) == ["shot_1", "shot_2", "shot_10"]


def test_padding_variants_are_distinct_radixes(tmp_path: Path) -> None:
    _touch(tmp_path, "shot_1_a.jpg", "shot_1_b.jpg", "shot_001_a.jpg", "shot_001_b.jpg")
    patterns = _patterns(tmp_path, "shot_1_a.jpg", "shot_1_b.jpg")
    assert _scan(tmp_path, patterns) == ["shot_001", "shot_1"]


def test_single_slot_match_is_filtered_out(tmp_path: Path) -> None:
    _touch(tmp_path, "shot_003_diffuse.jpg")
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    assert _scan(tmp_path, patterns) == []


def test_threshold_one_includes_partial_sets(tmp_path: Path) -> None:
    _touch(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg", "shot_003_diffuse.jpg")
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    assert _scan(tmp_path, patterns, min_slots_matched=2) == ["shot_001"]
    assert _scan(tmp_path, patterns, min_slots_matched=1) == ["shot_001", "shot_003"]


def test_partial_match_two_of_three(tmp_path: Path) -> None:
    _touch(tmp_path, "shot_003.jpg", "shot_003_diffuse.tiff")
    patterns = _patterns(tmp_path, "shot_001.jpg", "shot_001_diffuse.tiff", "shot_001_specular.jpeg")
    assert _scan(tmp_path, patterns) == ["shot_003"]


def test_threshold_above_slot_count_means_all_slots(tmp_path: Path) -> None:
    _touch(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg", "shot_002_diffuse.jpg")
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    assert _scan(tmp_path, patterns, min_slots_matched=5) == ["shot_001"]


def test_threshold_below_one_is_rejected(tmp_path: Path) -> None:
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    with pytest.raises(ValueError):
        _scan(tmp_path, patterns, min_slots_matched=0)


def test_entry_claims_only_its_first_matching_slot(tmp_path: Path) -> None:
    _touch(tmp_path, "a_x.jpg", "a_y.jpg")
    patterns = _patterns(tmp_path, "a_x.jpg", "a_y.jpg").with_texts(
        [r"^(?P<radix>.+)_.\.jpg$", r"^(?P<radix>.+)_y\.jpg$"]
    )
    assert _scan(tmp_path, patterns, min_slots_matched=2) == []
    assert _scan(tmp_path, patterns, min_slots_matched=1) == ["a"]


def test_directories_and_hidden_files_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "shot_009_diffuse.jpg").mkdir()
    _touch(tmp_path, "shot_009_specular.jpg", "._shot_004_diffuse.jpg", "shot_004_specular.jpg")
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    index = DirectoryIndex.read(tmp_path)
    assert "shot_009_diffuse.jpg" not in index.entries
    assert "._shot_004_diffuse.jpg" not in index.entries
    assert scan_radixes(index, patterns) == []


def test_repeated_scans_are_identical(tmp_path: Path) -> None:
    for i in range(1, 40):
        _touch(tmp_path, f"cam{i}_left.png", f"cam{i}_right.png")
    patterns = _patterns(tmp_path, "cam1_left.png", "cam1_right.png")
    first = scan_directory(tmp_path, patterns)
    assert first == scan_directory(tmp_path, patterns)
    assert first[:3] == ["cam1", "cam2", "cam3"]
    assert len(first) == 39


def test_snapshot_does_not_follow_later_changes(tmp_path: Path) -> None:
    _touch(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    index = DirectoryIndex.read(tmp_path)
    _touch(tmp_path, "shot_002_diffuse.jpg", "shot_002_specular.jpg")
    patterns = _patterns(tmp_path, "shot_001_diffuse.jpg", "shot_001_specular.jpg")
    assert scan_radixes(index, patterns) == ["shot_001"]
    assert _scan(tmp_path, patterns) == ["shot_001", "shot_002"]


def test_missing_directory_raises_scan_error(tmp_path: Path) -> None:
    with pytest.raises(ScanError) as excinfo:
        DirectoryIndex.read(tmp_path / "gone")
    assert excinfo.value.directory == tmp_path / "gone"
