# tests/services/test_storage.py
from pathlib import Path

import pytest

from app.config import settings
from app.services.storage import (
    FALLBACK_SLUG,
    MAX_SLUG_LENGTH,
    StorageError,
    next_candidate,
    project_storage,
    slugify,
)


@pytest.mark.parametrize("name,expected", [
    ("My Project", "my_project"),
    ("my-project", "my_project"),
    ("Thesis 2024", "thesis_2024"),
    ("Über Notes", "_ber_notes"),
    ("a/b\\c", "a_b_c"),
    ("!!!", FALLBACK_SLUG),
    ("   ", FALLBACK_SLUG),
    ("x" * 300, "x" * MAX_SLUG_LENGTH),
    ("!" * 150 + "tail", FALLBACK_SLUG),
])
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_next_candidate():
    assert next_candidate("notes", 0) == "notes"
    assert next_candidate("notes", 1) == "notes_1"
    assert next_candidate("notes", 12) == "notes_12"


def test_provision_creates_subdirectories(projects_path):
    directory = project_storage.provision("Field Work")

    assert directory == (projects_path / "field_work").resolve()
    assert (directory / "notes").is_dir()
    assert (directory / "citations").is_dir()


def test_provision_skips_taken_names(projects_path):
    (projects_path / "field_work").mkdir()
    (projects_path / "field_work_1").mkdir()

    directory = project_storage.provision("Field Work")

    assert directory.name == "field_work_2"


def test_provision_creates_missing_root(tmp_path, monkeypatch):
    root = tmp_path / "nested" / "projects"
    monkeypatch.setattr(settings, "PROJECTS_PATH", root)

    directory = project_storage.provision("Fresh")

    assert directory == (root / "fresh").resolve()


def test_provision_gives_up_after_max_suffix(projects_path, monkeypatch):
    monkeypatch.setattr(settings, "MAX_DIRECTORY_SUFFIX", 2)
    for name in ("busy", "busy_1", "busy_2"):
        (projects_path / name).mkdir()

    with pytest.raises(StorageError):
        project_storage.provision("Busy")

    assert sorted(p.name for p in projects_path.iterdir()) == ["busy", "busy_1", "busy_2"]


def test_provision_handles_name_claimed_between_check_and_create(projects_path, monkeypatch):
    """A candidate that appears after the existence check is skipped, not reused"""
    claimed = projects_path / "race"
    claimed.mkdir()
    (claimed / "marker.txt").write_text("owned by another request")

    original_exists = Path.exists

    def stale_exists(self, *args, **kwargs):
        if self == claimed:
            return False
        return original_exists(self, *args, **kwargs)

    monkeypatch.setattr(Path, "exists", stale_exists)

    directory = project_storage.provision("Race")

    assert directory.name == "race_1"
    assert (claimed / "marker.txt").read_text() == "owned by another request"


def test_remove_deletes_tree(projects_path):
    directory = project_storage.provision("Disposable")
    (directory / "notes" / "draft.md").write_text("# Draft")

    project_storage.remove(directory)

    assert not directory.exists()


def test_remove_missing_directory(projects_path):
    project_storage.remove(projects_path / "never_created")
