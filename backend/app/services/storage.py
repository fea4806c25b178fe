# backend/app/services/storage.py
import re
import shutil
from pathlib import Path

from ..config import settings
from ..utils.logging import service_logger

SLUG_INVALID_CHARS = re.compile(r"[^A-Za-z0-9]")
FALLBACK_SLUG = "project"
PROJECT_SUBDIRECTORIES = ("notes", "citations")
# Leaves room for a numeric suffix under the usual 255-byte filename limit
MAX_SLUG_LENGTH = 100


class StorageError(Exception):
    """Raised when a project directory cannot be provisioned"""


def slugify(name: str) -> str:
    """Filesystem-safe directory name for a project name.

    Every character outside [A-Za-z0-9] becomes an underscore, then the result
    is lowercased and cut to MAX_SLUG_LENGTH. Names without a single
    alphanumeric character fall back to FALLBACK_SLUG so the directory is
    never empty or all underscores.
    """
    slug = SLUG_INVALID_CHARS.sub("_", name).lower()[:MAX_SLUG_LENGTH]
    if not slug.strip("_"):
        return FALLBACK_SLUG
    return slug


def next_candidate(slug: str, n: int) -> str:
    """The n-th directory name to try for a slug: `slug`, `slug_1`, `slug_2`, ..."""
    if n == 0:
        return slug
    return f"{slug}_{n}"


class ProjectStorage:
    """Creates and removes per-project directory trees under PROJECTS_PATH"""

    @staticmethod
    def provision(name: str) -> Path:
        """Claim a unique directory for `name` and create its subdirectories.

        Candidates are probed in order up to MAX_DIRECTORY_SUFFIX. A candidate
        is claimed with a non-overwriting mkdir, so a name taken by a
        concurrent request between the existence check and the mkdir is
        skipped rather than shared.
        """
        root = settings.PROJECTS_PATH
        root.mkdir(parents=True, exist_ok=True)
        slug = slugify(name)

        for n in range(settings.MAX_DIRECTORY_SUFFIX + 1):
            candidate = root / next_candidate(slug, n)
            if candidate.exists():
                if n == 0:
                    service_logger.info(f"Directory {candidate} already exists, using incremental name")
                continue

            try:
                candidate.mkdir()
            except FileExistsError:
                service_logger.info("Directory claimed by another request, trying next name", extra={
                    "directory": str(candidate)
                })
                continue

            try:
                for subdirectory in PROJECT_SUBDIRECTORIES:
                    (candidate / subdirectory).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                shutil.rmtree(candidate, ignore_errors=True)
                raise StorageError(f"Could not create subdirectories in {candidate}") from e

            service_logger.info(f"Project directories created at: {candidate}")
            return candidate.resolve()

        raise StorageError(
            f"No free directory name for '{slug}' within {settings.MAX_DIRECTORY_SUFFIX} suffixes"
        )

    @staticmethod
    def remove(directory: Path) -> None:
        """Recursively remove a project directory; a missing directory is not an error"""
        directory = Path(directory)
        if not directory.exists():
            return
        shutil.rmtree(directory)


project_storage = ProjectStorage()
