# backend/app/services/cleanup.py
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Project
from ..utils.logging import service_logger
from .storage import project_storage


class CleanupService:
    """Best-effort removal of project directories"""

    @staticmethod
    async def delete_project_directory(directory_path: Optional[str]) -> bool:
        """Remove a project's directory tree.

        Failures are logged as warnings and reported through the return value;
        they never propagate, since the database row is already gone.
        """
        if not directory_path:
            return True

        try:
            project_storage.remove(Path(directory_path))
            service_logger.info(f"Project directory deleted: {directory_path}")
            return True
        except OSError as e:
            service_logger.warning(f"Could not delete project directory: {directory_path}", extra={
                "directory_path": directory_path,
                "error": str(e)
            })
            return False

    @staticmethod
    async def reconcile_project_directories(db: Session) -> Dict[str, List[str]]:
        """Remove directories under PROJECTS_PATH that no project row points at"""
        root = settings.PROJECTS_PATH
        result: Dict[str, List[str]] = {"removed": [], "failed": []}
        if not root.exists():
            return result

        referenced = {
            Path(path).resolve()
            for (path,) in db.query(Project.directory_path)
            .filter(Project.directory_path.isnot(None))
            .all()
        }

        for item in sorted(root.iterdir()):
            if not item.is_dir() or item.resolve() in referenced:
                continue

            # Reported the way directory_path is stored
            directory_path = str(item.resolve())
            if await CleanupService.delete_project_directory(directory_path):
                result["removed"].append(directory_path)
            else:
                result["failed"].append(directory_path)

        service_logger.info("Reconciled project directories", extra={
            "removed_count": len(result["removed"]),
            "failed_count": len(result["failed"])
        })
        return result


cleanup_service = CleanupService()
