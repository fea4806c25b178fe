# backend/app/schemas/__init__.py
from .project import Project, ProjectCreate, ProjectSummary, ProjectDeleted, ReconcileResult

__all__ = [
    "Project", "ProjectCreate", "ProjectSummary", "ProjectDeleted", "ReconcileResult"
]
