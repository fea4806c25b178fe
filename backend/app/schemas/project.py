# backend/app/schemas/project.py
from typing import List, Optional
from .base import BaseSchema, TimestampMixin

class ProjectCreate(BaseSchema):
    # Optional so a missing name reaches the handler and gets a 400, not a 422
    name: Optional[str] = None

class ProjectSummary(BaseSchema, TimestampMixin):
    id: int
    name: str

class Project(ProjectSummary):
    directory_path: Optional[str] = None

class ProjectDeleted(BaseSchema):
    message: str

class ReconcileResult(BaseSchema):
    removed: List[str] = []
    failed: List[str] = []
