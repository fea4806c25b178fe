# backend/app/models/__init__.py
from ..database import Base
from .project import Project
from .task import Task
from .note import Note
from .citation import Citation

__all__ = [
    "Base",
    "Project",
    "Task",
    "Note",
    "Citation"
]
