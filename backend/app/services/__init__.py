# backend/app/services/__init__.py
from .storage import project_storage, slugify, next_candidate, StorageError
from .cleanup import cleanup_service

__all__ = ["project_storage", "slugify", "next_candidate", "StorageError", "cleanup_service"]
