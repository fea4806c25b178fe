# backend/app/exceptions.py
from fastapi import HTTPException


class ProjectAPIError(HTTPException):
    """Base error for project endpoints; `message` is what the client sees"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        super().__init__(status_code=status_code, detail=message)


class ProjectValidationError(ProjectAPIError):
    def __init__(self, message: str = "Project name is required"):
        super().__init__(message=message, status_code=400)


class ProjectNotFoundError(ProjectAPIError):
    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, status_code=404)


class ProjectServerError(ProjectAPIError):
    def __init__(self, message: str):
        super().__init__(message=message, status_code=500)
