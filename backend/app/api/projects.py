# backend/app/api/projects.py
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..exceptions import ProjectAPIError, ProjectNotFoundError, ProjectServerError, ProjectValidationError
from ..models import Project, Task, Note, Citation
from ..schemas.project import (
    ProjectCreate,
    Project as ProjectSchema,
    ProjectSummary,
    ProjectDeleted,
    ReconcileResult,
)
from ..services.cleanup import cleanup_service
from ..services.storage import project_storage
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/projects", tags=["projects"])

# Deleted in this order before the project row itself
DEPENDENT_MODELS = (Task, Note, Citation)


@router.get("", response_model=List[ProjectSummary])
async def list_projects(db: Session = Depends(get_db)):
    """List all projects, newest first"""
    api_logger.info("Starting projects list operation", extra={
        "endpoint": "/api/projects",
        "method": "GET"
    })

    try:
        rows = db.query(Project.id, Project.name, Project.created_at) \
            .order_by(Project.created_at.desc(), Project.id.desc()) \
            .all()
        api_logger.info(f"Found {len(rows)} projects")
        return [ProjectSummary.model_validate(row) for row in rows]
    except Exception as e:
        api_logger.error("Failed to list projects", extra={"error": str(e)}, exc_info=True)
        raise ProjectServerError("Failed to get projects") from e


@router.post("", response_model=ProjectSchema, status_code=status.HTTP_201_CREATED)
async def create_project(project: Optional[ProjectCreate] = None, db: Session = Depends(get_db)):
    name = project.name if project else None
    if not name or not name.strip():
        api_logger.warning("Rejected project without a name")
        raise ProjectValidationError()

    api_logger.info("Creating new project", extra={"project_name": name})

    directory = None
    committed = False
    try:
        directory = project_storage.provision(name)

        # The stored name is the user's input; only the directory uses the slug
        db_project = Project(name=name)
        db.add(db_project)
        db.flush()

        db_project.directory_path = str(directory)
        db.commit()
        committed = True
        db.refresh(db_project)

        api_logger.info("Project created successfully", extra={
            "project_id": db_project.id,
            "project_name": db_project.name,
            "directory_path": db_project.directory_path
        })
        return db_project
    except Exception as e:
        api_logger.error("Failed to create project", extra={
            "project_name": name,
            "committed": committed,
            "error": str(e)
        }, exc_info=True)
        # Once committed the row owns the directory, so it must stay
        if not committed:
            db.rollback()
            if directory is not None:
                await cleanup_service.delete_project_directory(str(directory))
        raise ProjectServerError("Failed to create project") from e


@router.get("/{project_id}", response_model=ProjectSchema)
async def get_project(project_id: int, db: Session = Depends(get_db)):
    api_logger.info("Fetching project", extra={"project_id": project_id})

    try:
        project = db.query(Project).filter(Project.id == project_id).first()
        if not project:
            api_logger.warning("Project not found", extra={"project_id": project_id})
            raise ProjectNotFoundError()
        return project
    except ProjectAPIError:
        raise
    except Exception as e:
        api_logger.error("Failed to get project", extra={
            "project_id": project_id,
            "error": str(e)
        }, exc_info=True)
        raise ProjectServerError("Failed to get project") from e


@router.delete("/{project_id}", response_model=ProjectDeleted)
async def delete_project(project_id: int, db: Session = Depends(get_db)):
    """Delete a project, its tasks, notes and citations, then its directory"""
    api_logger.info("Deleting project", extra={"project_id": project_id})

    try:
        project = db.query(Project).filter(Project.id == project_id).first()
        if not project:
            api_logger.warning("Project not found for deletion", extra={"project_id": project_id})
            raise ProjectNotFoundError()

        directory_path = project.directory_path

        for model in DEPENDENT_MODELS:
            deleted = db.query(model) \
                .filter(model.project_id == project_id) \
                .delete(synchronize_session=False)
            api_logger.debug(f"Deleted {deleted} rows from {model.__tablename__}", extra={
                "project_id": project_id
            })

        db.query(Project).filter(Project.id == project_id).delete(synchronize_session=False)
        db.commit()
    except ProjectAPIError:
        raise
    except Exception as e:
        db.rollback()
        api_logger.error("Failed to delete project", extra={
            "project_id": project_id,
            "error": str(e)
        }, exc_info=True)
        raise ProjectServerError("Failed to delete project") from e

    api_logger.info(f"Successfully deleted project {project_id}")

    # The committed deletion stands whatever happens to the directory
    await cleanup_service.delete_project_directory(directory_path)

    return {"message": "Project deleted successfully"}


@router.post("/maintenance/reconcile", response_model=ReconcileResult)
async def reconcile_project_directories(db: Session = Depends(get_db)):
    """Remove project directories left behind by failed best-effort deletes"""
    api_logger.info("Reconciling project directories")

    try:
        return await cleanup_service.reconcile_project_directories(db)
    except Exception as e:
        api_logger.error("Failed to reconcile project directories", extra={"error": str(e)}, exc_info=True)
        raise ProjectServerError("Failed to reconcile project directories") from e
