"""
Project API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from atelier.dependencies import get_db
from atelier.errors import client_not_found, project_not_found
from atelier.models import Client, Project, ProjectStatus
from atelier.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectList,
)

router = APIRouter(prefix="/projects", tags=["projects"])


def _check_client(db: Session, client_id: Optional[str]) -> None:
    if client_id and not db.query(Client).filter(Client.id == client_id).first():
        raise HTTPException(status_code=404, detail=client_not_found(client_id))


@router.get("", response_model=ProjectList)
def list_projects(
    status: Optional[ProjectStatus] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """List projects ordered by display id."""
    query = db.query(Project)
    if status is not None:
        query = query.filter(Project.status == status)

    total = query.count()
    projects = query.order_by(Project.display_id).offset(skip).limit(limit).all()

    return ProjectList(
        items=projects,
        total=total
    )


@router.get("/statuses")
def list_statuses():
    """Lifecycle stages in order."""
    return [{"name": status.name, "value": status.value} for status in ProjectStatus]


@router.post("", response_model=ProjectResponse, status_code=201)
def create_project(
    project: ProjectCreate,
    db: Session = Depends(get_db)
):
    """Create a new project."""
    _check_client(db, project.main_client_id)

    db_project = Project(**project.model_dump())
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    return db_project


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    db: Session = Depends(get_db)
):
    """Get a specific project."""
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail=project_not_found(project_id))
    return project


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    db: Session = Depends(get_db)
):
    """Update a project."""
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail=project_not_found(project_id))

    update_data = project_update.model_dump(exclude_unset=True)
    if "main_client_id" in update_data:
        _check_client(db, update_data["main_client_id"])

    for field, value in update_data.items():
        setattr(project, field, value)

    db.commit()
    db.refresh(project)
    return project


@router.delete("/{project_id}", status_code=204)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db)
):
    """Delete a project. Allocations pointing at it are kept as they are."""
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise HTTPException(status_code=404, detail=project_not_found(project_id))

    db.delete(project)
    db.commit()
    return None
