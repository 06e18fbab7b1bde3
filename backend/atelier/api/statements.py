"""
Bank statement API endpoints.
"""

from fastapi import APIRouter, Depends, UploadFile, File, Form, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from atelier.dependencies import get_db, get_allocation_service
from atelier.errors import ConflictError, NotFoundError, StatementParseError
from atelier.models import Project
from atelier.schemas.statement import (
    StatementDetailResponse,
    StatementList,
    StatementUploadResponse,
)
from atelier.schemas.uploaded_file import UploadedFileResponse
from atelier.services import statement_service
from atelier.services.allocation_service import AllocationService

router = APIRouter(prefix="/statements", tags=["statements"])


@router.post("/upload", response_model=StatementUploadResponse, status_code=201)
async def upload_statement(
    file: UploadFile = File(...),
    uploaded_by: Optional[str] = Form(None),
    overwrite: Optional[bool] = Query(None),
    db: Session = Depends(get_db)
):
    """Upload a cartola XML file"""
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    if statement_service.get_parser(file.filename) is None:
        raise HTTPException(
            status_code=400,
            detail="File type not supported. Allowed: .xml"
        )

    content = await file.read()
    try:
        return statement_service.import_statement(
            db, content, file.filename, uploaded_by=uploaded_by, overwrite=overwrite
        )
    except StatementParseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=StatementList)
def list_statements(
    db: Session = Depends(get_db)
):
    """List statements, oldest period first"""
    statements = statement_service.list_statements(db)
    return StatementList(
        items=[statement_service.statement_summary(s) for s in statements],
        total=len(statements)
    )


@router.get("/uploads", response_model=list[UploadedFileResponse])
def get_upload_history(
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db)
):
    """Most recent upload attempts first"""
    uploads = statement_service.list_uploads(db, limit)
    return [UploadedFileResponse.model_validate(upload) for upload in uploads]


@router.get("/{statement_id}", response_model=StatementDetailResponse)
def get_statement(
    statement_id: str,
    db: Session = Depends(get_db),
    allocation_service: AllocationService = Depends(get_allocation_service)
):
    """Statement with its transactions and their allocations"""
    try:
        statement = statement_service.get_statement(db, statement_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    projects = db.query(Project).all()
    return statement_service.statement_detail(statement, allocation_service.all(), projects)
