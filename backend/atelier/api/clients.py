"""
Client API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from atelier.dependencies import get_db
from atelier.errors import client_not_found
from atelier.models import Client, Project
from atelier.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientList,
)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=ClientList)
def list_clients(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """List all clients."""
    clients = db.query(Client).order_by(Client.last_name, Client.name).offset(skip).limit(limit).all()
    total = db.query(Client).count()

    return ClientList(
        items=clients,
        total=total
    )


@router.post("", response_model=ClientResponse, status_code=201)
def create_client(
    client: ClientCreate,
    db: Session = Depends(get_db)
):
    """Create a new client."""
    db_client = Client(**client.model_dump())
    db.add(db_client)
    db.commit()
    db.refresh(db_client)
    return db_client


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: str,
    db: Session = Depends(get_db)
):
    """Get a specific client."""
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail=client_not_found(client_id))
    return client


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: str,
    client_update: ClientUpdate,
    db: Session = Depends(get_db)
):
    """Update a client."""
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail=client_not_found(client_id))

    for field, value in client_update.model_dump(exclude_unset=True).items():
        setattr(client, field, value)

    db.commit()
    db.refresh(client)
    return client


@router.delete("/{client_id}", status_code=204)
def delete_client(
    client_id: str,
    db: Session = Depends(get_db)
):
    """Delete a client and drop it from the projects that reference it."""
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail=client_not_found(client_id))

    for project in db.query(Project).all():
        if project.main_client_id == client_id:
            project.main_client_id = None
        if client_id in (project.secondary_client_ids or []):
            project.secondary_client_ids = [
                cid for cid in project.secondary_client_ids if cid != client_id
            ]

    db.delete(client)
    db.commit()
    return None
