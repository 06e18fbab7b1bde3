"""
Project database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
import enum
from atelier.database import Base


class ProjectStatus(str, enum.Enum):
    """Project lifecycle stages, in order."""
    proposal = "Propuesta"
    survey = "Levantamiento"
    preliminary_design = "Anteproyecto"
    design = "Proyecto"
    bidding = "Licitación"
    construction = "Construcción"
    finished = "Terminado"
    lost = "Perdido"


class Project(Base):
    """Project model."""

    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    display_id = Column(String(3), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(String(10), nullable=True)  # ISO date from the form
    end_date = Column(String(10), nullable=True)
    main_client_id = Column(String(36), ForeignKey("clients.id"), nullable=True)
    secondary_client_ids = Column(JSON, default=list, nullable=False)
    location = Column(String(255), nullable=True)
    status = Column(Enum(ProjectStatus), nullable=False, default=ProjectStatus.proposal)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    main_client = relationship("Client", back_populates="main_projects")

    @property
    def label(self) -> str:
        """Selector label, e.g. "[CAS] Casa Pirque"."""
        return f"[{self.display_id}] {self.name}"
