"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from atelier.config import settings
from atelier.database import Base, get_db as database_get_db
from atelier.dependencies import get_db as dependencies_get_db
from atelier.main import app
from atelier.models.client import Client
from atelier.models.project import Project, ProjectStatus
from atelier.services import statement_service


def build_cartola(movements, **fields):
    """Render a cartola document.

    `movements` is a list of dicts with any of fecha_movimiento, descripcion,
    abono, giro, saldo_diario; keys left out are left out of the XML too.
    Pass movements=None to drop the <movimientos> container.
    """
    header = {
        "empresa_nombre": "Arquitectos Ltda",
        "cuenta_numero": "00-123-45678-9",
        "moneda": "CLP",
        "fecha_desde": "01-01-2024",
        "fecha_hasta": "31-01-2024",
    }
    header.update(fields)

    parts = ["<cartola>"]
    for tag, value in header.items():
        if value is not None:
            parts.append(f"<{tag}>{value}</{tag}>")
    if movements is not None:
        parts.append("<movimientos>")
        for movement in movements:
            parts.append("<movimiento>")
            for tag, value in movement.items():
                parts.append(f"<{tag}>{value}</{tag}>")
            parts.append("</movimiento>")
        parts.append("</movimientos>")
    parts.append("</cartola>")
    return "\n".join(parts)


@pytest.fixture
def cartola_xml():
    """Builder for cartola XML documents."""
    return build_cartola


@pytest.fixture(autouse=True)
def upload_dirs(tmp_path, monkeypatch):
    """Send archived uploads to a per-test directory."""
    processed = tmp_path / "processed"
    failed = tmp_path / "failed"
    monkeypatch.setattr(settings, "upload_processed_path", str(processed))
    monkeypatch.setattr(settings, "upload_failed_path", str(failed))
    monkeypatch.setattr(settings, "allow_statement_overwrite", True)
    return {"processed": processed, "failed": failed}


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database_get_db] = override_get_db
    app.dependency_overrides[dependencies_get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_client(db_session):
    """Create a sample client."""
    db_client = Client(
        id=str(uuid.uuid4()),
        name="Isidora",
        last_name="Irarrázaval",
        email="isidora@example.cl",
        phone="+56 9 1234 5678",
    )
    db_session.add(db_client)
    db_session.commit()
    db_session.refresh(db_client)
    return db_client


@pytest.fixture
def sample_project(db_session, sample_client):
    """Create a sample project."""
    project = Project(
        id=str(uuid.uuid4()),
        display_id="CAS",
        name="Casa Pirque",
        main_client_id=sample_client.id,
        secondary_client_ids=[],
        status=ProjectStatus.design,
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def second_project(db_session):
    """Create a second project to split against."""
    project = Project(
        id=str(uuid.uuid4()),
        display_id="OFI",
        name="Oficinas Vitacura",
        secondary_client_ids=[],
        status=ProjectStatus.construction,
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def sample_statement(db_session):
    """Import a January statement with one credit and two debits."""
    xml = build_cartola([
        {"fecha_movimiento": "02-01-2024", "descripcion": "Pago cliente Pirque",
         "abono": "100000", "saldo_diario": "500000"},
        {"fecha_movimiento": "05-01-2024", "descripcion": "Compra materiales",
         "abono": "", "giro": "-90000", "saldo_diario": "410000"},
        {"fecha_movimiento": "09-01-2024", "descripcion": "Arriendo oficina",
         "giro": "-25000", "saldo_diario": "385000"},
    ])
    statement_service.import_statement(db_session, xml, "enero.xml")
    return statement_service.get_statement(db_session, "01-01-2024")
