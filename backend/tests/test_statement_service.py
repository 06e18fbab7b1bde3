"""Tests for statement import and lookups."""

import pytest

from atelier.config import settings
from atelier.errors import ConflictError, NotFoundError, StatementParseError, ValidationError
from atelier.models.statement import BankStatement, Transaction
from atelier.models.uploaded_file import UploadedFile, UploadStatus
from atelier.schemas.allocation import SingleAllocation
from atelier.services import statement_service
from atelier.services.allocation_service import AllocationService, SqlAllocationRepository
from atelier.services.statement_service import SqlTransactionLookup


class TestImportStatement:
    """Test storing uploaded statements."""

    def test_stores_statement_and_transactions(self, db_session, cartola_xml):
        xml = cartola_xml([
            {"descripcion": "Pago", "abono": "100000", "saldo_diario": "500000"},
            {"descripcion": "Compra", "giro": "-25000", "saldo_diario": "475000"},
        ])
        result = statement_service.import_statement(db_session, xml, "enero.xml", uploaded_by="isi@example.cl")

        assert result.statement.id == "01-01-2024"
        assert result.statement.transaction_count == 2
        assert result.replaced_file_name is None

        statement = db_session.query(BankStatement).one()
        assert [t.id for t in statement.transactions] == ["enero.xml-0", "enero.xml-1"]
        assert [t.amount for t in statement.transactions] == [100000, -25000]

        upload = db_session.query(UploadedFile).one()
        assert upload.status == UploadStatus.completed
        assert upload.uploaded_by == "isi@example.cl"
        assert upload.transaction_count == 2

    def test_archives_processed_file(self, db_session, cartola_xml, upload_dirs):
        result = statement_service.import_statement(db_session, cartola_xml([]), "enero.xml")
        archived = upload_dirs["processed"] / f"{result.upload_id}_enero.xml"
        assert archived.exists()

    def test_archive_can_be_disabled(self, db_session, cartola_xml, upload_dirs, monkeypatch):
        monkeypatch.setattr(settings, "archive_uploads", False)
        statement_service.import_statement(db_session, cartola_xml([]), "enero.xml")
        assert not upload_dirs["processed"].exists()

    def test_parse_failure_is_recorded(self, db_session, cartola_xml, upload_dirs):
        """A structural failure stores nothing but the failed upload."""
        with pytest.raises(StatementParseError):
            statement_service.import_statement(db_session, cartola_xml(None), "roto.xml")

        assert db_session.query(BankStatement).count() == 0
        upload = db_session.query(UploadedFile).one()
        assert upload.status == UploadStatus.failed
        assert "movimientos" in upload.error_message
        assert len(list(upload_dirs["failed"].iterdir())) == 1

    def test_unsupported_file(self, db_session):
        with pytest.raises(ValidationError):
            statement_service.import_statement(db_session, "a,b", "enero.csv")

    def test_same_start_date_overwrites(self, db_session, cartola_xml):
        """A second file with the same fecha_desde replaces the first."""
        statement_service.import_statement(
            db_session, cartola_xml([{"abono": "1"}, {"abono": "2"}]), "primera.xml"
        )
        result = statement_service.import_statement(
            db_session, cartola_xml([{"giro": "-7"}]), "segunda.xml"
        )

        assert result.replaced_file_name == "primera.xml"
        statement = db_session.query(BankStatement).one()
        assert statement.file_name == "segunda.xml"
        assert [t.id for t in statement.transactions] == ["segunda.xml-0"]
        assert db_session.query(Transaction).count() == 1

    def test_overwrite_refused(self, db_session, cartola_xml):
        """With overwriting off the first statement is kept and a conflict raised."""
        statement_service.import_statement(db_session, cartola_xml([{"abono": "1"}]), "primera.xml")
        with pytest.raises(ConflictError):
            statement_service.import_statement(
                db_session, cartola_xml([{"giro": "-7"}]), "segunda.xml", overwrite=False
            )

        statement = db_session.query(BankStatement).one()
        assert statement.file_name == "primera.xml"
        failed = db_session.query(UploadedFile).filter(UploadedFile.status == UploadStatus.failed).one()
        assert failed.statement_id == "01-01-2024"

    def test_overwrite_setting(self, db_session, cartola_xml, monkeypatch):
        monkeypatch.setattr(settings, "allow_statement_overwrite", False)
        statement_service.import_statement(db_session, cartola_xml([]), "primera.xml")
        with pytest.raises(ConflictError):
            statement_service.import_statement(db_session, cartola_xml([]), "segunda.xml")

    def test_reupload_keeps_allocations(self, db_session, cartola_xml):
        """Re-importing the same file keeps transaction ids, so allocations still apply."""
        xml = cartola_xml([{"abono": "100"}])
        statement_service.import_statement(db_session, xml, "enero.xml")
        service = AllocationService(SqlAllocationRepository(db_session), SqlTransactionLookup(db_session))
        service.set_single("enero.xml-0", "p1")

        statement_service.import_statement(db_session, xml, "enero.xml")
        assert service.get("enero.xml-0") == SingleAllocation(project_id="p1")
        assert service.transactions.get("enero.xml-0").amount == 100

    def test_same_file_name_other_period(self, db_session, cartola_xml):
        """Reusing a file name for another period moves the transaction ids."""
        statement_service.import_statement(db_session, cartola_xml([{"abono": "1"}]), "cartola.xml")
        statement_service.import_statement(
            db_session, cartola_xml([{"abono": "2"}], fecha_desde="01-02-2024"), "cartola.xml"
        )
        row = db_session.query(Transaction).filter(Transaction.id == "cartola.xml-0").one()
        assert row.statement_id == "01-02-2024"
        assert row.amount == 2
        assert statement_service.get_statement(db_session, "01-01-2024").transactions == []


class TestLookups:
    """Test statement queries."""

    def test_list_sorted_by_period(self, db_session, cartola_xml):
        for name, start in [("feb.xml", "01-02-2024"), ("dic.xml", "01-12-2023"), ("ene.xml", "01-01-2024")]:
            statement_service.import_statement(db_session, cartola_xml([], fecha_desde=start), name)
        statements = statement_service.list_statements(db_session)
        assert [s.id for s in statements] == ["01-12-2023", "01-01-2024", "01-02-2024"]

    def test_unparseable_period_sorts_last(self):
        keys = sorted(["sin fecha", "01-01-2024"], key=statement_service.period_sort_key)
        assert keys == ["01-01-2024", "sin fecha"]

    def test_get_statement_missing(self, db_session):
        with pytest.raises(NotFoundError):
            statement_service.get_statement(db_session, "01-01-1999")

    def test_get_transaction(self, db_session, sample_statement):
        txn = statement_service.get_transaction(db_session, "enero.xml-2")
        assert txn.description == "Arriendo oficina"
        assert txn.amount == -25000
        assert statement_service.get_transaction(db_session, "nope") is None

    def test_statement_detail_labels(self, db_session, sample_statement, sample_project):
        allocations = {"enero.xml-0": SingleAllocation(project_id=sample_project.id)}
        detail = statement_service.statement_detail(sample_statement, allocations, [sample_project])
        labels = [t.allocation_label for t in detail.transactions]
        assert labels == ["[CAS]", "Sin Asignar", "Sin Asignar"]
        assert detail.transactions[0].amount_display == "$100.000"
        assert detail.transactions[1].amount_display == "-$90.000"

    def test_list_uploads_most_recent_first(self, db_session, cartola_xml):
        statement_service.import_statement(db_session, cartola_xml([]), "a.xml")
        statement_service.import_statement(db_session, cartola_xml([], fecha_desde="01-02-2024"), "b.xml")
        uploads = statement_service.list_uploads(db_session)
        assert len(uploads) == 2
