"""initial schema: projects, clients, statements, allocations, uploads

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "001"
down_revision = None
branch_labels = None
depends_on = None

PROJECT_STATUSES = (
    "proposal", "survey", "preliminary_design", "design",
    "bidding", "construction", "finished", "lost",
)


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_table(
        "projects",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("display_id", sa.String(3), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("start_date", sa.String(10), nullable=True),
        sa.Column("end_date", sa.String(10), nullable=True),
        sa.Column("main_client_id", sa.String(36), sa.ForeignKey("clients.id"), nullable=True),
        sa.Column("secondary_client_ids", sa.JSON, nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("status", sa.Enum(*PROJECT_STATUSES, name="projectstatus"), nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_table(
        "bank_statements",
        sa.Column("id", sa.String(32), primary_key=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("account_number", sa.String(64), nullable=False),
        sa.Column("currency", sa.String(16), nullable=False),
        sa.Column("period_from", sa.String(32), nullable=False),
        sa.Column("period_to", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_table(
        "transactions",
        sa.Column("id", sa.String(300), primary_key=True),
        sa.Column("statement_id", sa.String(32), sa.ForeignKey("bank_statements.id"), nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("date", sa.String(32), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("amount", sa.Float, nullable=False),
        sa.Column("balance", sa.Float, nullable=False),
    )
    op.create_index(
        "idx_transaction_statement_position", "transactions", ["statement_id", "position"]
    )
    op.create_table(
        "allocations",
        sa.Column("transaction_id", sa.String(300), primary_key=True),
        sa.Column("allocation_type", sa.Enum("single", "prorated", name="allocationtype"), nullable=False),
        sa.Column("project_id", sa.String(36), nullable=True),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_table(
        "prorated_splits",
        sa.Column("row_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "allocation_id", sa.String(300),
            sa.ForeignKey("allocations.transaction_id"), nullable=False, index=True
        ),
        sa.Column("split_id", sa.String(64), nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("project_id", sa.String(36), nullable=True),
        sa.Column("amount", sa.Float, nullable=False),
    )
    op.create_table(
        "uploaded_files",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("statement_id", sa.String(32), nullable=True),
        sa.Column("status", sa.Enum("completed", "failed", name="uploadstatus"), nullable=False),
        sa.Column("transaction_count", sa.Integer, nullable=False),
        sa.Column("replaced_file_name", sa.String(255), nullable=True),
        sa.Column("error_message", sa.Text, nullable=True),
        sa.Column("uploaded_by", sa.String(255), nullable=True),
        sa.Column("uploaded_at", sa.DateTime, nullable=False),
    )


def downgrade() -> None:
    op.drop_table("uploaded_files")
    op.drop_table("prorated_splits")
    op.drop_table("allocations")
    op.drop_index("idx_transaction_statement_position", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("bank_statements")
    op.drop_table("projects")
    op.drop_table("clients")
