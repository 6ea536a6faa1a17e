"""create students, transactions, events and employees tables

Revision ID: a1f0c3d9e2b4
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "a1f0c3d9e2b4"
down_revision = None
branch_labels = None
depends_on = None

ENUMS = {
    "enrollment_status": ("active", "suspended", "transferred"),
    "financial_status": ("pending", "paid", "late"),
    "transaction_type": ("income", "expense"),
    "transaction_status": ("completed", "pending", "cancelled"),
    "department": ("Docentes", "Administrativo", "Serviços Gerais", "Segurança", "Direção"),
    "contract_type": ("Tempo Integral", "Tempo Parcial", "Prestador de Serviço"),
    "employee_status": ("active", "vacation", "inactive"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _common() -> list:
    return [
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    op.create_table(
        "students",
        *_common(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("enrollment_id", sa.String(64), nullable=False),
        sa.Column("grade", sa.String(64), nullable=False),
        sa.Column("balance", sa.Float(), nullable=False),
        sa.Column("status", _enum("enrollment_status"), nullable=False),
        sa.Column("financial_status", _enum("financial_status"), nullable=False),
        sa.Column("paid_months", postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column("personal", postgresql.JSONB(), nullable=False),
        sa.Column("academic", postgresql.JSONB(), nullable=False),
        sa.Column("guardians", postgresql.JSONB(), nullable=False),
        sa.Column("health", postgresql.JSONB(), nullable=False),
    )
    op.create_index(op.f("ix_students_id"), "students", ["id"], unique=False)
    op.create_index(op.f("ix_students_enrollment_id"), "students", ["enrollment_id"], unique=False)
    op.create_index(op.f("ix_students_financial_status"), "students", ["financial_status"], unique=False)

    op.create_table(
        "transactions",
        *_common(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("type", _enum("transaction_type"), nullable=False),
        sa.Column("category", sa.String(128), nullable=False),
        sa.Column("method", sa.String(64), nullable=False),
        sa.Column("status", _enum("transaction_status"), nullable=False),
        sa.Column("attachment", sa.Text(), nullable=True),
        sa.Column("student_id", sa.String(64), nullable=True),
        sa.Column("paid_months", postgresql.ARRAY(sa.String()), nullable=False),
    )
    op.create_index(op.f("ix_transactions_id"), "transactions", ["id"], unique=False)
    op.create_index(op.f("ix_transactions_date"), "transactions", ["date"], unique=False)
    op.create_index(op.f("ix_transactions_type"), "transactions", ["type"], unique=False)
    op.create_index(op.f("ix_transactions_status"), "transactions", ["status"], unique=False)
    op.create_index(op.f("ix_transactions_student_id"), "transactions", ["student_id"], unique=False)

    op.create_table(
        "events",
        *_common(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
    )
    op.create_index(op.f("ix_events_id"), "events", ["id"], unique=False)
    op.create_index(op.f("ix_events_start_time"), "events", ["start_time"], unique=False)

    op.create_table(
        "employees",
        *_common(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(128), nullable=False),
        sa.Column("department", _enum("department"), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(64), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("contract_type", _enum("contract_type"), nullable=False),
        sa.Column("admission_date", sa.Date(), nullable=True),
        sa.Column("status", _enum("employee_status"), nullable=False),
        sa.Column("salary_base", sa.Float(), nullable=False),
        sa.Column("salary_currency", sa.String(8), nullable=False),
        sa.Column("personal", postgresql.JSONB(), nullable=False),
        sa.Column("bank", postgresql.JSONB(), nullable=False),
    )
    op.create_index(op.f("ix_employees_id"), "employees", ["id"], unique=False)
    op.create_index(op.f("ix_employees_department"), "employees", ["department"], unique=False)


def downgrade() -> None:
    op.drop_table("employees")
    op.drop_table("events")
    op.drop_table("transactions")
    op.drop_table("students")
    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
