"""esquema inicial: operadores, alunos, turmas, presenças, documentos

Revision ID: 0001_initial_schema
Revises:
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=160), nullable=False),
        sa.Column("cpf", sa.String(length=11), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("cpf", sa.String(length=11), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("department", sa.String(length=160), nullable=True),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", sa.String(length=20), nullable=True),
        sa.Column("blocked", sa.Boolean(), nullable=False),
        sa.Column("on_waitlist", sa.Boolean(), nullable=False),
        sa.Column("modality", sa.String(length=20), nullable=False),
        sa.Column("training_days", sa.String(length=40), nullable=False),
        sa.Column("training_time", sa.String(length=10), nullable=True),
        sa.Column("turma", sa.String(length=20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_students")),
    )
    op.create_index(op.f("ix_students_cpf"), "students", ["cpf"], unique=True)
    op.create_index(op.f("ix_students_name"), "students", ["name"], unique=False)
    op.create_index(op.f("ix_students_on_waitlist"), "students", ["on_waitlist"], unique=False)

    op.create_table(
        "training_slots",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("modality", sa.String(length=20), nullable=False),
        sa.Column("training_days", sa.String(length=40), nullable=False),
        sa.Column("training_time", sa.String(length=10), nullable=False),
        sa.Column("turma", sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_training_slots")),
        sa.UniqueConstraint("modality", "training_days", "training_time", "turma", name="uq_training_slot_key"),
    )

    op.create_table(
        "attendance_records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("student_cpf", sa.String(length=11), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("hour", sa.String(length=5), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_attendance_records")),
    )
    op.create_index(op.f("ix_attendance_records_student_cpf"), "attendance_records", ["student_cpf"], unique=False)
    op.create_index(op.f("ix_attendance_records_timestamp"), "attendance_records", ["timestamp"], unique=False)

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("upload_date", sa.Date(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("file_type", sa.String(length=120), nullable=True),
        sa.Column("student_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["student_id"], ["students.id"],
            name=op.f("fk_documents_student_id_students"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_documents")),
    )
    op.create_index(op.f("ix_documents_upload_date"), "documents", ["upload_date"], unique=False)
    op.create_index(op.f("ix_documents_student_id"), "documents", ["student_id"], unique=False)

def downgrade():
    op.drop_index(op.f("ix_documents_student_id"), table_name="documents")
    op.drop_index(op.f("ix_documents_upload_date"), table_name="documents")
    op.drop_table("documents")
    op.drop_index(op.f("ix_attendance_records_timestamp"), table_name="attendance_records")
    op.drop_index(op.f("ix_attendance_records_student_cpf"), table_name="attendance_records")
    op.drop_table("attendance_records")
    op.drop_table("training_slots")
    op.drop_index(op.f("ix_students_on_waitlist"), table_name="students")
    op.drop_index(op.f("ix_students_name"), table_name="students")
    op.drop_index(op.f("ix_students_cpf"), table_name="students")
    op.drop_table("students")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
