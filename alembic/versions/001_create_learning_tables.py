"""Create generations, flashcards and generations_error_logs tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create learning tables."""
    op.create_table(
        "generations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("model", sa.String(255), nullable=False),
        sa.Column("source_text_length", sa.Integer(), nullable=False),
        sa.Column("source_text_hash", sa.String(64), nullable=False),
        sa.Column("generated_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("generation_duration", sa.Float(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_generations_id"), "generations", ["id"], unique=False)
    op.create_index(op.f("ix_generations_user_id"), "generations", ["user_id"], unique=False)
    op.create_index(
        op.f("ix_generations_source_text_hash"), "generations", ["source_text_hash"], unique=False
    )

    op.create_table(
        "flashcards",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("front", sa.String(200), nullable=False),
        sa.Column("back", sa.String(500), nullable=False),
        sa.Column("source", sa.String(20), nullable=False),
        sa.Column("generated_id", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["generated_id"], ["generations.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "source IN ('manual', 'ai-full', 'ai-edited')", name="ck_flashcards_source"
        ),
    )
    op.create_index(op.f("ix_flashcards_id"), "flashcards", ["id"], unique=False)
    op.create_index(op.f("ix_flashcards_user_id"), "flashcards", ["user_id"], unique=False)
    op.create_index(op.f("ix_flashcards_source"), "flashcards", ["source"], unique=False)
    op.create_index(
        op.f("ix_flashcards_generated_id"), "flashcards", ["generated_id"], unique=False
    )
    op.create_index(op.f("ix_flashcards_created_at"), "flashcards", ["created_at"], unique=False)

    op.create_table(
        "generations_error_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("error_code", sa.String(100), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=False),
        sa.Column("source_text_hash", sa.String(64), nullable=False),
        sa.Column("source_text_length", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_generations_error_logs_id"), "generations_error_logs", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_generations_error_logs_user_id"),
        "generations_error_logs",
        ["user_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop learning tables."""
    op.drop_index(op.f("ix_generations_error_logs_user_id"), table_name="generations_error_logs")
    op.drop_index(op.f("ix_generations_error_logs_id"), table_name="generations_error_logs")
    op.drop_table("generations_error_logs")

    op.drop_index(op.f("ix_flashcards_created_at"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_generated_id"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_source"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_user_id"), table_name="flashcards")
    op.drop_index(op.f("ix_flashcards_id"), table_name="flashcards")
    op.drop_table("flashcards")

    op.drop_index(op.f("ix_generations_source_text_hash"), table_name="generations")
    op.drop_index(op.f("ix_generations_user_id"), table_name="generations")
    op.drop_index(op.f("ix_generations_id"), table_name="generations")
    op.drop_table("generations")
