"""initial_schema

Create the schema for the Q&A community:
- Users (with cached reputation and content counts)
- Questions and answers (soft-deleted, with cached vote counters)
- Votes (the ledger: one row per voter and target)

Revision ID: 3c9d1f4a2b70
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c9d1f4a2b70"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in (
        ("user_role", "'user', 'admin'"),
        ("target_type", "'question', 'answer'"),
        ("vote_type", "'upvote', 'downvote'"),
    ):
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({values});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM("user", "admin", name="user_role", create_type=False),
            nullable=False,
            server_default="user",
        ),
        sa.Column("active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("reputation", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("question_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("answer_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "question_count >= 0", name="users_question_count_non_negative"
        ),
        sa.CheckConstraint("answer_count >= 0", name="users_answer_count_non_negative"),
    )
    op.create_index("idx_users_reputation", "users", ["reputation"])
    op.create_index("idx_users_created_at", "users", ["created_at"])

    # ========================================================================
    # QUESTIONS table
    # ========================================================================
    op.create_table(
        "questions",
        _uuid_pk(),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("answer_count", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "upvote_count >= 0", name="questions_upvote_count_non_negative"
        ),
        sa.CheckConstraint(
            "downvote_count >= 0", name="questions_downvote_count_non_negative"
        ),
        sa.CheckConstraint(
            "answer_count >= 0", name="questions_answer_count_non_negative"
        ),
    )
    op.create_index("idx_questions_author_id", "questions", ["author_id"])
    op.create_index("idx_questions_created_at", "questions", ["created_at"])

    # ========================================================================
    # ANSWERS table
    # ========================================================================
    op.create_table(
        "answers",
        _uuid_pk(),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("upvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default="false"),
        *_timestamps(),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "upvote_count >= 0", name="answers_upvote_count_non_negative"
        ),
        sa.CheckConstraint(
            "downvote_count >= 0", name="answers_downvote_count_non_negative"
        ),
    )
    op.create_index("idx_answers_question_id", "answers", ["question_id"])
    op.create_index("idx_answers_author_id", "answers", ["author_id"])

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        _uuid_pk(),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column(
            "target_type",
            postgresql.ENUM(
                "question", "answer", name="target_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "vote_type",
            postgresql.ENUM("upvote", "downvote", name="vote_type", create_type=False),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["voter_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "voter_id", "target_type", "target_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_voter_id", "votes", ["voter_id"])
    op.create_index("idx_votes_target", "votes", ["target_type", "target_id"])

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("users", "questions", "answers", "votes"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("votes", "answers", "questions", "users"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    op.drop_table("votes")
    op.drop_table("answers")
    op.drop_table("questions")
    op.drop_table("users")

    op.execute("DROP TYPE IF EXISTS vote_type")
    op.execute("DROP TYPE IF EXISTS target_type")
    op.execute("DROP TYPE IF EXISTS user_role")
