"""SQLAlchemy table definitions for the Q&A community.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column(
        "role",
        Enum("user", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column("active", Boolean, nullable=False, server_default="true"),
    Column("avatar_url", Text, nullable=True),
    Column("bio", Text, nullable=True),
    # Derived statistics, maintained by atomic deltas
    Column("reputation", Integer, nullable=False, server_default="0"),
    Column("question_count", Integer, nullable=False, server_default="0"),
    Column("answer_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("question_count >= 0", name="users_question_count_non_negative"),
    CheckConstraint("answer_count >= 0", name="users_answer_count_non_negative"),
)

Index("idx_users_reputation", users_table.c.reputation)
Index("idx_users_created_at", users_table.c.created_at)

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column("downvote_count", Integer, nullable=False, server_default="0"),
    Column("answer_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("upvote_count >= 0", name="questions_upvote_count_non_negative"),
    CheckConstraint(
        "downvote_count >= 0", name="questions_downvote_count_non_negative"
    ),
    CheckConstraint("answer_count >= 0", name="questions_answer_count_non_negative"),
)

Index("idx_questions_author_id", questions_table.c.author_id)
Index("idx_questions_created_at", questions_table.c.created_at)

# ============================================================================
# ANSWERS TABLE
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column("upvote_count", Integer, nullable=False, server_default="0"),
    Column("downvote_count", Integer, nullable=False, server_default="0"),
    Column("is_accepted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("upvote_count >= 0", name="answers_upvote_count_non_negative"),
    CheckConstraint("downvote_count >= 0", name="answers_downvote_count_non_negative"),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index("idx_answers_author_id", answers_table.c.author_id)

# ============================================================================
# VOTES TABLE (the vote ledger, polymorphic target)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "voter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "target_type",
        Enum("question", "answer", name="target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),
    Column(
        "vote_type",
        Enum("upvote", "downvote", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("voter_id", "target_type", "target_id", name="unique_vote"),
)

Index("idx_votes_voter_id", votes_table.c.voter_id)
Index("idx_votes_target", votes_table.c.target_type, votes_table.c.target_id)
