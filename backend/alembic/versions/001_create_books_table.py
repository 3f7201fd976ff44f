"""Create books table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `books` table backing SqlBookStore.
How:   Integer autoincrement primary key; every other column nullable.

Rollback: downgrade() drops the table entirely (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the books table. Column docs live in bookstore/models/book.py."""
    op.create_table(
        "books",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Server-assigned identifier, never reused",
        ),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("isbn", sa.String(32), nullable=True),
        sa.Column("publisher", sa.String(255), nullable=True),
        sa.Column("language", sa.String(64), nullable=True),
        sa.Column("author", sa.String(255), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("pages", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        # SQLite reuses the highest rowid after a delete without this
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    """Drop the books table. All book data is lost."""
    op.drop_table("books")
