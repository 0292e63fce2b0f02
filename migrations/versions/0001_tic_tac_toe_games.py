"""Create tic_tac_toe_games and log_entry tables

Revision ID: 0001a7c3e9b2
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001a7c3e9b2"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "log_entry",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("project", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "tic_tac_toe_games",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("board", sa.JSON(), nullable=False),
        sa.Column("current_player", sa.String(length=1), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Scoreboard and recent-games queries filter on status and sort by created_at
    op.create_index("ix_tic_tac_toe_games_status", "tic_tac_toe_games", ["status"])
    op.create_index("ix_tic_tac_toe_games_created_at", "tic_tac_toe_games", ["created_at"])


def downgrade():
    op.drop_index("ix_tic_tac_toe_games_created_at", table_name="tic_tac_toe_games")
    op.drop_index("ix_tic_tac_toe_games_status", table_name="tic_tac_toe_games")
    op.drop_table("tic_tac_toe_games")
    op.drop_table("log_entry")
