"""create lexical_items, reviews, user_settings and daily_progress tables

Revision ID: 3f9a1c7d2b40
Revises: 
Create Date: 2026-10-19 10:12:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c7d2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the catalog, review store and per-user tables."""
    op.create_table('lexical_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kana', sa.String(), nullable=False),
        sa.Column('kanji', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('subtype', sa.String(), nullable=True),
        sa.Column('meaning', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_lexical_items_category', 'lexical_items', ['category'])

    op.create_table('reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user', sa.String(), nullable=False),
        sa.Column('module', sa.String(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('form', sa.String(), nullable=False),
        sa.Column('mode', sa.String(), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('correct', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('due_at', sa.DateTime(), nullable=True),
        sa.Column('last_reviewed_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['item_id'], ['lexical_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user', 'module', 'item_id', 'form', 'mode', name='uq_reviews_key'),
        sa.CheckConstraint('correct <= attempts', name='ck_reviews_correct_le_attempts'),
        sa.CheckConstraint('streak >= 0', name='ck_reviews_streak_non_negative')
    )
    op.create_index('ix_reviews_user_module_mode', 'reviews', ['user', 'module', 'mode'])

    op.create_table('user_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user', sa.String(), nullable=False),
        sa.Column('enabled_forms', sa.Text(), nullable=True),
        sa.Column('due_only', sa.Boolean(), nullable=True, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user')
    )

    op.create_table('daily_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('module', sa.String(), nullable=False),
        sa.Column('mode', sa.String(), nullable=False),
        sa.Column('reviews_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('new_items_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('correct_answers', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user', 'date', 'module', 'mode', name='uq_daily_progress_key')
    )


def downgrade() -> None:
    """Drop the catalog, review store and per-user tables."""
    op.drop_table('daily_progress')
    op.drop_table('user_settings')
    op.drop_index('ix_reviews_user_module_mode', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_lexical_items_category', table_name='lexical_items')
    op.drop_table('lexical_items')
