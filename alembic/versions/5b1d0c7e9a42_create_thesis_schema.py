"""create users, theses, subtasks and feedbacks

Revision ID: 5b1d0c7e9a42
Revises:
Create Date: 2026-10-19 12:04:11.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1d0c7e9a42'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('STUDENT', 'TEACHER', name='user_role'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'theses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('request_due_date', sa.Date(), nullable=False),
        sa.Column('thesis_due_date', sa.Date(), nullable=False),
        sa.Column('added_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('requested_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('submitted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('file_name', sa.String(), nullable=True),
        sa.Column('last_update', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('ix_theses_id', 'theses', ['id'])
    op.create_index('ix_theses_requested_by', 'theses', ['requested_by'])

    op.create_table(
        'subtasks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('thesis_id', sa.Integer(), sa.ForeignKey('theses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('file_name', sa.String(), nullable=True),
        sa.Column('submitted', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_subtasks_id', 'subtasks', ['id'])
    op.create_index('ix_subtasks_thesis_id', 'subtasks', ['thesis_id'])

    op.create_table(
        'feedbacks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('thesis_id', sa.Integer(), sa.ForeignKey('theses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_feedbacks_id', 'feedbacks', ['id'])
    op.create_index('ix_feedbacks_thesis_id', 'feedbacks', ['thesis_id'])


def downgrade() -> None:
    op.drop_table('feedbacks')
    op.drop_table('subtasks')
    op.drop_table('theses')
    op.drop_table('users')
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
