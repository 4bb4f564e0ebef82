"""initial fitness schema: users, entries, run files, chat

Revision ID: 3e1f0a9c2b7d
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1f0a9c2b7d'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entry_table(name: str, *value_columns: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        *value_columns,
    )
    op.create_index(f'ix_{name}_user_id', name, ['user_id'])
    op.create_index(f'ix_{name}_date', name, ['date'])


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()

    if 'users' not in tables:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('hashed_password', sa.String(), nullable=False),
            sa.Column('username', sa.String(length=50), nullable=True),
            sa.Column('profile_picture', sa.String(), nullable=True),
            sa.Column('initial_weight', sa.Numeric(6, 2), nullable=True),
            sa.Column('target_weight', sa.Numeric(6, 2), nullable=True),
            sa.Column('target_miles', sa.Numeric(6, 2), nullable=True),
            sa.Column('target_streak', sa.Integer(), nullable=True),
            sa.Column('onboarded', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if 'weight_entries' not in tables:
        _entry_table('weight_entries', sa.Column('weight', sa.Numeric(6, 2), nullable=False))

    if 'run_entries' not in tables:
        _entry_table(
            'run_entries',
            sa.Column('distance', sa.Numeric(6, 2), nullable=False),
            sa.Column('source', sa.String(length=20), nullable=False, server_default='manual'),
        )

    if 'eating_well_entries' not in tables:
        _entry_table(
            'eating_well_entries',
            sa.Column('ate_well', sa.Boolean(), nullable=False, server_default=sa.true()),
        )

    if 'run_files' not in tables:
        op.create_table(
            'run_files',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('run_entry_id', sa.Integer(), sa.ForeignKey('run_entries.id', ondelete='CASCADE'), nullable=False),
            sa.Column('filename', sa.String(), nullable=False),
            sa.Column('content_type', sa.String(), nullable=False),
            sa.Column('size_bytes', sa.Integer(), nullable=False),
            sa.Column('storage_path', sa.String(), nullable=False),
            sa.Column('source', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_run_files_run_entry_id', 'run_files', ['run_entry_id'])

    if 'chat_messages' not in tables:
        op.create_table(
            'chat_messages',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
            sa.Column('username', sa.String(length=50), nullable=False),
            sa.Column('profile_picture', sa.String(), nullable=True),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
        op.create_index('ix_chat_messages_user_id', 'chat_messages', ['user_id'])
        op.create_index('ix_chat_messages_timestamp', 'chat_messages', ['timestamp'])


def downgrade() -> None:
    # Safe drop if exists, children first
    for table in ('chat_messages', 'run_files', 'eating_well_entries', 'run_entries', 'weight_entries', 'users'):
        op.execute(f'DROP TABLE IF EXISTS {table}')
