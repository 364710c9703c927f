"""create user and game_session tables

Revision ID: 5c2a9e7d1f30
Revises: 
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e7d1f30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'game_session' not in existing_tables:
        op.create_table(
            'game_session',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('host_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=False),
            sa.Column('guest_id', sa.Integer(), sa.ForeignKey('user.id'), nullable=True),
            sa.Column('size', sa.Integer(), nullable=False),
            sa.Column('board', sa.Text(), nullable=False),
            sa.Column('active_mark', sa.String(length=1), nullable=False),
            sa.Column('phase', sa.String(length=32), nullable=False),
            sa.Column('outcome', sa.String(length=8), nullable=True),
            sa.Column('version', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.Float(), nullable=False),
            sa.Column('last_updated', sa.Float(), nullable=False),
        )
        op.create_index('ix_game_session_host_id', 'game_session', ['host_id'])
        op.create_index('ix_game_session_guest_id', 'game_session', ['guest_id'])


def downgrade():
    op.drop_index('ix_game_session_guest_id', table_name='game_session')
    op.drop_index('ix_game_session_host_id', table_name='game_session')
    op.drop_table('game_session')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
