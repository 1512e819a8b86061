"""create users, languages and profiles

Revision ID: 20261001_0900_create_users_and_languages
Revises:
Create Date: 2026-10-01 09:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261001_0900_create_users_and_languages'
down_revision = None
branch_labels = None
depends_on = None

ROLES = ('EXPLORER', 'CONTRIBUTOR', 'CURATOR', 'JUROR', 'ADMIN')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', sa.Enum(*ROLES, name='role'), nullable=False, server_default='EXPLORER'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'languages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(8), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(100), nullable=False),
    )
    op.create_table(
        'parts_of_speech',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
    )
    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('ui_language_id', sa.Integer(), sa.ForeignKey('languages.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'profile_target_languages',
        sa.Column('profile_id', sa.Integer(), sa.ForeignKey('user_profiles.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('language_id', sa.Integer(), sa.ForeignKey('languages.id'), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table('profile_target_languages')
    op.drop_table('user_profiles')
    op.drop_table('parts_of_speech')
    op.drop_table('languages')
    op.drop_table('users')
    sa.Enum(name='role').drop(op.get_bind(), checkfirst=True)
