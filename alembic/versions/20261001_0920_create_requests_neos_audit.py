"""create translation requests, neos, ratings and audit log

Revision ID: 20261001_0920_create_requests_neos_audit
Revises: 20261001_0910_create_dictionary
Create Date: 2026-10-01 09:20:00
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision = '20261001_0920_create_requests_neos_audit'
down_revision = '20261001_0910_create_dictionary'
branch_labels = None
depends_on = None

REQUEST_STATUSES = ('PENDING', 'APPROVED', 'REJECTED')
NEO_TYPES = ('POPULAR', 'ADOPTIVE', 'FUNCTIONAL', 'ROOT', 'CREATIVE')


def upgrade() -> None:
    op.create_table(
        'translation_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('word', sa.String(100), nullable=False),
        sa.Column('meaning', sa.Text(), nullable=False),
        sa.Column('source_language_id', sa.Integer(), sa.ForeignKey('languages.id'), nullable=False),
        sa.Column('target_language_id', sa.Integer(), sa.ForeignKey('languages.id'), nullable=False),
        sa.Column('part_of_speech_id', sa.Integer(), sa.ForeignKey('parts_of_speech.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('status', sa.Enum(*REQUEST_STATUSES, name='requeststatus'), nullable=False,
                  server_default='PENDING', index=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('reviewed_by_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, index=True),
    )
    op.create_table(
        'domains_on_requests',
        sa.Column('request_id', sa.Integer(), sa.ForeignKey('translation_requests.id', ondelete='CASCADE'),
                  primary_key=True),
        sa.Column('domain_id', sa.Integer(), sa.ForeignKey('domains.id'), primary_key=True),
    )
    op.create_table(
        'neos',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('term_id', sa.Integer(), sa.ForeignKey('terms.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('text', sa.String(100), nullable=False),
        sa.Column('type', sa.Enum(*NEO_TYPES, name='neotype'), nullable=False),
        sa.Column('audio_url', sa.String(500), nullable=True),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating_score', sa.Float(), nullable=False, server_default='0'),
        sa.Column('reject_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'neo_ratings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('neo_id', sa.Integer(), sa.ForeignKey('neos.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('value', sa.Integer(), nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('neo_id', 'user_id', name='uq_neo_ratings_neo_user'),
    )
    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True, index=True),
        sa.Column('action', sa.String(100), nullable=False, index=True),
        sa.Column('resource_id', sa.String(100), nullable=True),
        sa.Column('metadata', JSONB, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('neo_ratings')
    op.drop_table('neos')
    op.drop_table('domains_on_requests')
    op.drop_table('translation_requests')
    bind = op.get_bind()
    sa.Enum(name='neotype').drop(bind, checkfirst=True)
    sa.Enum(name='requeststatus').drop(bind, checkfirst=True)
