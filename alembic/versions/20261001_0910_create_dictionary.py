"""create concepts, domains and terms

Revision ID: 20261001_0910_create_dictionary
Revises: 20261001_0900_create_users_and_languages
Create Date: 2026-10-01 09:10:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261001_0910_create_dictionary'
down_revision = '20261001_0900_create_users_and_languages'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'concepts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('gloss', sa.Text(), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'domains',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
    )
    op.create_table(
        'terms',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('text', sa.String(100), nullable=False, index=True),
        sa.Column('meaning', sa.Text(), nullable=False),
        sa.Column('phonics', sa.String(255), nullable=True),
        sa.Column('language_id', sa.Integer(), sa.ForeignKey('languages.id'), nullable=False, index=True),
        sa.Column('part_of_speech_id', sa.Integer(), sa.ForeignKey('parts_of_speech.id'), nullable=False),
        sa.Column('concept_id', sa.Integer(), sa.ForeignKey('concepts.id'), nullable=False, index=True),
        sa.Column('vote_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('text', 'meaning', 'language_id', name='uq_terms_text_meaning_language'),
    )
    op.create_table(
        'domains_on_terms',
        sa.Column('term_id', sa.Integer(), sa.ForeignKey('terms.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('domain_id', sa.Integer(), sa.ForeignKey('domains.id'), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table('domains_on_terms')
    op.drop_table('terms')
    op.drop_table('domains')
    op.drop_table('concepts')
