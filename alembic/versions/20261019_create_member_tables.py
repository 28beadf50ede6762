"""create_member_tables

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('members',
        sa.Column('id', sa.String(length=36), nullable=False, comment='Member ID (UUID)'),
        sa.Column('email', sa.String(length=255), nullable=False, comment='Member email address'),
        sa.Column('password_hash', sa.String(length=255), nullable=False, comment='Hashed password (argon2id)'),
        sa.Column('role', sa.String(length=50), nullable=False, comment='Role name carried in access tokens'),
        sa.Column('is_active', sa.Boolean(), nullable=False, comment='Whether the member can log in'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True, comment='Timestamp of last successful login'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('members', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_members_email'), ['email'], unique=True)

    op.create_table('skill_tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False, comment="Skill tag name (e.g., 'backend')"),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('skill_tags', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_skill_tags_name'), ['name'], unique=True)

    op.create_table('member_skill_tags',
        sa.Column('member_id', sa.String(length=36), nullable=False, comment='Foreign key to members table'),
        sa.Column('skill_tag_id', sa.Integer(), nullable=False, comment='Foreign key to skill_tags table'),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_tag_id'], ['skill_tags.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('member_id', 'skill_tag_id')
    )
    with op.batch_alter_table('member_skill_tags', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_member_skill_tags_skill_tag_id'), ['skill_tag_id'], unique=False)

    op.create_table('refresh_tokens',
        sa.Column('key', sa.String(length=36), nullable=False, comment='Session key (member ID)'),
        sa.Column('token_hash', sa.String(length=64), nullable=False, comment='SHA-256 hex digest of the refresh token'),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.ForeignKeyConstraint(['key'], ['members.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('key')
    )
    with op.batch_alter_table('refresh_tokens', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_refresh_tokens_token_hash'), ['token_hash'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('refresh_tokens', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_refresh_tokens_token_hash'))
    op.drop_table('refresh_tokens')

    with op.batch_alter_table('member_skill_tags', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_member_skill_tags_skill_tag_id'))
    op.drop_table('member_skill_tags')

    with op.batch_alter_table('skill_tags', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_skill_tags_name'))
    op.drop_table('skill_tags')

    with op.batch_alter_table('members', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_members_email'))
    op.drop_table('members')
