"""Create authors table

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Single flat table; ids are random UUIDs generated on insert.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    id_default = sa.text('gen_random_uuid()') if bind.dialect.name == 'postgresql' else None

    op.create_table(
        'authors',
        sa.Column('id', sa.Uuid(), server_default=id_default, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('birth_date', sa.Text(), nullable=True),
        sa.Column('death_date', sa.Text(), nullable=True),
        sa.Column('biography', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.CheckConstraint('length(name) > 0', name='authors_name_nonempty'),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('authors')
