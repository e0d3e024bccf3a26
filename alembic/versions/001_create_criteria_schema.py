"""Create criteria categories and criteria

Revision ID: 001
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Criteria categories table
    op.create_table('criteria_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('weight', sa.Numeric(precision=5, scale=2), nullable=False, server_default='0', comment='Weight percentage of active categories, sums to 100'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_criteria_categories_name', 'criteria_categories', ['name'])
    op.create_index('ix_criteria_categories_is_active', 'criteria_categories', ['is_active'])

    # Criteria table
    op.create_table('criteria',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('base_description', sa.String(length=500), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('updated_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['category_id'], ['criteria_categories.id']),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_criteria_name', 'criteria', ['name'])
    op.create_index('ix_criteria_category_id', 'criteria', ['category_id'])
    op.create_index('ix_criteria_is_active', 'criteria', ['is_active'])


def downgrade():
    # Drop tables in reverse order
    op.drop_table('criteria')
    op.drop_table('criteria_categories')
