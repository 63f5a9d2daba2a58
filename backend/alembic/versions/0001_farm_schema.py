"""Plots, rows, categories and custom row fields

Revision ID: 0001
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_farm_schema'
down_revision = None
branch_labels = None
depends_on = None

ROW_STATUS = ('planned', 'planted', 'growing', 'harvested', 'removed')
FIELD_TYPES = ('text', 'number', 'date', 'dropdown', 'checkbox')


def upgrade() -> None:
    op.create_table(
        'plot_categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(7), nullable=False, server_default='#3B82F6'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )

    # Deleting a plot removes its rows; deleting a category only detaches plots
    op.create_table(
        'plots',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['category_id'], ['plot_categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_plots_name', 'plots', ['name'])
    op.create_index('ix_plots_category_id', 'plots', ['category_id'])

    op.create_table(
        'rows',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('plot_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('variety', sa.String(200), nullable=True),
        sa.Column('planted_date', sa.Date(), nullable=True),
        sa.Column('expected_harvest', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.Enum(*ROW_STATUS, name='row_status'), nullable=False, server_default='planned'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['plot_id'], ['plots.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_rows_plot_id', 'rows', ['plot_id'])

    op.create_table(
        'row_categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(7), nullable=False, server_default='#3B82F6'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'row_category_assignments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('row_id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['row_id'], ['rows.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['row_categories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('row_id', 'category_id', name='uq_row_category_assignment')
    )
    op.create_index('ix_row_category_assignments_row_id', 'row_category_assignments', ['row_id'])
    op.create_index('ix_row_category_assignments_category_id', 'row_category_assignments', ['category_id'])

    op.create_table(
        'row_field_definitions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('field_type', sa.Enum(*FIELD_TYPES, name='row_field_type'), nullable=False),
        sa.Column('options', sa.JSON(), nullable=True),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_row_field_definitions_display_order', 'row_field_definitions', ['display_order'])

    # One value per (row, field definition)
    op.create_table(
        'row_field_values',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('row_id', sa.Uuid(), nullable=False),
        sa.Column('field_id', sa.Uuid(), nullable=False),
        sa.Column('value', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['row_id'], ['rows.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['field_id'], ['row_field_definitions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('row_id', 'field_id', name='uq_row_field_value')
    )
    op.create_index('ix_row_field_values_row_id', 'row_field_values', ['row_id'])
    op.create_index('ix_row_field_values_field_id', 'row_field_values', ['field_id'])


def downgrade() -> None:
    op.drop_table('row_field_values')
    op.drop_table('row_field_definitions')
    op.drop_table('row_category_assignments')
    op.drop_table('row_categories')
    op.drop_table('rows')
    op.drop_table('plots')
    op.drop_table('plot_categories')
    sa.Enum(name='row_field_type').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='row_status').drop(op.get_bind(), checkfirst=True)
