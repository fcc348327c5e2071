"""Create plants and care_tasks tables

Revision ID: 001
Revises:
Create Date: 2025-04-01 08:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create care scheduler tables"""

    # 1. Plants (owned by the plant module, read by the scheduler)
    op.create_table('plants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(200), nullable=True),
        sa.Column('watering_frequency_days', sa.Integer(), nullable=True),
        sa.Column('last_watered_date', sa.Date(), nullable=True),
        sa.Column('auto_watering', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('reminder_time', sa.String(5), nullable=True),

        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            'watering_frequency_days IS NULL OR watering_frequency_days > 0',
            name='ck_plants_watering_frequency_positive',
        ),
    )

    op.create_index('ix_plants_auto_watering', 'plants', ['auto_watering'])

    # 2. Care tasks
    op.create_table('care_tasks',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('due_day', sa.Date(), nullable=True),
        sa.Column('completed', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('date_completed', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            "type IN ('water', 'fertilize', 'repot', 'light', 'other')",
            name='ck_care_tasks_type',
        ),
        sa.CheckConstraint('length(description) > 0', name='ck_care_tasks_description_not_empty'),
    )

    op.create_index('ix_care_tasks_plant_type_day', 'care_tasks', ['plant_id', 'type', 'due_day'])
    op.create_index('ix_care_tasks_completed_day', 'care_tasks', ['completed', 'due_day'])
    op.create_index('ix_care_tasks_due_day', 'care_tasks', ['due_day'])


def downgrade() -> None:
    """Drop care scheduler tables"""

    op.drop_index('ix_care_tasks_due_day', table_name='care_tasks')
    op.drop_index('ix_care_tasks_completed_day', table_name='care_tasks')
    op.drop_index('ix_care_tasks_plant_type_day', table_name='care_tasks')
    op.drop_table('care_tasks')

    op.drop_index('ix_plants_auto_watering', table_name='plants')
    op.drop_table('plants')
