"""Create users, health_records and vital_signs

Revision ID: 4b7e2c91d0a3
Revises:
Create Date: 2026-10-19 10:12:07.418233

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b7e2c91d0a3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('username'),
    )

    op.create_table(
        'health_records',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('steps', sa.Integer(), nullable=True),
        sa.Column('sleep_hours', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('weight IS NULL OR weight > 0', name='ck_health_records_weight'),
        sa.CheckConstraint('steps IS NULL OR steps >= 0', name='ck_health_records_steps'),
        sa.CheckConstraint(
            'sleep_hours IS NULL OR (sleep_hours >= 0 AND sleep_hours <= 24)',
            name='ck_health_records_sleep_hours',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_health_records_user_id', 'health_records', ['user_id'])
    op.create_index('idx_health_records_user_date', 'health_records', ['user_id', 'date'])

    op.create_table(
        'vital_signs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('record_id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('time_of_day', sa.String(length=20), nullable=False),
        sa.Column('heart_rate', sa.Integer(), nullable=True),
        sa.Column('blood_pressure_systolic', sa.Integer(), nullable=True),
        sa.Column('blood_pressure_diastolic', sa.Integer(), nullable=True),
        sa.Column('temperature', sa.Float(), nullable=True),
        sa.Column('oxygen_saturation', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "time_of_day IN ('morning','afternoon','evening','night')",
            name='ck_vital_signs_time_of_day',
        ),
        sa.ForeignKeyConstraint(['record_id'], ['health_records.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_vital_signs_record_id', 'vital_signs', ['record_id'])
    op.create_index('idx_vital_signs_time_of_day', 'vital_signs', ['time_of_day'])


def downgrade():
    op.drop_index('idx_vital_signs_time_of_day', table_name='vital_signs')
    op.drop_index('idx_vital_signs_record_id', table_name='vital_signs')
    op.drop_table('vital_signs')
    op.drop_index('idx_health_records_user_date', table_name='health_records')
    op.drop_index('idx_health_records_user_id', table_name='health_records')
    op.drop_table('health_records')
    op.drop_table('users')
