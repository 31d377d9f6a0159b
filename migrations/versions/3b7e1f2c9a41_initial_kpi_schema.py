"""Initial KPI tracker schema: users, goals, assignments, work logs and images

Revision ID: 3b7e1f2c9a41
Revises:
Create Date: 2025-09-20 10:12:03.418220

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7e1f2c9a41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('ADMIN','USER')"),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'], unique=False)

    op.create_table(
        'goals',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('target', sa.Integer(), nullable=False),
        sa.Column('unit', sa.String(length=50), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('target >= 0', name='ck_goals_target_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_goals_end_date', 'goals', ['end_date'], unique=False)

    op.create_table(
        'goal_assignments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('goal_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('target', sa.Integer(), nullable=False),
        sa.CheckConstraint('target >= 0', name='ck_goal_assignments_target_non_negative'),
        sa.ForeignKeyConstraint(['goal_id'], ['goals.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('goal_id', 'user_id', name='uq_goal_assignments_goal_user'),
    )
    op.create_index('ix_goal_assignments_goal_id', 'goal_assignments', ['goal_id'], unique=False)
    op.create_index('ix_goal_assignments_user_id', 'goal_assignments', ['user_id'], unique=False)

    op.create_table(
        'work_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.Column('goal_id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('quantity > 0', name='ck_work_logs_quantity_positive'),
        sa.ForeignKeyConstraint(['goal_id'], ['goals.id']),
        sa.ForeignKeyConstraint(['author_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_work_logs_completed_at', 'work_logs', ['completed_at'], unique=False)
    op.create_index('ix_work_logs_goal_id', 'work_logs', ['goal_id'], unique=False)
    op.create_index('ix_work_logs_author_id', 'work_logs', ['author_id'], unique=False)
    op.create_index('idx_work_logs_goal_completed', 'work_logs', ['goal_id', 'completed_at'], unique=False)
    op.create_index('idx_work_logs_author_completed', 'work_logs', ['author_id', 'completed_at'], unique=False)

    op.create_table(
        'work_log_images',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('work_log_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['work_log_id'], ['work_logs.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_work_log_images_work_log_id', 'work_log_images', ['work_log_id'], unique=False)


def downgrade():
    op.drop_table('work_log_images')
    op.drop_table('work_logs')
    op.drop_table('goal_assignments')
    op.drop_table('goals')
    op.drop_table('users')
