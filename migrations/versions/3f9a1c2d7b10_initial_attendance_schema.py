"""initial_attendance_schema

Revision ID: 3f9a1c2d7b10
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns():
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=True),
    ]


user_role = sa.Enum('SUPER_ADMIN', 'COMPANY_ADMIN', 'COMPANY_MEMBER', name='userrole')
attendance_status = sa.Enum('ON_TIME', 'PRESENT', 'SLIGHTLY_LATE', 'LATE', 'VERY_LATE', 'ABSENT', name='attendancestatus')
badge_type = sa.Enum('STREAK', 'MONTHLY', name='badgetype')
leave_type = sa.Enum('SICK', 'CASUAL', 'ANNUAL', 'UNPAID', name='leavetype')
leave_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='leavestatus')
issue_type = sa.Enum('LOGIN_CORRECTION', 'LOGOUT_CORRECTION', 'LATE_EXPLANATION', 'OTHER', name='issuetype')
issue_status = sa.Enum('PENDING', 'APPROVED', 'REJECTED', name='issuestatus')
auto_task_type = sa.Enum('DAILY', 'WEEKLY', 'MONTHLY', name='autotasktype')
auto_task_status = sa.Enum('COMPLETED', 'FAILED', name='autotaskstatus')


def upgrade():
    op.create_table(
        'companies',
        *_audit_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('work_start_time', sa.String(length=5), nullable=False),
        sa.Column('work_end_time', sa.String(length=5), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_companies_id', 'companies', ['id'])

    op.create_table(
        'users',
        *_audit_columns(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=False),
        sa.Column('photo_url', sa.String(length=500), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_company_id', 'users', ['company_id'])

    op.create_table(
        'attendance_logs',
        *_audit_columns(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('login_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('logout_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', attendance_status, nullable=False),
        sa.Column('is_late', sa.Boolean(), nullable=True),
        sa.Column('late_type', sa.String(length=20), nullable=True),
        sa.Column('late_minutes', sa.Integer(), nullable=True),
        sa.Column('total_hours', sa.Numeric(5, 2), nullable=True),
        sa.Column('is_overtime', sa.Boolean(), nullable=True),
        sa.Column('overtime_hours', sa.Numeric(5, 2), nullable=True),
        sa.Column('points_earned', sa.Integer(), nullable=True),
        sa.Column('report_submitted', sa.Boolean(), nullable=True),
        sa.Column('tasks_completed', sa.Text(), nullable=True),
        sa.Column('early_logout_reason', sa.Text(), nullable=True),
        sa.Column('auto_logout', sa.Boolean(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'company_id', 'date', name='uq_attendance_log_user_company_date'),
    )
    op.create_index('ix_attendance_logs_id', 'attendance_logs', ['id'])
    op.create_index('ix_attendance_logs_user_id', 'attendance_logs', ['user_id'])
    op.create_index('ix_attendance_logs_company_id', 'attendance_logs', ['company_id'])
    op.create_index('ix_attendance_logs_date', 'attendance_logs', ['date'])

    op.create_table(
        'attendance_rewards',
        *_audit_columns(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('total_points', sa.Integer(), nullable=False),
        sa.Column('current_streak', sa.Integer(), nullable=False),
        sa.Column('longest_streak', sa.Integer(), nullable=False),
        sa.Column('last_attendance_date', sa.Date(), nullable=True),
        sa.Column('monthly_score', sa.Integer(), nullable=False),
        sa.Column('perfect_months', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'company_id', name='uq_attendance_reward_user_company'),
    )
    op.create_index('ix_attendance_rewards_id', 'attendance_rewards', ['id'])
    op.create_index('ix_attendance_rewards_user_id', 'attendance_rewards', ['user_id'])
    op.create_index('ix_attendance_rewards_company_id', 'attendance_rewards', ['company_id'])

    op.create_table(
        'badges',
        *_audit_columns(),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('icon', sa.String(length=20), nullable=True),
        sa.Column('criteria', sa.Text(), nullable=True),
        sa.Column('badge_type', badge_type, nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_badges_id', 'badges', ['id'])

    op.create_table(
        'user_badges',
        *_audit_columns(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('badge_id', sa.Integer(), sa.ForeignKey('badges.id'), nullable=False),
        sa.Column('awarded_on', sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'company_id', 'badge_id', 'awarded_on', name='uq_user_badge_award'),
    )
    op.create_index('ix_user_badges_id', 'user_badges', ['id'])
    op.create_index('ix_user_badges_user_id', 'user_badges', ['user_id'])

    op.create_table(
        'attendance_issues',
        *_audit_columns(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('issue_type', issue_type, nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('requested_login_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('requested_logout_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('explanation', sa.Text(), nullable=False),
        sa.Column('status', issue_status, nullable=False),
        sa.Column('admin_remarks', sa.Text(), nullable=True),
        sa.Column('reviewed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_attendance_issues_id', 'attendance_issues', ['id'])
    op.create_index('ix_attendance_issues_user_id', 'attendance_issues', ['user_id'])
    op.create_index('ix_attendance_issues_company_id', 'attendance_issues', ['company_id'])

    op.create_table(
        'holidays',
        *_audit_columns(),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_holidays_id', 'holidays', ['id'])
    op.create_index('ix_holidays_company_id', 'holidays', ['company_id'])

    op.create_table(
        'leaves',
        *_audit_columns(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('leave_type', leave_type, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', leave_status, nullable=False),
        sa.Column('reviewed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leaves_id', 'leaves', ['id'])
    op.create_index('ix_leaves_user_id', 'leaves', ['user_id'])
    op.create_index('ix_leaves_company_id', 'leaves', ['company_id'])

    op.create_table(
        'auto_tasks',
        *_audit_columns(),
        sa.Column('task_name', sa.String(length=100), nullable=False),
        sa.Column('task_type', auto_task_type, nullable=False),
        sa.Column('status', auto_task_status, nullable=False),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_auto_tasks_id', 'auto_tasks', ['id'])


def downgrade():
    for table in (
        'auto_tasks',
        'leaves',
        'holidays',
        'attendance_issues',
        'user_badges',
        'badges',
        'attendance_rewards',
        'attendance_logs',
        'users',
        'companies',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum in (
        auto_task_status,
        auto_task_type,
        issue_status,
        issue_type,
        leave_status,
        leave_type,
        badge_type,
        attendance_status,
        user_role,
    ):
        enum.drop(bind, checkfirst=True)
