"""Initial schema: users, classes, enrollments, assignments, submissions, progress

Revision ID: 3c1f0a9d7e42
Revises:
Create Date: 2025-01-13 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d7e42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table of the classroom schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('class_id', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_class_id', 'users', ['class_id'])

    op.create_table(
        'revoked_tokens',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('jti', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_revoked_tokens_id', 'revoked_tokens', ['id'])
    op.create_index('ix_revoked_tokens_jti', 'revoked_tokens', ['jti'], unique=True)

    op.create_table(
        'classes',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('subject', sa.String(), nullable=True),
        sa.Column('grade_level', sa.String(), nullable=True),
        sa.Column('academic_year', sa.String(), nullable=True),
        sa.Column('teacher_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])
    op.create_index('ix_classes_name', 'classes', ['name'])
    op.create_index('ix_classes_teacher_id', 'classes', ['teacher_id'])

    op.create_table(
        'class_enrollments',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('class_id', 'student_id', name='uq_enrollment_class_student'),
    )
    op.create_index('ix_class_enrollments_id', 'class_enrollments', ['id'])
    op.create_index('ix_class_enrollments_class_id', 'class_enrollments', ['class_id'])
    op.create_index('ix_class_enrollments_student_id', 'class_enrollments', ['student_id'])

    op.create_table(
        'assignments',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('total_points', sa.Float(), nullable=False),
        sa.Column('assignment_type', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_assignments_id', 'assignments', ['id'])
    op.create_index('ix_assignments_class_id', 'assignments', ['class_id'])
    op.create_index('ix_assignments_due_date', 'assignments', ['due_date'])

    op.create_table(
        'submissions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assignment_id', sa.String(), sa.ForeignKey('assignments.id', ondelete='CASCADE'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('submission_text', sa.String(), nullable=True),
        sa.Column('attachment_url', sa.String(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('grade', sa.Float(), nullable=True),
        sa.Column('feedback', sa.String(), nullable=True),
        sa.Column('graded_by', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('graded_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('student_id', 'assignment_id', name='uq_submission_student_assignment'),
    )
    op.create_index('ix_submissions_id', 'submissions', ['id'])
    op.create_index('ix_submissions_assignment_id', 'submissions', ['assignment_id'])
    op.create_index('ix_submissions_student_id', 'submissions', ['student_id'])
    op.create_index('ix_submissions_status', 'submissions', ['status'])

    op.create_table(
        'student_progress',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('class_id', sa.String(), sa.ForeignKey('classes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('total_assignments', sa.Integer(), nullable=False),
        sa.Column('completed_assignments', sa.Integer(), nullable=False),
        sa.Column('average_score', sa.Float(), nullable=False),
        sa.Column('current_grade', sa.String(length=1), nullable=True),
        sa.Column('last_updated', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('student_id', 'class_id', name='uq_progress_student_class'),
    )
    op.create_index('ix_student_progress_id', 'student_progress', ['id'])
    op.create_index('ix_student_progress_student_id', 'student_progress', ['student_id'])
    op.create_index('ix_student_progress_class_id', 'student_progress', ['class_id'])
    op.create_index('ix_student_progress_created_at', 'student_progress', ['created_at'])


def downgrade() -> None:
    """Drop every table of the classroom schema."""
    op.drop_table('student_progress')
    op.drop_table('submissions')
    op.drop_table('assignments')
    op.drop_table('class_enrollments')
    op.drop_table('classes')
    op.drop_table('revoked_tokens')
    op.drop_table('users')
