# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# when Alembic runs its auto-generation scan.

from .base_class import Base

from .models.user_model import User, RevokedToken
from .models.class_models import Class, ClassEnrollment
from .models.assignment_models import Assignment, Submission
from .models.progress_model import StudentProgress
