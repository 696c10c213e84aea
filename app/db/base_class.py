# /app/db/base_class.py

# The declarative Base that every SQLAlchemy model in app/db/models inherits from.
from sqlalchemy.orm import declarative_base

Base = declarative_base()
