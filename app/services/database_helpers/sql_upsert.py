# /app/services/database_helpers/sql_upsert.py

"""
Dialect-aware INSERT ... ON CONFLICT DO UPDATE.

Both supported backends (SQLite for local development, PostgreSQL in
production) implement the same conflict clause, so an upsert keyed on a unique
constraint is a single statement and concurrent writers resolve to
"last writer wins" inside the database.
"""

from typing import Dict, Iterable

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert(db: Session, model, values: Dict, conflict_columns: Iterable[str], update_columns: Iterable[str]):
    """Executes an upsert of `values` into `model`'s table. The caller commits."""
    dialect = db.get_bind().dialect.name
    insert = _INSERT_BY_DIALECT.get(dialect)
    if insert is None:
        raise NotImplementedError(f"Upsert is not supported for the '{dialect}' dialect.")

    stmt = insert(model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=list(conflict_columns),
        set_={column: stmt.excluded[column] for column in update_columns},
    )
    db.execute(stmt)
