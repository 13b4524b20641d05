import os
import duckdb
from pathlib import Path

DB_PATH = Path(os.getenv("PRICE_DB", "db/estimator.duckdb"))

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS app_users (
      id            VARCHAR PRIMARY KEY,
      email         VARCHAR UNIQUE NOT NULL,
      password_hash VARCHAR NOT NULL,
      salt          VARCHAR NOT NULL,
      created_at    TIMESTAMP NOT NULL
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS user_settings (
      user_id   VARCHAR PRIMARY KEY,
      dark_mode BOOLEAN NOT NULL DEFAULT FALSE
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS property_predictions (
      id              VARCHAR PRIMARY KEY,
      created_at      TIMESTAMP NOT NULL,
      user_id         VARCHAR NOT NULL,
      user_email      VARCHAR NOT NULL,
      bedrooms        INTEGER NOT NULL,
      bathrooms       INTEGER NOT NULL,
      floors          INTEGER NOT NULL,
      year_built      INTEGER NOT NULL,
      location        VARCHAR NOT NULL,
      square_feet     INTEGER NOT NULL,
      predicted_price DOUBLE NOT NULL
    );
    """,
]


def duckdb_conn(db_path=None):
    """Open the store; filesystem failures surface as duckdb.IOException."""
    path = Path(db_path) if db_path is not None else DB_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise duckdb.IOException(f"Cannot create database directory {path.parent}: {e}") from e
    return duckdb.connect(path.as_posix(), read_only=False)


def ensure_schema(con):
    for stmt in SCHEMA:
        con.execute(stmt)


def rows_to_dicts(rows, cols):
    return [dict(zip(cols, r)) for r in rows]
