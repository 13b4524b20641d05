import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

import duckdb

from tools.auth import Identity
from tools.pricing import PredictionInputs, PredictionResult
from tools.sql_utils import duckdb_conn, ensure_schema, rows_to_dicts

logger = logging.getLogger(__name__)

COLUMNS = [
    "id", "created_at", "user_id", "user_email", "bedrooms", "bathrooms",
    "floors", "year_built", "location", "square_feet", "predicted_price",
]


class StoreError(Exception): pass


class SaveRefused(Exception): pass


def build_row(identity: Identity, inputs: PredictionInputs, result: PredictionResult) -> Dict[str, Any]:
    """Insert payload; id and created_at are assigned by the store."""
    return {
        "user_id": identity.user_id,
        "user_email": identity.email,
        "bedrooms": inputs.bedrooms,
        "bathrooms": inputs.bathrooms,
        "floors": inputs.floors,
        "year_built": inputs.year_built,
        "location": inputs.location,
        "square_feet": inputs.square_feet,
        "predicted_price": float(result.current_price),
    }


def save_prediction(
    identity: Optional[Identity],
    inputs: PredictionInputs,
    result: Optional[PredictionResult],
    db_path=None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Insert one estimate and return the stored row."""
    if identity is None:
        raise SaveRefused("Please sign in to save predictions.")
    if result is None:
        raise SaveRefused("Calculate a prediction before saving it.")

    row = {"id": str(uuid.uuid4()), "created_at": now or datetime.now()}
    row.update(build_row(identity, inputs, result))
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            con.execute(
                f"INSERT INTO property_predictions ({', '.join(COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in COLUMNS)})",
                [row[c] for c in COLUMNS],
            )
            stored = con.execute(
                f"SELECT {', '.join(COLUMNS)} FROM property_predictions WHERE id = ?", [row["id"]]
            ).fetchone()
    except duckdb.Error as e:
        logger.error("Saving prediction for %s failed: %s", identity.email, e)
        raise StoreError(f"Could not save prediction: {e}") from e
    logger.info("Saved prediction %s for %s (%s)", row["id"], identity.email, inputs.location)
    return dict(zip(COLUMNS, stored))


def list_predictions(db_path=None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """All saved estimates from every user, newest first."""
    sql = f"SELECT {', '.join(COLUMNS)} FROM property_predictions ORDER BY created_at DESC"
    params = []
    if limit is not None:
        sql += " LIMIT ?"
        params.append(int(limit))
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            rows = con.execute(sql, params).fetchall()
    except duckdb.Error as e:
        logger.error("Listing predictions failed: %s", e)
        raise StoreError(f"Could not load saved predictions: {e}") from e
    return rows_to_dicts(rows, COLUMNS)


def delete_prediction(prediction_id: str, db_path=None) -> bool:
    """Delete by id. Ownership is checked by the caller (see can_delete)."""
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            found = con.execute(
                "SELECT COUNT(*) FROM property_predictions WHERE id = ?", [prediction_id]
            ).fetchone()[0]
            con.execute("DELETE FROM property_predictions WHERE id = ?", [prediction_id])
    except duckdb.Error as e:
        logger.error("Deleting prediction %s failed: %s", prediction_id, e)
        raise StoreError(f"Could not delete prediction: {e}") from e
    logger.info("Deleted prediction %s (found=%s)", prediction_id, bool(found))
    return bool(found)


def can_delete(row: Dict[str, Any], identity: Optional[Identity]) -> bool:
    return identity is not None and row.get("user_email") == identity.email
