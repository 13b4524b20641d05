import logging
import pathlib
import sys

import pandas as pd

from tools.log_config import configure_logging
from tools.predictions import COLUMNS
from tools.sql_utils import DB_PATH, duckdb_conn, ensure_schema

logger = logging.getLogger("init_duckdb")


def import_predictions(con, csv_path: pathlib.Path) -> int:
    """Load a CSV export of property_predictions (same columns) into the table."""
    df = pd.read_csv(csv_path)
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise SystemExit(f"CSV {csv_path} lacks columns: {', '.join(missing)}")

    # Basic normalization
    df["id"] = df["id"].astype(str)
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True, errors="coerce").dt.tz_localize(None)
    for col in ("bedrooms", "bathrooms", "floors", "year_built", "square_feet"):
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("Int64")
    df["predicted_price"] = pd.to_numeric(df["predicted_price"], errors="coerce")
    # every column is NOT NULL in the table
    df = df.dropna(subset=COLUMNS)

    con.register("df_in", df[COLUMNS])
    con.execute(f"""
        INSERT OR REPLACE INTO property_predictions ({', '.join(COLUMNS)})
        SELECT {', '.join(COLUMNS)} FROM df_in;
    """)
    con.unregister("df_in")
    return len(df)


def main():
    configure_logging()
    with duckdb_conn() as con:
        ensure_schema(con)
        if len(sys.argv) > 1:
            csv_path = pathlib.Path(sys.argv[1])
            if not csv_path.exists():
                raise SystemExit(f"CSV not found: {csv_path}")
            n = import_predictions(con, csv_path)
            logger.info("Imported %d saved predictions from %s", n, csv_path)
        total = con.execute("SELECT COUNT(*) FROM property_predictions").fetchone()[0]
    logger.info("Schema ready in %s (%d saved predictions)", DB_PATH, total)


if __name__ == "__main__":
    main()
