import hashlib
import hmac
import logging
import re
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import duckdb

from tools.sql_utils import duckdb_conn, ensure_schema

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LEN = 6
PBKDF2_ROUNDS = 120_000


class AuthError(Exception): pass


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str


def _hash_password(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), PBKDF2_ROUNDS).hex()


def sign_up(email: str, password: str, confirm: Optional[str] = None, db_path=None) -> Identity:
    email = (email or "").strip().lower()
    if not EMAIL_RE.match(email):
        raise AuthError("Please enter a valid email address")
    if len(password or "") < MIN_PASSWORD_LEN:
        raise AuthError(f"Password must be at least {MIN_PASSWORD_LEN} characters")
    if confirm is not None and confirm != password:
        raise AuthError("Passwords do not match")

    salt = secrets.token_hex(16)
    user = Identity(user_id=str(uuid.uuid4()), email=email)
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            taken = con.execute("SELECT COUNT(*) FROM app_users WHERE email = ?", [email]).fetchone()[0]
            if taken:
                raise AuthError("An account with this email already exists")
            con.execute(
                "INSERT INTO app_users (id, email, password_hash, salt, created_at) VALUES (?, ?, ?, ?, ?)",
                [user.user_id, email, _hash_password(password, salt), salt, datetime.now()],
            )
    except duckdb.Error as e:
        logger.error("Sign-up for %s failed: %s", email, e)
        raise AuthError("An error occurred during sign up") from e
    logger.info("New account %s", email)
    return user


def sign_in(email: str, password: str, db_path=None) -> Identity:
    email = (email or "").strip().lower()
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            row = con.execute(
                "SELECT id, password_hash, salt FROM app_users WHERE email = ?", [email]
            ).fetchone()
    except duckdb.Error as e:
        logger.error("Sign-in lookup for %s failed: %s", email, e)
        raise AuthError("An error occurred during login") from e
    if row is None or not hmac.compare_digest(row[1], _hash_password(password or "", row[2])):
        logger.warning("Failed sign-in for %s", email)
        raise AuthError("Invalid email or password")
    logger.info("Signed in %s", email)
    return Identity(user_id=row[0], email=email)


def load_dark_mode(user_id: str, db_path=None) -> Optional[bool]:
    """Stored theme flag, or None when the user has none (or the store is unavailable)."""
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            row = con.execute("SELECT dark_mode FROM user_settings WHERE user_id = ?", [user_id]).fetchone()
    except duckdb.Error as e:
        logger.warning("Could not load theme for %s: %s", user_id, e)
        return None
    return bool(row[0]) if row else None


def save_dark_mode(user_id: str, dark_mode: bool, db_path=None) -> bool:
    """Persist the theme flag. Returns False when the store rejects the write."""
    try:
        with duckdb_conn(db_path) as con:
            ensure_schema(con)
            con.execute(
                "INSERT OR REPLACE INTO user_settings (user_id, dark_mode) VALUES (?, ?)",
                [user_id, bool(dark_mode)],
            )
    except duckdb.Error as e:
        logger.warning("Could not save theme for %s: %s", user_id, e)
        return False
    return True
