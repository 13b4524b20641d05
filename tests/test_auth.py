import pytest
from tools.auth import AuthError, load_dark_mode, save_dark_mode, sign_in, sign_up


@pytest.fixture
def db(tmp_path):
    return tmp_path / "auth.duckdb"


def test_sign_up_then_sign_in(db):
    user = sign_up("Asha@Example.com", "secret1", "secret1", db_path=db)
    assert user.email == "asha@example.com"
    again = sign_in("asha@example.com", "secret1", db_path=db)
    assert again == user


def test_wrong_password_and_unknown_user(db):
    sign_up("asha@example.com", "secret1", db_path=db)
    with pytest.raises(AuthError, match="Invalid email or password"):
        sign_in("asha@example.com", "nope", db_path=db)
    with pytest.raises(AuthError, match="Invalid email or password"):
        sign_in("ghost@example.com", "secret1", db_path=db)


@pytest.mark.parametrize("email,pw,confirm", [
    ("not-an-email", "secret1", "secret1"),
    ("asha@example.com", "123", "123"),
    ("asha@example.com", "secret1", "secret2"),
])
def test_sign_up_validation(db, email, pw, confirm):
    with pytest.raises(AuthError):
        sign_up(email, pw, confirm, db_path=db)


def test_duplicate_sign_up(db):
    sign_up("asha@example.com", "secret1", db_path=db)
    with pytest.raises(AuthError, match="already exists"):
        sign_up("asha@example.com", "other12", db_path=db)


def test_dark_mode_preference(db):
    user = sign_up("asha@example.com", "secret1", db_path=db)
    assert load_dark_mode(user.user_id, db_path=db) is None
    assert save_dark_mode(user.user_id, True, db_path=db) is True
    assert load_dark_mode(user.user_id, db_path=db) is True
    save_dark_mode(user.user_id, False, db_path=db)
    assert load_dark_mode(user.user_id, db_path=db) is False


@pytest.fixture
def unusable_db(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    return blocker / "auth.duckdb"


def test_store_failure_surfaces_as_auth_error(unusable_db):
    with pytest.raises(AuthError):
        sign_up("asha@example.com", "secret1", db_path=unusable_db)
    with pytest.raises(AuthError):
        sign_in("asha@example.com", "secret1", db_path=unusable_db)


def test_theme_store_failure_is_not_fatal(unusable_db):
    assert load_dark_mode("u1", db_path=unusable_db) is None
    assert save_dark_mode("u1", True, db_path=unusable_db) is False
