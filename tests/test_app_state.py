import pytest
from tools.app_state import Action, AppState, reduce
from tools.auth import Identity

USER = Identity(user_id="u1", email="asha@example.com")


def test_field_edit_does_not_recompute():
    s = reduce(AppState(), Action("calculate"))
    before = s.result
    s = reduce(s, Action("set_field", {"name": "square_feet", "value": 99_999}))
    assert s.inputs.square_feet == 20_000
    assert s.result == before
    assert s.priced_inputs.square_feet == 1200


def test_calculate_uses_current_inputs():
    s = reduce(AppState(), Action("set_field", {"name": "location", "value": "Atlantis"}))
    s = reduce(s, Action("calculate"))
    assert s.result.current_price == pytest.approx(11_120_000)


def test_theme_and_navigation():
    s = reduce(AppState(), Action("toggle_theme"))
    assert s.dark_mode is True
    s = reduce(s, Action("navigate", {"page": "project"}))
    assert s.page == "project"
    with pytest.raises(ValueError):
        reduce(s, Action("navigate", {"page": "settings"}))


def test_sign_in_and_out():
    s = reduce(AppState(page="project"), Action("signed_in", {"identity": USER, "dark_mode": True}))
    assert s.identity == USER and s.dark_mode and s.page == "home"
    s = reduce(s, Action("set_field", {"name": "bedrooms", "value": 5}))
    s = reduce(s, Action("calculate"))
    s = reduce(s, Action("signed_out"))
    assert s.identity is None
    assert s.result is None
    assert s.inputs.bedrooms == 3
    assert s.dark_mode is True


def test_reset_and_notice():
    s = reduce(AppState(), Action("set_field", {"name": "floors", "value": 0}))
    assert s.inputs.floors == 1
    s = reduce(s, Action("notify", {"message": "Prediction saved."}))
    assert s.notice == "Prediction saved."
    s = reduce(s, Action("reset_inputs"))
    assert s.notice is None and s.result is None


def test_unknown_action():
    with pytest.raises(ValueError):
        reduce(AppState(), Action("explode"))


def test_sign_in_without_stored_theme_keeps_current():
    s = reduce(AppState(), Action("toggle_theme"))
    s = reduce(s, Action("signed_in", {"identity": USER, "dark_mode": None}))
    assert s.dark_mode is True
    s = reduce(AppState(dark_mode=True), Action("signed_in", {"identity": USER, "dark_mode": False}))
    assert s.dark_mode is False
