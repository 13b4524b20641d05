from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from tools.auth import Identity
from tools.normalize import DEFAULT_INPUTS, with_field
from tools.pricing import DEFAULT_ASSUMPTIONS, PredictionInputs, PredictionResult, PricingAssumptions, predict_price

PAGES = ("home", "project")


@dataclass(frozen=True)
class Action:
    kind: str                  # see reduce() for the accepted kinds
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AppState:
    inputs: PredictionInputs = DEFAULT_INPUTS
    result: Optional[PredictionResult] = None
    priced_inputs: Optional[PredictionInputs] = None   # inputs the result was computed from
    dark_mode: bool = False
    page: str = "home"
    identity: Optional[Identity] = None
    notice: Optional[str] = None


def reduce(state: AppState, action: Action, assumptions: PricingAssumptions = DEFAULT_ASSUMPTIONS) -> AppState:
    """Apply one user action. The result is recomputed only on 'calculate'."""
    p = action.payload
    if action.kind == "set_field":
        return replace(state, inputs=with_field(state.inputs, p["name"], p.get("value")), notice=None)
    if action.kind == "calculate":
        return replace(state, result=predict_price(state.inputs, assumptions), priced_inputs=state.inputs, notice=None)
    if action.kind == "reset_inputs":
        return replace(state, inputs=DEFAULT_INPUTS, result=None, priced_inputs=None, notice=None)
    if action.kind == "toggle_theme":
        return replace(state, dark_mode=not state.dark_mode)
    if action.kind == "navigate":
        page = p.get("page")
        if page not in PAGES:
            raise ValueError(f"Unknown page: {page}")
        return replace(state, page=page)
    if action.kind == "signed_in":
        return replace(
            state,
            identity=p["identity"],
            dark_mode=state.dark_mode if p.get("dark_mode") is None else bool(p["dark_mode"]),
            page="home",
            notice=None,
        )
    if action.kind == "notify":
        return replace(state, notice=p.get("message"))
    if action.kind == "signed_out":
        # theme survives sign-out; everything session-bound is dropped
        return AppState(dark_mode=state.dark_mode)
    raise ValueError(f"Unknown action: {action.kind}")
