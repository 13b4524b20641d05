from dataclasses import replace
from typing import Any, Dict, Optional, Tuple
import math
import sys

from tools.pricing import PredictionInputs

# Inclusive domains of the numeric fields of PredictionInputs.
FIELD_BOUNDS: Dict[str, Tuple[int, int]] = {
    "bedrooms": (1, 120),
    "bathrooms": (1, 100),
    "floors": (1, 30),          # the UI also offers 0 ("Ground Floor"); it clamps to 1
    "year_built": (1900, 2025),
    "square_feet": (200, 20000),
    "projection_years": (1, 100),
}

DEFAULT_INPUTS = PredictionInputs()


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def _to_number(raw: Any) -> float:
    """Best-effort numeric coercion; anything unreadable becomes NaN."""
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if raw == "":
            return math.nan
    try:
        return float(raw)
    except OverflowError:
        # finite but beyond float range; keep the sign so it clamps to a bound
        return sys.float_info.max if raw > 0 else -sys.float_info.max
    except (TypeError, ValueError):
        return math.nan


def normalize_field(name: str, raw: Any, previous: Optional[int] = None) -> int:
    """Clamp one numeric field into its domain.

    Non-finite input (empty text, NaN, +/-inf) takes the previous valid value
    when there is one, otherwise the field default. Fractions truncate toward zero.
    """
    if name not in FIELD_BOUNDS:
        raise KeyError(f"Not a numeric input field: {name}")
    lo, hi = FIELD_BOUNDS[name]
    value = _to_number(raw)
    if not math.isfinite(value):
        fallback = previous if previous is not None else getattr(DEFAULT_INPUTS, name)
        value = _to_number(fallback)
        if not math.isfinite(value):
            value = getattr(DEFAULT_INPUTS, name)
    return int(clamp(value, lo, hi))


def with_field(inputs: PredictionInputs, name: str, raw: Any) -> PredictionInputs:
    """Return a copy of `inputs` with only `name` replaced (and re-clamped)."""
    if name == "location":
        return replace(inputs, location="" if raw is None else str(raw))
    return replace(inputs, **{name: normalize_field(name, raw, previous=getattr(inputs, name))})


def normalize_inputs(raw: Dict[str, Any]) -> PredictionInputs:
    """Build a fully in-domain PredictionInputs from a loose mapping (missing keys use defaults)."""
    out = DEFAULT_INPUTS
    for name, value in raw.items():
        if name == "location" or name in FIELD_BOUNDS:
            out = with_field(out, name, value)
    return out
