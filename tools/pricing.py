from dataclasses import dataclass, field
from typing import Dict, Optional
import os
import logging
import yaml
from pathlib import Path

logger = logging.getLogger(__name__)

PRICING_PATH = Path(os.getenv("PRICING_CONFIG", Path(__file__).resolve().parent.parent / "config" / "pricing.yaml"))

# Built-in table; config/pricing.yaml may override it.
CITY_MULTIPLIERS: Dict[str, float] = {
    "Mumbai": 2.5, "Delhi": 2.2, "Bangalore": 2.0, "Hyderabad": 1.8,
    "Chennai": 1.7, "Kolkata": 1.5, "Pune": 1.6, "Ahmedabad": 1.4,
    "Jaipur": 1.3, "Lucknow": 1.2, "Nagpur": 1.3, "Bhopal": 1.2,
    "Chandigarh": 1.5, "Thiruvananthapuram": 1.4, "Patna": 1.1, "Raipur": 1.1,
    "Gandhinagar": 1.3, "Ranchi": 1.1, "Bhubaneswar": 1.2, "Dehradun": 1.3,
    "Shimla": 1.4, "Panaji": 1.5, "Shillong": 1.2, "Imphal": 1.1,
    "Aizawl": 1.1, "Kohima": 1.1, "Agartala": 1.1, "Itanagar": 1.1,
    "Dispur": 1.2,
}


@dataclass(frozen=True)
class PricingAssumptions:
    """All constants of the heuristic, in INR."""
    base_price: float = 2_500_000
    per_bedroom: float = 1_000_000
    per_bathroom: float = 500_000
    per_floor: float = 1_500_000
    age_step: float = -20_000        # per year of age relative to reference_year
    reference_year: int = 2024
    per_sqft: float = 3_000
    growth_rate: float = 0.08
    price_floor: float = 1_000_000
    city_multipliers: Dict[str, float] = field(default_factory=lambda: dict(CITY_MULTIPLIERS))


DEFAULT_ASSUMPTIONS = PricingAssumptions()


@dataclass(frozen=True)
class PredictionInputs:
    bedrooms: int = 3
    bathrooms: int = 2
    floors: int = 1
    year_built: int = 2000
    location: str = "Mumbai"
    square_feet: int = 1200
    projection_years: int = 5


@dataclass(frozen=True)
class PredictionResult:
    current_price: float
    future_price: float


def load_assumptions(path: Optional[Path] = None) -> PricingAssumptions:
    """Read pricing.yaml; any key it leaves out keeps its built-in default."""
    path = Path(path) if path is not None else PRICING_PATH
    if not path.exists():
        logger.warning("Pricing config %s not found, using built-in assumptions", path)
        return DEFAULT_ASSUMPTIONS
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    d = DEFAULT_ASSUMPTIONS
    cities = raw.get("city_multipliers")
    return PricingAssumptions(
        base_price=float(raw.get("base_price", d.base_price)),
        per_bedroom=float(raw.get("per_bedroom", d.per_bedroom)),
        per_bathroom=float(raw.get("per_bathroom", d.per_bathroom)),
        per_floor=float(raw.get("per_floor", d.per_floor)),
        age_step=float(raw.get("age_step", d.age_step)),
        reference_year=int(raw.get("reference_year", d.reference_year)),
        per_sqft=float(raw.get("per_sqft", d.per_sqft)),
        growth_rate=float(raw.get("growth_rate", d.growth_rate)),
        price_floor=float(raw.get("price_floor", d.price_floor)),
        city_multipliers={str(k): float(v) for k, v in cities.items()} if cities else dict(d.city_multipliers),
    )


def city_multiplier(location: str, assumptions: PricingAssumptions = DEFAULT_ASSUMPTIONS) -> float:
    # exact, case-sensitive; unknown cities are neutral
    return assumptions.city_multipliers.get(location, 1.0)


def locations(assumptions: PricingAssumptions = DEFAULT_ASSUMPTIONS):
    return sorted(assumptions.city_multipliers)


def raw_price(inp: PredictionInputs, assumptions: PricingAssumptions = DEFAULT_ASSUMPTIONS) -> float:
    """Linear estimate times the city multiplier, before the price floor. May be negative."""
    a = assumptions
    linear = (
        a.base_price
        + inp.bedrooms * a.per_bedroom
        + inp.bathrooms * a.per_bathroom
        + inp.floors * a.per_floor
        + (a.reference_year - inp.year_built) * a.age_step
        + inp.square_feet * a.per_sqft
    )
    return linear * city_multiplier(inp.location, a)


def predict_price(inp: PredictionInputs, assumptions: PricingAssumptions = DEFAULT_ASSUMPTIONS) -> PredictionResult:
    """Current estimate and its value after `projection_years` of compounding.

    The floor is applied to each price separately; no rounding happens here.
    """
    raw = raw_price(inp, assumptions)
    future = raw * (1 + assumptions.growth_rate) ** inp.projection_years
    return PredictionResult(
        current_price=max(raw, assumptions.price_floor),
        future_price=max(future, assumptions.price_floor),
    )
