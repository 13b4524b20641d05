import pandas as pd
import streamlit as st
from tools.formatting import fmt_inr
from tools.pricing import load_assumptions

st.set_page_config(page_title="Methodology • India House Price Estimator", layout="wide")
st.title("🧩 Methodology")
st.caption("How the estimate and the projection are computed")

a = load_assumptions()

st.markdown(f"""
## Formula
The estimate is a fixed linear formula, not a trained model:

| term | value |
|---|---|
| Base price | {fmt_inr(a.base_price)} |
| Per bedroom | {fmt_inr(a.per_bedroom)} |
| Per bathroom | {fmt_inr(a.per_bathroom)} |
| Per floor | {fmt_inr(a.per_floor)} |
| Per year of age (vs {a.reference_year}) | {fmt_inr(a.age_step)} |
| Per square foot | {fmt_inr(a.per_sqft)} |

The sum is multiplied by the **city multiplier** below (unlisted cities use 1.0).

- **Current price** = max(estimate, {fmt_inr(a.price_floor)})
- **Future price** = max(estimate × {1 + a.growth_rate:.2f}^years, {fmt_inr(a.price_floor)})

Appreciation is compounded once a year; fractional years are not supported.
Very old buildings can push the raw estimate below zero; the floor is applied afterwards.
""")

st.markdown("---")
st.markdown("## Input ranges")
st.markdown("""
- Bedrooms 1–120, bathrooms 1–100, floors 1–30 (Ground Floor counts as 1)
- Year built 1900–2025, area 200–20,000 sq.ft, projection 1–100 years
- Out-of-range values are clamped; an empty field keeps its last valid value.
""")

st.markdown("## City multipliers")
cities = pd.DataFrame(sorted(a.city_multipliers.items(), key=lambda kv: (-kv[1], kv[0])), columns=["city", "multiplier"])
st.dataframe(cities, width="stretch", hide_index=True)
st.caption("Assumptions are read from config/pricing.yaml.")
