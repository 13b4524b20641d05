import logging
import pandas as pd
import streamlit as st
from tools.app_state import Action, AppState, reduce
from tools.auth import AuthError, load_dark_mode, save_dark_mode, sign_in, sign_up
from tools.formatting import fmt_inr, fmt_inr_compact, fmt_saved_at
from tools.listings import load_listings
from tools.log_config import configure_logging
from tools.normalize import FIELD_BOUNDS
from tools.predictions import SaveRefused, StoreError, can_delete, delete_prediction, list_predictions, save_prediction
from tools.pricing import load_assumptions, locations
from tools.sql_utils import DB_PATH
import time

configure_logging()
logger = logging.getLogger("streamlit_app")

st.set_page_config(page_title="India House Price Estimator", page_icon="🏠", layout="wide")

NUMERIC_FIELDS = list(FIELD_BOUNDS)
DARK_CSS = """
<style>
.stApp { background-color: #111827; color: #f3f4f6; }
.stApp h1, .stApp h2, .stApp h3, .stApp label, .stApp p, .stApp span { color: #f3f4f6; }
[data-testid="stMetricValue"] { color: #60a5fa; }
</style>
"""


@st.cache_resource
def get_assumptions():
    return load_assumptions()


@st.cache_data
def get_listings():
    return load_listings()


assumptions = get_assumptions()

if "app" not in st.session_state:
    st.session_state["app"] = AppState()


def dispatch(kind, **payload):
    st.session_state["app"] = reduce(st.session_state["app"], Action(kind, payload), assumptions)


def sync_widgets():
    """Copy the (clamped) inputs back into the widget keys."""
    inputs = st.session_state["app"].inputs
    for name in NUMERIC_FIELDS + ["location"]:
        st.session_state[f"in_{name}"] = getattr(inputs, name)


def on_field_change(name):
    dispatch("set_field", name=name, value=st.session_state[f"in_{name}"])
    st.session_state[f"in_{name}"] = getattr(st.session_state["app"].inputs, name)


def on_toggle_theme():
    dispatch("toggle_theme")
    state = st.session_state["app"]
    if state.identity is not None:
        save_dark_mode(state.identity.user_id, state.dark_mode)


def on_reset():
    dispatch("reset_inputs")
    sync_widgets()


def on_logout():
    email = st.session_state["app"].identity.email if st.session_state["app"].identity else "-"
    dispatch("signed_out")
    sync_widgets()
    logger.info("Signed out %s", email)


def on_signed_in(identity):
    stored = load_dark_mode(identity.user_id)
    dispatch("signed_in", identity=identity, dark_mode=stored)
    if stored is None:
        # first sign-in keeps the theme picked on the auth page
        save_dark_mode(identity.user_id, st.session_state["app"].dark_mode)
    sync_widgets()


if "in_square_feet" not in st.session_state:
    sync_widgets()

state = st.session_state["app"]
if state.dark_mode:
    st.markdown(DARK_CSS, unsafe_allow_html=True)


# ---------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------
def render_auth():
    st.title("🏠 House Price Predictor")
    st.caption("Sign in to estimate property prices across Indian cities.")
    st.button("☀️ Light mode" if state.dark_mode else "🌙 Dark mode", on_click=on_toggle_theme)

    mode = st.radio("Account", ["Sign In", "Sign Up"], horizontal=True, label_visibility="collapsed")
    if mode == "Sign In":
        with st.form("login"):
            email = st.text_input("Email", placeholder="Enter your email")
            password = st.text_input("Password", type="password", placeholder="Enter your password")
            submitted = st.form_submit_button("Sign In")
        if submitted:
            try:
                on_signed_in(sign_in(email, password))
                st.rerun()
            except AuthError as e:
                st.error(str(e))
    else:
        with st.form("signup"):
            email = st.text_input("Email", placeholder="Enter your email")
            password = st.text_input("Password", type="password", placeholder="At least 6 characters")
            confirm = st.text_input("Confirm password", type="password")
            submitted = st.form_submit_button("Create Account")
        if submitted:
            try:
                on_signed_in(sign_up(email, password, confirm))
                st.rerun()
            except AuthError as e:
                st.error(str(e))


if state.identity is None:
    render_auth()
    st.stop()


# ---------------------------------------------------------------------
# Header (both pages)
# ---------------------------------------------------------------------
h1, h2, h3, h4 = st.columns([4, 3, 1, 1])
with h1:
    if state.page == "home":
        st.title("🏠 Featured Properties")
    else:
        st.button("← Back to Home", on_click=dispatch, args=("navigate",), kwargs={"page": "home"})
        st.title("🏠 House Price Predictor")
with h2:
    st.write(f"Welcome, **{state.identity.email}**")
with h3:
    st.button("Logout", on_click=on_logout)
with h4:
    st.button("☀️" if state.dark_mode else "🌙", on_click=on_toggle_theme, help="Toggle dark mode")

# Data freshness (DuckDB)
if DB_PATH.exists():
    age_hours = (time.time() - DB_PATH.stat().st_mtime) / 3600
    st.caption(f"Saved estimates store • last write ~{age_hours:.1f}h ago")


# ---------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------
def render_home():
    st.button("Go to House Prediction →", type="primary", on_click=dispatch, args=("navigate",), kwargs={"page": "project"})
    listings = get_listings()
    if not listings:
        st.info("No featured properties right now.")
        return
    cols = st.columns(3)
    for i, item in enumerate(listings):
        with cols[i % 3]:
            st.image(item.image_url, width="stretch")
            st.subheader(fmt_inr_compact(item.price))
            st.write(f"📍 {item.location}")
            st.caption(f"🛏 {item.bedrooms} • 🛁 {item.bathrooms} • {item.square_feet} sq.ft")
            st.write(f"Owner: **{item.owner_name}**")
            c1, c2 = st.columns(2)
            with c1:
                st.link_button("Call", item.tel_link)
            with c2:
                st.link_button("Email", item.mail_link)


# ---------------------------------------------------------------------
# Prediction
# ---------------------------------------------------------------------
def floor_label(n):
    if n == 0:
        return "Ground Floor"
    return f"{n} Floor" if n == 1 else f"{n} Floors"


def render_saved():
    st.divider()
    st.subheader("Saved Predictions")
    try:
        rows = list_predictions()
    except StoreError as e:
        st.error(str(e))
        return
    if not rows:
        st.caption("No saved predictions yet.")
        return

    df = pd.DataFrame(rows)
    df["saved"] = df["created_at"].map(fmt_saved_at)
    df["price"] = df["predicted_price"].map(fmt_inr)
    st.dataframe(
        df[["saved", "user_email", "location", "square_feet", "bedrooms", "bathrooms", "floors", "year_built", "price"]],
        width="stretch",
        hide_index=True,
    )

    mine = [r for r in rows if can_delete(r, state.identity)]
    if mine:
        st.write("**Your predictions**")
        for r in mine:
            c1, c2 = st.columns([5, 1])
            with c1:
                st.write(f"{fmt_saved_at(r['created_at'])} • {r['location']} • {fmt_inr(r['predicted_price'])}")
            with c2:
                if st.button("Delete", key=f"del_{r['id']}"):
                    try:
                        delete_prediction(r["id"])
                        st.rerun()
                    except StoreError as e:
                        st.error(str(e))


def render_project():
    st.caption("Estimates use a fixed heuristic and 8% yearly appreciation. See the Methodology page.")
    left, right = st.columns(2)
    with left:
        st.selectbox("📍 Location", locations(assumptions), key="in_location",
                     on_change=on_field_change, args=("location",))
        st.number_input("Square Feet (200-20,000)", *FIELD_BOUNDS["square_feet"], step=50, key="in_square_feet",
                        on_change=on_field_change, args=("square_feet",))
        st.number_input("Number of Bedrooms", *FIELD_BOUNDS["bedrooms"], step=1, key="in_bedrooms",
                        on_change=on_field_change, args=("bedrooms",))
        st.number_input("Number of Bathrooms", *FIELD_BOUNDS["bathrooms"], step=1, key="in_bathrooms",
                        on_change=on_field_change, args=("bathrooms",))
    with right:
        st.selectbox("Number of Floors", list(range(0, 31)), format_func=floor_label, key="in_floors",
                     on_change=on_field_change, args=("floors",))
        st.number_input("Year Built", *FIELD_BOUNDS["year_built"], step=1, key="in_year_built",
                        on_change=on_field_change, args=("year_built",))
        st.slider("Projection Years", 1, 100, key="in_projection_years",
                  on_change=on_field_change, args=("projection_years",))

    b1, b2 = st.columns([1, 5])
    with b1:
        st.button("Calculate Prediction", type="primary", on_click=dispatch, args=("calculate",))
    with b2:
        st.button("Reset", on_click=on_reset)

    current = st.session_state["app"]
    if current.result is not None:
        r = current.result
        c1, c2 = st.columns(2)
        with c1:
            st.metric("Current Estimated Price", fmt_inr(r.current_price))
            st.caption(fmt_inr_compact(r.current_price))
        with c2:
            st.metric("Projected Future Price", fmt_inr(r.future_price))
            st.caption(fmt_inr_compact(r.future_price))

        if st.button("Save Prediction"):
            try:
                save_prediction(current.identity, current.priced_inputs, current.result)
                dispatch("notify", message="Prediction saved.")
            except SaveRefused as e:
                st.warning(str(e))
            except StoreError as e:
                st.error(str(e))

    if st.session_state["app"].notice:
        st.success(st.session_state["app"].notice)

    render_saved()


if state.page == "home":
    render_home()
else:
    render_project()

st.write("")
st.caption("Estimates are indicative only and are not a valuation or financial advice.")
