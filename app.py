"""
Streamlit UI — Sowing Advisor.
Sidebar: crop, region, soil, month. Tabs: sowing window prediction and full crop plan.
Outcome feedback from past seasons updates the historical success records.
Run with: streamlit run app.py
"""

import sys
from datetime import datetime
from pathlib import Path

import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT))

from sowing_advisor.config import EXPERIENCE_TIERS, AGGREGATION_MODES, AGGREGATION_MODE, ensure_dirs
from sowing_advisor.history import get_history_store
from sowing_advisor.plan_generator import generate_crop_plan
from sowing_advisor.predictor import predict_sowing_window
from sowing_advisor.reference_data import default_reference_data, list_crops
from sowing_advisor.reporting import score_frame, timeline_frame

MONTHS = [datetime(2000, m, 1).strftime("%B") for m in range(1, 13)]
SOIL_TYPES = ["clay", "loamy", "silt", "sandy", "black", "red"]
OTHER_REGION = "Other (use default baseline)"


def _confidence_colour(label: str) -> str:
    return {"High": "green", "Medium": "orange", "Low": "red"}.get(label, "grey")


def _impact_icon(impact: str) -> str:
    return {"High": "🔴", "Medium": "🟡", "Low": "🟢"}.get(impact, "⚪")


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

THEME = {
    "soil":  "#1f1a14",   # page background
    "loam":  "#2b241b",   # sidebar and panels
    "straw": "#e8d9b0",   # headings
    "leaf":  "#5a8f3d",   # buttons
    "sprout": "#7fb35a",  # button hover, metric labels
    "text":  "#f4efe3",
}


def apply_theme():
    t = THEME
    st.markdown(f"""
    <style>
    .stApp {{ background: radial-gradient(circle at top, {t['loam']} 0%, {t['soil']} 70%); }}
    [data-testid="stHeader"] {{ background: {t['soil']}e6; }}
    .main .block-container {{ padding-top: 1rem; max-width: 1200px; }}
    h1, h2, h3 {{ color: {t['straw']} !important; letter-spacing: 0.02em; }}
    p, span, label {{ color: {t['text']} !important; }}
    [data-testid="stMetricLabel"] {{ color: {t['sprout']}; text-transform: uppercase; font-size: 0.8rem; }}
    [data-testid="stMetricValue"] {{ color: {t['straw']}; }}
    div[data-testid="stExpander"] {{ background: {t['loam']}; border-radius: 6px; border: 1px solid {t['leaf']}55; }}
    .stButton > button, .stDownloadButton > button {{
        background: {t['leaf']} !important; color: {t['text']} !important; border-radius: 6px; border: none;
    }}
    .stButton > button:hover, .stDownloadButton > button:hover {{ background: {t['sprout']} !important; }}
    [data-testid="stSidebar"] {{ background: {t['loam']}; border-right: 1px solid {t['leaf']}40; }}
    </style>
    """, unsafe_allow_html=True)


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def render_prediction(result: dict):
    if result["region_defaulted"]:
        st.warning(
            f"No weather baseline for **{result['region']}** — "
            f"using **{result['region_used']}** instead."
        )

    c1, c2, c3 = st.columns(3)
    c1.metric("Suitability", f"{result['suitability_score']:.2f}")
    c2.metric("Confidence", result["confidence"])
    c3.metric("Next sowing", result["optimal_sowing_date"], result["season"].capitalize())
    if result["success_multiplier"] is not None:
        st.caption(f"Past success rate for {result['season']} sowings here: {result['success_multiplier']:.2f}")
    st.markdown(
        f"Confidence: :{_confidence_colour(result['confidence'])}[{result['confidence']}] "
        f"• aggregation: *{result['aggregation']}*"
    )

    df = score_frame(result)
    st.bar_chart(df.set_index("factor")["score"])
    st.dataframe(df, use_container_width=True)

    if result["recommendations"]:
        st.subheader("Recommendations")
        for rec in result["recommendations"]:
            st.info(rec)


def render_plan(plan: dict):
    fin = plan["financial_projection"]
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Variety", plan["variety"] or "—")
    c2.metric("Area under crop", plan["area_allocation"])
    c3.metric("Total investment", fin["display"]["total_investment"])
    c4.metric("ROI", fin["display"]["roi"])

    if plan["region_defaulted"]:
        st.warning("Region not recognised — plan uses the default weather baseline.")
    if fin["budget_inr"] > 0 and not fin["within_budget"]:
        st.error(f"Budget short by ₹{fin['budget_gap_inr']:,.0f}")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Inputs**")
        st.markdown(f"- **Seeds:** {plan['inputs']['seeds']['display']}")
        for stage, dose in plan["inputs"]["fertilizers"].items():
            st.markdown(f"- **{stage.replace('_', ' ').capitalize()}:** {dose}")
        st.markdown(f"- **Pest management:** {', '.join(plan['inputs']['pesticides'])}")
        st.markdown("**Equipment**")
        for item in plan["equipment"]:
            st.markdown(f"- {item}")
    with col2:
        st.markdown("**Financial projection**")
        st.markdown(f"- **Expected revenue:** {fin['display']['expected_revenue']}")
        st.markdown(f"- **Net profit:** {fin['display']['net_profit']}")
        st.markdown("**Risks**")
        for r in plan["risk_assessment"]:
            st.markdown(f"{_impact_icon(r['impact'])} **{r['factor']}** — {r['mitigation']}")

    st.subheader("Timeline")
    tl = timeline_frame(plan)
    st.dataframe(tl, use_container_width=True)
    st.download_button(
        label="Download timeline CSV",
        data=tl.to_csv(index=False).encode("utf-8"),
        file_name=f"plan_{plan['crop_id']}.csv",
        mime="text/csv",
    )

    with st.expander("Recommendations"):
        for rec in plan["recommendations"]:
            st.markdown(f"- {rec}")


def _render_feedback(crop: str, region: str | None):
    sb = st.sidebar
    sb.divider()
    sb.markdown("**Record a past season**")
    with sb.form("outcome"):
        yield_value = st.number_input("Yield (crop's yield unit per acre)", min_value=0.0, value=0.0)
        success = st.checkbox("Season was a success")
        submitted = st.form_submit_button("Save outcome")
    if submitted:
        if not region:
            sb.error("Pick a known region to record an outcome.")
            return
        try:
            store = get_history_store()
            rec = store.record_outcome(crop, region, yield_value, success)
            store.save()
            sb.success(f"Saved. Success rate now {rec.success_rate:.2f} over {rec.samples} seasons.")
        except ValueError as exc:
            sb.error(str(exc))

    history = get_history_store().to_frame()
    if not history.empty:
        with sb.expander("Historical outcomes"):
            st.dataframe(history, use_container_width=True)


# ---------------------------------------------------------------------------
# Main app
# ---------------------------------------------------------------------------

def main():
    st.set_page_config(
        page_title="Sowing Advisor",
        page_icon="🌱",
        layout="wide",
    )
    apply_theme()
    ensure_dirs()

    st.title("🌱 Sowing Advisor")
    st.caption("Crop suitability • Next sowing window • Crop plan with ₹ projection")

    ref = default_reference_data()
    crops = list_crops(ref)
    crop_names = {c["name"]: c["id"] for c in crops}

    sb = st.sidebar
    crop_label = sb.selectbox("Crop", list(crop_names))
    crop = crop_names[crop_label]
    region_raw = sb.selectbox("Region", sorted(ref.regions) + [OTHER_REGION])
    region = None if region_raw == OTHER_REGION else region_raw
    soil = sb.selectbox("Soil type", SOIL_TYPES)
    month_label = sb.selectbox("Current month", MONTHS, index=datetime.now().month - 1)
    month = MONTHS.index(month_label) + 1
    aggregation = sb.radio(
        "Suitability rule", AGGREGATION_MODES, index=AGGREGATION_MODES.index(AGGREGATION_MODE),
    )

    tab_predict, tab_plan = st.tabs(["Sowing window", "Crop plan"])

    with tab_predict:
        result = predict_sowing_window(
            crop, region_raw, soil, month, aggregation=aggregation,
        )
        if result is None:
            st.error("Prediction unavailable for this crop.")
        else:
            render_prediction(result)

    with tab_plan:
        col1, col2, col3 = st.columns(3)
        with col1:
            farm_size = st.number_input("Farm size (acres)", min_value=0.1, max_value=1000.0, value=5.0, step=0.5)
        with col2:
            budget = st.number_input("Budget (₹)", min_value=0.0, value=100_000.0, step=5_000.0)
        with col3:
            experience = st.selectbox("Experience", EXPERIENCE_TIERS, index=1)

        if st.button("Generate plan", type="primary", use_container_width=True):
            try:
                st.session_state["last_plan"] = generate_crop_plan(
                    crop, region_raw, soil, farm_size, budget, experience,
                    current_month=month, aggregation=aggregation,
                )
            except ValueError as exc:
                st.error(f"Invalid input: {exc}")
                st.stop()

        plan = st.session_state.get("last_plan")
        if plan is None:
            st.info("Set farm size, budget and experience, then click **Generate plan**.")
        else:
            render_plan(plan)

    _render_feedback(crop, region)
    sb.divider()
    sb.caption("Sowing Advisor")


if __name__ == "__main__":
    main()
