# app.py — Holding Pattern Calculator (Streamlit)
# Run with:  streamlit run holdcalc/app.py
#
# Streamlit re-runs this script on every widget change, so each edit triggers one
# full, independent recomputation.

import logging

import streamlit as st

from holdcalc.config import SETTINGS
from holdcalc.engine import compute_hold
from holdcalc.logging_config import setup_logging
from holdcalc.render import draw_hold

setup_logging(logging.INFO)

# ------------------------------------ UI ---------------------------------------------

st.set_page_config(page_title="Hold Calculator", page_icon="✈️", layout="wide")
st.title("Holding Pattern • Drift, Headings & Outbound Time")

st.caption("Winds are entered as **ddd/ss** (e.g. 270/20). Empty or unreadable fields count as 0; "
           f"TAS defaults to {SETTINGS['inputs']['tas_kt']:g} kt and base time to "
           f"{SETTINGS['inputs']['outbound_base_time_sec']:g} s.")

col_in, col_out = st.columns([2, 3], gap="large")

with col_in:
    st.subheader("Winds")
    target_alt = st.text_input("Target altitude (ft)", "5000")
    a1, a2 = st.columns(2)
    low_alt = a1.text_input("Low altitude (ft)", "3000")
    low_wind = a2.text_input("Low wind (ddd/ss)", "270/20")
    b1, b2 = st.columns(2)
    high_alt = b1.text_input("High altitude (ft)", "6000")
    high_wind = b2.text_input("High wind (ddd/ss)", "300/40")
    mag_var = st.text_input("Magnetic variation (°, +E/-W)", "10")

    st.subheader("Hold")
    course = st.text_input("Inbound course (°)", "090")
    c1, c2 = st.columns(2)
    tas = c1.text_input("TAS (kt)", "120")
    base_time = c2.text_input("Outbound base time (s)", "60")

res = compute_hold(
    target_altitude=target_alt, low_altitude=low_alt, low_wind=low_wind,
    high_altitude=high_alt, high_wind=high_wind, magnetic_variation=mag_var,
    inbound_course=course, true_airspeed=tas, outbound_base_time=base_time,
)
labels = res.labels()

with col_out:
    colA, colB, colC = st.columns(3)
    colA.metric("Wind (true)", labels["wind"])
    colB.metric("Wind (mag)", labels["mag_wind"])
    colC.metric("Max drift", labels["max_drift"])

    st.markdown("**Inbound**")
    i1, i2 = st.columns(2)
    i1.metric("Single drift", labels["inbound_drift"])
    i2.metric("Heading", labels["inbound_heading"])

    st.markdown("**Outbound**")
    o1, o2, o3 = st.columns(3)
    o1.metric("Course", labels["outbound_course"])
    o2.metric("Single drift", labels["outbound_drift"])
    o3.metric("Heading", labels["outbound_heading"])
    st.caption(f"Correction: {labels['outbound_correction']}")

    wind_side = "tailwind" if res.timing.is_tailwind else "headwind"
    st.markdown(
        f"""
        <div style="text-align:center; font-size:1.6rem; font-weight:800;">
            Outbound time = {labels['outbound_time']} &nbsp;&nbsp;&nbsp; ({wind_side} outbound)
        </div>
        """, unsafe_allow_html=True
    )

    st.pyplot(draw_hold(res.geometry, res.magnetic_wind), use_container_width=False)
