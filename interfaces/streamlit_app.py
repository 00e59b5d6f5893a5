"""
Streamlit web interface for the discrete probability toolkit.

Interactive UI with tabs for:
- PMF and CDF charts over the support
- Cumulative probability queries
- Consistency diagnostics against scipy.stats
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
from src.core.distributions import Binomial, Geometric, Hypergeometric, NegativeBinomial, Poisson
from src.cumulative.operations import CumulativeOperation
from src.diagnostics.reference import run_all_checks
from src.diagnostics.tables import support_table

st.set_page_config(page_title="Discrete Probability Toolkit", layout="wide")

st.title("Discrete Probability Toolkit")
st.markdown("Overflow-safe probability mass functions and cumulative probabilities")

# Sidebar parameters
st.sidebar.header("Distribution")
kind = st.sidebar.selectbox(
    "Distribution", ["Binomial", "Geometric", "Hypergeometric", "Negative Binomial", "Poisson"]
)

try:
    if kind == "Binomial":
        trials = st.sidebar.number_input("Trials (n)", value=20, min_value=0, step=1)
        p = st.sidebar.slider("Chance of success (p)", 0.0, 1.0, 0.3)
        distribution = Binomial(int(trials), p)
    elif kind == "Geometric":
        p = st.sidebar.slider("Chance of success (p)", 0.01, 1.0, 1.0 / 6)
        distribution = Geometric(p)
    elif kind == "Hypergeometric":
        population = st.sidebar.number_input("Population size (N)", value=50, min_value=1, step=1)
        sample = st.sidebar.number_input("Sample size (n)", value=6, min_value=0, step=1)
        successes = st.sidebar.number_input("Success states (r)", value=6, min_value=0, step=1)
        distribution = Hypergeometric(int(population), int(sample), int(successes))
    elif kind == "Negative Binomial":
        k = st.sidebar.number_input("Successful trials (k)", value=3, min_value=1, step=1)
        p = st.sidebar.slider("Chance of success (p)", 0.01, 1.0, 1.0 / 6)
        distribution = NegativeBinomial(int(k), p)
    else:
        rate = st.sidebar.number_input("Rate (lambda)", value=7.0, min_value=0.0)
        distribution = Poisson(rate)
except ValueError as e:
    st.error(f"Invalid parameters: {e}")
    st.stop()

# Main tabs
tab1, tab2, tab3 = st.tabs(["Distribution", "Cumulative Query", "Diagnostics"])

with tab1:
    st.header(f"{kind} Distribution")

    col1, col2 = st.columns(2)
    col1.metric(label="Expected Value", value=f"{distribution.expected_value():.6g}")
    col2.metric(label="Variance", value=f"{distribution.variance():.6g}")

    frame = support_table(distribution)

    fig_pmf = go.Figure()
    fig_pmf.add_trace(go.Bar(x=frame["y"], y=frame["pmf"], name="P(Y = y)"))
    fig_pmf.update_layout(title="Probability Mass Function", xaxis_title="y", yaxis_title="P(Y = y)")
    st.plotly_chart(fig_pmf, use_container_width=True)

    fig_cdf = go.Figure()
    fig_cdf.add_trace(
        go.Scatter(x=frame["y"], y=frame["cdf"], name="P(Y <= y)", line=dict(shape="hv", color="orange"))
    )
    fig_cdf.update_layout(title="Cumulative Distribution", xaxis_title="y", yaxis_title="P(Y <= y)")
    st.plotly_chart(fig_cdf, use_container_width=True)

with tab2:
    st.header("Cumulative Probability")

    operation = st.selectbox(
        "Operation", list(CumulativeOperation), format_func=lambda op: f"P(Y {op.value} y)"
    )
    y = st.number_input("Random variable (y)", value=3, step=1)
    result = operation.apply(int(y), distribution.compute_result)
    st.success(f"P(Y {operation.value} {int(y)}) = {result:.10g}")

with tab3:
    st.header("Diagnostics")

    if st.button("Run diagnostics"):
        results = run_all_checks(distribution, int(y))
        summary = pd.DataFrame(
            {
                "Check": list(results),
                "Valid": [result.is_valid for result in results.values()],
                "Violations": [len(result.violations) for result in results.values()],
            }
        )
        st.table(summary)
        for name, check in results.items():
            for violation in check.violations[:5]:
                st.error(f"{name}: {violation}")
