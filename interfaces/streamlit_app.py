"""
Streamlit web interface for the Kolmogorov-Smirnov distribution toolkit.

Interactive UI with tabs for:
- Distribution curves (CDF and complementary CDF)
- Regime map over the statistic
- Quantile solver
"""

import streamlit as st
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from ksdist.core.kolmogorov_smirnov import cdf, complementary_cdf, evaluate, regime
from ksdist.solvers.quantile import quantile

st.set_page_config(page_title="Kolmogorov-Smirnov Distribution", layout="wide")

st.title("Kolmogorov-Smirnov Distribution")
st.markdown("Exact and asymptotic probabilities of the two-sided statistic D_n")

# Sidebar parameters
st.sidebar.header("Parameters")
n = int(st.sidebar.number_input("Sample Size (n)", value=60, min_value=1, step=1))
x_max = st.sidebar.slider("Largest statistic shown", 0.01, 1.0, float(min(1.0, max(0.01, 3.0 / np.sqrt(n)))))
points = st.sidebar.slider("Grid points", 50, 1000, 300)
x = st.sidebar.number_input("Statistic (x)", value=0.1, min_value=0.0, max_value=1.0, step=0.001, format="%.4f")

# Main tabs
tab1, tab2, tab3 = st.tabs(["Distribution", "Regimes", "Quantiles"])

grid = np.linspace(0.0, x_max, points)

with tab1:
    st.header("Distribution of D_n")

    col1, col2 = st.columns(2)

    with col1:
        result = evaluate(n, x)
        st.metric(label="P[D_n <= x]", value=f"{result.cdf:.10f}")
        st.metric(label="P[D_n >= x]", value=f"{result.complementary_cdf:.10g}")
        st.caption(f"Computed by: {result.regime}")

    with col2:
        cdf_values = [cdf(n, xi) for xi in grid]
        sf_values = [complementary_cdf(n, xi) for xi in grid]

        fig = go.Figure()
        fig.add_trace(go.Scatter(x=grid, y=cdf_values, name="CDF"))
        fig.add_trace(go.Scatter(x=grid, y=sf_values, name="Complementary CDF", line=dict(color="orange")))
        fig.update_layout(title=f"D_{n}", xaxis_title="x", yaxis_title="Probability")
        st.plotly_chart(fig, use_container_width=True)

with tab2:
    st.header("Algorithm by Statistic")

    sample = np.linspace(0.0, x_max, 21)
    regime_df = pd.DataFrame({
        "x": sample,
        "n·x²": n * sample * sample,
        "CDF regime": [regime(n, xi) for xi in sample],
        "Complementary regime": [regime(n, xi, complementary=True) for xi in sample],
        "CDF": [f"{cdf(n, xi):.12g}" for xi in sample],
    })
    st.table(regime_df)

with tab3:
    st.header("Quantile Solver")

    p = st.number_input("Cumulative probability", value=0.95, min_value=0.0, max_value=1.0, step=0.01)

    if st.button("Solve for x"):
        try:
            q = quantile(n, p)

            if q.success:
                st.success(f"x = {q.statistic:.10f}")
                st.info(f"Method: {q.method} | Iterations: {q.iterations}")
            else:
                st.error(f"Solver failed: {q.message}")
        except ValueError as e:
            st.error(f"Error: {e}")
