"""Visualization helpers for the wizard steps."""

from __future__ import annotations

from typing import Dict, Sequence

import plotly.graph_objects as go
import streamlit as st

from calc import CashFlowRow, EnergyForecast

PLOTLY_DOWNLOAD_OPTIONS = {
    "format": "png",
    "height": 500,
    "width": 1000,
    "scale": 2,
}


def plotly_download_config(name: str) -> Dict[str, object]:
    """Expose an image download button on every chart."""

    return {
        "displaylogo": False,
        "toImageButtonOptions": {"filename": name, **PLOTLY_DOWNLOAD_OPTIONS},
    }


def build_cash_flow_figure(rows: Sequence[CashFlowRow]) -> go.Figure:
    months = [row.label for row in rows]
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            name="Tulud",
            x=months,
            y=[float(row.income) for row in rows],
            marker_color="#00CC96",
            hovertemplate="%{x}<br>Tulud=%{y:,.2f} €<extra></extra>",
        )
    )
    fig.add_trace(
        go.Bar(
            name="Kulud",
            x=months,
            y=[-float(row.expense) for row in rows],
            marker_color="#FF9F43",
            hovertemplate="%{x}<br>Kulud=%{y:,.2f} €<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            name="Kumulatiivne saldo",
            x=months,
            y=[float(row.cumulative_balance) for row in rows],
            mode="lines+markers",
            line=dict(color="#636EFA", width=3),
            hovertemplate="%{x}<br>Saldo=%{y:,.2f} €<extra></extra>",
        )
    )
    fig.update_layout(
        barmode="relative",
        hovermode="x unified",
        legend=dict(title=dict(text=""), itemclick="toggleothers", itemdoubleclick="toggle"),
        yaxis_title="Summa (€)",
        yaxis_tickformat=",",
    )
    return fig


def build_energy_figure(forecast: EnergyForecast) -> go.Figure:
    months = [row.label for row in forecast.heat_rows]
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            name="Eelmine aasta",
            x=months,
            y=[float(row.prior_cost) for row in forecast.heat_rows],
            marker_color="#B6B6B6",
        )
    )
    fig.add_trace(
        go.Bar(
            name="Prognoos",
            x=months,
            y=[float(row.cost) for row in forecast.heat_rows],
            marker_color="#EF553B",
        )
    )
    fig.update_layout(barmode="group", hovermode="x unified", yaxis_title="Küte (€)", yaxis_tickformat=",")
    return fig


def render_cash_flow_chart(rows: Sequence[CashFlowRow]) -> None:
    st.plotly_chart(
        build_cash_flow_figure(rows),
        use_container_width=True,
        config=plotly_download_config("rahavoog"),
    )


def render_energy_chart(forecast: EnergyForecast) -> None:
    st.plotly_chart(
        build_energy_figure(forecast),
        use_container_width=True,
        config=plotly_download_config("kuttekulud"),
    )


__all__ = [
    "build_cash_flow_figure",
    "build_energy_figure",
    "plotly_download_config",
    "render_cash_flow_chart",
    "render_energy_chart",
]
