from typing import Optional

import pandas as pd
import streamlit as st

from services.courses import passing_rate_band

PRIMARY_ACCENT = "#2563EB"  # blue-600
GREEN = "#059669"  # emerald-600
BLUE = "#1D4ED8"
YELLOW = "#D97706"  # amber-600
RED = "#DC2626"  # red-600
GRAY = "#6B7280"
CHIP_BG = "#374151"

BAND_CLASS = {"high": "green", "good": "blue", "fair": "yellow", "low": "red"}


def inject_base_css():
    """Called by the router at the top of every run; markup does not survive reruns."""
    st.markdown(
        f"""
        <style>
        .badge {{
            display:inline-block; padding:2px 8px; border-radius:12px;
            font-size:12px; line-height:16px; font-weight:600;
            background:{CHIP_BG}; color:#F9FAFB; margin-right:4px; margin-bottom:4px;
        }}
        .badge.green {{background:{GREEN};}}
        .badge.blue {{background:{BLUE};}}
        .badge.yellow {{background:{YELLOW};}}
        .badge.red {{background:{RED};}}
        .badge.gray {{background:{GRAY};}}
        .page-header {{
            padding:0.9rem 1.1rem; border-radius:10px; color:white; margin-bottom:1rem;
            background:linear-gradient(135deg,#1e3a8a,{PRIMARY_ACCENT});
        }}
        .page-header .title {{font-size:1.3rem; font-weight:700;}}
        .page-header .subtitle {{font-size:0.8rem; opacity:0.85;}}
        .question-text p {{margin:0;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


def page_header(title: str, subtitle: str = ""):
    st.markdown(
        f"<div class='page-header'><div class='title'>{title}</div>"
        f"<div class='subtitle'>{subtitle}</div></div>",
        unsafe_allow_html=True,
    )


def status_badge(status) -> str:
    text = str(status)
    if text in {"1", "True"}:
        text = "active"
    elif text in {"0", "False"}:
        text = "inactive"
    cls = "green" if text.lower() in {"active", "passed", "eligible"} else "gray"
    return f'<span class="badge {cls}">{text.capitalize()}</span>'


def passing_rate_badge(rate: Optional[float]) -> str:
    rate = rate if rate is not None else 80
    cls = BAND_CLASS[passing_rate_band(rate)]
    return f'<span class="badge {cls}">{rate:g}%</span>'


def html_table(df: pd.DataFrame, empty_text: str = "No records found."):
    """Render a DataFrame whose cells may hold badge markup."""
    if df is None or df.empty:
        st.caption(empty_text)
        return
    st.write(df.to_html(escape=False, index=False), unsafe_allow_html=True)
