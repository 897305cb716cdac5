"""Streamlit dashboard for wind-farm fault analytics."""

from __future__ import annotations

from datetime import time

import streamlit as st

from windfarm_faults import DashboardState, LoadedData, load_datasets
from windfarm_faults import config
from windfarm_faults.analytics import (
    FAULT_COLUMNS,
    TableState,
    build_dashboard_charts,
    combine_picker,
    build_fault_table,
    build_fault_time_series,
    date_range_from_pickers,
    render_table,
    summary_to_frame,
)
from windfarm_faults.analytics.visuals import (
    build_bar_chart,
    build_fault_trend_chart,
    build_pie_chart,
    create_duration_distribution_plot,
)
from windfarm_faults.logging import get_logger
from windfarm_faults.reporting import build_pdf_report, export_excel_report

logger = get_logger(__name__)

STATE_KEY = "dashboard_state"
NO_SORT = "(unsorted)"

st.set_page_config(page_title="Wind-Farm Fault Analytics", layout="wide")
st.title("🌬️ Wind-Farm Fault Analytics")


@st.cache_data(show_spinner=False)
def _initial_load(devices_source: str, faults_source: str) -> LoadedData:
    return load_datasets(devices_source, faults_source)


def _download_bytes(data: bytes, *, file_name: str, mime: str, label: str, key: str) -> None:
    st.download_button(
        label,
        data=data,
        file_name=file_name,
        mime=mime,
        use_container_width=True,
        key=key,
    )


def _current_state() -> DashboardState:
    state = st.session_state.get(STATE_KEY)
    if state is None:
        loaded = _initial_load(config.devices_source(), config.faults_source())
        if not loaded.ok:
            # Failed loads are reported once, then retried by the next session.
            _initial_load.clear()
        state = DashboardState().with_data(loaded)
        st.session_state[STATE_KEY] = state
    return state


def _reload(state: DashboardState) -> DashboardState:
    loaded = load_datasets(config.devices_source(), config.faults_source(), previous=state.as_loaded())
    return state.with_data(loaded)


def _sidebar_filters(state: DashboardState) -> DashboardState:
    with st.sidebar:
        st.header("Filters")
        criteria = state.criteria
        site = st.selectbox("Site", config.SITES, index=config.SITES.index(criteria.site))
        state = state.with_criteria({"site": site})

        options = [config.ALL_DEVICES_LABEL, *state.device_options()]
        current = state.criteria.device_name
        device = st.selectbox("Device", options, index=options.index(current) if current in options else 0)

        start_day = st.date_input("Start date", value=None, format="YYYY-MM-DD")
        start_time = st.time_input("Start time", value=time(0, 0), step=60)
        end_day = st.date_input("End date", value=None, format="YYYY-MM-DD")
        end_time = st.time_input("End time", value=time(23, 59), step=60)

        code = st.text_input("Code", value=state.criteria.code or "", placeholder="Code")

        state = state.with_criteria(
            {
                "device_name": None if device == config.ALL_DEVICES_LABEL else device,
                "date_range": date_range_from_pickers(
                    combine_picker(start_day, start_time),
                    combine_picker(end_day, end_time, end=True),
                ),
                "code": code,
            }
        )

        st.divider()
        if st.button("Reload data", use_container_width=True):
            state = _reload(state)
    return state


def _render_table(view) -> None:
    st.subheader("Faults")
    table = build_fault_table(view.faults)
    headers = [column.header for column in FAULT_COLUMNS]

    with st.expander("Column filters"):
        filter_columns = st.columns(len(headers))
        text_filters = {
            header: column.text_input(header, key=f"filter_{header}")
            for header, column in zip(headers, filter_columns)
        }

    sort_col, order_col, page_col = st.columns([2, 1, 1])
    with sort_col:
        sort_by = st.selectbox("Sort by", [NO_SORT, *headers])
    with order_col:
        descending = st.toggle("Descending", value=False)
    with page_col:
        page_number = st.number_input("Page", min_value=1, value=1, step=1)

    page = render_table(
        table,
        TableState(
            sort_by=None if sort_by == NO_SORT else sort_by,
            ascending=not descending,
            text_filters=text_filters,
            page=int(page_number),
            page_size=config.PAGE_SIZE,
        ),
    )
    st.dataframe(page.rows, use_container_width=True, hide_index=True)
    st.caption(f"Page {page.page} of {page.page_count} · {page.total_rows:,} faults")


def main() -> None:
    state = _sidebar_filters(_current_state())
    st.session_state[STATE_KEY] = state

    for dataset, message in state.errors.items():
        st.warning(f"Could not load {dataset}: {message}")

    view = state.derive()

    tile1, tile2 = st.columns(2)
    tile1.metric("Total Faults", f"{view.summary.total_faults:,}")
    tile2.metric("Total Duration", view.summary.total_duration)

    charts = build_dashboard_charts(view)
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(build_bar_chart(charts.duration, "Top 10 faults by duration"), use_container_width=True)
    with col2:
        st.plotly_chart(build_bar_chart(charts.frequency, "Top 10 codes by frequency"), use_container_width=True)

    col3, col4 = st.columns(2)
    with col3:
        st.plotly_chart(build_pie_chart(charts.category_duration, "Duration by category"), use_container_width=True)
    with col4:
        st.plotly_chart(build_pie_chart(charts.category_frequency, "Faults by category"), use_container_width=True)

    _render_table(view)

    st.subheader("Fault volume trend (daily)")
    ts_result = build_fault_time_series(view.faults)
    st.plotly_chart(build_fault_trend_chart(ts_result.frame), use_container_width=True)
    if ts_result.model_summary:
        if ts_result.slope is not None:
            st.caption(f"OLS slope: {ts_result.slope:.2f} faults/day")
        with st.expander("Trend regression details"):
            st.code(ts_result.model_summary)

    st.subheader("Distribution of fault durations")
    st.pyplot(create_duration_distribution_plot(view.faults), clear_figure=True)

    st.subheader("Downloads")
    st.dataframe(summary_to_frame(view.summary), use_container_width=True, hide_index=True)
    _download_bytes(
        export_excel_report(view),
        file_name="fault_analytics.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        label="📊 Download Excel workbook",
        key="download_excel",
    )
    try:
        pdf_bytes = build_pdf_report(view)
    except Exception as exc:  # noqa: BLE001
        logger.warning("PDF export failed: %s", exc)
        st.warning(f"PDF export unavailable: {exc}")
    else:
        _download_bytes(
            pdf_bytes,
            file_name="fault_analytics.pdf",
            mime="application/pdf",
            label="📄 Download PDF summary",
            key="download_pdf",
        )


if __name__ == "__main__":
    main()
