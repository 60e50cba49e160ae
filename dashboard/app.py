"""
OSGB Screening Dashboard
Appointments, trends, scheduling conflicts, reports and document expiry
Run with: streamlit run dashboard/app.py
"""
from datetime import date, datetime
import pandas as pd
import plotly.express as px
import streamlit as st
from sqlalchemy.exc import SQLAlchemyError
from osgb_analytics.analytics.aggregate import STATUS_LABELS, TYPE_LABELS, status_breakdown, type_breakdown
from osgb_analytics.analytics.documents import expiring_documents
from osgb_analytics.analytics.filters import ALL, FilterCriteria, filter_screenings
from osgb_analytics.core.config import DOCUMENTS_LOGS, SCREENINGS_LOGS
from osgb_analytics.core.logging_setup import setup_logging
from osgb_analytics.models.records import DocumentCategory, ScreeningStatus, ScreeningType
from osgb_analytics.services.cache import AnalyticsCache
from osgb_analytics.services.calendar import by_day, calendar_counts, conflict_map
from osgb_analytics.services.dashboard import build_dashboard
from osgb_analytics.services.reports import SORT_FIELDS, build_report, paginate
from osgb_analytics.services.series import to_frame
from osgb_analytics.services.snapshot import load_from_csv, load_from_db

setup_logging()

st.set_page_config(page_title="OSGB Dashboard", layout="wide")

@st.cache_resource
def get_cache():
    return AnalyticsCache(maxsize=64)

@st.cache_data(ttl=60)
def load_snapshot(source: str):
    if source == "Database":
        return load_from_db(write_logs=True)
    return load_from_csv(write_logs=True)

@st.cache_data(ttl=60)
def load_log(filepath):
    try:
        return pd.read_csv(filepath)
    except (FileNotFoundError, pd.errors.EmptyDataError):
        return pd.DataFrame()

# Main app
st.title("OSGB Screening Dashboard")
st.markdown("Appointments, participation and document expiry across client companies")
st.markdown("---")

source = st.sidebar.radio("Data source", ["Database", "CSV exports"])
try:
    snapshot = load_snapshot(source)
except (SQLAlchemyError, FileNotFoundError) as e:
    st.error(f"Cannot load data: {e}")
    st.stop()

cache = get_cache()
company_names = {c.id: c.name for c in snapshot.companies}

# Filters
st.sidebar.header("Filters")
company = st.sidebar.selectbox(
    "Company", [ALL] + list(company_names),
    format_func=lambda cid: "All companies" if cid == ALL else company_names[cid],
)
status = st.sidebar.selectbox(
    "Status", [ALL] + [s.value for s in ScreeningStatus],
    format_func=lambda v: "All" if v == ALL else STATUS_LABELS[ScreeningStatus(v)],
)
stype = st.sidebar.selectbox(
    "Type", [ALL] + [t.value for t in ScreeningType],
    format_func=lambda v: "All" if v == ALL else TYPE_LABELS[ScreeningType(v)],
)
use_dates = st.sidebar.checkbox("Limit to date range")
date_start = date_end = None
if use_dates:
    picked = st.sidebar.date_input("Date range", value=(date.today().replace(day=1), date.today()))
    if isinstance(picked, tuple) and len(picked) == 2:
        date_start, date_end = picked
search = st.sidebar.text_input("Search (company, participant, notes)")

criteria = FilterCriteria(
    company_id=company, status=status, type=stype,
    date_start=date_start, date_end=date_end, search_text=search,
)

now = datetime.now()
dash = build_dashboard(snapshot, now=now, criteria=criteria, cache=cache)
summary = dash.summary

# Alerts
for alert in dash.alerts:
    if alert.level == "warning":
        st.warning(f"**{alert.title}:** {alert.message}")
    else:
        st.info(f"**{alert.title}:** {alert.message}")

# Summary metrics
st.subheader("Summary")
col1, col2, col3, col4 = st.columns(4)

col1.metric("Screenings", summary.total,
            delta=f"{dash.weekly.change_percent}% vs last week")
col1.caption(f"{dash.weekly.current_count} in the last 7 days")

col2.metric("Participants", summary.total_participants)
col2.caption(f"Average {summary.avg_participants} per screening")

col3.metric("Completion rate", f"{summary.completion_rate}%")
col3.caption(f"Cancelled or no-show: {summary.cancellation_rate}%")

col4.metric("Monthly target", f"{dash.monthly_target.current}/{dash.monthly_target.target}",
            delta=f"{dash.monthly_trend.change_percent}% vs last month")
col4.progress(dash.monthly_target.progress / 100)

st.markdown("---")

tab_home, tab_calendar, tab_reports, tab_docs, tab_quality = st.tabs(
    ["Overview", "Calendar", "Reports", "Documents", "Data Quality"]
)

with tab_home:
    col1, col2 = st.columns(2)

    with col1:
        st.markdown("**Screenings by status**")
        data = pd.DataFrame(status_breakdown(summary), columns=["Status", "Count"])
        if not data.empty:
            fig = px.pie(data, values="Count", names="Status", hole=0.4)
            fig.update_traces(textposition="inside", textinfo="percent+label")
            fig.update_layout(height=300)
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No screenings match the current filters")

    with col2:
        st.markdown("**Screenings by type**")
        data = pd.DataFrame(type_breakdown(summary), columns=["Type", "Count"])
        if not data.empty:
            fig = px.bar(data, x="Type", y="Count", text="Count", color_discrete_sequence=["#00CC96"])
            fig.update_traces(textposition="outside")
            fig.update_layout(showlegend=False, height=300)
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No screenings match the current filters")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Last five weeks**")
        weekly = pd.DataFrame(dash.weekly_series, columns=["Week starting", "Screenings"])
        fig = px.line(weekly, x="Week starting", y="Screenings", markers=True)
        fig.update_layout(height=300)
        st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.markdown(f"**Monthly screenings in {dash.today.year}**")
        fig = px.bar(dash.monthly_series, x="month", y=["total", "completed"], barmode="group",
                     labels={"month": "Month", "value": "Screenings", "variable": ""})
        fig.update_layout(height=300)
        st.plotly_chart(fig, use_container_width=True)

    st.markdown("**Top companies**")
    top = pd.DataFrame([vars(c) for c in dash.top_companies])
    if not top.empty:
        st.dataframe(top[["name", "count", "participants"]], use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"**Today ({len(dash.todays_screenings)})**")
        st.dataframe(to_frame(dash.todays_screenings, snapshot.company_map), use_container_width=True)
    with col2:
        st.markdown(f"**Upcoming** (overdue: {dash.overdue_count})")
        st.dataframe(to_frame(dash.upcoming, snapshot.company_map), use_container_width=True)

    st.markdown("**Recently created**")
    st.dataframe(to_frame(dash.recent, snapshot.company_map), use_container_width=True)

with tab_calendar:
    visible = filter_screenings(snapshot.screenings, criteria, snapshot.company_map)
    counts = calendar_counts(visible, dash.today)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Today", counts.today)
    col2.metric("This week", counts.this_week)
    col3.metric("This month", counts.this_month)
    col4.metric("Employees", counts.total_employees)

    conflicts = conflict_map(snapshot, criteria)
    if conflicts:
        st.warning(f"{len(conflicts)} appointment(s) overlap another appointment on the same day")
        rows = [
            {"id": sid, "conflicts_with": ", ".join(str(c.id) for c in hits)}
            for sid, hits in conflicts.items()
        ]
        st.dataframe(pd.DataFrame(rows), use_container_width=True)
    else:
        st.success("No scheduling conflicts")

    days = by_day(visible)
    if days:
        day = st.selectbox("Day", list(days), format_func=lambda d: f"{d:%Y-%m-%d} ({len(days[d])})")
        st.dataframe(to_frame(days[day], snapshot.company_map), use_container_width=True)

with tab_reports:
    col1, col2, col3 = st.columns(3)
    sort_by = col1.selectbox("Sort by", SORT_FIELDS)
    descending = col2.checkbox("Descending")
    page_size = col3.selectbox("Rows per page", [10, 25, 50], index=1)

    report = build_report(snapshot, criteria, sort_by=sort_by, descending=descending,
                          year=dash.today.year, cache=cache)
    if report.trend is not None:
        st.metric("Screenings in range", report.trend.current_count,
                  delta=f"{report.trend.change_percent}% vs previous period")

    page_no = st.number_input("Page", min_value=1, value=1, step=1)
    page = paginate(report.screenings, int(page_no), page_size)
    st.caption(f"Page {page.page} of {page.total_pages} ({page.total_items} screenings)")
    frame = to_frame(page.items, snapshot.company_map)
    st.dataframe(frame, use_container_width=True, height=400)
    st.download_button(
        "Download filtered screenings (CSV)",
        to_frame(report.screenings, snapshot.company_map).to_csv(index=False).encode("utf-8"),
        file_name="screenings_report.csv",
    )

    st.markdown("**Top companies in range**")
    top = pd.DataFrame([vars(c) for c in report.top_companies])
    if not top.empty:
        fig = px.bar(top, x="name", y="count", text="count",
                     labels={"name": "Company", "count": "Screenings"})
        fig.update_traces(textposition="outside")
        st.plotly_chart(fig, use_container_width=True)

with tab_docs:
    docs = dash.documents
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Documents", docs.total)
    col2.metric("Expiring soon", docs.expiring_within_30_days)
    col3.metric("Expired", docs.expired_count)
    col4.metric("Uploaded this week", docs.recent_uploads)

    by_category = pd.DataFrame(
        [(c.value, n) for c, n in docs.by_category.items() if n > 0], columns=["Category", "Count"]
    )
    if not by_category.empty:
        fig = px.pie(by_category, values="Count", names="Category", hole=0.4)
        fig.update_layout(height=300)
        st.plotly_chart(fig, use_container_width=True)

    horizon = st.slider("Show documents expiring within (days)", 1, 365, 30)
    rows = [
        {
            "title": d.title,
            "category": DocumentCategory(d.category).value,
            "company": company_names.get(d.company_id, ""),
            "expiry_date": d.expiry_date,
            "days_left": info.days_until_expiry,
            "expired": info.is_expired,
        }
        for d, info in expiring_documents(snapshot.documents, now, days=horizon)
    ]
    if rows:
        st.dataframe(pd.DataFrame(rows), use_container_width=True)
    else:
        st.success("No active documents expire in this window")

with tab_quality:
    st.markdown("### Rows rejected while loading")
    for label, path in (("Screenings", SCREENINGS_LOGS), ("Documents", DOCUMENTS_LOGS)):
        dropped = load_log(path)
        if dropped.empty:
            st.success(f"No {label.lower()} were rejected")
            continue
        st.warning(f"{len(dropped)} {label.lower()} rejected")
        if "qa_flags" in dropped.columns:
            flags = dropped["qa_flags"].str.split("|").explode().value_counts()
            st.bar_chart(flags)
        st.dataframe(dropped, use_container_width=True, height=300)
