import html

import streamlit as st

from taskboard import charts
from taskboard.session import get_dashboard, show_notices
from taskboard.theme import kpi_row, priority_badge, set_theme

set_theme(page_title="Task Analytics", page_icon="📊")

dash = get_dashboard()
metrics = dash.get_analytics()

st.title("Analytics")

if not dash.loaded:
    st.warning("Tasks could not be loaded. Reload the dataset from the task list page.")

st.markdown(
    kpi_row([
        ("Avg. Completion Time", f"{metrics.avg_completion_time} days"),
        ("On-time Delivery", f"{metrics.on_time_rate}%", "good" if metrics.on_time_rate >= 80 else ""),
        ("Top Performer", metrics.top_performer),
        ("Bottlenecks", metrics.bottleneck_count, "bad" if metrics.bottleneck_count else "good"),
    ]),
    unsafe_allow_html=True,
)

c1, c2 = st.columns(2)
with c1:
    st.plotly_chart(charts.status_pie(metrics.status_counts), use_container_width=True)
with c2:
    st.plotly_chart(charts.priority_bar(metrics.priority_counts), use_container_width=True)

c3, c4 = st.columns(2)
with c3:
    st.plotly_chart(charts.weekly_line(metrics.weekly_completions), use_container_width=True)
with c4:
    st.plotly_chart(charts.team_donut(metrics.team_distribution), use_container_width=True)

left, right = st.columns(2)
with left:
    st.subheader("Top Performers")
    if not metrics.top_performers:
        st.caption("No team members in the dataset.")
    for rank, member in enumerate(metrics.top_performers, start=1):
        st.markdown(
            f"<div class='tb-performer'><b>{rank}. {html.escape(member.name)}</b> "
            f"<span class='tb-member-role'>{html.escape(member.role)}</span>"
            f"<span style='float:right'>{member.productivity:g}%</span></div>",
            unsafe_allow_html=True,
        )
        st.progress(min(max(member.productivity, 0), 100) / 100)

with right:
    st.subheader("Bottlenecks")
    if not metrics.bottlenecks:
        st.success("No overdue tasks")
    for item in metrics.bottlenecks:
        task = item.task
        days = "day" if item.days_overdue == 1 else "days"
        st.markdown(
            f"<div class='tb-bottleneck'><b>#{task.id} {html.escape(task.title)}</b> "
            f"{priority_badge(task.priority)}<br>"
            f"<span class='tb-member-role'>{html.escape(task.assigned_to)}</span> · "
            f"<span class='tb-overdue'>{item.days_overdue} {days} overdue</span></div>",
            unsafe_allow_html=True,
        )

show_notices(dash)
