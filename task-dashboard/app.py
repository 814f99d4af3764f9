import html
from datetime import date, timedelta

import streamlit as st

from taskboard import TaskboardError, TaskValidationError
from taskboard.models import STATUSES
from taskboard.session import get_dashboard, reload_dashboard, show_notices
from taskboard.theme import kpi_row, priority_badge, set_theme
from taskboard.view_state import FILTERS, page_links

set_theme(page_title="Task Dashboard", page_icon="📋")

dash = get_dashboard()

FILTER_LABELS = {"all": "All", "pending": "Pending", "in-progress": "In Progress", "completed": "Completed", "overdue": "Overdue"}
STATUS_LABELS = {"pending": "Pending", "in-progress": "In Progress", "completed": "Completed"}
SORT_LABELS = {"priority": "Priority", "dueDate": "Due Date", "status": "Status"}


# ----- Callbacks (bound to named dashboard operations) -----
def _on_search():
    dash.set_search_term(st.session_state.tb_search)


def _on_status_change(task_id):
    dash.update_status(task_id, st.session_state[f"tb-status-{task_id}"])


st.title("Task Dashboard")

# ----- KPI cards -----
stats = dash.get_statistics()
st.markdown(
    kpi_row([
        ("Total Tasks", stats.total),
        ("Completed", stats.completed, "good"),
        ("In Progress", stats.in_progress),
        ("Overdue", stats.overdue, "bad" if stats.overdue else "good"),
    ]),
    unsafe_allow_html=True,
)

with st.sidebar:
    pending = dash.pending_badge()
    st.markdown(f"**Pending tasks:** {pending}" if pending else "No pending tasks 🎉")
    if st.button("↻ Reload dataset", help="Reload tasks and saved changes"):
        dash = reload_dashboard()

# ----- Search / filter / sort -----
st.text_input("Search (title / description / assignee)", key="tb_search", on_change=_on_search, placeholder="Type to filter…")

active = dash.view.state.active_filter
filter_cols = st.columns(len(FILTERS))
for col, f in zip(filter_cols, FILTERS):
    with col:
        label = FILTER_LABELS[f] if f != active else f"✓ {FILTER_LABELS[f]}"
        if st.button(label, key=f"tb-filter-{f}", use_container_width=True):
            dash.set_filter(f)
            st.rerun()

sort_state = dash.view.state
sort_cols = st.columns([1, 1, 1, 1, 2])
for col, (column, label) in zip(sort_cols, SORT_LABELS.items()):
    with col:
        arrow = ""
        if sort_state.sort_column == column:
            arrow = " ▲" if sort_state.sort_direction == "asc" else " ▼"
        if st.button(f"Sort: {label}{arrow}", key=f"tb-sort-{column}", use_container_width=True):
            dash.set_sort(column)
            st.rerun()
with sort_cols[3]:
    if sort_state.sort_column and st.button("Clear sort", key="tb-sort-clear", use_container_width=True):
        dash.set_sort(None)
        st.rerun()
with sort_cols[4]:
    if st.button("Generate CSV Export", key="tb-export"):
        filename, content = dash.export_csv()
        st.download_button(f"Download {filename}", data=content.encode("utf-8"), file_name=filename, mime="text/csv", key="tb-dl-csv")

# ----- Task table -----
page = dash.get_visible_page()
now = dash.clock()

if not page.tasks:
    st.markdown("<div class='tb-empty'>📭<br>No tasks found</div>", unsafe_allow_html=True)
else:
    head = st.columns([0.6, 3, 2, 1, 1.6, 1.2])
    for col, h in zip(head, ["ID", "Task", "Assigned To", "Priority", "Status", "Due Date"]):
        col.markdown(f"**{h}**")
    for task in page.tasks:
        row = st.columns([0.6, 3, 2, 1, 1.6, 1.2])
        row[0].markdown(f"#{task.id}")
        with row[1]:
            st.markdown(f"**{task.title}**")
            st.caption(task.description[:50] + ("..." if len(task.description) > 50 else ""))
        row[2].markdown(
            f"<div class='tb-member'>{html.escape(task.team_member.name)}</div>"
            f"<div class='tb-member-role'>{html.escape(task.team_member.role)}</div>",
            unsafe_allow_html=True,
        )
        row[3].markdown(priority_badge(task.priority), unsafe_allow_html=True)
        with row[4]:
            st.selectbox(
                "Status",
                options=list(STATUSES),
                index=STATUSES.index(task.status),
                format_func=lambda s: STATUS_LABELS[s],
                key=f"tb-status-{task.id}",
                on_change=_on_status_change,
                args=(task.id,),
                label_visibility="collapsed",
            )
        due_cls = "tb-overdue" if task.is_overdue(now) else ""
        row[5].markdown(f"<span class='{due_cls}'>{task.due_date.strftime('%b %d, %Y')}</span>", unsafe_allow_html=True)
        with st.expander(f"Details #{task.id}"):
            st.markdown(f"**Description:** {task.description or 'N/A'}")
            st.markdown(f"**Department:** {task.team_member.department or 'N/A'}")
            st.progress(task.progress / 100, text=f"Progress {task.progress}%")
            c1, c2, c3 = st.columns(3)
            c1.markdown(f"**Created:** {task.created_date.strftime('%b %d, %Y')}")
            c2.markdown(f"**Due:** {task.due_date.strftime('%b %d, %Y')}")
            c3.markdown(f"**Completed:** {task.completed_date.strftime('%b %d, %Y') if task.completed_date else 'N/A'}")
            if task.tags:
                st.markdown("🏷️ " + ", ".join(task.tags))

# ----- Pagination -----
links = page_links(page.current_page, page.total_pages)
if links:
    pager = st.columns(len(links) + 2)
    with pager[0]:
        if st.button("‹", key="tb-page-prev", disabled=page.current_page == 1):
            dash.set_page(page.current_page - 1)
            st.rerun()
    for col, n in zip(pager[1:-1], links):
        with col:
            if n is None:
                st.markdown("…")
            elif st.button(f"{'✓ ' if n == page.current_page else ''}{n}", key=f"tb-page-{n}"):
                dash.set_page(n)
                st.rerun()
    with pager[-1]:
        if st.button("›", key="tb-page-next", disabled=page.current_page == page.total_pages):
            dash.set_page(page.current_page + 1)
            st.rerun()

# ----- Create task -----
with st.expander("➕ Create Task", expanded=False):
    with st.form("tb-create-task", clear_on_submit=True):
        title = st.text_input("Title *")
        description = st.text_area("Description")
        fc1, fc2, fc3 = st.columns(3)
        with fc1:
            assignee = st.text_input("Assignee *")
        with fc2:
            priority = st.selectbox("Priority", ["Low", "Medium", "High"], index=1)
        with fc3:
            status = st.selectbox("Status", ["Pending", "In Progress", "Completed"], index=0)
        due = st.date_input("Due Date *", value=date.today() + timedelta(days=1))
        tags = st.text_input("Tags (comma separated)")
        if st.form_submit_button("Save Task"):
            try:
                dash.create_task({
                    "title": title,
                    "description": description,
                    "assignee": assignee,
                    "priority": priority,
                    "status": status,
                    "due_date": due,
                    "tags": tags,
                })
                st.rerun()
            except TaskValidationError as e:
                st.error(str(e))
            except TaskboardError as e:
                st.error(f"Task could not be saved: {e}")

show_notices(dash)
