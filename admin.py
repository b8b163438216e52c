import asyncio

import streamlit as st

from app.core.config import settings
from app.core.config_loader import load_dashboard_config, get_default_restrictions, get_label
from app.core.logger import setup_logging
from app.models.dashboard_models import RESTRICTION_LEVELS, STATUS_FILTERS
from app.services.api_client import AdminApiClient
from app.services.dashboard_service import DashboardService, bookings_to_frame

# Page Config
st.set_page_config(
    page_title="Admin Dashboard",
    page_icon="🛡️",
    layout="wide"
)

setup_logging()
config = load_dashboard_config()


def get_service() -> DashboardService:
    # One controller per browser session; the token may be handed over by the host app
    if "dashboard" not in st.session_state:
        client = AdminApiClient(token=st.session_state.get("auth_token") or settings.API_TOKEN)
        st.session_state.dashboard = DashboardService(
            client, default_restrictions=get_default_restrictions(config)
        )
    return st.session_state.dashboard


service = get_service()

if not service.initialized:
    with st.spinner("Loading admin dashboard..."):
        user = asyncio.run(service.resolve_user())
        asyncio.run(service.load(user))

if service.redirect_to:
    st.warning("This page is only available to administrators.")
    st.link_button("Go to Dashboard", service.redirect_to)
    st.stop()

for notification in service.notifications.drain():
    st.toast(notification.message, icon=notification.icon)


# --- Callbacks (run before the rerun they trigger) ---

def _open_decision(booking, action):
    service.open_decision(booking, action)
    st.session_state.admin_notes_input = ""

def _submit_decision():
    asyncio.run(service.submit_decision(st.session_state.get("admin_notes_input", "")))

def _open_restrictions():
    record = service.open_restrictions()
    st.session_state.covid_level = record.level
    st.session_state.covid_density = record.density_limits
    st.session_state.covid_mask = record.mask_required
    st.session_state.covid_quarantine = record.quarantine_required
    st.session_state.covid_message = record.message

def _submit_restrictions():
    asyncio.run(service.submit_restrictions({
        "level": st.session_state.covid_level,
        "density_limits": st.session_state.covid_density,
        "mask_required": st.session_state.covid_mask,
        "quarantine_required": st.session_state.covid_quarantine,
        "message": st.session_state.covid_message,
    }))

def _change_filter():
    service.set_filter(st.session_state.filter_status)

def _refresh():
    service.initialized = False


# Header
head_left, head_right = st.columns([4, 1])
with head_left:
    st.title("Admin Dashboard")
    st.caption("Manage service requests")
with head_right:
    st.link_button("← Back to Dashboard", settings.USER_DASHBOARD_URL)
    st.button("Refresh", key="refresh", on_click=_refresh)

# Decision panel
if service.decision_open and service.selected_booking:
    booking = service.selected_booking
    verb = "Accept" if service.action_type == "accept" else "Decline"
    with st.container(border=True):
        st.subheader(f"{verb} Booking")
        st.write(f"Booking ID: {booking.id}  \nService: {booking.service_type}")
        st.text_area(
            "Notes to Customer (optional)",
            key="admin_notes_input",
            placeholder="Add any notes or instructions for the customer...",
            height=120,
        )
        st.caption("Customer will receive an email notification with your decision and notes.")
        cancel_col, confirm_col = st.columns(2)
        cancel_col.button("Cancel", key="action_cancel", on_click=service.cancel_decision, use_container_width=True)
        confirm_col.button(
            f"Confirm {verb}",
            key="action_submit",
            type="primary",
            on_click=_submit_decision,
            use_container_width=True,
        )

# COVID Restrictions Management
with st.container(border=True):
    info_col, button_col = st.columns([4, 1])
    with info_col:
        st.subheader("🦠 COVID-19 Restrictions Management")
        st.caption("Update current restriction levels for all users")
        level = service.restrictions.level
        color = get_label(config, "level_colors", level).lower()
        st.markdown(f":{color}[**{level.upper()} LEVEL**]  {service.restrictions.message}")
    with button_col:
        st.button("⚙️ Update Restrictions", key="open_restrictions", on_click=_open_restrictions)

    if service.restrictions_open:
        with st.form("restrictions_form"):
            st.markdown("**Update COVID-19 Restrictions**")
            st.caption("Changes will be applied immediately and all users will be notified")
            st.selectbox(
                "Restriction Level *",
                options=RESTRICTION_LEVELS,
                key="covid_level",
                format_func=lambda value: get_label(config, "level_labels", value),
            )
            st.text_input("Density Limits *", key="covid_density", placeholder="e.g., 1 person per 4 sqm")
            st.toggle("Masks Required", key="covid_mask")
            st.toggle("Quarantine Required", key="covid_quarantine")
            st.text_area("Public Message *", key="covid_message", placeholder="Message to display to all users...")
            cancel_col, submit_col = st.columns(2)
            cancel_col.form_submit_button("Cancel", on_click=service.cancel_restrictions)
            submit_col.form_submit_button("Update & Notify Users", type="primary", on_click=_submit_restrictions)

# Stats
stats = service.stats
col1, col2, col3, col4 = st.columns(4)
col1.metric("Total Requests", stats.total)
col2.metric("Pending", stats.pending)
col3.metric("Accepted", stats.accepted)
col4.metric("Declined", stats.declined)

# Filter
filter_col, count_col, view_col = st.columns([2, 2, 1])
with filter_col:
    st.selectbox(
        "Filter by Status:",
        options=STATUS_FILTERS,
        index=STATUS_FILTERS.index(service.filter_status),
        key="filter_status",
        format_func=lambda value: get_label(config, "filter_labels", value),
        on_change=_change_filter,
    )
visible = service.filtered_bookings
count_col.caption(f"Showing {len(visible)} of {len(service.bookings)} bookings")
table_view = view_col.toggle("Table view", key="table_view")

# Bookings List
st.subheader("Service Requests")
st.caption("Review and manage all booking requests")

if not visible:
    st.info("🕒 No bookings to display")
elif table_view:
    st.dataframe(
        bookings_to_frame(visible),
        use_container_width=True,
        column_config={
            "preferred_date": st.column_config.DatetimeColumn("Date", format="D.M.YYYY HH:mm"),
            "cost": st.column_config.NumberColumn("Cost", format="$%.2f"),
            "duration": "Duration (min)",
            "service_type": "Service",
            "user_name": "Name",
            "user_email": "Email",
            "covid_restrictions": "COVID Level",
            "status": "Status",
            "admin_notes": "Notes",
            "id": "ID",
        },
    )
else:
    for booking in visible:
        with st.container(border=True):
            title_col, status_col = st.columns([4, 1])
            with title_col:
                st.markdown(f"#### {booking.service_type}")
                st.caption(f"Requested by: {booking.user_name} ({booking.user_email})  \nID: {booking.id}")
            status_color = get_label(config, "status_colors", booking.status).lower()
            status_col.markdown(f":{status_color}[**{booking.status.upper()}**]")

            c1, c2, c3, c4 = st.columns(4)
            c1.markdown(f"**Date:** {booking.preferred_date.strftime('%d.%m.%Y')}")
            c2.markdown(f"**Duration:** {booking.duration} min")
            c3.markdown(f"**Cost:** ${booking.cost}")
            c4.markdown(f"**COVID Level:** {booking.covid_restrictions}")

            if booking.details:
                st.markdown(f"**Details:** {booking.details}")

            if booking.is_pending:
                accept_col, decline_col = st.columns(2)
                accept_col.button(
                    "✅ Accept",
                    key=f"accept-{booking.id}",
                    on_click=_open_decision,
                    args=(booking, "accept"),
                    use_container_width=True,
                )
                decline_col.button(
                    "❌ Decline",
                    key=f"decline-{booking.id}",
                    on_click=_open_decision,
                    args=(booking, "decline"),
                    use_container_width=True,
                )
            else:
                st.caption(f"_Already {booking.status}_")

# Footer
st.markdown("---")
st.caption(f"{settings.PROJECT_NAME} • {settings.ENVIRONMENT}")
