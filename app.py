import streamlit as st
from datetime import date

from booking_service import BookingService
from config import load_settings
from errors import NotificationError
from logger import get_logger
from slot_engine import next_available
from working_hours import WORKING_HOURS, weekday_of

settings = load_settings()

logger = get_logger(log_file=settings.log_file)

st.set_page_config(page_title="Cabin Booking")
st.title("🛖 Cabin Booking")

if not settings.webhook_url:
    st.error("BOOKING_WEBHOOK_URL is not configured. Add it to your environment or .env file.")
    st.stop()


@st.cache_resource
def get_service() -> BookingService:
    return BookingService(settings)


service = get_service()

with st.sidebar:
    user_id = st.text_input("User ID", value=st.session_state.get("user_id", ""))
    st.session_state.user_id = user_id
    cabin_id = st.text_input("Cabin", value="cabin-1")
    day = st.date_input("Date", value=date.today(), min_value=date.today())

    start, end = WORKING_HOURS[weekday_of(day)]
    st.caption(f"Open {start.strftime('%H:%M')} - {end.strftime('%H:%M')} on {day.strftime('%A')}")

    if st.button("Check cabin availability"):
        res = service.attempt(service.check_cabin_availability, cabin_id, day)
        if res.ok:
            st.json(res.value)
        else:
            st.error(f"Could not check availability: {res.error}")

# SLOTS
st.subheader(f"Slots on {day.isoformat()}")
res = service.attempt(service.fetch_available_time_slots, day)
if not res.ok:
    st.error(f"Could not load time slots: {res.error}")
    st.stop()

slots = res.value
free = [s["time"] for s in slots if s["available"]]
st.caption(f"{len(free)} of {len(slots)} slots free. Next free: {next_available(slots) or 'none'}")

cols = st.columns(4)
for i, s in enumerate(slots):
    cols[i % 4].write(f"{'🟢' if s['available'] else '🔴'} {s['time']}")

# BOOK
if free:
    chosen = st.selectbox("Time", free)
    if st.button("Book", disabled=not user_id):
        res = service.attempt(service.create_booking, {
            "cabinId": cabin_id,
            "userId": user_id,
            "date": day.isoformat(),
            "time": chosen,
        })
        if res.ok:
            st.success(f"Booked {cabin_id} on {day.isoformat()} at {chosen} (id {res.value})")
        elif isinstance(res.error, NotificationError) and res.error.booking_id:
            # stored, but the automation was not told
            st.warning(f"Booking {res.error.booking_id} saved, but the notification failed: {res.error}")
        else:
            st.error(f"Booking failed: {res.error}")
else:
    st.info("No free slots on this day.")

# MY BOOKINGS
if user_id:
    st.subheader("My bookings")
    res = service.attempt(service.get_user_bookings, user_id)
    if not res.ok:
        st.error(f"Could not load bookings: {res.error}")
    else:
        for b in res.value:
            c1, c2 = st.columns([4, 1])
            c1.write(f"{b['date']} {b['time']} · {b['cabinId']} · {b['status']}")
            if b["status"] == "confirmed" and c2.button("Cancel", key=f"cancel_{b['id']}"):
                out = service.attempt(service.cancel_booking, b["id"])
                if out.ok:
                    logger.info(f"User {user_id} cancelled {b['id']}")
                    st.rerun()
                else:
                    st.error(f"Cancel failed: {out.error}")
