"""
Streamlit chat interface.

Run with ``streamlit run src/bodegoes_assistant/ui/streamlit_app.py`` while
the API is up.
"""

from datetime import datetime

import httpx
import streamlit as st

from bodegoes_assistant.application.use_cases.restaurant_info import WEEKDAYS
from bodegoes_assistant.config import get_settings
from bodegoes_assistant.ui.api_client import RestaurantApiClient


@st.cache_resource
def get_client() -> RestaurantApiClient:
    return RestaurantApiClient(get_settings().api_base_url)


def today_hours(info: dict) -> str:
    today = datetime.now().strftime("%A")
    return info.get("hours", {}).get(today, "Hours not available")


def render_welcome(client: RestaurantApiClient):
    st.title("Welcome to Bodegoes")
    st.write("Ask me anything about our menu, hours, reservations or events.")

    with st.form("welcome"):
        name = st.text_input("What's your name?", value=st.session_state.get("username", ""))
        submitted = st.form_submit_button("Start chatting")

    if submitted:
        name = name.strip()
        if not name:
            st.warning("Please enter your name.")
            return
        try:
            session = client.create_session(name)
        except httpx.HTTPError:
            st.error("Failed to start chat. Please try again.")
            return
        st.session_state.username = name
        st.session_state.session = session
        st.rerun()


def render_info_panel(client: RestaurantApiClient):
    with st.sidebar:
        st.header("Restaurant Info")
        try:
            info = client.get_restaurant_info()
        except httpx.HTTPError:
            st.caption("Restaurant info is unavailable right now.")
            return

        st.subheader(info["name"])
        status = info["currentStatus"]
        if info["isOpen"]:
            st.success(f"{status} · Today {today_hours(info)}")
        else:
            st.error(f"{status} · Today {today_hours(info)}")

        st.metric("Rating", f"{info['rating']:.1f} ★", help=f"{info['reviews']} reviews")
        st.write(f"📍 {info['address']}")
        st.write(f"📞 {info['phone']}")
        st.write(f"🌐 {info['website']}")

        with st.expander("Opening hours"):
            hours = info.get("hours", {})
            for day in WEEKDAYS:
                if day in hours:
                    st.write(f"**{day}**: {hours[day]}")


def render_chat(client: RestaurantApiClient):
    session = st.session_state.session
    st.title("Bodegoes Assistant")
    st.caption(f"Chatting as {session['name']}")

    try:
        messages = client.get_messages(session["id"])
    except httpx.HTTPError:
        messages = []
        st.error("Could not load the conversation.")

    if not messages:
        with st.chat_message("assistant"):
            st.write(
                f"Hi {session['name']}! I can help with our menu, hours, "
                "reservations and special events."
            )

    for message in messages:
        role = "assistant" if message["isAssistant"] else "user"
        with st.chat_message(role):
            st.write(message["content"])

    prompt = st.chat_input("Ask about menu, hours, reservations...")
    if prompt and prompt.strip():
        with st.chat_message("user"):
            st.write(prompt)
        with st.chat_message("assistant"):
            with st.spinner("Thinking..."):
                try:
                    reply = client.send_message(session["id"], prompt.strip())
                except httpx.HTTPError:
                    st.toast("Failed to send message. Please try again.")
                    return
            st.write(reply["assistantMessage"]["content"])
        st.rerun()


def main():
    st.set_page_config(page_title="Bodegoes Assistant", page_icon="🍽️", layout="wide")
    client = get_client()

    render_info_panel(client)

    if "session" not in st.session_state:
        render_welcome(client)
    else:
        render_chat(client)
        if st.sidebar.button("Start a new chat"):
            del st.session_state["session"]
            st.rerun()


main()
