"""Streamlit front end and its HTTP client."""
