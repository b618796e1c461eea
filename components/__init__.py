"""Streamlit UI components for the vernacular map."""
