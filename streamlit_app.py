"""Streamlit Cloud entry point for the majanduskava wizard."""
from __future__ import annotations

from app import main

main()
