"""
Streamlit launcher for Etymolens.

Run with ``streamlit run main.py``.
"""

from etymolens.main import main

main()
