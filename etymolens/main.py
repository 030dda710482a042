"""
Main entry point for the Etymolens web application.

This module initializes all components and starts the Streamlit interface.
"""

import streamlit as st
from loguru import logger

from etymolens.agents.batch_agent import create_batch_processor
from etymolens.config import DEBUG_MODE, LOG_DIR
from etymolens.gui import EtymologyUI
from etymolens.utils.logging_config import setup_logging


def main():
    """Initialize and run the application."""
    setup_logging(
        log_path=str(LOG_DIR / "etymolens.log"),
        console_level="DEBUG" if DEBUG_MODE else "INFO",
        file_level="DEBUG"
    )

    try:
        logger.info("Initializing application components...")

        processor = create_batch_processor()
        logger.info("Batch processor initialized successfully")

        ui = EtymologyUI(processor=processor)
        ui.run()

    except Exception as e:
        logger.error(f"Application initialization failed: {str(e)}")
        st.error("Failed to initialize application. Please check the logs for details.")


if __name__ == "__main__":
    main()
