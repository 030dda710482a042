"""
Streamlit-based GUI for the Etymolens application.

This module renders analysed text with every word coloured by its origin, a
legend of the origins present and a pie chart of their shares. All resolution
work is delegated to the batch processor.
"""

import asyncio
import html
from concurrent.futures import ThreadPoolExecutor
from typing import List

import pandas as pd
import plotly.express as px
import streamlit as st
from loguru import logger

from etymolens.agents.batch_agent import (
    BatchProcessor,
    calculate_origin_stats,
    get_active_languages
)
from etymolens.config import LANGUAGE_COLORS
from etymolens.models.origin_models import BatchResult, CompoundOrigin, OriginLabel, ProcessedWord

# Custom CSS for clean typography and spacing
PAGE_CSS = """
<style>
    .analyzed-text {
        font-size: 1.35rem;
        line-height: 2.2rem;
        font-family: Georgia, serif;
    }
    .legend-item {
        display: flex;
        align-items: center;
        gap: 12px;
        padding: 4px 0;
    }
    .legend-color {
        width: 16px;
        height: 16px;
        border: 1px solid #d1d5db;
        flex-shrink: 0;
    }
</style>
"""


def _color(origin: OriginLabel) -> str:
    return LANGUAGE_COLORS.get(origin.value, LANGUAGE_COLORS["Unknown"])


def _span(text: str, origin: OriginLabel) -> str:
    return (
        f'<span style="color: {_color(origin)}" title="{origin.value}">'
        f'{html.escape(text)}</span>'
    )


def render_word(item: ProcessedWord) -> str:
    """Render one word as HTML; compound words are split into two coloured spans."""
    if isinstance(item.origin, CompoundOrigin):
        first, second = item.origin.parts
        split = item.word.lower().rfind(second.text.lower()) if second.text else -1
        if split > 0:
            return _span(item.word[:split], first.origin) + _span(item.word[split:], second.origin)
        return _span(item.word, first.origin)
    return _span(item.word, item.origin.label)


def run_async(coro):
    """Run a coroutine on a fresh event loop outside Streamlit's script thread."""
    with ThreadPoolExecutor() as executor:
        future = executor.submit(lambda: asyncio.run(coro))
        return future.result()


class EtymologyUI:
    """
    Main UI controller for the Etymolens application.

    This class manages the UI state, component rendering, and data flow
    between the interface and the batch processor.
    """

    def __init__(self, processor: BatchProcessor):
        """
        Initialize UI state.

        Args:
            processor: Batch processor used to resolve submitted text
        """
        self.processor = processor

        if 'input_text' not in st.session_state:
            st.session_state.input_text = ""
        if 'results' not in st.session_state:
            st.session_state.results = []
        if 'network_error' not in st.session_state:
            st.session_state.network_error = False

    def run(self):
        """Run the Streamlit application."""
        st.markdown(PAGE_CSS, unsafe_allow_html=True)
        st.title("Etymolens")
        st.markdown("""
        Discover where the words you use come from.
        Paste some English text and each word is coloured by its language of origin.
        """)

        text = st.text_area(
            "Text to analyse",
            key="text_input",
            height=160,
            placeholder="e.g., 'The quick brown fox jumps over the lazy dog'"
        )
        if st.button("Analyze", key="analyze_button") and text.strip():
            self._process_text(text)

        if st.session_state.network_error:
            self._render_error()
        elif st.session_state.results:
            self._render_results(st.session_state.results)

    def _process_text(self, text: str):
        """Resolve text and store the outcome in session state."""
        with st.spinner("Looking up word origins..."):
            try:
                batch: BatchResult = run_async(self.processor.process_text(text))
            except Exception as e:
                logger.error(f"Processing failed: {str(e)}")
                st.error(f"Error analysing text: {str(e)}")
                return

        st.session_state.input_text = text
        st.session_state.network_error = batch.has_network_error
        st.session_state.results = batch.results

    def _render_error(self):
        """Render the network failure message with a retry button."""
        st.error(
            "Can't reach Wiktionary. Please check your internet connection and try again."
        )
        if st.button("Retry", key="retry_button") and st.session_state.input_text:
            self._process_text(st.session_state.input_text)
            st.rerun()

    def _render_results(self, results: List[ProcessedWord]):
        st.markdown(
            '<div class="analyzed-text">'
            + " ".join(render_word(item) for item in results)
            + '</div>',
            unsafe_allow_html=True
        )

        col1, col2 = st.columns(2)
        with col1:
            self._render_legend(get_active_languages(results))
        with col2:
            self._render_chart(results)

    def _render_legend(self, languages: List[OriginLabel]):
        """Render legend for the origins present."""
        st.markdown("### Legend")
        for language in languages:
            st.markdown(
                f'<div class="legend-item">'
                f'<div class="legend-color" style="background: {_color(language)}"></div>'
                f'<span>{language.value}</span>'
                f'</div>',
                unsafe_allow_html=True
            )

    def _render_chart(self, results: List[ProcessedWord]):
        """Render the origin distribution as a pie chart."""
        stats = calculate_origin_stats(results)
        if not stats:
            return
        df = pd.DataFrame([stat.to_dict() for stat in stats])
        fig = px.pie(
            df,
            names="origin",
            values="count",
            color="origin",
            color_discrete_map=LANGUAGE_COLORS,
            hole=0.35
        )
        fig.update_traces(sort=False, textinfo="percent+label")
        fig.update_layout(showlegend=False, margin=dict(t=20, b=20, l=20, r=20))
        st.markdown("### Origins")
        st.plotly_chart(fig, use_container_width=True)
