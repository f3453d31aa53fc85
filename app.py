"""
textdiff - Interactive Streamlit Playground

A lightweight UI layer for comparing two texts. This app wraps the diff
engine, summaries, insights and merge utilities with no additional
comparison logic.

Usage:
    streamlit run app.py

Design Principles:
- Thin UI layer: all comparison logic lives in textdiff.core
- Explicit actions: user triggers each comparison manually
- Process-wide services: cache and rate limiter are created once
- No persistence: session resets on reload
"""

import os
import tempfile

import streamlit as st
from markitdown import MarkItDown

from textdiff import __version__
from textdiff.core.engine import diff
from textdiff.core.highlight import compute_character_diff
from textdiff.core.insights import compute_diff_insights
from textdiff.core.merge import MergeDecision, generate_merged_text, merge_separator
from textdiff.core.models import ChangeType, DiffOptions, Granularity, OptionsError
from textdiff.core.navigation import get_all_change_indices
from textdiff.core.similarity import interpret_similarity
from textdiff.core.streaming import DEFAULT_STREAM_CHUNK_SIZE, should_chunk, stream_diff
from textdiff.core.summary import ImpactLevel, summarize_changes
from textdiff.core.text_analysis import analyze_text
from textdiff.services.cache import DiffCache
from textdiff.services.rate_limiter import RateLimiter


# Inputs above this size are rejected before diffing.
MAX_INPUT_CHARS = 10 * 1024 * 1024


# =============================================================================
# Services (created once per process)
# =============================================================================

@st.cache_resource
def get_diff_cache() -> DiffCache:
    return DiffCache()


@st.cache_resource
def get_rate_limiter() -> RateLimiter:
    return RateLimiter()


# =============================================================================
# Session State Initialization
# =============================================================================

def init_session_state():
    """
    Initialize session state variables.

    Session state tracks:
    - diff_result: Output of the last comparison
    - diff_options: Options used for that comparison
    - compared_texts: (original, modified) pair behind diff_result
    - status_message: Current status for user feedback
    - error_message: Current error message (if any)
    - session_id: Identity used for rate limiting
    """
    defaults = {
        "diff_result": None,
        "diff_options": None,
        "compared_texts": None,
        "status_message": "",
        "error_message": "",
        "session_id": os.urandom(8).hex(),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def convert_source_to_text(source: str) -> tuple[bool, str]:
    """
    Convert a URL or local file path to text using markitdown.

    Returns:
        Tuple of (success: bool, content_or_error: str)
    """
    try:
        content = MarkItDown().convert(source).text_content
        if content and content.strip():
            return True, content
        return False, "Conversion returned empty content"
    except Exception as e:
        return False, f"Error: {e}"


def convert_upload_to_text(uploaded) -> tuple[bool, str]:
    """Write an uploaded file to a temp path and convert it."""
    suffix = os.path.splitext(uploaded.name)[1]
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as handle:
        handle.write(uploaded.getvalue())
        path = handle.name
    try:
        return convert_source_to_text(path)
    finally:
        os.unlink(path)


# =============================================================================
# Backend Integration
# =============================================================================

def run_comparison(original: str, modified: str, raw_options: dict) -> bool:
    """
    Validate options, consult the cache, and run the streaming diff.

    Returns True on success, False on error.
    """
    try:
        st.session_state.error_message = ""
        options = DiffOptions.from_mapping(raw_options)

        for label, text in (("Original", original), ("Modified", modified)):
            if len(text) > MAX_INPUT_CHARS:
                st.session_state.error_message = (
                    f"{label} text exceeds the maximum size of {MAX_INPUT_CHARS:,} characters."
                )
                return False

        decision = get_rate_limiter().check(st.session_state.session_id)
        if not decision.allowed:
            st.session_state.error_message = "Too many comparisons. Please wait a minute."
            return False

        cache = get_diff_cache()
        # Cache keys ignore semantic options, so only plain diffs are cached.
        result = None if options.semantic_analysis else cache.get(original, modified, options)
        cached = result is not None

        if result is None:
            progress = st.progress(0.0, text="Comparing...")
            for event in stream_diff(original, modified, options, chunk_size=DEFAULT_STREAM_CHUNK_SIZE):
                progress.progress(event.progress / 100, text=f"Comparing... {event.progress:.0f}%")
                if event.complete:
                    result = event.partial_result
            progress.empty()
            if not options.semantic_analysis:
                cache.set(original, modified, options, result)

        st.session_state.diff_result = result
        st.session_state.diff_options = options
        st.session_state.compared_texts = (original, modified)
        mode = "chunked" if should_chunk(original, modified) else "single pass"
        st.session_state.status_message = (
            f"Comparison complete: {len(result.changes)} entries "
            f"({mode}{', cached' if cached else ''})."
        )
        return True

    except OptionsError as e:
        st.session_state.error_message = f"Invalid options: {e}"
        return False
    except Exception as e:
        st.session_state.error_message = f"Unexpected error: {e}"
        return False


# =============================================================================
# UI Components
# =============================================================================

def render_header():
    """Render the app header."""
    st.title("textdiff")
    st.caption(f"Granular text comparison with change explanations · v{__version__}")


def render_text_input(label: str, key: str) -> str:
    """Text area with optional URL/file import for one side."""
    with st.expander(f"Import {label.lower()} from URL or file", expanded=False):
        url = st.text_input("URL", key=f"{key}_url", placeholder="https://example.com/page")
        uploaded = st.file_uploader("File", key=f"{key}_file")
        if st.button("Import", key=f"{key}_import", disabled=not (url or uploaded)):
            with st.spinner("Converting..."):
                if uploaded is not None:
                    success, content = convert_upload_to_text(uploaded)
                else:
                    success, content = convert_source_to_text(url.strip())
            if success:
                st.session_state[key] = content
                st.rerun()
            else:
                st.error(f"Failed to import: {content}")

    text = st.text_area(label, height=220, key=key)
    if text:
        st.caption(f"{len(text):,} characters, ~{len(text.split()):,} words")
    return text


def render_options() -> dict:
    """Render option widgets and return a raw options mapping."""
    st.subheader("Options")
    col1, col2, col3 = st.columns(3)
    with col1:
        granularity = st.selectbox(
            "Granularity",
            options=[g.value for g in Granularity],
            index=[g.value for g in Granularity].index(Granularity.LINE.value),
        )
    with col2:
        ignore_whitespace = st.checkbox("Ignore whitespace")
        ignore_case = st.checkbox("Ignore case")
    with col3:
        semantic = st.checkbox("Semantic analysis", help="Score and explain modified entries")
        threshold = st.slider("Similarity threshold", 0.0, 1.0, 0.5, 0.05, disabled=not semantic)

    return {
        "granularity": granularity,
        "ignoreWhitespace": ignore_whitespace,
        "ignoreCase": ignore_case,
        "semanticAnalysis": semantic,
        "similarityThreshold": threshold,
    }


IMPACT_BADGES = {
    ImpactLevel.LOW: "🟢 Low",
    ImpactLevel.MEDIUM: "🟡 Medium",
    ImpactLevel.HIGH: "🔴 High",
}

CHANGE_MARKERS = {
    ChangeType.ADDED: "➕",
    ChangeType.REMOVED: "➖",
    ChangeType.MODIFIED: "✏️",
    ChangeType.UNCHANGED: "·",
}


def render_overview():
    """Render stats, summary, impact and recommendations."""
    result = st.session_state.diff_result
    summary = summarize_changes(result)
    insights = compute_diff_insights(result)

    st.divider()
    st.subheader("Overview")
    cols = st.columns(5)
    cols[0].metric("Added", result.stats.added)
    cols[1].metric("Removed", result.stats.removed)
    cols[2].metric("Modified", result.stats.modified)
    cols[3].metric("Unchanged", result.stats.unchanged)
    cols[4].metric("Similarity", f"{insights.similarity:.0f}%")

    st.markdown(f"**Impact:** {IMPACT_BADGES[summary.impact]} · {summary.summary}")
    for message in summary.recommendation_messages:
        st.warning(message)

    largest = insights.largest_change
    if largest is not None and largest.change_type == ChangeType.MODIFIED:
        st.caption("Largest change, character highlight")
        st.markdown(_highlight_markdown(largest.original or "", largest.modified or ""))


def _highlight_markdown(original: str, modified: str) -> str:
    """Render a character diff with strike-through and bold markers."""
    char_diff = compute_character_diff(original, modified)
    removed = "".join(
        f"~~{t.char}~~" if t.change_type == ChangeType.REMOVED and t.char.strip() else t.char
        for t in char_diff.original
    )
    added = "".join(
        f"**{t.char}**" if t.change_type == ChangeType.ADDED and t.char.strip() else t.char
        for t in char_diff.modified
    )
    return f"- {removed}\n- {added}"


def render_text_analysis():
    """Side-by-side readability and key terms for both compared texts."""
    original, modified = st.session_state.compared_texts
    with st.expander("Text analysis", expanded=False):
        cols = st.columns(2)
        for col, label, text in ((cols[0], "Original", original), (cols[1], "Modified", modified)):
            analysis = analyze_text(text)
            with col:
                st.markdown(f"**{label}**")
                st.write(
                    f"{analysis.word_count} words, {analysis.sentence_count} sentences, "
                    f"{analysis.paragraph_count} paragraphs"
                )
                st.write(
                    f"Readability: {analysis.readability_score} ({analysis.readability_level})"
                )
                if analysis.key_terms:
                    st.caption("Key terms: " + ", ".join(analysis.key_terms))


def render_changes():
    """Render the change list, hiding unchanged entries on request."""
    result = st.session_state.diff_result
    st.subheader("Changes")
    show_unchanged = st.checkbox("Show unchanged entries", value=False)

    for index, change in enumerate(result.changes):
        if not change.is_change and not show_unchanged:
            continue
        marker = CHANGE_MARKERS[change.change_type]
        if change.change_type == ChangeType.MODIFIED:
            st.markdown(f"{marker} `{index}` ~~{change.original}~~ → {change.modified}")
            if change.explanation:
                label = interpret_similarity(change.similarity or 0.0)
                st.caption(f"{label} ({change.similarity:.2f}): {change.explanation}")
        elif change.change_type == ChangeType.ADDED:
            st.markdown(f"{marker} `{index}` {change.modified}")
        elif change.change_type == ChangeType.REMOVED:
            st.markdown(f"{marker} `{index}` ~~{change.original}~~")
        else:
            st.markdown(f"{marker} `{index}` {change.original}")


def render_merge_panel():
    """Let the user accept or reject individual changes and preview the merge."""
    result = st.session_state.diff_result
    changed = get_all_change_indices(result.changes)
    if not changed:
        return

    st.subheader("Merge")
    decisions = {}
    with st.expander("Decisions", expanded=False):
        for index in changed:
            choice = st.radio(
                f"Change {index} ({result.changes[index].change_type.value})",
                options=[d.value for d in MergeDecision],
                index=[d.value for d in MergeDecision].index(MergeDecision.KEEP.value),
                horizontal=True,
                key=f"merge_{index}",
            )
            decisions[index] = MergeDecision(choice)

    original, _ = st.session_state.compared_texts
    separator = merge_separator(st.session_state.diff_options.granularity, original)
    merged = generate_merged_text(result.changes, decisions, separator)
    st.text_area("Merged text", merged, height=200)
    st.download_button("Download merged text", merged, file_name="merged.txt")


def main():
    """Main app entry point."""
    st.set_page_config(page_title="textdiff", layout="wide")
    init_session_state()
    render_header()

    col1, col2 = st.columns(2)
    with col1:
        original = render_text_input("Original", "original_input")
    with col2:
        modified = render_text_input("Modified", "modified_input")

    raw_options = render_options()

    if st.button("Compare", type="primary", use_container_width=True):
        if run_comparison(original, modified, raw_options):
            st.rerun()

    if st.session_state.error_message:
        st.error(st.session_state.error_message)
    elif st.session_state.status_message:
        st.success(st.session_state.status_message)

    if st.session_state.diff_result is not None:
        render_overview()
        render_text_analysis()
        render_changes()
        render_merge_panel()


if __name__ == "__main__":
    main()
