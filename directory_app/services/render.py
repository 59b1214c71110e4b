"""
HTML fragments and status lines for search results.

- Directory results render as a table (the KEYWORDS column is search-only).
- FAQ results render as expandable question/answer cards.
"""

from html import escape
from typing import List

from directory_app.config import SUGGESTION_FORM_URL
from directory_app.utils.records import (
    FAQ_ANSWER,
    FAQ_CATEGORY,
    FAQ_QUESTION,
    HIDDEN_TABLE_COLUMNS,
    Dataset,
)


# -----------------------------------------
# Empty states
# -----------------------------------------
def _no_results(query: str, suggestion: str) -> str:
    if not query:
        return '<p class="no-results">No results found.</p>'
    return (
        '<div class="no-results">'
        f'<p>No results found for "<strong>{escape(query)}</strong>".</p>'
        f"{suggestion}"
        "</div>"
    )


def _directory_suggestion() -> str:
    text = '<p class="suggestion-text">Please consider suggesting a subject area to add to the directory.</p>'
    if not SUGGESTION_FORM_URL:
        return text
    return (
        text
        + f'<iframe src="{escape(SUGGESTION_FORM_URL)}" width="640" height="600" '
        'frameborder="0" marginheight="0" marginwidth="0">Loading…</iframe>'
    )


FAQ_SUGGESTION = '<p class="suggestion-text">Try searching with different keywords or check the spelling.</p>'


# -----------------------------------------
# Directory table
# -----------------------------------------
def table_columns(records: Dataset) -> List[str]:
    if not records:
        return []
    return [h for h in records[0].keys() if h.upper() not in HIDDEN_TABLE_COLUMNS]


def render_directory_table(records: Dataset, query: str = "") -> str:
    if not records:
        return _no_results(query, _directory_suggestion())

    columns = table_columns(records)
    head = "".join(f"<th>{escape(c)}</th>" for c in columns)
    rows = "".join(
        "<tr>" + "".join(f"<td>{escape(row.get(c) or '')}</td>" for c in columns) + "</tr>"
        for row in records
    )
    return f"<table><thead><tr>{head}</tr></thead><tbody>{rows}</tbody></table>"


# -----------------------------------------
# FAQ cards
# -----------------------------------------
def _faq_card(entry) -> str:
    question = entry.get(FAQ_QUESTION) or "No Question"
    answer = entry.get(FAQ_ANSWER) or "No Answer."
    category = entry.get(FAQ_CATEGORY) or ""

    answer_html = escape(answer).replace("\n", "<br>")
    category_html = f'<div class="faq-category">Category: {escape(category)}</div>' if category else ""

    return (
        '<div class="faq-card">'
        '<div class="faq-question">'
        f'<div><span class="faq-icon">❓</span> {escape(question)}</div>'
        '<span class="faq-toggle-icon">▼</span>'
        "</div>"
        '<div class="faq-answer">'
        f"<p>{answer_html}</p>"
        f"{category_html}"
        "</div>"
        "</div>"
    )


def render_faq_cards(records: Dataset, query: str = "") -> str:
    if not records:
        return _no_results(query, FAQ_SUGGESTION)
    cards = "".join(_faq_card(entry) for entry in records)
    return f'<div class="faq-cards-container">{cards}</div>'


# -----------------------------------------
# Status lines
# -----------------------------------------
def summary_text(match_count: int, total_count: int, noun: str, showing_all: bool = False) -> str:
    """'Showing all N <noun>.' after load/reset, 'Found X of Y <noun>.' after a search."""
    if showing_all:
        return f"Showing all {total_count} {noun}."
    return f"Found {match_count} of {total_count} {noun}."
