# path: bike-router-api/bike_router/utils/labels.py

from __future__ import annotations

from typing import Optional
import html
import re


# Checked in this order; " onto " wins even when " on " appears earlier.
# Only the first marker found is used: " onto " with no bold span after it
# does not fall back to " on ".
STREET_MARKERS = (" onto ", " on ")
_MARKER_PATTERNS = [re.compile(re.escape(m), re.IGNORECASE) for m in STREET_MARKERS]
UNNAMED_PREFIX = "Unnamed"
PLUS_CODE_MARKER = "+"

_BOLD_SPAN = re.compile(r"<b>(.*?)</b>", re.IGNORECASE | re.DOTALL)


def strip_html(markup: str) -> str:
    # An unmatched '<' swallows the rest; a stray '>' is dropped.
    out = []
    in_tag = False
    for ch in markup or "":
        if ch == "<":
            in_tag = True
            continue
        if ch == ">":
            in_tag = False
            continue
        if not in_tag:
            out.append(ch)
    return html.unescape("".join(out)).strip()


def is_usable_label(label: Optional[str]) -> bool:
    if not label:
        return False
    if PLUS_CODE_MARKER in label:
        return False
    return not label.startswith(UNNAMED_PREFIX)


def street_from_markup(markup: str) -> str:
    """
    Returns the first bold span after " onto " (or, failing that, " on ").
    Empty string when there is no marker or no bold span after it.
    """
    markup = markup or ""
    for pattern in _MARKER_PATTERNS:
        found = pattern.search(markup)
        if found is None:
            continue
        m = _BOLD_SPAN.search(markup, found.end())
        if m is None:
            return ""
        return strip_html(m.group(1))
    return ""


def resolve_label(markup: str, external_label: Optional[str] = None) -> str:
    """
    Picks the label to show for a step.

    Precedence:
      1. external_label, if it looks like a real name (not a plus code, not "Unnamed ...")
      2. the bold street name after " onto " / " on " in the markup
      3. the markup with all tags stripped
    """
    if external_label and is_usable_label(external_label):
        return external_label

    street = street_from_markup(markup)
    if street:
        return street

    return strip_html(markup)
