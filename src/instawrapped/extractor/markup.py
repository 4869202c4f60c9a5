"""
BeautifulSoup helpers for the table-and-div layout of export pages.

Export pages put each record in a ``div.pam`` block. Labeled values come in
two layouts depending on the format version::

    <tr><td>Label</td><td>value</td></tr>
    <tr><td colspan="2">Label<div><div>value</div></div></td></tr>
"""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..utils.text import clean

PARSER = "html.parser"
BLOCK_SELECTOR = "div.pam"
BLOCK_CLASS = "uiBoxWhite"
BLOCK_OPENING_PATTERN = re.compile(r"<div[^>]*\bclass=[\"']pam[\s\"']", re.IGNORECASE)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, PARSER)


def text_of(element: Optional[Tag]) -> str:
    if element is None:
        return ""
    return clean(element.get_text(" "))


def content_blocks(soup: BeautifulSoup | Tag) -> list[Tag]:
    """Return the repeated record blocks of a page."""
    return soup.select(BLOCK_SELECTOR)


def _count_by_selector(html: str) -> Optional[int]:
    return len(content_blocks(parse_html(html))) or None


def _count_by_class(html: str) -> Optional[int]:
    return len(parse_html(html).find_all("div", class_=BLOCK_CLASS)) or None


def _count_by_regex(html: str) -> Optional[int]:
    return len(BLOCK_OPENING_PATTERN.findall(html)) or None


BLOCK_COUNTERS = (_count_by_selector, _count_by_class, _count_by_regex)


def innermost_text(cell: Tag, label: str) -> Optional[str]:
    """
    Text of the deepest nested div whose text is not just the label.

    Walks descendant divs from the last (deepest) one outward.
    """
    for div in reversed(cell.find_all("div")):
        text = text_of(div)
        if text and text != label:
            return text
    return None


def sibling_cell_value(scope: BeautifulSoup | Tag, label: str) -> Optional[str]:
    """Value of a ``<td>label</td><td>value</td>`` row."""
    for row in scope.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) >= 2 and text_of(cells[0]) == label:
            value = text_of(cells[1])
            if value:
                return value
    return None


def _label_cell(row: Tag, label: str) -> Optional[Tag]:
    spanning = row.find("td", attrs={"colspan": "2"})
    if spanning is not None and label in text_of(spanning):
        return spanning
    for cell in row.find_all("td"):
        if label in text_of(cell):
            return cell
    return None


def nested_label_value(
    scope: BeautifulSoup | Tag,
    label: str,
    exclude: Optional[str] = None,
) -> Optional[str]:
    """
    Value of a ``<td>label<div><div>value</div></div></td>`` row.

    Rows whose text also contains ``exclude`` are skipped, which keeps a
    ``Name`` lookup from landing on the ``Username`` row.
    """
    for row in scope.find_all("tr"):
        # Outer rows of nested tables would capture another field's value.
        if row.find("tr") is not None:
            continue
        row_text = text_of(row)
        if label not in row_text or (exclude and exclude in row_text):
            continue
        cell = _label_cell(row, label)
        if cell is None:
            continue
        value = innermost_text(cell, label)
        if value:
            return value
    return None
