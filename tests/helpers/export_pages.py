"""
Builders for export archives and the HTML pages found inside them.

The markup mirrors the layout of real export pages: every record sits in a
``div.pam`` block and labeled values use either the nested
``Label<div><div>value</div></div>`` cell or a two-cell table row.
"""

import io
import zipfile
from typing import Iterable, Optional, Sequence

BLOCK_OPEN = '<div class="pam _3-95 _2ph- _a6-g uiBoxWhite noborder">'


def build_archive(files: dict) -> bytes:
    """Zip a mapping of archive path -> text into bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for path, content in files.items():
            zf.writestr(path, content)
    return buffer.getvalue()


def page(body: str, title: str = "Export") -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\" />"
        f"<title>{title}</title></head><body><main>{body}</main></body></html>"
    )


def nested_row(label: str, value: str) -> str:
    return f'<tr><td colspan="2" class="_2pin _a6_q">{label}<div><div>{value}</div></div></td></tr>'


def table_row(label: str, value: str) -> str:
    return f'<tr><td class="_2pin _a6_q">{label}</td><td class="_2pin _2piu _a6_r">{value}</td></tr>'


def block(inner: str) -> str:
    return f'{BLOCK_OPEN}<div class="_3-95 _a6-p">{inner}</div></div>'


def personal_information_page(username: Optional[str], name: Optional[str], layout: str = "nested") -> str:
    row = nested_row if layout == "nested" else table_row
    rows = ""
    if username is not None:
        rows += row("Username", username)
    if name is not None:
        rows += row("Name", name)
    return page(block(f'<table style="table-layout: fixed;">{rows}</table>'), "Personal information")


def signup_page(signup: str, label: str = "Time", layout: str = "nested") -> str:
    row = nested_row if layout == "nested" else table_row
    rows = row("Username", "testuser") + row(label, signup)
    return page(block(f"<table>{rows}</table>"), "Signup details")


def topics_page(names: Iterable[str]) -> str:
    blocks = "".join(block(f"<table>{nested_row('Name', name)}</table>") for name in names)
    return page(blocks, "Recommended topics")


def media_page(count: int) -> str:
    blocks = "".join(
        block(f'<div><a href="https://www.instagram.com/p/post{i}/">Post {i}</a></div><div>Jan 1, 2024</div>')
        for i in range(count)
    )
    return page(blocks, "Content")


def liked_posts_page(owners: Sequence[str]) -> str:
    blocks = "".join(
        f'{BLOCK_OPEN}<h2 class="_3-95 _2pim _a6-h _a6-i">{owner}</h2>'
        f'<div class="_3-95 _a6-p"><div><div><a target="_blank" href="https://www.instagram.com/p/abc{i}/">'
        f"https://www.instagram.com/p/abc{i}/</a></div><div>Jan 2, 2024 1:00 pm</div></div></div></div>"
        for i, owner in enumerate(owners)
    )
    return page(blocks, "Liked posts")


def comments_page(owners: Sequence[str]) -> str:
    blocks = "".join(
        block(
            "<table>"
            + nested_row("Comment", f"Nice shot {i}!")
            + nested_row("Media Owner", owner)
            + table_row("Time", "Jan 02, 2024 3:00 pm")
            + "</table>"
        )
        for i, owner in enumerate(owners)
    )
    return page(blocks, "Comments")


def message_block(sender: str, text: str, timestamp: str = "", link: Optional[str] = None) -> str:
    content = f"<div>{text}</div>"
    if link:
        content += f'<div><a target="_blank" href="{link}">{link}</a></div>'
    stamp = f'<div class="_3-94 _a6-o">{timestamp}</div>' if timestamp else ""
    return (
        f'{BLOCK_OPEN}<h2 class="_3-95 _2pim _a6-h _a6-i">{sender}</h2>'
        f'<div class="_3-95 _a6-p"><div><div></div>{content}<div></div></div></div>{stamp}</div>'
    )


def message_page(messages: Iterable[tuple]) -> str:
    """Build a chat page from (sender, text, timestamp[, link]) tuples."""
    return page("".join(message_block(*message) for message in messages), "Messages")
