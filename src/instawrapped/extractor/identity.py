"""
Account owner resolution.

Every "other party" metric has to leave the owner out, so the owner's
username and display name are read once from the personal information page
and shared read-only with all extractors.
"""

from __future__ import annotations

from typing import Optional

import structlog

from ..archive import Archive, paths
from .markup import nested_label_value, parse_html, sibling_cell_value
from .models import Identity
from .strategies import compile_patterns, first_success, regex_strategy

logger = structlog.get_logger(__name__)

USERNAME_LABEL = "Username"
NAME_LABEL = "Name"

USERNAME_PATTERNS = compile_patterns(
    [
        r"Username</td>(?:(?!</tr>)[\s\S])*?<div><div>([^<]+)</div></div>",
        r"Username[^>]*>(?:(?!</tr>)[\s\S])*?<div><div>([^<]+)</div></div>",
        r"Username</td>\s*<td[^>]*>(.*?)</td>",
        r"Username(?:(?!</tr>).)*?<div>([^<]+)</div>",
    ]
)

# The look-behind keeps these from matching inside "Username". Nested-div
# patterns stay within one table row.
NAME_PATTERNS = compile_patterns(
    [
        r"(?<!User)Name</td>(?:(?!</tr>)[\s\S])*?<div><div>([^<]+)</div></div>",
        r"(?<![A-Za-z])Name[^>]*>(?:(?!</tr>)[\s\S])*?<div><div>([^<]+)</div></div>",
        r"(?<!User)Name</td>\s*<td[^>]*>(.*?)</td>",
    ]
)


class IdentityResolver:
    """Reads the owner's username and display name from an archive."""

    name = "identity"

    def resolve_html(self, html: Optional[str]) -> Identity:
        if not html:
            return Identity()

        soup = parse_html(html)

        username = first_success(
            [
                lambda: nested_label_value(soup, USERNAME_LABEL),
                lambda: sibling_cell_value(soup, USERNAME_LABEL),
                lambda: regex_strategy(USERNAME_PATTERNS)(html),
            ]
        )
        name = first_success(
            [
                lambda: nested_label_value(soup, NAME_LABEL, exclude=USERNAME_LABEL),
                lambda: sibling_cell_value(soup, NAME_LABEL),
                lambda: regex_strategy(NAME_PATTERNS)(html),
            ]
        )
        return Identity(username=username, name=name)

    async def resolve(self, archive: Archive) -> Identity:
        html = await archive.read_text(paths.PERSONAL_INFORMATION)
        if html is None:
            logger.info("identity_source_missing", path=paths.PERSONAL_INFORMATION)
            return Identity()

        identity = self.resolve_html(html)
        if not identity.resolved:
            logger.warning("identity_unresolved", path=paths.PERSONAL_INFORMATION)
        else:
            logger.debug("identity_resolved", username=identity.username, name=identity.name)
        return identity
