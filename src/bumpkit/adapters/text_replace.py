"""Default text-replacement collaborator."""

from __future__ import annotations

from logging import getLogger

log = getLogger(__name__)


def replace_first_occurrence(content: str, old_value: str, new_value: str) -> str | None:
    """Replace the first occurrence of ``old_value`` in ``content``.

    ``None`` means ``old_value`` was not found. Finding ``new_value`` elsewhere
    in the file proves nothing, so the caller decides how to recover.
    """

    if not old_value or old_value not in content:
        log.debug("Replacement source %r not found", old_value)
        return None
    return content.replace(old_value, new_value, 1)
