"""
Literal placeholder substitution for label templates.

Placeholder keys are plain substrings (e.g. `<<SKU>>` or `$ITEM`), not a
dedicated syntax. All keys are replaced in a single left-to-right pass so the
text of an inserted value is never matched against other keys. Where keys
overlap at the same position the longest key wins.
"""

import re
from typing import Mapping
from labelprep.lib.log import LOG


def placeholders_pattern(keys: list[str]) -> re.Pattern[str] | None:
    """Build one alternation matching any of the given literal keys.

    Args:
        keys: Placeholder keys, empty strings already removed

    Returns:
        Compiled pattern, or None if there is nothing to match
    """
    if not keys:
        return None
    ordered: list[str] = sorted(keys, key=len, reverse=True)
    return re.compile("|".join(re.escape(key) for key in ordered))


def placeholders_replace(template: str, placeholders: Mapping[str, str]) -> str:
    """Replace every occurrence of each placeholder key with its value.

    Args:
        template: Text with conditionals already resolved
        placeholders: Mapping of literal key to replacement value

    Returns:
        Substituted text. Keys absent from the template are ignored and
        unknown placeholder text stays as it is.
    """
    keys: list[str] = [key for key in placeholders if key]
    if len(keys) != len(placeholders):
        LOG("Ignoring empty placeholder key")

    pattern: re.Pattern[str] | None = placeholders_pattern(keys)
    if pattern is None:
        return template

    return pattern.sub(lambda match: placeholders[match.group(0)], template)
