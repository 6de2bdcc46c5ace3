"""
Placeholder context loading.

Builds the placeholder context for a print run from a JSON object file and
`KEY=VALUE` pairs given on the command line. Pairs override file entries.
Non-string JSON values are kept as their JSON text, so `{"QTY": 12}` behaves
like `{"QTY": "12"}` and `null` becomes `"null"`.
"""

import json
from pathlib import Path
from typing import Any
from labelprep.lib.log import LOG


def placeholders_fromFile(path: Path, encoding: str = "utf-8") -> dict[str, str]:
    """Read a placeholder context from a JSON object file.

    Args:
        path: JSON file containing a single object
        encoding: Text encoding of the file

    Returns:
        Mapping of placeholder key to value

    Raises:
        ValueError: If the file is not valid JSON or not an object
    """
    try:
        data: Any = json.loads(path.read_text(encoding=encoding))
    except json.JSONDecodeError as e:
        raise ValueError(f"Placeholder file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Placeholder file {path} must contain a JSON object")

    LOG(f"Loaded {len(data)} placeholders from {path}")
    return {
        str(key): (
            value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)
        )
        for key, value in data.items()
    }


def placeholders_fromPairs(pairs: list[str]) -> dict[str, str]:
    """Parse `KEY=VALUE` pairs into a placeholder context.

    Only the first `=` separates key and value, so values may contain `=`.

    Raises:
        ValueError: If a pair has no `=` or an empty key
    """
    placeholders: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid placeholder '{pair}', expected KEY=VALUE")
        placeholders[key] = value
    return placeholders


def placeholders_load(
    file: Path | None = None, pairs: list[str] | None = None, encoding: str = "utf-8"
) -> dict[str, str]:
    """Merge file and command line placeholders into one context.

    Args:
        file: Optional JSON object file
        pairs: Optional `KEY=VALUE` strings, applied after the file
        encoding: Text encoding of the file

    Returns:
        The merged placeholder context
    """
    placeholders: dict[str, str] = {}
    if file is not None:
        placeholders.update(placeholders_fromFile(file, encoding))
    if pairs:
        placeholders.update(placeholders_fromPairs(pairs))
    return placeholders
