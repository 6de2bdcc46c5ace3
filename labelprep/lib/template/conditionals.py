"""
Conditional block resolution for label templates.

A conditional block has the form::

    {{IF name}}...body...{{ENDIF}}

The body is kept when `name` is a key of the placeholder context (its value
is irrelevant) and dropped otherwise, together with both markers. Blocks are
resolved left to right and are not nested: a kept body is copied through
verbatim and never scanned again.

Example:
    result = conditionals_parse("{{IF LOT}}^FDLot^FS{{ENDIF}}^XZ", {"LOT": "7"})
    result.text == "^FDLot^FS^XZ"
"""

from typing import Final, Mapping
from labelprep.lib.log import LOG
from labelprep.models.dataModel import RenderResult, TemplateError

IF_MARKER: Final[str] = "{{IF "
ENDIF_MARKER: Final[str] = "{{ENDIF}}"
HEADER_CLOSE: Final[str] = "}}"


def conditionals_parse(template: str, placeholders: Mapping[str, str]) -> RenderResult:
    """Resolve every conditional block in a template.

    Args:
        template: Raw template text
        placeholders: Placeholder context; only its keys are consulted

    Returns:
        RenderResult with the resolved text, or the first error found:
            - MISSING_ENDIF if a block never closes
            - MALFORMED_CONDITION if the `{{IF` header has no `}}` before
              the block's `{{ENDIF}}`
    """
    pieces: list[str] = []
    cursor: int = 0

    while (start := template.find(IF_MARKER, cursor)) != -1:
        end: int = template.find(ENDIF_MARKER, start)
        if end == -1:
            msg: str = f"Invalid template: missing {ENDIF_MARKER} for block at {start}"
            LOG(msg)
            return RenderResult(
                text="", error=TemplateError.MISSING_ENDIF, message=msg, success=False
            )

        header_end: int = template.find(HEADER_CLOSE, start)
        if header_end == -1 or header_end > end:
            msg = f"Invalid template: malformed {{{{IF}}}} condition at {start}"
            LOG(msg)
            return RenderResult(
                text="",
                error=TemplateError.MALFORMED_CONDITION,
                message=msg,
                success=False,
            )

        condition: str = template[start + len(IF_MARKER) : header_end].strip()
        pieces.append(template[cursor:start])
        if condition in placeholders:
            pieces.append(template[header_end + len(HEADER_CLOSE) : end])

        cursor = end + len(ENDIF_MARKER)

    pieces.append(template[cursor:])
    return RenderResult(text="".join(pieces))
