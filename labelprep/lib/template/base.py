"""
Template rendering entry point.

Rendering runs in two fixed steps:
1. Resolve `{{IF name}}...{{ENDIF}}` blocks against the placeholder keys
2. Substitute placeholder keys with their values

Substitution only sees the text that survived step 1, so placeholders inside
a dropped block are never expanded.

Example:
    result = template_render("^FO10,10^FD{{IF NAME}}NAME{{ENDIF}}^FS", {"NAME": "Ada"})
    result.text == "^FO10,10^FDAda^FS"
"""

from typing import Mapping
from labelprep.lib.log import LOG
from labelprep.lib.template.conditionals import conditionals_parse
from labelprep.lib.template.placeholders import placeholders_replace
from labelprep.models.dataModel import RenderResult


def template_render(template: str, placeholders: Mapping[str, str]) -> RenderResult:
    """Render a template with conditionals and placeholder substitution.

    Args:
        template: Raw template text
        placeholders: Placeholder context used for both steps

    Returns:
        RenderResult containing:
            - text: Rendered command stream if successful
            - error: TemplateError kind if a conditional is invalid
            - success: Whether rendering succeeded
    """
    if not template:
        return RenderResult(text="")

    parsed: RenderResult = conditionals_parse(template, placeholders)
    if not parsed.success:
        LOG(f"Template rendering stopped at conditionals: {parsed.message}")
        return parsed

    return RenderResult(text=placeholders_replace(parsed.text, placeholders))
