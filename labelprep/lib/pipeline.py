"""
Label preparation pipeline.

Runs a raw template through rendering and then resolution scaling, the order
the printer needs: placeholders may carry geometry, so scaling only ever sees
the fully expanded stream.
"""

from typing import Mapping
from labelprep.lib.scaler import commands_scale
from labelprep.lib.template import template_render
from labelprep.models.dataModel import RenderResult


def label_prepare(
    template: str,
    placeholders: Mapping[str, str],
    source_resolution: int,
    target_resolution: int,
) -> RenderResult:
    """Render a template and scale the result for the target printer.

    Args:
        template: Raw template text
        placeholders: Placeholder context
        source_resolution: Resolution the template was authored for
        target_resolution: Resolution of the receiving device

    Returns:
        RenderResult with the final command stream, or the rendering error
    """
    rendered: RenderResult = template_render(template, placeholders)
    if not rendered.success:
        return rendered

    return RenderResult(
        text=commands_scale(rendered.text, source_resolution, target_resolution)
    )
