"""
Template package for labelprep.

Expands `{{IF name}}...{{ENDIF}}` blocks and literal placeholders into a
final command stream.
"""

from .base import template_render
from .conditionals import conditionals_parse
from .placeholders import placeholders_replace

__all__ = ["template_render", "conditionals_parse", "placeholders_replace"]
