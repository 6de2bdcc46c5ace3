"""
dataModel.py

This module defines the data models used throughout labelprep.
The models leverage Pydantic for validation and type safety.

Features:
- Enum classes for template and printer error kinds.
- Result models carrying either a payload or a named error kind, so callers
  branch on the outcome instead of catching exceptions.

Usage:
Import these models to structure results passed between the template,
scaling and printer layers.
"""

from enum import Enum
from pydantic import BaseModel, Field, NonNegativeInt


class TemplateError(Enum):
    """
    Enum for template rendering failures.
    """

    MISSING_ENDIF = "MissingEndif"
    MALFORMED_CONDITION = "MalformedCondition"


class PrintError(Enum):
    """
    Enum for printer transport failures.
    """

    HOST_NOT_FOUND = "HostNotFound"
    UNREACHABLE = "Unreachable"
    TIMEOUT = "Timeout"
    WRITE_FAILED = "WriteFailed"


class RenderResult(BaseModel):
    """Result of a template rendering or label preparation.

    Attributes:
        text: The rendered (and possibly scaled) command stream
        error: Error kind if rendering failed
        message: Human readable detail about the failure
        success: Whether rendering succeeded
    """

    text: str
    error: TemplateError | None = None
    message: str | None = None
    success: bool = True


class PrintResult(BaseModel):
    """Result of dispatching a command stream to a printer.

    Attributes:
        success: Whether every copy was written
        error: Error kind if dispatch failed
        message: Human readable detail about the failure
        copies_sent: Number of copies fully written before returning
    """

    success: bool
    error: PrintError | None = None
    message: str | None = None
    copies_sent: NonNegativeInt = Field(
        default=0, description="Copies written to the printer."
    )
