"""
Resolution scaling for ZPL command streams.

Rewrites the geometry parameters of a known set of ZPL commands so that a
label authored for one printer resolution prints at the same physical size on
another. The stream is split on the `^` command separator, each command is
looked up in `SCALING_TABLE`, and its leading numeric parameters are
multiplied by the scale factor.

Scaling is best effort and never rejects a stream:
- unknown commands are emitted unchanged
- non-numeric parameters are emitted unchanged
- commands with fewer parameters than the table names are scaled as far as
  they go

Example:
    commands_scale("^FO10,20,ABC", 200, 300) == "^FO15,30,ABC"
"""

import re
from decimal import Decimal, DecimalException, ROUND_HALF_UP
from types import MappingProxyType
from typing import Final, Mapping
from labelprep.lib.log import LOG

COMMAND_SEPARATOR: Final[str] = "^"
PARAMETER_SEPARATOR: Final[str] = ","

# Command code -> number of leading parameters to scale; None scales all
SCALING_TABLE: Final[Mapping[str, int | None]] = MappingProxyType(
    {
        "FO": 2,
        "PW": None,
        "FT": 2,
        "A0": None,
        "A1": None,
        "A2": None,
        "A3": None,
        "A4": None,
        "A5": None,
        "A6": None,
        "A7": None,
        "A8": None,
        "A9": None,
        "A@": None,
        "LL": None,
        "LH": None,
        "GB": None,
        "FB": None,
        "BY": None,
        "BQ": 3,
        "B3": None,
        "BC": None,
        "B7": 2,
    }
)

# Surrounding whitespace is accepted and dropped from the rewritten number
_NUMBER: Final[re.Pattern[str]] = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*$"
)

_HUNDREDTHS: Final[Decimal] = Decimal("0.01")
_UNIT: Final[Decimal] = Decimal(1)


def scaleFactor_calculate(
    source_resolution: int, target_resolution: int
) -> Decimal | None:
    """Compute the target/source ratio rounded to two decimals.

    Zero and negative targets and negative sources give a factor like any
    other resolution. A zero source has no ratio.

    Args:
        source_resolution: Resolution the stream was authored for
        target_resolution: Resolution of the receiving device

    Returns:
        Scale factor, rounded half away from zero, or None if the source
        resolution is zero
    """
    if source_resolution == 0:
        return None
    ratio: Decimal = Decimal(target_resolution) / Decimal(source_resolution)
    return ratio.quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP)


def stream_tokenize(stream: str) -> list[str]:
    """Split a command stream into command tokens.

    The first token is empty when the stream starts with the separator.
    """
    return stream.split(COMMAND_SEPARATOR)


def parameter_scale(parameter: str, scale_factor: Decimal) -> str:
    """Scale a single parameter if it is a number.

    Args:
        parameter: Raw parameter text
        scale_factor: Multiplier for numeric values

    Returns:
        The rounded, integer-formatted product, or the parameter unchanged
        if it is not numeric
    """
    match: re.Match[str] | None = _NUMBER.match(parameter)
    if not match:
        return parameter

    number: str = match.group(1)
    try:
        scaled: Decimal = (Decimal(number) * scale_factor).quantize(
            _UNIT, rounding=ROUND_HALF_UP
        )
    except DecimalException:
        LOG(f"Parameter out of range, left unscaled: {number}")
        return parameter
    return str(int(scaled))


def command_parse(token: str, scale_factor: Decimal) -> str:
    """Parse one command token and scale its parameters.

    Args:
        token: Command token without the leading separator
        scale_factor: Multiplier for numeric parameters

    Returns:
        Command code followed by the comma-joined parameters, or an empty
        string for an empty token
    """
    if not token:
        return ""

    command: str = token[:2]
    parameters: list[str] = token[2:].split(PARAMETER_SEPARATOR)

    if command not in SCALING_TABLE:
        return token

    count: int | None = SCALING_TABLE[command]
    if count is None:
        count = len(parameters)

    for i in range(min(count, len(parameters))):
        parameters[i] = parameter_scale(parameters[i], scale_factor)

    return command + PARAMETER_SEPARATOR.join(parameters)


def commands_scale(stream: str, source_resolution: int, target_resolution: int) -> str:
    """Scale a ZPL command stream from one resolution to another.

    Args:
        stream: Command stream, e.g. "^XA^FO10,10^A0N,30,30^FDHi^FS^XZ"
        source_resolution: Resolution the stream was authored for
        target_resolution: Resolution of the receiving device

    Returns:
        The rewritten stream. Every non-empty command is prefixed with
        exactly one separator. A zero source resolution returns the stream
        unchanged.
    """
    scale_factor: Decimal | None = scaleFactor_calculate(
        source_resolution, target_resolution
    )
    if scale_factor is None:
        LOG(f"Source resolution is 0, stream left unscaled ({len(stream)} chars)")
        return stream

    scaled: list[str] = []

    for token in stream_tokenize(stream):
        parsed: str = command_parse(token, scale_factor)
        if parsed:
            scaled.append(COMMAND_SEPARATOR + parsed)

    LOG(
        f"Scaled {len(scaled)} commands {source_resolution} -> {target_resolution} "
        f"dpi (factor {scale_factor})"
    )
    return "".join(scaled)
