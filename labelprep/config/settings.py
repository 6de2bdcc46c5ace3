"""
settings.py

This module provides application configuration management for labelprep.

Features:
- Centralized application configuration using Pydantic settings
- Defaults for resolution scaling and printer dispatch
- Constants for application-wide use

Usage:
Import appsettings for application configuration values.
"""

from typing import Final
from pydantic import PositiveInt, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

# Raw print port spoken by Zebra and compatible network printers
PRINTER_PORT: Final[int] = 9100


class App(BaseSettings):
    """
    Application settings model.

    Settings can be overridden through environment variables with LBP_ prefix.

    Attributes:
        beQuiet: Suppress detailed logging output
        noComplain: Do not print per-file progress to the console
        sourceResolution: DPI the templates were authored for
        targetResolution: DPI of the device the labels are printed on
        printerPort: TCP port of the raw print service
        connectTimeout: Seconds to wait for the printer connection
        encoding: Text encoding used for template files and printer output
    """

    beQuiet: bool = False
    noComplain: bool = False

    sourceResolution: PositiveInt = 203
    targetResolution: PositiveInt = 203

    printerPort: PositiveInt = PRINTER_PORT
    connectTimeout: PositiveFloat = 5.0

    encoding: str = "utf-8"

    model_config = SettingsConfigDict(
        env_prefix="LBP_",  # Environment variables with this prefix override settings
        case_sensitive=False,  # Allow case-insensitive environment variables
        extra="allow",  # Allow additional attributes not defined in the model
    )


# Create the application settings instance
appsettings: Final[App] = App()
