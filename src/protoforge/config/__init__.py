"""Configuration module using Pydantic Settings.

Usage:
    from protoforge.config import ManipulatorSettings

    settings = ManipulatorSettings(validate_elements=False)
"""

from protoforge.config.settings import ManipulatorSettings

__all__ = [
    "ManipulatorSettings",
]
