"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for
manipulators.

Usage:
    from protoforge.config import ManipulatorSettings

    # Load from environment variables (PROTOFORGE_*)
    settings = ManipulatorSettings()

    # Or override with explicit values
    settings = ManipulatorSettings(warn_on_overwrite=True)
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ManipulatorSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for record manipulators.

    Attributes:
        validate_elements: Shape-check sub-list elements (ingredients, results,
            science packs, effects) before they are added or used as replacements.
        warn_on_overwrite: Emit a StaleCommitWarning when commit() replaces a store
            entry that changed after the manipulator loaded it.

    Environment Variables:
        PROTOFORGE_VALIDATE_ELEMENTS
        PROTOFORGE_WARN_ON_OVERWRITE
    """

    model_config = SettingsConfigDict(
        env_prefix="PROTOFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    validate_elements: bool = True
    warn_on_overwrite: bool = False
