"""Core configuration, startup checks and logging."""

from __future__ import annotations

from note_synth.core.config import AppSettings
from note_synth.core.logging_config import setup_logging
from note_synth.core.startup_checks import validate_settings

__all__ = ["AppSettings", "setup_logging", "validate_settings"]
