"""Runtime settings read from the environment.

    CODEGAUGE_LANGUAGE   language assumed for text with no file extension
                         ("python" or "java", default "python")
    CODEGAUGE_LOG_LEVEL  log level for the CLI handler (default "WARNING")

CLI flags override both.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    language: str = "python"
    log_level: str = "WARNING"


def load_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    return Settings(
        language=os.environ.get("CODEGAUGE_LANGUAGE", "python").strip().lower(),
        log_level=os.environ.get("CODEGAUGE_LOG_LEVEL", "WARNING").strip().upper(),
    )
