"""Configuration defaults for newickcore."""

import os


class Config:
    """Package-wide defaults, overridable from the environment."""

    # Logging
    LOG_LEVEL = os.environ.get("NEWICKCORE_LOG_LEVEL", "WARNING")

    # Formatting
    FORMAT_LENGTHS = os.environ.get("NEWICKCORE_FORMAT_LENGTHS", "1") == "1"
