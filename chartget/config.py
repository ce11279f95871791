"""Environment-driven defaults for the command-line interface."""

from __future__ import annotations

import os

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Configurable registry directory for the local client; default to a
# project-level .chartget_registry
REGISTRY_DIR = os.environ.get("CHARTGET_REGISTRY_DIR", ".chartget_registry")

LOG_LEVEL = os.environ.get("CHARTGET_LOG_LEVEL", "WARNING").upper()
if LOG_LEVEL not in LOG_LEVELS:
    LOG_LEVEL = "WARNING"
