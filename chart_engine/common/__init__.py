"""
Shared utilities for the chart engine.
"""

from .logging import log_transform_result, setup_logging

__all__ = ["setup_logging", "log_transform_result"]
