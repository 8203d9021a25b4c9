"""
Configuration for the chart engine.
"""

from .options import TransformOptions
from .settings import EngineSettings, get_settings

__all__ = ["EngineSettings", "TransformOptions", "get_settings"]
