"""
Configuration management for txshield.

Loads settings from environment variables and an optional .env file.
Detection thresholds are exposed as an explicit DetectionConfig value
passed into each policy call; nothing reads ambient state at detection time.
"""

from txshield.config.settings import DetectionConfig, Settings, get_settings  # noqa: F401

__all__ = ["DetectionConfig", "Settings", "get_settings"]
