"""Configuration module."""

from .settings import OracleSettings, get_settings

__all__ = ["OracleSettings", "get_settings"]
