"""Application configuration loaded from the environment."""

from .settings import AppSettings, RemoteSettings, Settings, StorageSettings, get_settings

__all__ = ["AppSettings", "RemoteSettings", "Settings", "StorageSettings", "get_settings"]
