from .config import AppConfig, ConfigStore

__all__ = ["AppConfig", "ConfigStore"]
