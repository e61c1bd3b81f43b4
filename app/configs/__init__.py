from app.configs.logger import file_logger
from app.configs.settings import LimiterConfig, settings

__all__ = [
    "LimiterConfig",
    "file_logger",
    "settings",
]
