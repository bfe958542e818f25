"""
EnvHelper - Read environment variables with .env file support
"""

import os
import threading
from pathlib import Path
from typing import Any, Optional, Union
from dotenv import load_dotenv


class EnvHelper:
    """
    Environment variable reader backed by python-dotenv

    Usage:
        EnvHelper.load('/srv/app/.env')
        view_path = EnvHelper.get('VIEW_PATH', 'views')
        if EnvHelper.get_bool('SHOW_CONSOLE_LOG'):
            ...
    """

    _lock = threading.Lock()
    _env_path: Optional[Path] = None
    _loaded: bool = False

    @classmethod
    def load(cls, env_path: Union[str, Path, None] = None, override: bool = False) -> bool:
        """
        Load .env file into environment

        Args:
            env_path: Path to .env file (defaults to .env in the working directory)
            override: Whether to override existing environment variables

        Returns:
            bool: True if a file was found and loaded
        """
        with cls._lock:
            cls._env_path = Path(env_path) if env_path else Path.cwd() / '.env'
            cls._loaded = True

            if not cls._env_path.is_file():
                return False

            return load_dotenv(cls._env_path, override=override)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Optional[str]:
        """
        Get environment variable value

        Example:
            app_name = EnvHelper.get('APP_NAME', 'sanicmvc')
        """
        if not cls._loaded:
            cls.load()

        return os.getenv(key, default)

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        """
        Get boolean environment variable

        Example:
            show_log = EnvHelper.get_bool('SHOW_CONSOLE_LOG', False)
        """
        value = cls.get(key)
        if value is None:
            return default

        return value.lower() in ('true', '1', 'yes', 'on')

    @classmethod
    def has(cls, key: str) -> bool:
        if not cls._loaded:
            cls.load()

        return key in os.environ

    @classmethod
    def path(cls) -> Optional[Path]:
        """Path of the last loaded .env file"""
        return cls._env_path
