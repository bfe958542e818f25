"""
Engine Options
Process-wide configuration resolved once at startup
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Tuple, Union

from sanicmvc.defaults import (
    DEFAULT_APP_NAME,
    DEFAULT_ENVIRONMENT,
    DEFAULT_LOG_FORMAT,
    DEFAULT_STATIC_FILE_PATH,
    DEFAULT_VIEW_ENGINE,
    DEFAULT_VIEW_PATH,
)
from sanicmvc.support.env_helper import EnvHelper

# Environment variable -> option name
ENV_OPTIONS = {
    'APP_NAME': 'app_name',
    'APP_ENV': 'environment',
    'VIEW_PATH': 'view_path',
    'VIEW_ENGINE': 'view_engine',
    'STATIC_FILE_PATH': 'static_file_path',
    'DEFAULT_PAGE': 'default_page',
    'LOG_FORMAT': 'log_format',
    'LOG_FILE': 'log_file',
}


@dataclass(frozen=True)
class EngineOptions:
    """
    Options recognised by SanicEngine.init()

    Usage:
        options = EngineOptions(
            base_path=Path(__file__).parent,
            default_page='/home/index',
            middlewares=('auth', RequestIdMiddleware),
            error_handler=render_error,
        )

    middlewares take the same entries as @use_middleware. error_handler
    receives an HttpError and may be sync or async.
    """
    app_name: str = DEFAULT_APP_NAME
    base_path: Union[str, Path] = '.'
    view_path: str = DEFAULT_VIEW_PATH
    view_engine: str = DEFAULT_VIEW_ENGINE
    static_file_path: Optional[str] = DEFAULT_STATIC_FILE_PATH
    show_console_log: bool = False
    middlewares: Tuple[Any, ...] = field(default_factory=tuple)
    default_page: Optional[str] = None
    error_handler: Optional[Callable] = None
    environment: str = DEFAULT_ENVIRONMENT
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'middlewares', tuple(self.middlewares or ()))

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == 'development'

    def resolve_path(self, path: Union[str, Path]) -> Path:
        """Resolve a configured path against base_path"""
        path = Path(path)
        if path.is_absolute():
            return path
        return (Path(self.base_path) / path).resolve()

    @classmethod
    def from_env(cls, env_file: Union[str, Path, None] = None, **overrides: Any) -> 'EngineOptions':
        """
        Build options from environment variables (and a .env file)

        Explicit keyword overrides win over the environment.

        Example:
            options = EngineOptions.from_env(base_path=ROOT, error_handler=on_error)
        """
        EnvHelper.load(env_file)

        values = {
            option: EnvHelper.get(variable)
            for variable, option in ENV_OPTIONS.items()
            if EnvHelper.has(variable)
        }
        if EnvHelper.has('SHOW_CONSOLE_LOG'):
            values['show_console_log'] = EnvHelper.get_bool('SHOW_CONSOLE_LOG')

        values.update(overrides)
        return cls(**values)
