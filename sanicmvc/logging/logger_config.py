"""
Logging Configuration
Provides structured logging with security features
"""
import logging
import logging.handlers
import json
import re
from pathlib import Path
from typing import Dict, List, Optional
from datetime import datetime


class SensitiveDataFilter(logging.Filter):
    """
    Filter to redact sensitive data from logs
    Request URLs and headers end up in access and error logs, so tokens
    and passwords passed there must not reach the log file
    """

    SENSITIVE_PATTERNS = {
        # Password fields
        'password': r'("password"\s*:\s*)"[^"]*"',

        # API keys and tokens
        'api_key': r'("api_key"\s*:\s*)"[^"]*"',
        'token': r'("token"\s*:\s*)"[^"]*"',
        'access_token': r'("access_token"\s*:\s*)"[^"]*"',
        'secret': r'("secret"\s*:\s*)"[^"]*"',

        # Credentials in query strings
        'query_secret': r'([?&](?:password|token|access_token|api_key)=)[^&\s]*',

        # Authorization headers
        'auth_header': r'(Authorization:\s+Bearer\s+)[A-Za-z0-9\-_=]+\.[A-Za-z0-9\-_=]+\.?[A-Za-z0-9\-_.+/=]*',
    }

    JSON_FIELDS = ('password', 'api_key', 'token', 'access_token', 'secret')

    def __init__(self, additional_patterns: Optional[Dict[str, str]] = None):
        """
        Initialize sensitive data filter
        Args:
            additional_patterns: Additional regex patterns to filter (name: pattern)
                                 whose first group is kept
        """
        super().__init__()
        self.patterns = self.SENSITIVE_PATTERNS.copy()
        if additional_patterns:
            self.patterns.update(additional_patterns)

        self.compiled_patterns = {
            name: re.compile(pattern, re.IGNORECASE)
            for name, pattern in self.patterns.items()
        }

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Filter log record to redact sensitive data
        Returns:
            True (always pass the record, but with redacted content)
        """
        if isinstance(record.msg, str):
            record.msg = self._redact_sensitive_data(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self._redact_sensitive_data(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            elif isinstance(record.args, tuple):
                record.args = tuple(
                    self._redact_sensitive_data(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        return True

    def _redact_sensitive_data(self, text: str) -> str:
        redacted = text

        for name, pattern in self.compiled_patterns.items():
            if name in self.JSON_FIELDS:
                redacted = pattern.sub(r'\1"[REDACTED]"', redacted)
            else:
                redacted = pattern.sub(r'\1[REDACTED]', redacted)

        return redacted


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging

    Outputs logs in JSON format for easy parsing and analysis
    """

    RESERVED_ATTRS = frozenset([
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'thread', 'threadName', 'exc_info', 'exc_text', 'stack_info',
        'taskName', 'message',
    ])

    def __init__(self, include_fields: Optional[List[str]] = None):
        """
        Args:
            include_fields: Additional fields to include in JSON output
        """
        super().__init__()
        self.include_fields = include_fields or []

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data['stack'] = record.stack_info

        for field in self.include_fields:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in self.RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class LoggerConfig:
    """
    Centralized logging configuration
    """
    TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @staticmethod
    def setup_logger(
        name: str,
        format_type: str = 'text',
        log_file: Optional[Path] = None,
        environment: str = 'development',
        console: bool = False,
        max_bytes: int = None,
        backup_count: int = None,
        filter_sensitive: bool = True,
        additional_sensitive_patterns: Optional[Dict[str, str]] = None,
    ) -> logging.Logger:
        """
        Setup a logger with rotation and optional sensitive data filtering

        Args:
            name: Logger name
            format_type: Format type ('json' or 'text')
            log_file: Rotating log file, no file handler when None
            environment: Environment name, decides the level
            console: Also log to stderr
            max_bytes: Max bytes before rotation (default: 10MB)
            backup_count: Number of backup files to keep
            filter_sensitive: Enable sensitive data filtering
            additional_sensitive_patterns: Additional patterns to filter

        Returns:
            Configured logger

        Example:
            logger = LoggerConfig.setup_logger(
                'sanicmvc',
                format_type='json',
                log_file=Path('storage/logs/app.log'),
                environment='production',
            )
        """
        from sanicmvc.defaults import DEFAULT_LOG_MAX_BYTES, DEFAULT_LOG_BACKUP_COUNT
        if max_bytes is None:
            max_bytes = DEFAULT_LOG_MAX_BYTES
        if backup_count is None:
            backup_count = DEFAULT_LOG_BACKUP_COUNT

        logger = logging.getLogger(name)
        logger.setLevel(LoggerConfig.get_level_by_environment(environment))

        # Clear existing handlers
        logger.handlers.clear()

        if format_type == 'json':
            formatter = JSONFormatter()
        else:
            formatter = logging.Formatter(LoggerConfig.TEXT_FORMAT)

        sensitive_filter = SensitiveDataFilter(additional_sensitive_patterns) if filter_sensitive else None

        handlers: List[logging.Handler] = []
        if log_file is not None:
            log_file = Path(log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            ))

        if console:
            handlers.append(logging.StreamHandler())

        for handler in handlers:
            handler.setFormatter(formatter)
            if sensitive_filter is not None:
                handler.addFilter(sensitive_filter)
            logger.addHandler(handler)

        # Own handlers: don't duplicate records on the root logger
        logger.propagate = not handlers

        return logger

    @staticmethod
    def get_level_by_environment(environment: str) -> int:
        """
        Get logging level based on environment

        Args:
            environment: Environment name ('production', 'development', 'testing')

        Returns:
            Logging level
        """
        levels = {
            'production': logging.WARNING,
            'staging': logging.INFO,
            'development': logging.DEBUG,
            'testing': logging.ERROR,
        }
        return levels.get(environment.lower(), logging.INFO)
