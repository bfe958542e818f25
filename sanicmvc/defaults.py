"""
Framework Default Values
Hardcoded values live here and are picked up by EngineOptions
"""

# ============================================================================
# NETWORK DEFAULTS
# ============================================================================

# Application Server
DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 8000

# ============================================================================
# APPLICATION DEFAULTS
# ============================================================================

DEFAULT_APP_NAME = 'sanicmvc'
DEFAULT_ENVIRONMENT = 'development'

# ============================================================================
# VIEW DEFAULTS
# ============================================================================

DEFAULT_VIEW_PATH = 'views'
DEFAULT_VIEW_ENGINE = 'html'  # template file extension
DEFAULT_ERROR_VIEW = 'error'

# ============================================================================
# STATIC FILE DEFAULTS
# ============================================================================

DEFAULT_STATIC_FILE_PATH = 'public'

# ============================================================================
# ERROR DEFAULTS
# ============================================================================

DEFAULT_ERROR_STATUS = 500
DEFAULT_ERROR_MESSAGE = 'An error occurred while processing your request'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_FORMAT = 'text'
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
