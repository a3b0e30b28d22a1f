"""Logging utilities for sftpadmin modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers
    
    Args:
        name: Logger name (typically __name__)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger


def truncate_body(body: bytes, limit: int = 200) -> str:
    """Renders a response body for log lines."""
    text = body.decode('utf-8', errors='replace') if body else ''
    if len(text) > limit:
        return text[:limit - 3] + '...'
    return text


PACKAGE_LOGGERS = (
    'sftpadmin',
    'sftpadmin.client',
    'sftpadmin.core.api.request.request_handler',
    'sftpadmin.core.checker.user_checker',
)


def setup_logging(level=logging.INFO):
    """
    Configure logging for sftpadmin modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    for logger_name in PACKAGE_LOGGERS:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True
