"""
Logging configuration for the Satellite Tracking server.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict

from satellite_tracking.config import settings


class CorrelationFilter(logging.Filter):
    """
    Logging filter to add correlation ID to log records.
    """

    def filter(self, record):
        """Add correlation ID to log record if available."""
        if not hasattr(record, 'correlation_id'):
            record.correlation_id = 'N/A'
        return True


def get_logging_config() -> Dict[str, Any]:
    """
    Get logging configuration based on environment settings.

    Returns:
        Dict containing logging configuration
    """
    log_level = settings.log_level.upper()
    app_handlers = ['console']

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {
            'correlation_filter': {
                '()': CorrelationFilter,
            },
        },
        'formatters': {
            'standard': {
                'format': '[{asctime}] {levelname} {name} [{correlation_id}] {message}',
                'style': '{',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'detailed': {
                'format': '[{asctime}] {levelname} {name} [{correlation_id}] {pathname}:{lineno} {message}',
                'style': '{',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': log_level,
                'formatter': 'standard',
                'filters': ['correlation_filter'],
                'stream': sys.stderr
            }
        },
        'loggers': {
            'satellite_tracking': {
                'level': log_level,
                'handlers': app_handlers,
                'propagate': False
            },
            'uvicorn': {
                'level': 'INFO',
                'handlers': ['console'],
                'propagate': False
            },
            'uvicorn.access': {
                'level': 'INFO',
                'handlers': ['console'],
                'propagate': False
            },
            'httpx': {
                'level': 'WARNING',
                'handlers': ['console'],
                'propagate': False
            }
        },
        'root': {
            'level': log_level,
            'handlers': ['console']
        }
    }

    if settings.log_file:
        # Create the log directory if it doesn't exist
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)

        config['handlers']['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': log_level,
            'formatter': 'detailed',
            'filters': ['correlation_filter'],
            'filename': settings.log_file,
            'maxBytes': 10485760,  # 10MB
            'backupCount': 5,
            'encoding': 'utf8'
        }
        app_handlers.append('file')

    return config


def setup_logging():
    """
    Set up logging configuration for the application.
    """
    config = get_logging_config()
    logging.config.dictConfig(config)

    logger = logging.getLogger('satellite_tracking')
    logger.info("Logging configuration initialized")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
