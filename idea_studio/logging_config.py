"""
JSON structured logging configuration using python-json-logger
"""
import logging
import logging.config
import sys
from typing import Dict, Any, Optional

import pythonjsonlogger.jsonlogger

from idea_studio.config import Settings, get_settings


SERVICE_NAME = "idea-studio"

logger = logging.getLogger("idea_studio")


class CustomJsonFormatter(pythonjsonlogger.jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = SERVICE_NAME

        if hasattr(record, 'request_id'):
            log_record['request_id'] = record.request_id


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """Build the dictConfig for the given settings"""
    level = settings.log_level.upper()
    formatter = 'json' if settings.environment == 'production' else 'standard'

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(asctime)s %(name)s %(levelname)s %(message)s'
            },
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': level,
                'formatter': formatter,
                'stream': sys.stdout
            }
        },
        'loggers': {
            'idea_studio': {
                'level': level,
                'handlers': ['console'],
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
            }
        },
        'root': {
            'level': level,
            'handlers': ['console']
        }
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup JSON structured logging"""
    settings = settings or get_settings()

    logging.config.dictConfig(build_logging_config(settings))

    logger.info(
        "Logging configured",
        extra={
            'log_level': settings.log_level,
            'environment': settings.environment
        }
    )
