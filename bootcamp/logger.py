"""
Request Logging
One 'Processed request' record per HTTP request, plus the default logger factory.
"""

import json
import logging
import sys
from typing import Optional

from flask import Flask, g, request
from werkzeug.exceptions import HTTPException

from bootcamp.config import LOG_FORMAT


class JsonFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            'time': self.formatTime(record),
            'level': record.levelname.lower(),
            'name': record.name,
            'msg': record.getMessage(),
        }
        data.update(getattr(record, 'request', None) or {})
        if record.exc_info:
            data['err'] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def create_default_logger(name: str = 'bootcamp', log_format: Optional[str] = None) -> logging.Logger:
    """
    Get the application logger.

    With LOG_FORMAT=json a stdout handler emitting JSON lines is attached;
    otherwise records propagate to the root handlers set up in main.py.
    """
    log_format = (log_format or LOG_FORMAT).lower()
    logger = logging.getLogger(name)

    if log_format == 'json' and not any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.propagate = False
        logger.setLevel(logging.INFO)

    return logger


def init_request_logging(app: Flask, logger: Optional[logging.Logger] = None) -> logging.Logger:
    """
    Register request logging hooks on the app.

    Handlers can reach the logger through flask.g.logger.
    """
    logger = logger or create_default_logger()

    @app.before_request
    def _attach_logger():
        g.logger = logger
        g.request_logged = False

    @app.after_request
    def _log_response(response):
        _log_processed(logger, response.status_code)
        return response

    @app.teardown_request
    def _log_failure(error=None):
        if error is None:
            return
        logger.error(f"Request failed: {error}", exc_info=error)
        # after_request is skipped when the exception propagates
        if not g.get('request_logged'):
            status = error.code if isinstance(error, HTTPException) else 500
            _log_processed(logger, status)

    return logger


def _log_processed(logger: logging.Logger, status: int):
    data = {
        'status': status,
        'method': request.method,
        'url': request.full_path.rstrip('?'),
        'query': request.args.to_dict(),
        'user_id': g.get('user_id'),
    }
    g.request_logged = True
    logger.info(
        f"Processed request {data['method']} {data['url']} {status}",
        extra={'request': data}
    )
