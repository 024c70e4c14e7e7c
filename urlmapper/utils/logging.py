"""JSON logging for the Lambda handlers and the sweeper process

`initialize_logging()` is called once per process: by every Lambda package's
`__init__.py` and by the `urlmapper-sweeper` entry point. Afterwards modules
log through `logging.getLogger(__name__)` and pass structured fields with
`extra=`, e.g. `extra={'event': SHORT_CODE_NOT_FOUND, 'client': ...}`.

One JSON document is written per record:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "urlmapper.lambdas.redirect_url.app",
    "message": "Short code not found. Responding with 404.",
    "event": "SHORT_CODE_NOT_FOUND",
    "client": "3f1c9a0e"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlmapper.constants import ENV


# Attributes of a bare LogRecord. Anything else on a record came from `extra=`
RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}

# boto3/botocore log every AppConfig request at INFO
QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        document = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        document.update((key, value) for key, value in vars(record).items() if key not in RECORD_ATTRIBUTES)

        if record.exc_info:
            document['exception'] = self.formatException(record.exc_info)

        # datetimes and other extras are rendered with str()
        return json.dumps(document, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        moment = datetime.fromtimestamp(record.created, tz=UTC)
        return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def logging_config(level: str = 'INFO') -> dict:
    """dictConfig schema: JSON to stdout at `level`, QUIET_LOGGERS at WARNING."""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            }
        },
        'loggers': {name: {'level': 'WARNING'} for name in QUIET_LOGGERS},
        'root': {'level': level, 'handlers': ['stdout']},
    }


def initialize_logging() -> None:
    logging.config.dictConfig(logging_config(os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()))
