import logging.config
import sys

from yarl import URL

from connective.graph import Graph

graph: Graph = {'q': (17, ['s']),
                'r': (18, ['s']),
                's': (19, ['q', 'r']),
                't': (20, ['w', 'x']),
                'u': (21, ['y', 'z']),
                'v': (22, ['x']),
                'w': (23, ['t', 'x']),
                'x': (24, ['t', 'v', 'w', 'y']),
                'y': (25, ['u', 'x', 'z']),
                'z': (26, ['y'])}


class FilterRecordsWithGreaterLevel:
    def __init__(self, max_level: int) -> None:
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def to_logger(url: URL,
              *,
              level: int = logging.WARNING,
              version: int = 1) -> logging.Logger:
    name = url.authority
    console_formatter = {'format': '[%(levelname)-8s %(name)s] %(msg)s'}
    formatters = {'console': console_formatter}
    stderr_handler_config = {
        'class': 'logging.StreamHandler',
        'level': logging.WARNING,
        'formatter': 'console',
        'stream': sys.stderr,
    }
    stdout_handler_config = {
        'class': 'logging.StreamHandler',
        'level': logging.DEBUG,
        'formatter': 'console',
        'stream': sys.stdout,
        'filters': ['stdout']
    }
    handlers = {'stdout': stdout_handler_config,
                'stderr': stderr_handler_config}
    loggers = {name: {'level': level,
                      'handlers': ('stderr', 'stdout'),
                      'propagate': False}}
    config = {'disable_existing_loggers': False,
              'formatters': formatters,
              'handlers': handlers,
              'loggers': loggers,
              'version': version,
              'filters': {
                  'stdout': {
                      '()': FilterRecordsWithGreaterLevel,
                      'max_level': logging.WARNING,
                  }
              }}
    logging.config.dictConfig(config)
    return logging.getLogger(name)
