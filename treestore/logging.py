"""Log output for treestore.

Library modules log through ``logging.getLogger(__name__)`` and attach no
handlers of their own. Applications that want to see those records can
call ``configure_logging``, which renders them with structlog on stderr,
either as human-readable console lines or as JSON lines.

Only the ``treestore`` logger is touched: the root logger, its handlers
and any global structlog configuration stay as the application left them.
"""

import logging
import sys

import structlog

PACKAGE_LOGGER = "treestore"

# Name given to the handler we attach so reconfiguring replaces it
_HANDLER_NAME = "treestore-structlog"


def configure_logging(verbose: bool = False, log_json: bool = False) -> logging.Handler:
    """Send treestore log records to stderr through structlog's formatter.

    Calling it again replaces the handler installed by the previous call.
    Records stop propagating to ancestor loggers so they are not printed
    twice when the application also logs to stderr.

    Args:
        verbose: Show DEBUG records (cache misses and scans); otherwise
            only WARNING and above
        log_json: Render JSON lines instead of console lines

    Returns:
        The handler attached to the ``treestore`` logger
    """
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.set_name(_HANDLER_NAME)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)

    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
    return handler
