import logging
from PySide6.QtCore import QObject, Signal


class QtLogHandler(logging.Handler, QObject):
    """A logging handler that emits a Qt signal for each log record.

    Inherits from both `logging.Handler` and `QObject` so log messages can be
    routed to the main window's log panel through a signal, which is safe to
    emit from the page fetch thread.

    Attributes:
        log_message_received (Signal): Emits the formatted message string.
    """

    log_message_received = Signal(str)

    def __init__(self, parent=None):
        """Initializes the QtLogHandler."""
        QObject.__init__(self, parent)
        logging.Handler.__init__(self)

    def emit(self, record):
        """Formats a log record and emits it via `log_message_received`.

        Args:
            record (logging.LogRecord): The log record to be processed.
        """
        msg = self.format(record)
        self.log_message_received.emit(msg)
