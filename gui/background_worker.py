"""Base class for background workers with proper lifecycle management.

Key Features:
    - QThread lifecycle management
    - Signal disconnection before cleanup
    - Timeout handling for wait()
    - Cancellation support
    - Generic data passing via signals

Cleanup order:
    1. Check for an existing worker before creating a new one
    2. Disconnect ALL signals before cleanup
    3. quit() + wait(timeout) + deleteLater()
    4. Terminate if the timeout is exceeded
"""

from PySide6.QtCore import QThread, Signal
import logging
import warnings

from gallery_tool.page_provider import ProviderFailure

logger = logging.getLogger(__name__)


class BackgroundWorker(QThread):
    """Reusable base class for background I/O operations.

    Signals:
        finished_with_data(object): Emitted when work completes with result
    """

    finished_with_data = Signal(object)  # Generic data result

    def __init__(self, parent=None):
        """Initialize background worker.

        Args:
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._is_cancelled = False

    @property
    def is_cancelled(self) -> bool:
        return self._is_cancelled

    def cancel(self):
        """Request cancellation of work.

        Worker should check _is_cancelled and exit without emitting results
        once it's True.
        """
        self._is_cancelled = True
        logger.debug(f"Cancellation requested for {self.__class__.__name__}")

    def _result_signals(self):
        return (self.finished_with_data,)

    def disconnect_signals(self):
        """Disconnect every result signal of this worker."""
        # PySide6 may emit RuntimeWarning when disconnecting unconnected signals
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            for signal in self._result_signals():
                try:
                    signal.disconnect()
                except (RuntimeError, TypeError):
                    pass

    def cleanup(self):
        """Disconnect, stop and schedule the worker for deletion.

        This method MUST be called in the owning widget's closeEvent() for
        every worker it still holds.
        """
        logger.debug(f"Cleaning up worker: {self.__class__.__name__}")

        self.disconnect_signals()

        if self.isRunning():
            logger.debug(f"Worker running, initiating shutdown: {self.__class__.__name__}")
            self.quit()

            if not self.wait(2000):  # 2 second timeout
                logger.warning(
                    f"Worker didn't finish in time, forcing termination: "
                    f"{self.__class__.__name__}"
                )
                self.terminate()
                self.wait(1000)
        else:
            logger.debug(f"Worker not running, skipping shutdown sequence: {self.__class__.__name__}")

        self.deleteLater()

        logger.debug(f"Worker cleanup complete: {self.__class__.__name__}")

    def run(self):
        """Override this method in subclass to perform work.

        Must check self._is_cancelled and exit quietly when set.
        Emit finished_with_data on success; subclasses declare their own
        failure signal and list it in _result_signals().
        """
        raise NotImplementedError("Subclass must implement run() method")


class PageFetchWorker(BackgroundWorker):
    """Fetches one page from a page provider off the GUI thread.

    Signals:
        finished_with_data(object): The fetched Page
        page_failed(int, str): Page number and error message when the
            provider fails

    Attributes:
        provider: Object with ``fetch_page(page_number, page_size)``
        page_number: Page requested by this worker
        page_size: Session page size
    """

    page_failed = Signal(int, str)

    def __init__(self, provider, page_number: int, page_size: int, parent=None):
        super().__init__(parent)
        self.provider = provider
        self.page_number = page_number
        self.page_size = page_size

    def _result_signals(self):
        return super()._result_signals() + (self.page_failed,)

    def _fail(self, message: str):
        if not self._is_cancelled:
            self.page_failed.emit(self.page_number, message)

    def run(self):
        if self._is_cancelled:
            return
        try:
            page = self.provider.fetch_page(self.page_number, self.page_size)
        except ProviderFailure as e:
            self._fail(str(e))
            return
        except Exception as e:
            logger.error(f"Unexpected error fetching page {self.page_number}: {e}", exc_info=True)
            self._fail(f"Unexpected error: {e}")
            return

        if not self._is_cancelled:
            self.finished_with_data.emit(page)
