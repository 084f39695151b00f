"""
Archive Image Client

Fetches one snapshot image at a time from the archive, either over HTTP
with aiohttp or from a local copy of the image tree. Runs in a background
thread and reports results with PyQt6 signals.
"""

import aiohttp
import asyncio
import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from ..common.config import ArchiveConfig


class ArchiveImageWorker(QObject):
    """Worker that loads archive images in a background thread."""

    # Signals
    image_received = pyqtSignal(str, bytes)  # image_path, image_data
    load_failed = pyqtSignal(str, str)  # image_path, error_message

    def __init__(self, archive: ArchiveConfig):
        super().__init__()
        self.archive = archive
        self.archive_url = archive.archive_url.rstrip('/')
        self.request_timeout_sec = archive.request_timeout_sec
        self.logger = logging.getLogger("sunviewer.image_client")

    @pyqtSlot(str)
    def fetch(self, image_path: str):
        """Load a single image and emit the result."""
        if self.archive.is_remote:
            self._run_fetch(image_path)
        else:
            self._read_local(image_path)

    def _read_local(self, image_path: str):
        """Read an image from a local copy of the archive tree."""
        file_path = Path(self.archive_url) / image_path.lstrip('/')
        try:
            data = file_path.read_bytes()
        except OSError as e:
            self.load_failed.emit(image_path, e.strerror or str(e))
            return

        self.image_received.emit(image_path, data)

    def _run_fetch(self, image_path: str):
        """Run async fetch in a new event loop."""
        loop = asyncio.new_event_loop()
        try:
            loop.run_until_complete(self._async_fetch(image_path))
        finally:
            loop.close()

    async def _async_fetch(self, image_path: str):
        """Fetch image over HTTP."""
        url = f"{self.archive_url}{image_path}"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=self.request_timeout_sec)
                ) as resp:
                    if resp.status != 200:
                        self.load_failed.emit(image_path, f"HTTP {resp.status}")
                        return

                    data = await resp.read()

        except asyncio.TimeoutError:
            self.load_failed.emit(image_path, "Timeout")
            return
        except aiohttp.ClientError as e:
            self.logger.debug(f"Request for {url} failed: {e}")
            self.load_failed.emit(image_path, str(e))
            return

        self.image_received.emit(image_path, data)


class ArchiveImageClient(QObject):
    """Main client class that manages the worker thread."""

    # Forward signals from worker
    image_received = pyqtSignal(str, bytes)
    load_failed = pyqtSignal(str, str)

    # Internal: queued hand-off to the worker thread
    _fetch_requested = pyqtSignal(str)

    def __init__(self, archive: ArchiveConfig, parent=None):
        super().__init__(parent)
        self.archive = archive
        self.thread: Optional[QThread] = None
        self.worker: Optional[ArchiveImageWorker] = None
        self.logger = logging.getLogger("sunviewer.image_client")

    def start(self):
        """Start the worker thread."""
        if self.thread is not None and self.thread.isRunning():
            return

        self.thread = QThread()
        self.worker = ArchiveImageWorker(self.archive)
        self.worker.moveToThread(self.thread)

        # Connect thread lifecycle
        self.thread.finished.connect(self.worker.deleteLater)

        # Requests in, results out
        self._fetch_requested.connect(self.worker.fetch)
        self.worker.image_received.connect(self.image_received.emit)
        self.worker.load_failed.connect(self.load_failed.emit)

        self.thread.start()
        self.logger.info(f"Archive image client started: {self.archive.archive_url}")

    def stop(self):
        """Stop the client."""
        if self.thread and self.thread.isRunning():
            self.thread.quit()
            self.thread.wait(5000)
        self.thread = None
        self.worker = None

    def is_running(self) -> bool:
        """Check if client is running."""
        return self.thread is not None and self.thread.isRunning()

    def request(self, image_path: str):
        """Queue a fetch of image_path on the worker thread."""
        if not self.is_running():
            self.logger.warning(f"Client not running, dropping request for {image_path}")
            return
        self._fetch_requested.emit(image_path)
