"""
BackgroundLoader - Async background image decoding with QThreadPool

Pattern: Background loading with QRunnable workers
Every request bumps a generation counter; a finished decode is delivered
only if no newer request was made in the meantime.
"""

import logging
import time
from typing import Optional

from PyQt6.QtCore import QObject, QRunnable, pyqtSignal, QThreadPool
from PyQt6.QtGui import QImage

from ..config import Config
from ..utils.image_utils import ImageSource, decode_image

logger = logging.getLogger(__name__)


class BackgroundDecodeSignals(QObject):
    """Signals for BackgroundDecodeTask"""

    decode_complete = pyqtSignal(int, QImage, float)  # generation, image, elapsed_ms
    decode_failed = pyqtSignal(int, str)  # generation, error_message


class BackgroundDecodeTask(QRunnable):
    """
    Background task for decoding one background image

    Usage:
        task = BackgroundDecodeTask(generation, source)
        threadpool.start(task)
    """

    def __init__(self, generation: int, source: ImageSource):
        super().__init__()
        self.generation = generation
        self.source = source
        self.signals = BackgroundDecodeSignals()
        self.start_time = time.time()

    def run(self):
        """Execute decoding task"""
        try:
            image = decode_image(self.source)
            if image is None:
                self.signals.decode_failed.emit(
                    self.generation,
                    "Could not decode background image"
                )
                return

            elapsed_ms = (time.time() - self.start_time) * 1000
            self.signals.decode_complete.emit(self.generation, image, elapsed_ms)

        except Exception as e:
            self.signals.decode_failed.emit(
                self.generation,
                f"Background decode error: {e}"
            )


class BackgroundLoader(QObject):
    """
    Manages async background image decoding

    Features:
    - Decoding off the UI thread
    - Last request wins: stale results are dropped by generation
    - Failures reported as a signal and a logged warning

    Usage:
        loader = BackgroundLoader()
        loader.image_loaded.connect(on_background_ready)
        loader.request(encoded_bytes)
    """

    # Signals
    image_loaded = pyqtSignal(QImage)
    image_cleared = pyqtSignal()
    load_failed = pyqtSignal(str)  # error_message

    def __init__(self, parent=None, thread_pool: Optional[QThreadPool] = None):
        super().__init__(parent)

        # Private pool so decoding never competes with other workers
        self.thread_pool = thread_pool or QThreadPool(self)
        if thread_pool is None:
            self.thread_pool.setMaxThreadCount(Config.BACKGROUND_LOADER_THREAD_COUNT)

        self._generation = 0
        self._pending = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._pending

    def request(self, source: Optional[ImageSource]) -> int:
        """
        Request a new background image.

        Passing None removes the background image and cancels any
        pending decode.

        Args:
            source: Encoded bytes, data URL, path, or None

        Returns:
            Generation number of this request
        """
        self._generation += 1
        generation = self._generation

        if source is None:
            self._pending = False
            self.image_cleared.emit()
            return generation

        self._pending = True

        task = BackgroundDecodeTask(generation, source)
        task.signals.decode_complete.connect(self._on_decode_complete)
        task.signals.decode_failed.connect(self._on_decode_failed)
        self.thread_pool.start(task)

        return generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _on_decode_complete(self, generation: int, image: QImage, elapsed_ms: float):
        """Handle successful decode"""
        if not self.is_current(generation):
            logger.debug("Dropping stale background decode (generation %d)", generation)
            return

        self._pending = False
        logger.debug("Background decoded in %.1f ms (%dx%d)",
                     elapsed_ms, image.width(), image.height())
        self.image_loaded.emit(image)

    def _on_decode_failed(self, generation: int, error_message: str):
        """Handle failed decode"""
        if not self.is_current(generation):
            return

        self._pending = False
        logger.warning(error_message)
        self.load_failed.emit(error_message)


__all__ = ['BackgroundLoader', 'BackgroundDecodeTask']
