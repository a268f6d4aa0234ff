#!/usr/bin/env python3
"""
ASCII Frame Converter - Coalescing Executor
===========================================
Runs conversions off the caller's thread with at most one in flight.
A request that arrives while a conversion runs replaces any request still
waiting; only the newest waiting request runs next.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from ascii_frame.config import ConversionSettings
from ascii_frame.pipeline import AsciiFrameConverter, ConversionResult
from ascii_frame.sampler import PixelSource

logger = logging.getLogger(__name__)


class SupersedeToken:
    """Flipped when a newer request replaces the one holding it."""

    def __init__(self):
        self._event = threading.Event()

    @property
    def superseded(self) -> bool:
        return self._event.is_set()

    def supersede(self) -> None:
        self._event.set()


@dataclass
class _Request:
    source: PixelSource
    columns: int
    settings: Optional[ConversionSettings]
    future: Future = field(default_factory=Future)
    token: SupersedeToken = field(default_factory=SupersedeToken)


class CoalescingExecutor:
    """Single-in-flight conversion executor for one output stream."""

    def __init__(self, converter: Optional[AsciiFrameConverter] = None):
        self.converter = converter or AsciiFrameConverter()
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix='ascii-frame')
        self._lock = threading.Lock()
        self._busy = False
        self._pending: Optional[_Request] = None
        self._closed = False

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._busy

    def submit(self, source: PixelSource, columns: int,
               settings: Optional[ConversionSettings] = None) -> 'Future[ConversionResult]':
        """
        Request a conversion.

        Returns:
            Future resolving to the ConversionResult, or cancelled if a newer
            request supersedes this one before it starts
        """
        request = _Request(source, columns, settings)
        with self._lock:
            if self._closed:
                raise RuntimeError("cannot submit after shutdown")
            if self._busy:
                if self._pending is not None:
                    logger.debug("Superseding pending conversion request")
                    self._pending.token.supersede()
                    self._pending.future.cancel()
                self._pending = request
                return request.future
            try:
                self._pool.submit(self._drain, request)
            except RuntimeError:
                request.future.cancel()
                raise
            self._busy = True
        return request.future

    def _run(self, request: _Request) -> None:
        if request.token.superseded or not request.future.set_running_or_notify_cancel():
            return
        try:
            result = self.converter.convert(request.source, request.columns, request.settings)
        except Exception as exc:
            logger.debug("Conversion failed: %s", exc)
            request.future.set_exception(exc)
        else:
            request.future.set_result(result)

    def _drain(self, request: _Request) -> None:
        while request is not None:
            self._run(request)
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._busy = False

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting requests; a waiting request is cancelled."""
        with self._lock:
            self._closed = True
            if self._pending is not None:
                self._pending.token.supersede()
                self._pending.future.cancel()
                self._pending = None
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> 'CoalescingExecutor':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
