"""
PreviewStream - Superseding Preview Renders
===========================================
Runs preview renders off the caller's thread and applies only the
newest one.

Every request gets a generation token from a counter. When a render
finishes, its result is applied only if its token is still the latest
issued; anything older is discarded, even if it finishes last.
Requests that have not started yet are cancelled outright. Delivery is
serialized: the token check and the on_result call happen under one
lock, so a result that was superseded while waiting is never delivered
after a newer one.

A failing render stores its error and leaves the last applied result
in place. Nothing is retried.

Usage:
    stream = PreviewStream(pipeline, on_result=show)
    stream.request(options, "Hello")
    stream.request(options, "Hello World")   # "Hello" is superseded
"""

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, List, NamedTuple, Optional

from ..glyph import GlyphRecord, RenderOptions
from ..text.pipeline import RasterizationPipeline


class PreviewTicket(NamedTuple):
    """Handle for one preview request."""
    token: int
    future: Future


class PreviewStream:
    """
    One logical preview stream.

    Args:
        pipeline: Pipeline used to render
        executor: Executor to submit renders to (default: a private
            single-worker pool, shut down by close())
        on_result: Called as on_result(token, glyphs) when a result is
            applied
    """

    def __init__(self, pipeline: RasterizationPipeline, executor: Executor = None,
                 on_result: Callable[[int, List[GlyphRecord]], None] = None):
        self._pipeline = pipeline
        self._owns_executor = executor is None
        self._executor = executor if executor is not None else ThreadPoolExecutor(max_workers=1)
        self._on_result = on_result
        self._lock = threading.Lock()
        self._deliver_lock = threading.Lock()
        self._generation = 0
        self._pending: Optional[Future] = None
        self._applied_token = 0

        self.result: Optional[List[GlyphRecord]] = None
        self.error: Optional[BaseException] = None

    @property
    def latest_token(self) -> int:
        return self._generation

    @property
    def applied_token(self) -> int:
        """Token of the result currently in `result` (0 if none)."""
        return self._applied_token

    def request(self, options: RenderOptions, text: str) -> PreviewTicket:
        """
        Submit a preview render, superseding any earlier request.

        Returns:
            PreviewTicket with the request's token and future
        """
        with self._lock:
            self._generation += 1
            token = self._generation
            if self._pending is not None:
                self._pending.cancel()
            future = self._executor.submit(self._pipeline.render_preview, options, text)
            self._pending = future
        future.add_done_callback(partial(self._complete, token))
        return PreviewTicket(token, future)

    def _complete(self, token: int, future: Future) -> None:
        if future.cancelled():
            return

        error = future.exception()
        with self._deliver_lock:
            with self._lock:
                if token != self._generation:
                    return
                if error is not None:
                    self.error = error
                    return
                glyphs = future.result()
                self.result = glyphs
                self.error = None
                self._applied_token = token
                callback = self._on_result

            if callback is not None:
                callback(token, glyphs)

    def close(self) -> None:
        """Cancel pending work and shut down a private executor."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
        return False
