"""Rendering engine session: one headless Chromium shared by many contexts.

A session is either *owned* (launched here, so whoever launched it disposes
it) or *borrowed* (wraps a browser somebody else launched and will close).
Disposing a borrowed session only closes the contexts it opened.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator

from playwright.async_api import async_playwright

from ..config import PipelineSettings
from ..core.utils import get_logger
from ..exceptions import EngineStartFailure, SessionDisposedError

LOGGER = get_logger("inspectpdf.render.session")


class Ownership(str, Enum):
    OWNED = "owned"
    BORROWED = "borrowed"


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISPOSED = "disposed"


class RenderingSession:
    """Wraps one Playwright browser and the contexts opened against it."""

    def __init__(self, *, ownership: Ownership = Ownership.OWNED, settings: PipelineSettings | None = None) -> None:
        self.ownership = ownership
        self.settings = settings or PipelineSettings()
        self.state = SessionState.UNINITIALIZED
        self._playwright: Any = None
        self._browser: Any = None
        self._contexts: set[Any] = set()

    @classmethod
    async def launch(cls, settings: PipelineSettings | None = None) -> "RenderingSession":
        """Start Chromium and return a ready, owned session."""

        session = cls(ownership=Ownership.OWNED, settings=settings)
        await session._start()
        return session

    @classmethod
    def borrow(cls, browser: Any, settings: PipelineSettings | None = None) -> "RenderingSession":
        """Wrap an already running Playwright ``Browser``."""

        session = cls(ownership=Ownership.BORROWED, settings=settings)
        session._browser = browser
        session.state = SessionState.READY
        return session

    @property
    def is_owned(self) -> bool:
        return self.ownership is Ownership.OWNED

    @property
    def is_ready(self) -> bool:
        return self.state is SessionState.READY

    @property
    def active_contexts(self) -> int:
        return len(self._contexts)

    async def _start(self) -> None:
        settings = self.settings
        started = time.perf_counter()
        LOGGER.debug("Launching Chromium (headless=%s, args=%s)", settings.headless, settings.engine_args)
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=settings.headless,
                args=list(settings.engine_args),
            )
        except asyncio.CancelledError:
            await self._stop_playwright()
            self.state = SessionState.DISPOSED
            raise
        except Exception as exc:
            LOGGER.error("Failed to launch Chromium: %s", exc)
            await self._stop_playwright()
            self.state = SessionState.DISPOSED
            raise EngineStartFailure(f"Unable to start the rendering engine: {exc}") from exc
        self.state = SessionState.READY
        LOGGER.info("Chromium launched (%.0fms)", (time.perf_counter() - started) * 1000)

    def _ensure_ready(self) -> None:
        if self.state is SessionState.DISPOSED:
            raise SessionDisposedError()
        if self.state is not SessionState.READY:
            raise SessionDisposedError("The rendering session has not been started.")

    @asynccontextmanager
    async def open_context(self) -> AsyncIterator[Any]:
        """Open an isolated browser context and yield a fresh page in it.

        The context is closed on exit whether or not the body raised.
        """

        self._ensure_ready()
        context = await self._browser.new_context()
        self._contexts.add(context)
        try:
            page = await context.new_page()
            yield page
        finally:
            self._contexts.discard(context)
            try:
                await context.close()
            except Exception as exc:  # pragma: no cover - closing a crashed context
                LOGGER.warning("Failed to close browser context: %s", exc)

    async def dispose(self) -> None:
        """Release the session. Safe to call more than once."""

        if self.state is SessionState.DISPOSED:
            return
        self.state = SessionState.DISPOSED

        for context in list(self._contexts):
            try:
                await context.close()
            except Exception as exc:  # pragma: no cover - best effort on teardown
                LOGGER.warning("Failed to close browser context: %s", exc)
        self._contexts.clear()

        if self.is_owned:
            if self._browser is not None:
                try:
                    await self._browser.close()
                except Exception as exc:  # pragma: no cover - browser may already be gone
                    LOGGER.warning("Failed to close Chromium: %s", exc)
            await self._stop_playwright()
            LOGGER.info("Chromium closed")
        self._browser = None

    async def _stop_playwright(self) -> None:
        if self._playwright is None:
            return
        try:
            await self._playwright.stop()
        except Exception as exc:  # pragma: no cover - driver already stopped
            LOGGER.warning("Failed to stop Playwright: %s", exc)
        self._playwright = None

    async def __aenter__(self) -> "RenderingSession":
        if self.state is SessionState.UNINITIALIZED:
            await self._start()
        self._ensure_ready()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.dispose()

    def __repr__(self) -> str:
        return (
            f"RenderingSession(ownership={self.ownership.value}, state={self.state.value}, "
            f"contexts={self.active_contexts})"
        )


async def acquire(existing: Any = None, *, settings: PipelineSettings | None = None) -> RenderingSession:
    """Return *existing* if given, otherwise launch a new owned session.

    A bare Playwright ``Browser`` is wrapped as a borrowed session. The caller
    that supplied *existing* keeps the duty to dispose it.
    """

    if existing is None:
        return await RenderingSession.launch(settings)
    if isinstance(existing, RenderingSession):
        existing._ensure_ready()
        LOGGER.debug("Reusing existing rendering session %r", existing)
        return existing
    LOGGER.debug("Wrapping caller supplied browser as a borrowed session")
    return RenderingSession.borrow(existing, settings)


__all__ = ["Ownership", "SessionState", "RenderingSession", "acquire"]
