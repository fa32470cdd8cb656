"""Headless browser session used to snapshot rendered pages.

One Chromium instance and one page are opened per run and reused for every
route; each navigation replaces the page's DOM.
"""
from __future__ import annotations

from typing import Optional, Sequence

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from prerender.core.errors import BrowserLaunchError, NavigationError
from prerender.schemas.config import Viewport

# Sandboxing is unavailable in most containers / CI runners.
DEFAULT_LAUNCH_ARGS = ("--no-sandbox", "--disable-dev-shm-usage")
DEFAULT_NAVIGATION_TIMEOUT_MS = 30_000

REMOVE_MATCHING_JS = """
(selector) => {
  document.querySelectorAll(selector).forEach((el) => el.remove());
}
"""


class PageCapture:
    """Async context manager wrapping a Playwright browser and its single page."""

    def __init__(
        self,
        *,
        viewport: Optional[Viewport] = None,
        navigation_timeout_ms: float = DEFAULT_NAVIGATION_TIMEOUT_MS,
        headless: bool = True,
        launch_args: Sequence[str] = DEFAULT_LAUNCH_ARGS,
        debug: bool = False,
    ):
        self.viewport = viewport
        self.navigation_timeout_ms = navigation_timeout_ms
        self.headless = headless
        self.launch_args = list(launch_args)
        self.debug = debug
        self._playwright = None
        self._browser = None
        self._page = None

    @property
    def is_open(self) -> bool:
        return self._page is not None

    async def open(self) -> None:
        if self.is_open:
            return
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless, args=self.launch_args
            )
            self._page = await self._browser.new_page()
            if self.viewport is not None:
                await self._page.set_viewport_size(
                    {"width": self.viewport.width, "height": self.viewport.height}
                )
        except PlaywrightError as exc:
            await self.close()
            raise BrowserLaunchError(f"Could not launch headless Chromium: {exc}") from exc
        if self.debug:
            self._page.on("console", lambda msg: print(f"[browser] {msg.type}: {msg.text}"))
            self._page.on("pageerror", lambda err: print(f"[browser] pageerror: {err}"))

    async def capture(self, url: str, skip_selector: Optional[str] = None, route: Optional[str] = None) -> str:
        """Navigate to ``url``, wait for network idle and return the serialized DOM."""
        if self._page is None:
            raise RuntimeError("PageCapture.open() must be called first")
        try:
            await self._page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
            if skip_selector:
                await self._page.evaluate(REMOVE_MATCHING_JS, skip_selector)
            return await self._page.content()
        except PlaywrightError as exc:
            raise NavigationError(url, exc, route=route) from exc

    async def close(self) -> None:
        """Close browser and driver. Safe to call more than once."""
        browser, driver = self._browser, self._playwright
        self._page = None
        self._browser = None
        self._playwright = None
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as exc:
                print(f"[warn] browser close failed: {exc}")
        if driver is not None:
            try:
                await driver.stop()
            except PlaywrightError as exc:
                print(f"[warn] playwright stop failed: {exc}")

    async def __aenter__(self) -> "PageCapture":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


__all__ = ["PageCapture", "DEFAULT_LAUNCH_ARGS", "DEFAULT_NAVIGATION_TIMEOUT_MS", "REMOVE_MATCHING_JS"]
