"""Page readers used to fetch the content published at a key location."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from playwright.sync_api import sync_playwright, Browser, Page, Error as PlaywrightError

from qrsign.exceptions import FetchError, PageBlockedError, PageNotFoundError


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class PageReader(ABC):
    """Capability to fetch page content by URL."""

    @abstractmethod
    def read_page(self, url: str) -> str:
        """
        Fetch the content at a URL.

        Args:
            url: Absolute page URL

        Returns:
            Raw page content as text

        Raises:
            FetchError: On any transport or HTTP failure
        """
        ...


class BrowserPageReader(PageReader):
    """Playwright-backed reader using a headless Chromium."""

    def __init__(
        self,
        headless: bool = True,
        timeout_ms: int = 30000,
        user_agent: str | None = None,
        render: bool = False,
    ):
        """
        Initialize the reader.

        Args:
            headless: Run browser in headless mode
            timeout_ms: Navigation timeout in milliseconds
            user_agent: Custom user agent string
            render: Return the rendered DOM instead of the raw response body
        """
        self.headless = headless
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.render = render

    def read_page(self, url: str) -> str:
        with sync_playwright() as p:
            browser: Browser = p.chromium.launch(headless=self.headless)

            try:
                context = browser.new_context(user_agent=self.user_agent)
                page: Page = context.new_page()

                response = page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
                if response is None:
                    raise FetchError(f"No response received from {url}")

                status = response.status
                if status == 404:
                    raise PageNotFoundError(f"Page {url} not found")
                if status in (403, 429):
                    raise PageBlockedError(f"Blocked or rate limited (HTTP {status})")
                if status >= 400:
                    raise FetchError(f"HTTP {status} from {url}")

                if self.render:
                    return page.content()
                return response.text()

            except FetchError:
                raise
            except PlaywrightError as e:
                raise FetchError(f"Browser error: {e}") from e
            except Exception as e:
                raise FetchError(f"Unexpected error: {e}") from e
            finally:
                browser.close()


class StaticPageReader(PageReader):
    """In-memory reader serving fixed content, for offline checks."""

    def __init__(self, pages: Mapping[str, str] | str):
        """
        Args:
            pages: Mapping of URL to content, or one content string served for every URL
        """
        self._pages = pages
        self.requested: list[str] = []

    def read_page(self, url: str) -> str:
        self.requested.append(url)
        if isinstance(self._pages, str):
            return self._pages
        try:
            return self._pages[url]
        except KeyError:
            raise PageNotFoundError(f"No content for {url}") from None
