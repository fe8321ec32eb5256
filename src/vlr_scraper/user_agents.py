"""Desktop User-Agent selection for vlr.gg requests.

Real browsers do not change User-Agent mid-session. VlrClient calls
get_headers() once when it starts and keeps the result for the lifetime
of its httpx session.
"""

from fake_useragent import UserAgent

# fake-useragent browser name -> oldest major version worth sending
_FAMILIES = {
    "Chrome": 120.0,
    "Firefox": 115.0,
    "Safari": 16.0,
    "Edge": 120.0,
}


class UserAgentRotator:
    """Picks desktop User-Agent strings from a single browser family.

    Client Hint headers are added only for Chromium-based families, since
    Firefox and Safari never send them.
    """

    def __init__(self, browser_family: str = "Chrome"):
        self._browser_family = self._normalize_family(browser_family)
        self._ua = UserAgent(
            browsers=[self._browser_family],
            platforms=["desktop"],
            min_version=_FAMILIES[self._browser_family],
        )

    @staticmethod
    def _normalize_family(family: str) -> str:
        """Map a loosely spelled family name to a fake-useragent browser.

        Defaults to "Chrome" for unknown names.
        """
        lowered = family.strip().lower()
        for known in _FAMILIES:
            if lowered.startswith(known.lower()):
                return known
        return "Chrome"

    @property
    def browser_family(self) -> str:
        return self._browser_family

    def get(self) -> str:
        """Return a random UA string from the configured browser family."""
        return self._ua.random

    def get_headers(self) -> dict[str, str]:
        """Return request headers with User-Agent and optional Client Hints."""
        headers: dict[str, str] = {
            "User-Agent": self.get(),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

        if self._browser_family in ("Chrome", "Edge"):
            headers["Sec-CH-UA-Platform"] = '"Windows"'
            headers["Sec-CH-UA-Mobile"] = "?0"

        return headers
