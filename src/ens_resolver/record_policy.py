"""
Record-type policy for resolved text records.

Maps a text record type and its raw value to what the caller should do
with it: open a profile URL, insert raw text, or search for it.

Policy:
- x:      https://x.com/<handle> (leading '@' stripped)
- url:    passed through, https:// added when no http(s) scheme is present
- github: https://github.com/<handle> (leading '@' stripped)
- anything else (name, bio, description, ...): raw text when inserting into
  a field, a search URL when opening in a browser
"""

from urllib.parse import quote

from ens_resolver.config import DEFAULT_EXPLORER_URL, DEFAULT_SEARCH_URL
from ens_resolver.enums import CallerContext
from ens_resolver.models import ResolutionOutcome


X_PROFILE_URL = "https://x.com/"
GITHUB_PROFILE_URL = "https://github.com/"

URL_RECORD_TYPES = frozenset({"x", "url", "github"})


def _strip_handle(value: str) -> str:
    return value[1:] if value.startswith("@") else value


class RecordPolicy:
    """
    Applies the per-record-type policy table.

    Record types are compared case-insensitively. Unlisted record types get
    the search fallback.
    """

    def __init__(
        self,
        search_url: str = DEFAULT_SEARCH_URL,
        explorer_url: str = DEFAULT_EXPLORER_URL,
    ) -> None:
        """
        Initialize the policy.

        Args:
            search_url: Search endpoint; the query is appended as ``?q=``
            explorer_url: Block explorer base for address pages
        """
        self._search_url = search_url
        self._explorer_url = explorer_url.rstrip("/")

    def should_convert_to_url(self, record_type: str) -> bool:
        """True for record types whose value is always opened as a URL."""
        return record_type.lower() in URL_RECORD_TYPES

    def search_url(self, value: str) -> str:
        return f"{self._search_url}?q={quote(value, safe='')}"

    def convert_text_record_to_url(self, record_type: str, value: str) -> str:
        """
        Convert a text record value to a URL.

        Accepts any record type; unknown types become a search URL.
        """
        record = record_type.lower()

        if record == "x":
            return X_PROFILE_URL + _strip_handle(value)

        if record == "url":
            if value.startswith("http://") or value.startswith("https://"):
                return value
            return f"https://{value}"

        if record == "github":
            return GITHUB_PROFILE_URL + _strip_handle(value)

        return self.search_url(value)

    def apply(
        self,
        record_type: str,
        value: str,
        context: CallerContext = CallerContext.FIELD,
    ) -> ResolutionOutcome:
        """
        Decide the outcome for a resolved text record.

        Args:
            record_type: Text record type (the query qualifier)
            value: Raw record value returned by the resolver
            context: Where the caller will use the result

        Returns:
            URL outcome for profile/url records or browser context,
            RAW_TEXT outcome otherwise
        """
        if self.should_convert_to_url(record_type) or context == CallerContext.BROWSER:
            return ResolutionOutcome.url(self.convert_text_record_to_url(record_type, value))
        return ResolutionOutcome.raw_text(value)

    def explorer_address_url(self, address: str) -> str:
        """Address page on the block explorer."""
        return f"{self._explorer_url}/address/{address}"
