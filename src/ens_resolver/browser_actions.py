"""
Default browser actions for ENS names typed into a browser.

The caller's stored preference picks what a name opens:

- etherscan: the resolved address on the block explorer
- url / github / x: the matching text record as a URL, falling back to the
  explorer page when the record is missing
"""

from typing import Union

from ens_resolver.enums import BrowserAction, CallerContext, OutcomeKind
from ens_resolver.models import NormalizedName, ResolutionOutcome
from ens_resolver.resolver_client import ResolutionClient


class BrowserActionResolver:
    """Turns a name plus the caller's default browser action into a URL outcome."""

    def __init__(self, client: ResolutionClient) -> None:
        self._client = client

    async def resolve_for_browser(
        self,
        name: Union[NormalizedName, str],
        action: Union[BrowserAction, str] = BrowserAction.ETHERSCAN,
    ) -> ResolutionOutcome:
        """
        Resolve a name to the URL the browser should open.

        Args:
            name: ENS name or expression
            action: BrowserAction or the raw preference string

        Returns:
            URL outcome, or NOT_FOUND if nothing resolved
        """
        if not isinstance(action, BrowserAction):
            action = BrowserAction.from_preference(action)

        if action != BrowserAction.ETHERSCAN:
            value = await self._client.resolve_text_record(name, action.value)
            if value:
                return ResolutionOutcome.url(
                    self._client.policy.convert_text_record_to_url(action.value, value)
                )

        return await self._explorer_outcome(name)

    async def _explorer_outcome(self, name: Union[NormalizedName, str]) -> ResolutionOutcome:
        outcome = await self._client.resolve(name, CallerContext.BROWSER)

        if outcome.kind == OutcomeKind.ADDRESS and outcome.value:
            return ResolutionOutcome.url(self._client.policy.explorer_address_url(outcome.value))
        # Text record expressions already resolve to a URL in browser context
        if outcome.kind == OutcomeKind.URL:
            return outcome
        return ResolutionOutcome.not_found()
