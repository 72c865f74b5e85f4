"""
Tests for default browser actions.
"""

import asyncio

import httpx
import pytest

from ens_resolver.browser_actions import BrowserActionResolver
from ens_resolver.enums import BrowserAction
from ens_resolver.models import ResolutionOutcome
from ens_resolver.resolver_client import ResolutionClient


def make_handler(records: dict, requests: list):
    """
    Resolver stub keyed by requested name.

    Names missing from ``records`` get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        requests.append(name)
        if name not in records:
            return httpx.Response(404, json={"success": False, "error": "not found"})
        return httpx.Response(200, json=records[name])

    return handler


def open_in_browser(records: dict, name, action=BrowserAction.ETHERSCAN):
    requests: list[str] = []

    async def run():
        transport = httpx.MockTransport(make_handler(records, requests))
        async with ResolutionClient(transport=transport) as client:
            return await BrowserActionResolver(client).resolve_for_browser(name, action)

    return asyncio.run(run()), requests


ADDRESS = {"success": True, "data": {"address": "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"}}


class TestEtherscanAction:
    """The default action opens the explorer page for the resolved address."""

    def test_address_page(self) -> None:
        outcome, requests = open_in_browser({"vitalik.eth": ADDRESS}, "vitalik.eth")

        assert outcome == ResolutionOutcome.url(
            "https://etherscan.io/address/0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
        )
        assert requests == ["vitalik.eth"]

    def test_unresolved_name(self) -> None:
        outcome, _ = open_in_browser({}, "nobody.eth")
        assert outcome == ResolutionOutcome.not_found()

    def test_text_record_expression_opens_its_url(self) -> None:
        records = {"vitalik.eth:github": {"success": True, "data": {"address": "vbuterin"}}}
        outcome, _ = open_in_browser(records, "vitalik.eth:github")
        assert outcome == ResolutionOutcome.url("https://github.com/vbuterin")

    def test_raw_text_record_becomes_search(self) -> None:
        records = {"vitalik.eth:bio": {"success": True, "data": {"address": "hello world"}}}
        outcome, _ = open_in_browser(records, "vitalik.eth:bio")
        assert outcome == ResolutionOutcome.url("https://google.com/search?q=hello%20world")


class TestProfileActions:
    """url, github and x preferences open the matching text record."""

    @pytest.mark.parametrize("action, value, expected", [
        (BrowserAction.URL, "vitalik.ca", "https://vitalik.ca"),
        (BrowserAction.GITHUB, "vbuterin", "https://github.com/vbuterin"),
        (BrowserAction.X, "@VitalikButerin", "https://x.com/VitalikButerin"),
    ])
    def test_record_url(self, action: BrowserAction, value: str, expected: str) -> None:
        records = {f"vitalik.eth.{action.value}": {"address": value}}
        outcome, requests = open_in_browser(records, "vitalik.eth", action)

        assert outcome == ResolutionOutcome.url(expected)
        assert requests == [f"vitalik.eth.{action.value}"]

    def test_missing_record_falls_back_to_explorer(self) -> None:
        outcome, requests = open_in_browser({"vitalik.eth": ADDRESS}, "vitalik.eth", BrowserAction.GITHUB)

        assert outcome.value.startswith("https://etherscan.io/address/")
        assert requests == ["vitalik.eth.github", "vitalik.eth"]

    def test_preference_string(self) -> None:
        records = {"vitalik.eth.x": {"address": "VitalikButerin"}}
        outcome, _ = open_in_browser(records, "vitalik.eth", "x")
        assert outcome == ResolutionOutcome.url("https://x.com/VitalikButerin")

    @pytest.mark.parametrize("preference", ["", "opensea", None])
    def test_unknown_preference_uses_explorer(self, preference) -> None:
        outcome, requests = open_in_browser({"vitalik.eth": ADDRESS}, "vitalik.eth", preference)

        assert outcome.value.startswith("https://etherscan.io/address/")
        assert requests == ["vitalik.eth"]


class TestBrowserPreference:
    """Stored preference strings map onto actions."""

    @pytest.mark.parametrize("value, expected", [
        ("etherscan", BrowserAction.ETHERSCAN),
        ("url", BrowserAction.URL),
        ("GitHub", BrowserAction.GITHUB),
        ("x", BrowserAction.X),
        ("twitter", BrowserAction.ETHERSCAN),
        (None, BrowserAction.ETHERSCAN),
    ])
    def test_from_preference(self, value, expected: BrowserAction) -> None:
        assert BrowserAction.from_preference(value) == expected
