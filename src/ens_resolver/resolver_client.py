"""
Resolution client for ENS expressions.

Sends one request per resolution to the remote resolver:

    GET <base_url>/resolve/{name}?network=mainnet&source=<client-tag>

and turns the loosely-typed answer into a ResolutionOutcome. Transport,
decode and not-found failures are preserved as a ResolveError by
``resolve_result`` and collapsed to NOT_FOUND by ``resolve``; neither
raises for a failed lookup.
"""

import time
from typing import Optional, Union
from urllib.parse import quote, urlparse

import httpx

from ens_resolver.audit_logger import AuditLogger
from ens_resolver.config import ResolverConfig
from ens_resolver.enums import CallerContext, LogLevel, ResolveErrorCode
from ens_resolver.exceptions import (
    ConfigurationError,
    DecodeError,
    ENSResolverError,
    InvalidExpressionError,
    NotFoundError,
    TransportError,
)
from ens_resolver.models import (
    NormalizedName,
    Query,
    ResolutionOutcome,
    ResolveError,
    ResolveResult,
    ResolverResponse,
    select_resolved_value,
)
from ens_resolver.name_matcher import NameMatcher
from ens_resolver.record_policy import RecordPolicy


COMPONENT = "resolver_client"


class ResolutionClient:
    """
    Async client for the remote ENS resolver.

    The HTTP transport can be injected (``httpx.MockTransport`` in tests).
    Calls share one pooled ``httpx.AsyncClient`` and are otherwise
    independent, so concurrent resolutions are safe.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger: Optional[AuditLogger] = None,
        matcher: Optional[NameMatcher] = None,
    ) -> None:
        """
        Initialize the resolution client.

        Args:
            config: Resolver settings; defaults to ResolverConfig()
            transport: Optional httpx transport used for every request
            logger: Optional logger for request and outcome entries
            matcher: Name matcher used to parse string queries

        Raises:
            ConfigurationError: If the resolver endpoint is not HTTPS
        """
        self._config = config or ResolverConfig()
        self._validate_endpoint_url(self._config.base_url)
        self._transport = transport
        self._logger = logger
        self._matcher = matcher or NameMatcher()
        self._policy = RecordPolicy(
            search_url=self._config.search_url,
            explorer_url=self._config.explorer_url,
        )
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ResolutionClient":
        """Async context manager entry."""
        if self._client is None:
            self._client = self._create_http_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def config(self) -> ResolverConfig:
        return self._config

    @property
    def policy(self) -> RecordPolicy:
        return self._policy

    def _create_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            verify=True,  # TLS certificate verification enforced
            timeout=httpx.Timeout(self._config.timeout_seconds),
            follow_redirects=True,
            transport=self._transport,
        )

    def _validate_endpoint_url(self, endpoint: str) -> None:
        """
        Validate that the resolver endpoint uses HTTPS.

        Raises:
            ConfigurationError: If the endpoint is not HTTPS (or plain HTTP
                while ``allow_insecure`` is set)
        """
        parsed = urlparse(endpoint)
        scheme = parsed.scheme.lower()
        allowed = ("https", "http") if self._config.allow_insecure else ("https",)
        if scheme not in allowed or not parsed.netloc:
            raise ConfigurationError(
                code="insecure_endpoint",
                message=f"Resolver endpoint must use HTTPS: {endpoint}",
                details={"endpoint": endpoint, "scheme": parsed.scheme},
            )

    def resolve_url(self, name: str) -> str:
        """URL of the resolve endpoint for a name (query string excluded)."""
        return f"{self._config.base_url.rstrip('/')}/resolve/{quote(name, safe=':@')}"

    def _log(self, level: LogLevel, message: str, data: Optional[dict] = None) -> None:
        if self._logger is not None:
            self._logger.log(level, COMPONENT, message, data)

    def _to_query(self, query: Union[NormalizedName, str]) -> Query:
        """
        Parse the caller's query; shortcut strings gain the .eth suffix.

        Raises:
            InvalidExpressionError: If the query is not a valid expression
        """
        text = query.value if isinstance(query, NormalizedName) else query
        return self._matcher.require_query(text)

    async def _fetch(self, name: str) -> ResolverResponse:
        """
        Perform the resolver request for an already-normalized name.

        Raises:
            TransportError: Network error, timeout, unexpected HTTP status or any
                other transport failure
            NotFoundError: Resolver answered 404
            DecodeError: Body is not a JSON object
        """
        if self._client is None:
            self._client = self._create_http_client()

        url = self.resolve_url(name)
        params = {"network": self._config.network, "source": self._config.source}
        self._log(LogLevel.DEBUG, "Resolver request", {"name": name, "url": url})

        try:
            response = await self._client.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
            )
        except httpx.TimeoutException as e:
            raise TransportError(
                code=ResolveErrorCode.TRANSPORT_FAILURE.value,
                message=f"Resolver request timed out after {self._config.timeout_seconds}s",
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                code=ResolveErrorCode.TRANSPORT_FAILURE.value,
                message=f"Connection error: {e}",
                details={"url": url},
            ) from e
        except Exception as e:
            raise TransportError(
                code=ResolveErrorCode.TRANSPORT_FAILURE.value,
                message=f"Unexpected error: {e}",
                details={"url": url, "error_type": type(e).__name__},
            ) from e

        if response.status_code == 404:
            raise NotFoundError(
                code=ResolveErrorCode.NOT_FOUND.value,
                message=f"Resolver has no record for {name}",
                details={"url": url, "http_status_code": 404},
            )

        if not response.is_success:
            raise TransportError(
                code=ResolveErrorCode.TRANSPORT_FAILURE.value,
                message=f"Unexpected HTTP status: {response.status_code}",
                details={"url": url, "http_status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(
                code=ResolveErrorCode.DECODE_FAILURE.value,
                message=f"Failed to parse resolver response: {e}",
                details={"url": url, "http_status_code": response.status_code},
            ) from e

        return ResolverResponse.from_json(payload)

    def _elapsed_ms(self, start_time: float) -> float:
        """Calculate elapsed time in milliseconds."""
        return (time.perf_counter() - start_time) * 1000

    def _failure(
        self,
        error: ENSResolverError,
        name: Optional[str],
        start_time: float,
    ) -> ResolveResult:
        code = ResolveErrorCode(error.code)
        status_code = error.details.get("http_status_code")

        level = LogLevel.WARN if code in (
            ResolveErrorCode.TRANSPORT_FAILURE,
            ResolveErrorCode.DECODE_FAILURE,
        ) else LogLevel.INFO
        self._log(level, "Resolution failed", {
            "name": name,
            "code": code.value,
            "reason": error.message,
            "http_status_code": status_code,
        })

        return ResolveResult(
            outcome=ResolutionOutcome.not_found(),
            error=ResolveError(
                code=code,
                message=error.message,
                http_status_code=status_code,
            ),
            query=name,
            response_time_ms=self._elapsed_ms(start_time),
        )

    def _interpret(
        self,
        query: Query,
        value: str,
        context: CallerContext,
    ) -> ResolutionOutcome:
        # Chain-qualified and plain names are addresses; the resolver picks
        # the chain's address format.
        if query.is_text_record and query.qualifier:
            return self._policy.apply(query.qualifier, value, context)
        return ResolutionOutcome.address(value)

    async def resolve_result(
        self,
        query: Union[NormalizedName, str],
        context: CallerContext = CallerContext.FIELD,
    ) -> ResolveResult:
        """
        Resolve a query and keep the failure cause.

        Args:
            query: Normalized name or expression text (shortcuts allowed)
            context: Where the caller will use the outcome

        Returns:
            ResolveResult; ``error`` is set and the outcome is NOT_FOUND when
            the lookup failed. Invalid expressions never reach the network.
        """
        start_time = time.perf_counter()

        try:
            parsed = self._to_query(query)
        except InvalidExpressionError as e:
            return self._failure(e, None, start_time)

        name = parsed.normalized().value

        try:
            response = await self._fetch(name)
            value = select_resolved_value(response)
            if value is None:
                raise NotFoundError(
                    code=ResolveErrorCode.NOT_FOUND.value,
                    message=response.error or "Resolver returned no value",
                    details={"name": name},
                )
        except (TransportError, DecodeError, NotFoundError) as e:
            return self._failure(e, name, start_time)

        outcome = self._interpret(parsed, value, context)
        self._log(LogLevel.INFO, "Resolved", {
            "name": name,
            "kind": parsed.kind.value,
            "outcome": outcome.kind.value,
        })

        return ResolveResult(
            outcome=outcome,
            error=None,
            query=name,
            response_time_ms=self._elapsed_ms(start_time),
        )

    async def resolve(
        self,
        query: Union[NormalizedName, str],
        context: CallerContext = CallerContext.FIELD,
    ) -> ResolutionOutcome:
        """Resolve a query; every failure becomes a NOT_FOUND outcome."""
        result = await self.resolve_result(query, context)
        return result.outcome

    async def resolve_text_record(
        self,
        name: Union[NormalizedName, str],
        record_type: str = "name",
    ) -> Optional[str]:
        """
        Look up ``<name>.<record_type>`` and return the legacy ``address`` field.

        Only the top-level ``address`` is read; ``data.address`` is ignored.

        Args:
            name: ENS name, e.g. ``vitalik.eth``
            record_type: Record suffix appended unless already present

        Returns:
            The raw value, or None on any failure
        """
        text = str(name)
        suffix = f".{record_type}"
        full_name = text if text.endswith(suffix) else f"{text}{suffix}"

        try:
            response = await self._fetch(full_name)
        except (TransportError, DecodeError, NotFoundError) as e:
            self._log(LogLevel.INFO, "Text record lookup failed", {
                "name": full_name,
                "code": e.code,
                "reason": e.message,
            })
            return None

        return response.address

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
