"""
Data models for the ENS resolver.

This module defines the recognised query, its canonical name form, the
loosely-typed resolver response, and the outcome handed back to callers.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ens_resolver.enums import OutcomeKind, QueryKind, ResolveErrorCode
from ens_resolver.exceptions import DecodeError

ETH_SUFFIX = ".eth"
QUALIFIER_SEPARATOR = ":"


@dataclass(frozen=True)
class NormalizedName:
    """
    Canonical resolvable name: ``base.eth`` or ``base.eth:qualifier``.

    The label case is preserved; canonicalisation is left to the resolver.
    """

    base_name: str
    qualifier: Optional[str] = None

    @property
    def value(self) -> str:
        if self.qualifier:
            return f"{self.base_name}{ETH_SUFFIX}{QUALIFIER_SEPARATOR}{self.qualifier}"
        return f"{self.base_name}{ETH_SUFFIX}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Query:
    """A recognised ENS expression."""

    raw_text: str  # Literal text that was matched
    kind: QueryKind
    base_name: str  # Label chain without the .eth suffix
    qualifier: Optional[str] = None  # Chain code or text record type
    shortcut: bool = False  # True when .eth was implied (name:btc)

    @property
    def is_text_record(self) -> bool:
        return self.kind == QueryKind.TEXT_RECORD

    def normalized(self) -> NormalizedName:
        return NormalizedName(base_name=self.base_name, qualifier=self.qualifier)


def _as_text(value: Any) -> Optional[str]:
    """Keep non-empty strings, drop everything else."""
    if isinstance(value, str) and value:
        return value
    return None


@dataclass
class ResolverResponse:
    """
    Response body of the remote resolver.

    No field is guaranteed; fields of an unexpected type are treated as
    absent. ``address`` is the deprecated top-level channel.
    """

    success: Optional[bool] = None
    data_address: Optional[str] = None
    address: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any) -> "ResolverResponse":
        """
        Build a response from decoded JSON.

        Raises:
            DecodeError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise DecodeError(
                code=ResolveErrorCode.DECODE_FAILURE.value,
                message="Resolver response is not a JSON object",
                details={"payload_type": type(payload).__name__},
            )

        success = payload.get("success")
        data = payload.get("data")

        return cls(
            success=success if isinstance(success, bool) else None,
            data_address=_as_text(data.get("address")) if isinstance(data, dict) else None,
            address=_as_text(payload.get("address")),
            error=_as_text(payload.get("error")),
        )


def select_resolved_value(response: ResolverResponse) -> Optional[str]:
    """
    Pick the resolved value from a response.

    ``data.address`` wins when ``success`` is true; otherwise the legacy
    top-level ``address`` is used.
    """
    if response.success is True and response.data_address:
        return response.data_address
    if response.address:
        return response.address
    return None


@dataclass(frozen=True)
class ResolutionOutcome:
    """Final result of a resolution: address, URL, raw text, or nothing."""

    kind: OutcomeKind
    value: Optional[str] = None

    @classmethod
    def address(cls, value: str) -> "ResolutionOutcome":
        return cls(OutcomeKind.ADDRESS, value)

    @classmethod
    def url(cls, value: str) -> "ResolutionOutcome":
        return cls(OutcomeKind.URL, value)

    @classmethod
    def raw_text(cls, value: str) -> "ResolutionOutcome":
        return cls(OutcomeKind.RAW_TEXT, value)

    @classmethod
    def not_found(cls) -> "ResolutionOutcome":
        return cls(OutcomeKind.NOT_FOUND)

    @property
    def found(self) -> bool:
        return self.kind != OutcomeKind.NOT_FOUND


@dataclass
class ResolveError:
    """Why a resolution produced nothing."""

    code: ResolveErrorCode
    message: str
    http_status_code: Optional[int] = None


@dataclass
class ResolveResult:
    """Outcome of a resolution with the underlying failure preserved."""

    outcome: ResolutionOutcome
    error: Optional[ResolveError] = None
    query: Optional[str] = None  # Name actually sent to the resolver
    response_time_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None
