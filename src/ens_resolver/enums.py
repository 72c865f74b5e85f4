"""
Enumeration types for the ENS resolver.

These enums provide type-safe constants for query kinds, outcome kinds,
error codes, and caller-supplied context throughout the package.
"""

from enum import Enum


class QueryKind(Enum):
    """Which grammar a query was recognised by."""

    STANDARD = "standard"
    MULTI_CHAIN = "multi_chain"
    TEXT_RECORD = "text_record"


class RecordClass(Enum):
    """Classification of a qualifier code."""

    CHAIN = "chain"
    TEXT_RECORD = "text_record"
    UNKNOWN = "unknown"


class CallerContext(Enum):
    """Where the caller intends to use the outcome."""

    FIELD = "field"  # insert into a text field
    BROWSER = "browser"  # open in a browser


class BrowserAction(Enum):
    """Default action taken for a name typed into a browser."""

    ETHERSCAN = "etherscan"
    URL = "url"
    GITHUB = "github"
    X = "x"

    @classmethod
    def from_preference(cls, value: object) -> "BrowserAction":
        """Map a stored preference string to an action, defaulting to etherscan."""
        if isinstance(value, str):
            for action in cls:
                if action.value == value.strip().lower():
                    return action
        return cls.ETHERSCAN


class OutcomeKind(Enum):
    """Tag of a resolution outcome."""

    ADDRESS = "address"
    URL = "url"
    RAW_TEXT = "raw_text"
    NOT_FOUND = "not_found"


class ResolveErrorCode(Enum):
    """Error codes for resolution failures."""

    INVALID_EXPRESSION = "invalid_expression"
    TRANSPORT_FAILURE = "transport_failure"
    DECODE_FAILURE = "decode_failure"
    NOT_FOUND = "not_found"


class ExpressionErrorCode(Enum):
    """Error codes for expression validation failures."""

    EMPTY_INPUT = "empty_input"
    INVALID_LABEL = "invalid_label"
    INVALID_QUALIFIER = "invalid_qualifier"
    MALFORMED = "malformed"


class LogLevel(Enum):
    """Logging severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
