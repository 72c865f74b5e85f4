"""
ENS Resolver - ENS name recognition and resolution for text input.

This package finds ENS names (``vitalik.eth``), multi-chain and text-record
expressions (``vitalik.eth:btc``, ``vitalik.eth:x``) and their shortcuts
(``vitalik:btc``) in free text, resolves them through a remote resolver, and
applies record-type policy to the result.
"""

__version__ = "0.1.0"

from ens_resolver.exceptions import (
    ENSResolverError,
    InvalidExpressionError,
    TransportError,
    DecodeError,
    NotFoundError,
    ConfigurationError,
)
from ens_resolver.enums import (
    QueryKind,
    RecordClass,
    CallerContext,
    BrowserAction,
    OutcomeKind,
    ResolveErrorCode,
    ExpressionErrorCode,
    LogLevel,
)
from ens_resolver.records import (
    SUPPORTED_CHAINS,
    SUPPORTED_TEXT_RECORDS,
    get_supported_chains,
    get_supported_text_records,
    is_supported_chain,
    is_supported_text_record,
    classify_record,
)
from ens_resolver.models import (
    Query,
    NormalizedName,
    ResolverResponse,
    ResolutionOutcome,
    ResolveError,
    ResolveResult,
    select_resolved_value,
)
from ens_resolver.name_matcher import (
    NameMatcher,
    Grammar,
    ExpressionValidationResult,
    ExpressionValidationError,
    is_valid_ens_expression,
    extract_candidate,
    parse_query,
    should_auto_resolve,
)
from ens_resolver.config import (
    ResolverConfig,
    LoggingConfig,
    Settings,
    load_config_from_env,
    validate_config,
)
from ens_resolver.audit_logger import (
    AuditLogger,
    LogEntry,
)
from ens_resolver.record_policy import (
    RecordPolicy,
)
from ens_resolver.resolver_client import (
    ResolutionClient,
)
from ens_resolver.browser_actions import (
    BrowserActionResolver,
)

__all__ = [
    # Exceptions
    "ENSResolverError",
    "InvalidExpressionError",
    "TransportError",
    "DecodeError",
    "NotFoundError",
    "ConfigurationError",
    # Enums
    "QueryKind",
    "RecordClass",
    "CallerContext",
    "BrowserAction",
    "OutcomeKind",
    "ResolveErrorCode",
    "ExpressionErrorCode",
    "LogLevel",
    # Records
    "SUPPORTED_CHAINS",
    "SUPPORTED_TEXT_RECORDS",
    "get_supported_chains",
    "get_supported_text_records",
    "is_supported_chain",
    "is_supported_text_record",
    "classify_record",
    # Models
    "Query",
    "NormalizedName",
    "ResolverResponse",
    "ResolutionOutcome",
    "ResolveError",
    "ResolveResult",
    "select_resolved_value",
    # Name Matcher
    "NameMatcher",
    "Grammar",
    "ExpressionValidationResult",
    "ExpressionValidationError",
    "is_valid_ens_expression",
    "extract_candidate",
    "parse_query",
    "should_auto_resolve",
    # Configuration
    "ResolverConfig",
    "LoggingConfig",
    "Settings",
    "load_config_from_env",
    "validate_config",
    # Logging
    "AuditLogger",
    "LogEntry",
    # Record Policy
    "RecordPolicy",
    # Resolution Client
    "ResolutionClient",
    # Browser Actions
    "BrowserActionResolver",
]
