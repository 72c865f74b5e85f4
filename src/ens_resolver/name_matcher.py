"""
ENS expression recognition and normalization.

Three surface forms are recognised:

- standard:     ``vitalik.eth``
- multi-chain:  ``vitalik.eth:btc`` (the qualifier may also be a text record
  such as ``vitalik.eth:x``)
- shortcut:     ``vitalik:btc``, normalized to ``vitalik.eth:btc``

``validate_expression`` checks a whole string; ``extract_candidate`` searches
free text for the best single candidate.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Iterator, Optional

from ens_resolver.enums import ExpressionErrorCode, QueryKind, ResolveErrorCode
from ens_resolver.exceptions import InvalidExpressionError
from ens_resolver.models import ETH_SUFFIX, QUALIFIER_SEPARATOR, NormalizedName, Query
from ens_resolver.records import is_supported_qualifier, is_supported_text_record


MAX_LABEL_LENGTH = 63

MULTI_CHAIN_MARKER = ETH_SUFFIX + QUALIFIER_SEPARATOR

# Shortest forms: "a.eth:x" and "ab:x"
MIN_MULTI_CHAIN_LENGTH = 7
MIN_SHORTCUT_LENGTH = 4

# Candidate characters for scanning: ASCII alphanumerics or any non-ASCII,
# non-space character. Labels are checked with unicodedata afterwards since
# re has no Unicode category classes. Each class is a single set so the
# engine never has two ways to match one character.
_CHAR = r"[^\x00-\x2f\x3a-\x40\x5b-\x60\x7b-\x7f\s]"
_NAME_CHAR = r"[^\x00-\x2c\x2f\x3a-\x40\x5b-\x60\x7b-\x7f\s]"  # _CHAR plus '-' and '.'
_NAME = rf"{_CHAR}(?:{_NAME_CHAR}*{_CHAR})?"
_QUALIFIER = r"[A-Za-z0-9]+"

# Maximal runs of name characters. A leftmost match can only begin at the
# first _CHAR of a run, so grammars are tried there and nowhere else.
_NAME_RUN = re.compile(rf"{_NAME_CHAR}+")


@dataclass(frozen=True)
class Grammar:
    """One surface form, as a search pattern with ``name``/``qualifier`` groups."""

    name: str
    pattern: re.Pattern
    qualified: bool = False
    shortcut: bool = False


# Priority order: the multi-chain form must be tried before the shortcut so
# that "ses.eth:x" is not read as the shortcut "ses.eth" + ":x".
GRAMMARS = (
    Grammar(
        name="multi_chain",
        pattern=re.compile(rf"(?P<name>{_NAME})\.eth:(?P<qualifier>{_QUALIFIER})(?!\w)"),
        qualified=True,
    ),
    Grammar(
        name="shortcut",
        pattern=re.compile(rf"(?P<name>{_NAME}):(?P<qualifier>{_QUALIFIER})(?!\w)"),
        qualified=True,
        shortcut=True,
    ),
    Grammar(
        name="standard",
        pattern=re.compile(rf"(?P<name>{_NAME})\.eth(?!{_CHAR})"),
    ),
)


def _is_label_char(ch: str) -> bool:
    if ch.isascii():
        return ch.isalnum()
    # Letters, marks, numbers
    return unicodedata.category(ch)[0] in ("L", "M", "N")


def is_valid_label(label: str) -> bool:
    """
    Check a single dot-separated label.

    A label is 1-63 characters of letters, marks, numbers and inner hyphens.
    """
    if not label or len(label) > MAX_LABEL_LENGTH:
        return False
    if label.startswith("-") or label.endswith("-"):
        return False
    return all(ch == "-" or _is_label_char(ch) for ch in label)


def is_valid_name(name: str) -> bool:
    """Check a label chain such as ``pay.vitalik`` (no ``.eth`` suffix)."""
    return bool(name) and all(is_valid_label(label) for label in name.split("."))


def _run_starts(text: str) -> Iterator[int]:
    """Yield the index of the first non-separator character of each name run."""
    for run in _NAME_RUN.finditer(text):
        offset = len(run.group()) - len(run.group().lstrip("-."))
        if offset < len(run.group()):
            yield run.start() + offset


@dataclass
class ExpressionValidationError:
    """Structured error information for expression validation failures."""

    code: ExpressionErrorCode
    message: str
    details: dict


@dataclass
class ExpressionValidationResult:
    """Result of expression validation."""

    valid: bool
    query: Optional[Query]
    error: Optional[ExpressionValidationError]


def _invalid(code: ExpressionErrorCode, message: str, **details) -> ExpressionValidationResult:
    return ExpressionValidationResult(
        valid=False,
        query=None,
        error=ExpressionValidationError(code=code, message=message, details=details),
    )


class NameMatcher:
    """
    Recognises and normalizes ENS expressions.

    The matcher holds no state between calls; every method is a pure
    function of its input.
    """

    def __init__(self, grammars: tuple[Grammar, ...] = GRAMMARS) -> None:
        """
        Initialize the matcher.

        Args:
            grammars: Surface forms to search for, in priority order
        """
        self._grammars = grammars

    def validate_expression(self, text: str) -> ExpressionValidationResult:
        """
        Validate a complete standalone expression.

        Surrounding whitespace is ignored; anything else in the string must
        belong to the expression.

        Args:
            text: Text to validate

        Returns:
            ExpressionValidationResult with the parsed query or an error
        """
        if not text or not text.strip():
            return _invalid(ExpressionErrorCode.EMPTY_INPUT, "Expression is empty", raw_input=text)

        expression = text.strip()

        # Standard: name.eth
        if expression.endswith(ETH_SUFFIX) and len(expression) > len(ETH_SUFFIX):
            base_name = expression[: -len(ETH_SUFFIX)]
            if not is_valid_name(base_name):
                return _invalid(
                    ExpressionErrorCode.INVALID_LABEL,
                    f"Invalid ENS name: {base_name!r}",
                    raw_input=text,
                    name=base_name,
                )
            return ExpressionValidationResult(
                valid=True,
                query=Query(raw_text=expression, kind=QueryKind.STANDARD, base_name=base_name),
                error=None,
            )

        # Multi-chain: name.eth:qualifier
        if MULTI_CHAIN_MARKER in expression and len(expression) >= MIN_MULTI_CHAIN_LENGTH:
            parts = expression.split(MULTI_CHAIN_MARKER)
            if len(parts) != 2:
                return _invalid(
                    ExpressionErrorCode.MALFORMED,
                    "Expected exactly one '.eth:' separator",
                    raw_input=text,
                )
            return self._validate_qualified(expression, parts[0], parts[1], shortcut=False)

        # Shortcut: name:qualifier, .eth implied
        if (
            QUALIFIER_SEPARATOR in expression
            and ETH_SUFFIX not in expression
            and len(expression) >= MIN_SHORTCUT_LENGTH
        ):
            parts = expression.split(QUALIFIER_SEPARATOR)
            if len(parts) != 2:
                return _invalid(
                    ExpressionErrorCode.MALFORMED,
                    "Expected exactly one ':' separator",
                    raw_input=text,
                )
            return self._validate_qualified(expression, parts[0], parts[1], shortcut=True)

        return _invalid(
            ExpressionErrorCode.MALFORMED,
            "Not a recognised ENS expression",
            raw_input=text,
        )

    def _validate_qualified(
        self,
        expression: str,
        base_name: str,
        qualifier: str,
        shortcut: bool,
    ) -> ExpressionValidationResult:
        if not is_valid_name(base_name):
            return _invalid(
                ExpressionErrorCode.INVALID_LABEL,
                f"Invalid ENS name: {base_name!r}",
                raw_input=expression,
                name=base_name,
            )
        if not qualifier or not is_supported_qualifier(qualifier):
            return _invalid(
                ExpressionErrorCode.INVALID_QUALIFIER,
                f"Unsupported chain or text record: {qualifier!r}",
                raw_input=expression,
                qualifier=qualifier,
            )
        return ExpressionValidationResult(
            valid=True,
            query=Query(
                raw_text=expression,
                kind=self._qualified_kind(qualifier),
                base_name=base_name,
                qualifier=qualifier,
                shortcut=shortcut,
            ),
            error=None,
        )

    @staticmethod
    def _qualified_kind(qualifier: str) -> QueryKind:
        if is_supported_text_record(qualifier):
            return QueryKind.TEXT_RECORD
        return QueryKind.MULTI_CHAIN

    def is_valid_ens_expression(self, text: str) -> bool:
        return self.validate_expression(text).valid

    def parse_query(self, text: str) -> Optional[Query]:
        """Parse a standalone expression, or return None if it is invalid."""
        return self.validate_expression(text).query

    def require_query(self, text: str) -> Query:
        """
        Parse a standalone expression.

        Raises:
            InvalidExpressionError: If the text is not a valid expression
        """
        result = self.validate_expression(text)
        if result.query is None:
            error = result.error
            raise InvalidExpressionError(
                code=ResolveErrorCode.INVALID_EXPRESSION.value,
                message=error.message if error else "Invalid ENS expression",
                details={"reason": error.code.value} if error else {},
            )
        return result.query

    def find_query(self, text: str) -> Optional[Query]:
        """
        Find the best single ENS expression inside free text.

        Grammars are tried in priority order. Only the first occurrence of
        each grammar is considered; if its name or qualifier does not
        validate, the next grammar is tried.

        Args:
            text: Arbitrary user text

        Returns:
            The recognised Query, or None if nothing matched
        """
        if not text:
            return None

        haystack = text.strip()
        starts = list(_run_starts(haystack))
        for grammar in self._grammars:
            query = self._search(grammar, haystack, starts)
            if query is not None:
                return query
        return None

    def _search(self, grammar: Grammar, text: str, starts: list[int]) -> Optional[Query]:
        match = None
        for start in starts:
            match = grammar.pattern.match(text, start)
            if match is not None:
                break
        if match is None:
            return None

        base_name = match.group("name")
        if not is_valid_name(base_name):
            return None

        if not grammar.qualified:
            return Query(raw_text=match.group(0), kind=QueryKind.STANDARD, base_name=base_name)

        qualifier = match.group("qualifier")
        if not is_supported_qualifier(qualifier):
            return None
        # "x.eth:q" belongs to the multi-chain grammar
        if grammar.shortcut and base_name.endswith(ETH_SUFFIX):
            return None

        return Query(
            raw_text=match.group(0),
            kind=self._qualified_kind(qualifier),
            base_name=base_name,
            qualifier=qualifier,
            shortcut=grammar.shortcut,
        )

    def extract_candidate(self, text: str) -> Optional[NormalizedName]:
        """
        Find and normalize the best single ENS expression in free text.

        Shortcut matches gain the ``.eth`` suffix; other matches are
        returned as written.
        """
        query = self.find_query(text)
        return query.normalized() if query is not None else None


_default_matcher = NameMatcher()


def is_valid_ens_expression(text: str) -> bool:
    """True if the whole (trimmed) text is a valid ENS expression."""
    return _default_matcher.is_valid_ens_expression(text)


def extract_candidate(text: str) -> Optional[str]:
    """Return the normalized form of the best ENS candidate in text, if any."""
    candidate = _default_matcher.extract_candidate(text)
    return candidate.value if candidate is not None else None


def parse_query(text: str) -> Optional[Query]:
    return _default_matcher.parse_query(text)


def should_auto_resolve(
    text: str,
    auto_resolve_enabled: bool,
    last_resolved: Optional[str] = None,
) -> bool:
    """
    Decide whether typed or selected text should be resolved now.

    Args:
        text: Current text
        auto_resolve_enabled: The caller's auto-resolve preference
        last_resolved: Text the caller resolved most recently, to skip repeats

    Returns:
        True if enabled, the text changed, and it is a valid expression
    """
    if not auto_resolve_enabled:
        return False
    if last_resolved is not None and text == last_resolved:
        return False
    return is_valid_ens_expression(text)
