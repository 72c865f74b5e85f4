"""
Supported qualifier tables.

A qualifier is the code after ``:`` in ``name.eth:btc`` or ``name.eth:x``.
It names either a chain (the resolver returns that chain's address) or a
text record (the resolver returns the record's raw text).
"""

from ens_resolver.enums import RecordClass


SUPPORTED_CHAINS = (
    "btc", "eth", "sol", "doge", "xrp", "ltc", "ada",
    "dot", "avax", "matic", "base", "arb", "op", "bsc",
)

SUPPORTED_TEXT_RECORDS = ("x", "url", "github", "name", "bio", "description")

_CHAIN_SET = frozenset(SUPPORTED_CHAINS)
_TEXT_RECORD_SET = frozenset(SUPPORTED_TEXT_RECORDS)


def get_supported_chains() -> list[str]:
    """Return the supported chain codes in display order."""
    return list(SUPPORTED_CHAINS)


def get_supported_text_records() -> list[str]:
    """Return the supported text record types in display order."""
    return list(SUPPORTED_TEXT_RECORDS)


def is_supported_chain(code: str) -> bool:
    return code.lower() in _CHAIN_SET


def is_supported_text_record(code: str) -> bool:
    return code.lower() in _TEXT_RECORD_SET


def is_supported_qualifier(code: str) -> bool:
    """True if the code is a chain or a text record."""
    return is_supported_chain(code) or is_supported_text_record(code)


def classify_record(qualifier: str) -> RecordClass:
    """
    Classify a qualifier code.

    Text records are checked first so a code present in both tables is
    resolved the way the client treats it (as raw text).
    """
    if is_supported_text_record(qualifier):
        return RecordClass.TEXT_RECORD
    if is_supported_chain(qualifier):
        return RecordClass.CHAIN
    return RecordClass.UNKNOWN
