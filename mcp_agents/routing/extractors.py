"""Per-field parameter extractors for capability handlers.

Each extractor reads one field out of raw instruction text and returns an
``Extracted`` value that records whether the field was actually found or
the caller's default was substituted. Extraction never fails: a missing or
malformed field always falls back to the default. Amounts may use
thousands separators (``1,000 USDC``).

Token symbols are recognised by shape rather than by a fixed list: an
alphanumeric word of two to ten characters with at least two capital
letters (``SOL``, ``USDC``, ``mSOL``, ``BONK``).

Example:
    >>> title = quoted_after('Create a new proposal titled "Fund Grants"', "titled", "Untitled Proposal")
    >>> title.value, title.used_default
    ('Fund Grants', False)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Generic, Iterable, Optional, TypeVar

T = TypeVar("T")

_NUMBER = r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
_TOKEN = r"([A-Za-z0-9]*[A-Z][A-Za-z0-9]*[A-Z][A-Za-z0-9]*)"

_AMOUNT_TOKEN_RE = re.compile(rf"(?<![\w.,]){_NUMBER}\s*\$?{_TOKEN}\b")
_TARGET_TOKEN_RE = re.compile(rf"\b(?:to|for|into)\s+\$?{_TOKEN}\b")
_PAIR_RE = re.compile(rf"\b{_TOKEN}\s*[/-]\s*{_TOKEN}\b")
_URL_RE = re.compile(r"https?://[^\s\"'<>]+")
_PROPOSAL_ID_RE = re.compile(r"\bproposal\s+(?:id\s+)?#?([A-Za-z0-9]+)", re.IGNORECASE)
_SOL_PRICE_RE = re.compile(rf"(?<![\w.,]){_NUMBER}\s*sol\b", re.IGNORECASE)
_NFT_MINT_RE = re.compile(
    r"\b(?:list|sell)\s+nft\s+(?!(?:for|at|on)\b)([A-Za-z0-9]+)", re.IGNORECASE
)
_COLLECTION_RE = re.compile(
    r"\bcollection\b.*?\b(?:for|of|named|called)\s+([A-Za-z0-9_\-]+)", re.IGNORECASE
)
_SYMBOL_WORD_RE = re.compile(r"\bsymbol\s+([A-Za-z0-9]+)\b", re.IGNORECASE)


@dataclass(frozen=True)
class Extracted(Generic[T]):
    """Result of extracting one field.

    Attributes:
        value: The extracted value, or the default when nothing was found.
        used_default: True when ``value`` is the caller's default.
    """

    value: T
    used_default: bool

    @classmethod
    def found(cls, value: T) -> "Extracted[T]":
        return cls(value=value, used_default=False)

    @classmethod
    def default(cls, value: T) -> "Extracted[T]":
        return cls(value=value, used_default=True)


def _to_float(raw: str) -> Optional[float]:
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None


def _marker_pattern(marker: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(marker)}\b", re.IGNORECASE)


# =============================================================================
# Text Fields
# =============================================================================


def quoted_after(text: str, marker: str, default: T) -> Extracted:
    """Extract the first double-quoted string that follows ``marker``.

    Example:
        ``Mint a new NFT named "MCP Demo"`` with marker ``named`` gives
        ``MCP Demo``.
    """
    match = _marker_pattern(marker).search(text)
    if match is None:
        return Extracted.default(default)
    # An unterminated quote runs to the end of the text.
    quoted = re.search(r'"([^"]*)(?:"|$)', text[match.end():])
    if quoted is None or not quoted.group(1).strip():
        return Extracted.default(default)
    return Extracted.found(quoted.group(1).strip())


def text_after_quoted(text: str, marker: str, default: str = "") -> Extracted[str]:
    """Extract the free text that follows the quoted value after ``marker``.

    Used for proposal descriptions: in
    ``Create a proposal titled "X" to allocate 1000 USDC`` the result is
    ``to allocate 1000 USDC``.
    """
    match = _marker_pattern(marker).search(text)
    if match is None:
        return Extracted.default(default)
    quoted = re.search(r'"[^"]*"', text[match.end():])
    if quoted is None:
        return Extracted.default(default)
    rest = text[match.end() + quoted.end():].strip(" \t\n,;:-.")
    if not rest:
        return Extracted.default(default)
    return Extracted.found(rest)


def url(text: str, default: Optional[str] = None) -> Extracted[Optional[str]]:
    """Extract the first http(s) URL."""
    match = _URL_RE.search(text)
    if match is None:
        return Extracted.default(default)
    return Extracted.found(match.group(0).rstrip(".,;:)]"))


def venue_mention(text: str, venues: Iterable[str], default: str) -> Extracted[str]:
    """Return whichever of ``venues`` is named earliest in the text."""
    lowered = text.lower()
    best: Optional[tuple[int, str]] = None
    for venue in venues:
        position = lowered.find(venue.lower())
        if position >= 0 and (best is None or position < best[0]):
            best = (position, venue)
    if best is None:
        return Extracted.default(default)
    return Extracted.found(best[1])


# =============================================================================
# Token and Amount Fields
# =============================================================================


def token_amounts(text: str) -> list[tuple[float, str]]:
    """All ``<number> <SYMBOL>`` pairs in order of appearance."""
    pairs = []
    for raw_amount, symbol in _AMOUNT_TOKEN_RE.findall(text):
        amount = _to_float(raw_amount)
        if amount is not None and len(symbol) <= 10:
            pairs.append((amount, symbol))
    return pairs


def source_amount(text: str, default: float = 1.0) -> Extracted[float]:
    """Amount of the first ``<number> <SYMBOL>`` pair."""
    pairs = token_amounts(text)
    if not pairs:
        return Extracted.default(default)
    return Extracted.found(pairs[0][0])


def source_token(text: str, default: str = "SOL") -> Extracted[str]:
    """Symbol of the first ``<number> <SYMBOL>`` pair."""
    pairs = token_amounts(text)
    if not pairs:
        return Extracted.default(default)
    return Extracted.found(pairs[0][1])


def target_token(text: str, default: str = "USDC") -> Extracted[str]:
    """Symbol introduced by ``to``, ``for`` or ``into``."""
    for symbol in _TARGET_TOKEN_RE.findall(text):
        if len(symbol) <= 10:
            return Extracted.found(symbol)
    return Extracted.default(default)


def token_pair(
    text: str, default: tuple[str, str] = ("SOL", "USDC")
) -> Extracted[tuple[str, str]]:
    """Pool pair written as ``A/B`` (or ``A-B``)."""
    match = _PAIR_RE.search(text)
    if match is None:
        return Extracted.default(default)
    return Extracted.found((match.group(1), match.group(2)))


def amount_for(text: str, symbol: str, default: float = 1.0) -> Extracted[float]:
    """Amount written directly before ``symbol``, e.g. ``15 USDC``."""
    for amount, found_symbol in token_amounts(text):
        if found_symbol.upper() == symbol.upper():
            return Extracted.found(amount)
    return Extracted.default(default)


def percent_bps(text: str, keyword: str, default: int) -> Extracted[int]:
    """Percentage attached to ``keyword``, converted to basis points.

    Accepts both ``0.5% slippage`` and ``royalty of 7.5%``. Values outside
    0-100% fall back to the default.
    """
    kw = re.escape(keyword)
    patterns = (
        rf"(?<![\w.,]){_NUMBER}\s*%\s*(?:{kw})",
        rf"(?:{kw})\s*(?:of|at|to|:)?\s*{_NUMBER}\s*%",
    )
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match is None:
            continue
        percent = _to_float(match.group(1))
        if percent is not None and 0 <= percent <= 100:
            return Extracted.found(int(round(percent * 100)))
    return Extracted.default(default)


def sol_price(text: str, default: float = 1.0) -> Extracted[float]:
    """First amount denominated in SOL, e.g. ``for 5 SOL``."""
    match = _SOL_PRICE_RE.search(text)
    if match is None:
        return Extracted.default(default)
    price = _to_float(match.group(1))
    if price is None:
        return Extracted.default(default)
    return Extracted.found(price)


# =============================================================================
# Governance Fields
# =============================================================================


def proposal_id(text: str, default: str = "latest") -> Extracted[str]:
    """Identifier written after ``proposal``.

    Only identifiers containing a digit are accepted, so ordinary words
    (``Vote for proposal to fund ...``) are not mistaken for ids.
    """
    for candidate in _PROPOSAL_ID_RE.findall(text):
        if any(ch.isdigit() for ch in candidate):
            return Extracted.found(candidate)
    return Extracted.default(default)


def vote_direction(text: str, default: str = "for") -> Extracted[str]:
    """``against`` if the word appears anywhere, ``for`` if stated, else default."""
    if re.search(r"\bagainst\b", text, re.IGNORECASE):
        return Extracted.found("against")
    if re.search(r"\b(?:vote|voting)\s+(?:yes\s+|in\s+)?for\b", text, re.IGNORECASE):
        return Extracted.found("for")
    return Extracted.default(default)


# =============================================================================
# NFT Fields
# =============================================================================


def nft_symbol(text: str, default: str = "NFT") -> Extracted[str]:
    """Symbol given as ``symbol "X"`` or ``symbol X``."""
    quoted = quoted_after(text, "symbol", None)
    if not quoted.used_default:
        return Extracted.found(quoted.value)
    match = _SYMBOL_WORD_RE.search(text)
    if match is None:
        return Extracted.default(default)
    return Extracted.found(match.group(1).upper())


def nft_mint(text: str, default: str = "unknown") -> Extracted[str]:
    """Mint address following ``list nft`` or ``sell nft``."""
    match = _NFT_MINT_RE.search(text)
    if match is None:
        return Extracted.default(default)
    return Extracted.found(match.group(1))


def collection_name(text: str, default: str = "UNKNOWN") -> Extracted[str]:
    """Collection named after ``collection ... for``/``of``, or quoted."""
    quoted = quoted_after(text, "collection", None)
    if not quoted.used_default:
        return Extracted.found(quoted.value)
    match = _COLLECTION_RE.search(text)
    if match is None:
        return Extracted.default(default)
    return Extracted.found(match.group(1))


__all__ = [
    "Extracted",
    "quoted_after",
    "text_after_quoted",
    "url",
    "venue_mention",
    "token_amounts",
    "source_amount",
    "source_token",
    "target_token",
    "token_pair",
    "amount_for",
    "percent_bps",
    "sol_price",
    "proposal_id",
    "vote_direction",
    "nft_symbol",
    "nft_mint",
    "collection_name",
]
