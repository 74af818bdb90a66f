"""Keyword rule table for instruction routing.

The rule table is data, not code: it ships as ``rules.json`` next to this
module and is validated into frozen Pydantic models on first use. Rules are
kept in file order for each agent kind, and that order is the precedence
policy of the classifier (first match wins).

Rule Semantics:
    A rule matches an instruction when every ``all_of`` keyword occurs in
    it, at least one ``any_of`` keyword occurs (if ``any_of`` is
    non-empty), and no ``none_of`` keyword occurs. Matching is
    case-insensitive and whole-word: ``mint`` does not match ``Mintables``
    and ``create`` does not match ``created``. Multi-word keywords match
    across any run of whitespace.

Usage:
    from mcp_agents.routing.rules import get_rule_table

    table = get_rule_table()
    for rule in table.rules_for(AgentKind.GOVERNANCE):
        print(rule.action, rule.capability)
"""

from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from mcp_agents.config.schemas.agent import AgentKind
from mcp_agents.core.actions import Action
from mcp_agents.core.exceptions import ConfigurationError


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)

RULES_RESOURCE = "rules.json"


# =============================================================================
# Rule Models
# =============================================================================


class KeywordRule(BaseModel):
    """One routing rule.

    Attributes:
        action: Handler tag selected when the rule matches.
        capability: Label advertised by agents that route to this action.
        all_of: Keywords that must all be present.
        any_of: Keywords of which at least one must be present (ignored
            when empty).
        none_of: Keywords that veto the rule.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    action: Action
    capability: str = Field(min_length=1)
    all_of: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()
    none_of: tuple[str, ...] = ()

    @field_validator("all_of", "any_of", "none_of")
    @classmethod
    def normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase keywords and reject blanks."""
        keywords = tuple(" ".join(kw.lower().split()) for kw in v)
        if any(not kw for kw in keywords):
            raise ValueError("keywords must not be blank")
        return keywords

    @model_validator(mode="after")
    def require_keywords(self) -> "KeywordRule":
        """A rule with no keywords would match everything."""
        if not self.all_of and not self.any_of:
            raise ValueError(f"rule for '{self.action.value}' has no keywords")
        return self

    def matches(self, text: str) -> bool:
        """Check the rule against already-lowercased instruction text."""
        if not all(_contains(text, kw) for kw in self.all_of):
            return False
        if any(_contains(text, kw) for kw in self.none_of):
            return False
        return not self.any_of or any(_contains(text, kw) for kw in self.any_of)


@lru_cache(maxsize=None)
def _keyword_pattern(keyword: str) -> re.Pattern:
    words = (re.escape(word) for word in keyword.split())
    return re.compile(r"\b" + r"\s+".join(words) + r"\b")


def _contains(text: str, keyword: str) -> bool:
    return _keyword_pattern(keyword).search(text) is not None


class RuleTable(BaseModel):
    """Ordered rules for every agent kind."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: int = 1
    kinds: dict[AgentKind, tuple[KeywordRule, ...]]

    @model_validator(mode="after")
    def check_unique_actions(self) -> "RuleTable":
        """Each action may be routed by at most one rule per kind."""
        for kind, rules in self.kinds.items():
            actions = [rule.action for rule in rules]
            duplicates = {a.value for a in actions if actions.count(a) > 1}
            if duplicates:
                raise ValueError(
                    f"duplicate rules for {kind.value}: {', '.join(sorted(duplicates))}"
                )
        return self

    def rules_for(self, kind: AgentKind) -> tuple[KeywordRule, ...]:
        """Return the ordered rules of one agent kind (empty if none)."""
        return self.kinds.get(kind, ())


# =============================================================================
# Loading
# =============================================================================


def load_rule_table(path: Optional[Union[str, Path]] = None) -> RuleTable:
    """Load and validate a rule table.

    Args:
        path: JSON file to load. Defaults to the packaged ``rules.json``.

    Returns:
        The validated RuleTable.

    Raises:
        ConfigurationError: If the file is missing, not JSON, or invalid.
    """
    try:
        if path is None:
            raw = resources.files(__package__).joinpath(RULES_RESOURCE).read_text(encoding="utf-8")
            source = RULES_RESOURCE
        else:
            raw = Path(path).read_text(encoding="utf-8")
            source = str(path)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read rule table: {e}",
            config_key="routing.rules",
        ) from e

    try:
        table = RuleTable.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Rule table {source} is not valid JSON: {e}",
            config_key="routing.rules",
        ) from e
    except ValidationError as e:
        raise ConfigurationError(
            f"Rule table {source} is invalid",
            config_key="routing.rules",
            validation_details=str(e),
        ) from e

    logger.debug(
        f"Loaded rule table from {source}: "
        + ", ".join(f"{k.value}={len(r)}" for k, r in table.kinds.items())
    )
    return table


_rule_table: Optional[RuleTable] = None


def get_rule_table() -> RuleTable:
    """Get the cached packaged rule table."""
    global _rule_table
    if _rule_table is None:
        _rule_table = load_rule_table()
    return _rule_table


__all__ = [
    "KeywordRule",
    "RuleTable",
    "load_rule_table",
    "get_rule_table",
]
