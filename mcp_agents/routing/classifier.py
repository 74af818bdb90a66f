"""Instruction classification for mcp-agents.

This module maps raw instruction text to the handler tag (Action) of one
agent. Classification is deterministic keyword routing over the ordered rule
table in ``rules.json``; there is no scoring and no language model. The
first rule that matches wins, so the rule order for each agent kind is the
complete precedence policy.

Key Components:
    Instruction: Immutable instruction text plus its resolved action.
    InstructionStage: Per-call processing stages, used in log records.
    InstructionClassifier: Routes text for one agent's enabled actions.

Usage:
    from mcp_agents.routing import InstructionClassifier

    classifier = InstructionClassifier(AgentKind.GOVERNANCE, enabled_actions)
    instruction = classifier.classify("Vote against proposal 42")
    print(instruction.action)  # Action.CAST_VOTE
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from mcp_agents.config.schemas.agent import AgentKind
from mcp_agents.core.actions import Action
from mcp_agents.core.exceptions import AgentConfigurationError, ClassificationError
from mcp_agents.routing.rules import KeywordRule, RuleTable, get_rule_table


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Instruction
# =============================================================================


class InstructionStage(Enum):
    """Stages an instruction passes through during one call.

    ``RECEIVED -> CLASSIFIED -> (UNSUPPORTED | DISPATCHED -> HANDLED ->
    [SIGNED]) -> RESPONDED``. Every call reaches RESPONDED through exactly
    one of UNSUPPORTED or HANDLED.
    """

    RECEIVED = "received"
    CLASSIFIED = "classified"
    UNSUPPORTED = "unsupported"
    DISPATCHED = "dispatched"
    HANDLED = "handled"
    SIGNED = "signed"
    RESPONDED = "responded"


@dataclass(frozen=True)
class Instruction:
    """Instruction text as given by the caller and the action it routes to.

    Attributes:
        text: The raw instruction, unmodified.
        action: Resolved handler tag, or None before classification.
    """

    text: str
    action: Optional[Action] = None

    @property
    def normalized(self) -> str:
        """Lowercased text used for keyword matching."""
        return self.text.lower()


# =============================================================================
# Instruction Classifier
# =============================================================================


class InstructionClassifier:
    """Routes instructions to one of an agent's enabled actions.

    The classifier keeps the rules of its agent kind in table order and
    drops rules for actions the agent's configuration does not enable, so
    the advertised capabilities and the routable actions always agree.

    Attributes:
        kind: Agent kind whose rules are used.
        rules: The enabled rules, in precedence order.

    Example:
        >>> classifier = InstructionClassifier(AgentKind.DEFI, [Action.SWAP_TOKENS])
        >>> classifier.classify("Swap 1 SOL to USDC").action
        <Action.SWAP_TOKENS: 'swap_tokens'>
    """

    def __init__(
        self,
        kind: AgentKind,
        enabled_actions: Iterable[Action],
        table: Optional[RuleTable] = None,
    ) -> None:
        """Initialize the classifier.

        Args:
            kind: Agent kind whose rules apply.
            enabled_actions: Actions the agent's configuration supports.
            table: Rule table to use; defaults to the packaged table.

        Raises:
            AgentConfigurationError: If no rule survives filtering.
        """
        self.kind = kind
        enabled = frozenset(enabled_actions)
        table = table if table is not None else get_rule_table()
        self.rules: tuple[KeywordRule, ...] = tuple(
            rule for rule in table.rules_for(kind) if rule.action in enabled
        )
        if not self.rules:
            raise AgentConfigurationError(
                f"No routable actions for {kind.value} agent",
                agent_kind=kind.value,
            )

    @property
    def capabilities(self) -> list[str]:
        """Capability labels of the enabled rules, in rule order."""
        return [rule.capability for rule in self.rules]

    @property
    def actions(self) -> tuple[Action, ...]:
        """Routable actions, in rule order."""
        return tuple(rule.action for rule in self.rules)

    def match(self, text: str) -> Optional[KeywordRule]:
        """Return the first matching rule, or None."""
        normalized = text.lower()
        for rule in self.rules:
            if rule.matches(normalized):
                return rule
        return None

    def classify(self, text: str) -> Instruction:
        """Classify instruction text.

        Args:
            text: Raw instruction text.

        Returns:
            Instruction carrying the resolved action.

        Raises:
            ClassificationError: If no enabled rule matches.
        """
        rule = self.match(text) if text and text.strip() else None
        if rule is None:
            logger.debug(f"[{self.kind.value}] no rule matched: {text!r}")
            raise ClassificationError(text, agent_kind=self.kind.value)

        logger.debug(f"[{self.kind.value}] classified as {rule.action.value}: {text!r}")
        return Instruction(text=text, action=rule.action)


__all__ = [
    "Instruction",
    "InstructionStage",
    "InstructionClassifier",
]
