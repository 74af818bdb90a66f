"""Routing layer for mcp-agents.

Maps instruction text to handler tags with ordered keyword rules and
provides the per-field extractors handlers use to read parameters.
"""

from mcp_agents.routing.classifier import (
    Instruction,
    InstructionClassifier,
    InstructionStage,
)
from mcp_agents.routing.extractors import Extracted
from mcp_agents.routing.rules import (
    KeywordRule,
    RuleTable,
    get_rule_table,
    load_rule_table,
)

__all__ = [
    "Instruction",
    "InstructionStage",
    "InstructionClassifier",
    "Extracted",
    "KeywordRule",
    "RuleTable",
    "get_rule_table",
    "load_rule_table",
]
