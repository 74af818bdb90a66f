"""Context definition loading for mcp-agents.

A context definition is a small JSON document describing a domain an
agent operates in (its keywords and reference documents). The
ContextRouter loads every ``*.json`` file in a directory once, validates
it, and indexes it by domain. Loading must complete before an agent is
built on top of the router; it fails fast on the first bad file.

Context File Format:
    {
        "name": "jupiter-swaps",
        "domain": "defi",
        "description": "Token swaps through the Jupiter aggregator",
        "keywords": ["swap", "jupiter"],
        "documents": ["https://station.jup.ag/docs"]
    }

Example:
    >>> router = ContextRouter()
    >>> router.load_contexts("contexts")
    >>> [c.name for c in router.contexts_for("defi")]
    ['jupiter-swaps']
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from mcp_agents.config.settings import get_settings
from mcp_agents.core.exceptions import ConfigurationError, ContextLoadError


# =============================================================================
# Module Logger
# =============================================================================

logger = logging.getLogger(__name__)


# =============================================================================
# Context Definition
# =============================================================================


class ContextDefinition(BaseModel):
    """A validated context definition file.

    Attributes:
        name: Unique context name.
        domain: Agent kind the context belongs to (e.g. ``defi``).
        description: Human-readable summary.
        keywords: Lowercased keywords associated with the domain.
        documents: Reference documents or URLs.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    domain: str = Field(min_length=1)
    description: str = ""
    keywords: tuple[str, ...] = ()
    documents: tuple[str, ...] = ()

    @field_validator("name", "domain")
    @classmethod
    def strip_required(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        return v.lower()

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(kw.strip().lower() for kw in v if kw.strip())


# =============================================================================
# Context Router
# =============================================================================


class ContextRouter:
    """Loads and indexes context definitions by domain.

    Attributes:
        directory: Directory the contexts were loaded from, once loaded.
    """

    def __init__(self) -> None:
        self.directory: Optional[Path] = None
        self._contexts: dict[str, ContextDefinition] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        """Whether ``load_contexts`` has completed successfully."""
        return self._loaded

    def load_contexts(self, directory: Optional[Union[str, Path]] = None) -> None:
        """Load every ``*.json`` context definition in a directory.

        Files are read in name order. Loading is all-or-nothing: on any
        error the router keeps its previous state.

        Args:
            directory: Directory to scan. Defaults to
                ``settings.contexts.contexts_dir``.

        Raises:
            ContextLoadError: If the directory does not exist, a file cannot
                be read or parsed, or two files declare the same name.
        """
        path = Path(directory) if directory is not None else get_settings().contexts.contexts_dir
        if not path.is_dir():
            raise ContextLoadError(f"Context directory not found: {path}", path=str(path))

        contexts: dict[str, ContextDefinition] = {}
        for file_path in sorted(path.glob("*.json")):
            definition = self._load_file(file_path)
            if definition.name in contexts:
                raise ContextLoadError(
                    f"Duplicate context name '{definition.name}'",
                    path=str(file_path),
                )
            contexts[definition.name] = definition

        self._contexts = contexts
        self.directory = path
        self._loaded = True
        logger.info(f"Loaded {len(contexts)} context definitions from {path}")

    @staticmethod
    def _load_file(file_path: Path) -> ContextDefinition:
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ContextLoadError(f"Cannot read context file: {e}", path=str(file_path)) from e
        except json.JSONDecodeError as e:
            raise ContextLoadError(
                f"Context file is not valid JSON: {e}", path=str(file_path)
            ) from e

        try:
            return ContextDefinition.model_validate(raw)
        except ValidationError as e:
            raise ContextLoadError(
                f"Invalid context definition in {file_path.name}",
                path=str(file_path),
                validation_details=str(e),
            ) from e

    def require_loaded(self) -> None:
        """Raise ConfigurationError unless contexts have been loaded."""
        if not self._loaded:
            raise ConfigurationError(
                "Context router must load contexts before agents use it",
                config_key="contexts",
            )

    def get(self, name: str) -> Optional[ContextDefinition]:
        """Look up a context by name."""
        return self._contexts.get(name)

    def contexts_for(self, domain: str) -> list[ContextDefinition]:
        """Contexts of one domain, in load order."""
        key = domain.lower()
        return [c for c in self._contexts.values() if c.domain == key]

    def __len__(self) -> int:
        return len(self._contexts)


__all__ = ["ContextDefinition", "ContextRouter"]
