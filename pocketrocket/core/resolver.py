"""
Reuse-or-create decisions for the resources backing stack state.

The resolver only asks questions. Creating resources is left to the
orchestrator so this module never touches the cloud provider.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

from ..config.defaults import DEFAULT_REGION
from ..errors import InvalidAction, NoCandidatesAvailable
from ..prompts import Prompter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceKind:
    """Per-kind prompting strategy."""
    name: str
    label: str              # e.g. "s3 bucket", shown in questions
    select_label: str
    name_prompt: str
    asks_location: bool = False
    asks_prefix: bool = False


STORAGE = ResourceKind(
    name="storage",
    label="s3 bucket",
    select_label="Select bucket",
    name_prompt="Enter the bucket name",
    asks_location=True,
    asks_prefix=True,
)

ENCRYPTION_KEY = ResourceKind(
    name="key",
    label="kms key",
    select_label="Select key",
    name_prompt="Enter the key name",
)

RESOURCE_KINDS: Dict[str, ResourceKind] = {
    kind.name: kind for kind in (STORAGE, ENCRYPTION_KEY)
}


@dataclass(frozen=True)
class Candidate:
    """An existing resource that may be reused."""
    identifier: str
    label: Optional[str] = None

    @property
    def display(self) -> str:
        if self.label and self.label != self.identifier:
            return f"{self.label} ({self.identifier})"
        return self.identifier


@dataclass(frozen=True)
class Reuse:
    identifier: str
    prefix: str = ""


@dataclass(frozen=True)
class CreateNew:
    name: str
    location_hint: Optional[str] = None


ResourceChoice = Union[Reuse, CreateNew]


class ResourceResolver:
    """
    Decide, per resource kind, whether to reuse an existing resource
    or create a new one, and collect what creation needs.
    """

    def __init__(self, prompter: Prompter, default_region: str = DEFAULT_REGION):
        self.prompter = prompter
        self.default_region = default_region or DEFAULT_REGION

    def wants_reuse(self, kind: ResourceKind) -> bool:
        """Ask whether an existing resource of this kind should be used."""
        return self.prompter.confirm(f"Use existing {kind.label} for infra state?")

    def resolve(
        self,
        kind: ResourceKind,
        candidates: Sequence[Candidate],
        reuse: bool,
    ) -> ResourceChoice:
        """
        Resolve one resource kind.

        Args:
            kind: The resource kind being resolved
            candidates: Existing resources, in provider order
            reuse: True to pick among candidates, False to create

        Raises:
            NoCandidatesAvailable: reuse requested with no candidates
            InvalidAction: the prompter returned something not offered
        """
        if reuse:
            return self._select(kind, candidates)
        return self._collect(kind)

    def _select(self, kind: ResourceKind, candidates: Sequence[Candidate]) -> Reuse:
        if not candidates:
            raise NoCandidatesAvailable(kind.label)

        options = [candidate.display for candidate in candidates]
        picked = self.prompter.choose(kind.select_label, options)

        # first match wins when two candidates render the same
        selected = next((c for c in candidates if c.display == picked), None)
        if selected is None:
            raise InvalidAction(picked)

        prefix = ""
        if kind.asks_prefix:
            prefix = self.prompter.ask(f"Specify {kind.label} prefix")

        logger.info(f"Reusing {kind.label}: {selected.identifier}")
        return Reuse(identifier=selected.identifier, prefix=prefix)

    def _collect(self, kind: ResourceKind) -> CreateNew:
        name = self.prompter.ask(kind.name_prompt)

        location = None
        if kind.asks_location:
            location = self.prompter.ask(
                f"Enter the {kind.label} region", default=self.default_region
            ) or self.default_region

        logger.info(f"Creating new {kind.label}: '{name}'")
        return CreateNew(name=name, location_hint=location)
