"""
Results of optional post-processing steps.

Cover and table-of-contents merging never fail the build. They report
either ``Enriched`` with the new artifact or ``Unchanged`` with the
original artifact and the reason the step was skipped.
"""

from dataclasses import dataclass
from typing import Union

from blueprint.core.artifacts import Artifact


@dataclass(frozen=True)
class Enriched:
    artifact: Artifact

    @property
    def changed(self) -> bool:
        return True


@dataclass(frozen=True)
class Unchanged:
    artifact: Artifact
    reason: str

    @property
    def changed(self) -> bool:
        return False


EnrichmentResult = Union[Enriched, Unchanged]
