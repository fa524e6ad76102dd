"""
The resolution engine contract.

ivybridge does not resolve dependency graphs itself: it hands manifests and
module revisions to an engine and consumes the reports it returns.
"""

from typing import Callable, Protocol, Sequence

from ivybridge.resolution_engine.report_models import ResolveReport

DEFAULT_CONF = "default"


class ResolutionEngine(Protocol):
    def resolve(self, manifest_url: str, confs: Sequence[str]) -> ResolveReport:
        """
        Resolves the dependencies a manifest declares for the configurations given.
        """
        ...

    def resolve_module(
        self, organisation: str, module: str, revision: str, confs: Sequence[str]
    ) -> ResolveReport:
        """
        Resolves the artifacts published by a single module revision.
        """
        ...


# Builds an engine from a settings URL
EngineFactory = Callable[[str], ResolutionEngine]
