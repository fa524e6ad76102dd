"""
The pipeline entry: installs the Ivy resolver strategy in a build session and, when asked,
resolves dependencies into a build scope and/or a directory.
"""

import dataclasses
import logging
import pathlib
from typing import Dict, List, Optional

from ivybridge.artifact_models import ResolvedArtifact, ScopedArtifact
from ivybridge.bridge_config import BridgeConfig
from ivybridge.bridge_exceptions import ConfigurationError
from ivybridge.bridge_logger import IvyBridgeLogger
from ivybridge.bridge_utils import UrlUtils
from ivybridge.build_session import BuildSession
from ivybridge.materialization import add_artifacts, copy_artifacts
from ivybridge.resolution import IvyArtifactResolver, ResolverContext, resolve_all_dependencies
from ivybridge.resolution_engine import EngineFactory, FileSystemEngine


class PipelineState:
    """Enumeration of pipeline states."""

    UNINITIALIZED = "uninitialized"
    RESOLVER_INSTALLED = "resolver_installed"
    MATERIALIZED = "materialized"


@dataclasses.dataclass
class PipelineResult:
    """
    What a pipeline run did.
    """

    state: str = PipelineState.UNINITIALIZED
    context: Optional[ResolverContext] = None
    artifacts: List[ResolvedArtifact] = dataclasses.field(default_factory=list)
    scoped_artifacts: List[ScopedArtifact] = dataclasses.field(default_factory=list)
    files_copied: Dict[ResolvedArtifact, pathlib.Path] = dataclasses.field(default_factory=dict)


def run_pipeline(
    config: BridgeConfig,
    session: BuildSession,
    engine_factory: EngineFactory = FileSystemEngine.from_settings,
    logger: Optional[IvyBridgeLogger] = None,
) -> PipelineResult:
    """
    Runs the pipeline against the build session given.

    1. Fails with ConfigurationError if no settings are configured
    2. Builds a resolver context from the settings and chains an IvyArtifactResolver in front of
       the session's active resolver
    3. Stops there if neither a scope nor a target directory is configured
    4. Otherwise resolves the manifest and inline dependencies, adds them to the scope, then
       copies them to the directory

    Args:
        config: Pipeline parameters
        session: Build session to install the resolver in and add scoped artifacts to
        engine_factory: Callable building the resolution engine from the settings URL
        logger: Logger for summary lines

    Returns:
        PipelineResult describing the run
    """
    logger = logger or IvyBridgeLogger()
    result = PipelineResult()

    if not config.settings_path:
        raise ConfigurationError("Resolver settings (\"settingsPath\") are required")

    settings_url = UrlUtils.to_url(config.settings_path)
    manifest_url = UrlUtils.to_url(config.manifest_path)

    context = ResolverContext.from_settings(settings_url, engine_factory, logger)
    session.install_artifact_resolver(IvyArtifactResolver(session.artifact_resolver, context, logger))
    logger.log(f"Added Ivy artifacts resolver based on \"{settings_url}\"", logging.INFO)
    result.state = PipelineState.RESOLVER_INSTALLED
    result.context = context

    if not (config.scope or config.target_dir):
        return result

    artifacts = resolve_all_dependencies(
        context,
        session.artifact_resolver,
        manifest_url,
        config.dependencies,
        logger,
        config.verbose,
    )
    result.artifacts = artifacts

    if config.scope:
        result.scoped_artifacts = add_artifacts(session, config.scope, artifacts, logger, config.verbose)
    if config.target_dir:
        result.files_copied = copy_artifacts(config.target_dir, artifacts, logger, config.verbose)

    result.state = PipelineState.MATERIALIZED
    return result
