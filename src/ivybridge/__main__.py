import argparse
import logging
import sys
from typing import List, Optional

from ivybridge.artifact_models import ArtifactDeclaration
from ivybridge.bridge_config import BridgeConfig
from ivybridge.bridge_exceptions import IvyBridgeException
from ivybridge.build_session import BuildSession
from ivybridge.pipeline import run_pipeline
from ivybridge.resolution import LocalRepositoryArtifactResolver


def build_config(parsed_args: argparse.Namespace) -> BridgeConfig:
    config = BridgeConfig.from_toml(parsed_args.config) if parsed_args.config else BridgeConfig()

    update = {}
    if parsed_args.settings:
        update["settings_path"] = parsed_args.settings
    if parsed_args.manifest:
        update["manifest_path"] = parsed_args.manifest
    if parsed_args.dependency:
        update["dependencies"] = list(config.dependencies) + [
            ArtifactDeclaration.from_string(d) for d in parsed_args.dependency
        ]
    if parsed_args.scope:
        update["scope"] = parsed_args.scope
    if parsed_args.dir:
        update["target_dir"] = parsed_args.dir
    if parsed_args.local_repository:
        update["local_repository"] = parsed_args.local_repository
    if parsed_args.verbose:
        update["verbose"] = True
    return BridgeConfig.from_dict({**config.model_dump(), **update})


def main(args: Optional[List[str]] = None) -> int:
    if args is None:
        args = sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="ivybridge",
        description="ivybridge: resolve Ivy and Maven-style dependencies into a scope or a directory"
    )
    parser.add_argument("--config", help="TOML file with an [ivybridge] table")
    parser.add_argument("--settings", help="Ivy settings: file path, file: or jar: URL")
    parser.add_argument("--manifest", help="Ivy file: file path, file: or jar: URL")
    parser.add_argument("--dependency", action="append", help="groupId:artifactId:version[:type[:classifier]], repeatable")
    parser.add_argument("--scope", help="Scope to add the dependencies resolved to")
    parser.add_argument("--dir", help="Directory to copy the dependencies resolved to")
    parser.add_argument("--local-repository", help="Maven-layout repository for non-Ivy dependencies")
    parser.add_argument("--verbose", action="store_true", help="Log every artifact resolved")

    parsed_args = parser.parse_args(args)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        config = build_config(parsed_args)
        session = BuildSession(LocalRepositoryArtifactResolver(config.local_repository))
        result = run_pipeline(config, session)
    except IvyBridgeException as e:
        print(f"ivybridge: {e.message}", file=sys.stderr)
        return 1

    if result.scoped_artifacts:
        print(":".join(str(a.local_file) for a in result.scoped_artifacts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
