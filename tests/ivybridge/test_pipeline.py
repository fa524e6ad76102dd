"""
End-to-end tests of the pipeline, the configuration and the command line.
"""

import argparse
import logging

import pytest

from ivybridge import (
    BridgeConfig,
    BuildSession,
    ConfigurationError,
    PipelineState,
    ResolutionError,
    run_pipeline,
)
from ivybridge.__main__ import build_config, main
from ivybridge.artifact_models import ArtifactCoordinates
from ivybridge.resolution import IvyArtifactResolver, LocalRepositoryArtifactResolver
from tests.test_utils import FakeEngine, create_ivy_repository, make_report, write_file


@pytest.fixture
def repository(tmp_path):
    return create_ivy_repository(tmp_path)


@pytest.fixture
def session(tmp_path):
    return BuildSession(LocalRepositoryArtifactResolver(tmp_path / "m2"))


def engine_factory(engine):
    calls = []

    def factory(settings_url):
        calls.append(settings_url)
        return engine

    factory.calls = calls
    return factory


class TestRunPipeline:
    """Tests for run_pipeline."""

    def test_settings_are_required(self, session):
        """Test that nothing runs without Ivy settings."""
        factory = engine_factory(FakeEngine())
        with pytest.raises(ConfigurationError):
            run_pipeline(BridgeConfig(manifest_path="ivy.xml", scope="compile"), session, factory)
        assert factory.calls == []
        assert isinstance(session.artifact_resolver, LocalRepositoryArtifactResolver)

    def test_only_installs_resolver_without_scope_or_dir(self, repository, session, caplog):
        """Test that without scope or directory only the resolver is installed."""
        caplog.set_level(logging.INFO, logger="ivybridge")
        previous = session.artifact_resolver
        engine = FakeEngine()
        config = BridgeConfig(settings_path=str(repository.settings_path), manifest_path=str(repository.manifest_path))

        result = run_pipeline(config, session, engine_factory(engine))

        assert result.state == PipelineState.RESOLVER_INSTALLED
        assert result.artifacts == []
        assert engine.resolve_calls == []
        assert isinstance(session.artifact_resolver, IvyArtifactResolver)
        assert session.artifact_resolver.delegate is previous
        assert session.resolved_artifacts == set()
        assert [r.getMessage() for r in caplog.records] == [
            f"Added Ivy artifacts resolver based on \"{repository.settings_path.as_uri()}\""
        ]

    def test_manifest_into_scope(self, repository, session, tmp_path):
        """Test resolving an Ivy file into a scope."""
        engine = FakeEngine([
            make_report(write_file(tmp_path / "a-1.0.jar"), module="a", artifact_name="a"),
            make_report(write_file(tmp_path / "b-1.0.jar"), module="b", artifact_name="b"),
        ])
        config = BridgeConfig(
            settings_path=str(repository.settings_path), manifest_path=str(repository.manifest_path), scope="test"
        )

        result = run_pipeline(config, session, engine_factory(engine))

        assert result.state == PipelineState.MATERIALIZED
        assert len(session.resolved_artifacts) == 2
        assert {a.scope for a in session.resolved_artifacts} == {"test"}
        assert result.files_copied == {}

    def test_inline_dependencies_into_directory(self, repository, session, tmp_path):
        """Test copying inline dependencies to a directory."""
        m2 = tmp_path / "m2"
        for name in ("x", "y", "z"):
            write_file(m2 / "org" / "example" / name / "1.0" / f"{name}-1.0.jar", name)
        target = tmp_path / "lib"
        config = BridgeConfig(
            settings_path=str(repository.settings_path),
            dependencies=["org.example:x:1.0", "org.example:y:1.0", "org.example:z:1.0"],
            target_dir=target,
        )

        result = run_pipeline(config, session)

        assert sorted(p.name for p in target.iterdir()) == ["x-1.0.jar", "y-1.0.jar", "z-1.0.jar"]
        assert len(result.files_copied) == 3
        assert session.resolved_artifacts == set()

    def test_zero_artifacts_fails_after_installing_resolver(self, repository, session):
        """Test that an empty resolution fails but leaves the resolver installed."""
        config = BridgeConfig(
            settings_path=str(repository.settings_path), manifest_path=str(repository.manifest_path), scope="test"
        )
        with pytest.raises(ResolutionError):
            run_pipeline(config, session, engine_factory(FakeEngine([])))
        assert isinstance(session.artifact_resolver, IvyArtifactResolver)
        assert session.resolved_artifacts == set()

    def test_scope_and_directory_from_filesystem_repository(self, repository, session, tmp_path):
        """Test a full run against a filesystem Ivy repository."""
        config = BridgeConfig(
            settings_path=str(repository.settings_path),
            manifest_path=str(repository.manifest_path),
            dependencies=["ivy.org.example:core:1.0:jar:core/annotations"],
            scope="compile",
            target_dir=tmp_path / "lib",
        )

        result = run_pipeline(config, session)

        assert [str(a) for a in result.artifacts] == [
            "ivy.org.example:core:jar:core:1.0",
            "ivy.org.example:core:jar:core/annotations:1.0",
            "ivy.org.example:util:jar:util:2.0",
            "ivy.org.example:core:jar:core/annotations:1.0",
        ]
        assert len(session.resolved_artifacts) == 3
        assert sorted(p.name for p in (tmp_path / "lib").iterdir()) == [
            "annotations-1.0.jar",
            "core-1.0.jar",
            "util-2.0.jar",
        ]

    def test_installed_resolver_serves_later_resolutions(self, repository, session):
        """Test that the installed resolver answers later lookups."""
        run_pipeline(BridgeConfig(settings_path=str(repository.settings_path)), session)
        artifact = session.artifact_resolver.resolve_artifact(
            ArtifactCoordinates(group_id="ivy.org.example", artifact_id="util", version="2.0")
        )
        assert artifact.local_file.name == "util-2.0.jar"


class TestBridgeConfig:
    """Tests for BridgeConfig."""

    def test_from_dict_camel_case(self):
        """Test loading a config from camelCase keys."""
        config = BridgeConfig.from_dict({
            "settingsPath": "ivysettings.xml",
            "targetDir": "lib",
            "dependencies": [{"groupId": "org.example", "artifactId": "a", "version": "1.0"}, "org.example:b:2.0"],
        })
        assert config.settings_path == "ivysettings.xml"
        assert str(config.target_dir) == "lib"
        assert [d.artifact_id for d in config.dependencies] == ["a", "b"]
        assert config.verbose is False

    def test_blank_values_are_absent(self):
        """Test that blank config values count as absent."""
        config = BridgeConfig.from_dict({"settingsPath": " ", "scope": ""})
        assert config.settings_path is None
        assert config.scope is None

    def test_invalid_dependency_fails(self):
        """Test that an incomplete dependency is a configuration error."""
        with pytest.raises(ConfigurationError):
            BridgeConfig.from_dict({"dependencies": [{"groupId": "org.example"}]})

    def test_from_toml_resolves_relative_paths(self, tmp_path):
        """Test that TOML paths are relative to the TOML file."""
        path = write_file(tmp_path / "build.toml", "\n".join([
            "[ivybridge]",
            "settingsPath = \"conf/ivysettings.xml\"",
            "manifestPath = \"jar:file:/opt/conf.jar!/ivy.xml\"",
            "targetDir = \"lib\"",
            "scope = \"compile\"",
            "dependencies = [\"org.example:a:1.0\"]",
        ]))

        config = BridgeConfig.from_toml(path)

        assert config.settings_path == str(tmp_path / "conf" / "ivysettings.xml")
        assert config.manifest_path == "jar:file:/opt/conf.jar!/ivy.xml"
        assert config.target_dir == tmp_path / "lib"
        assert config.scope == "compile"

    def test_from_toml_without_table_fails(self, tmp_path):
        """Test that a TOML file needs an [ivybridge] table."""
        with pytest.raises(ConfigurationError):
            BridgeConfig.from_toml(write_file(tmp_path / "build.toml", "[other]\n"))


class TestMain:
    """Tests for the command line."""

    def test_prints_scoped_files(self, repository, tmp_path, capsys):
        """Test that the scoped files are printed as a classpath."""
        code = main([
            "--settings", str(repository.settings_path),
            "--manifest", str(repository.manifest_path),
            "--scope", "compile",
            "--local-repository", str(tmp_path / "m2"),
        ])

        assert code == 0
        printed = capsys.readouterr().out.strip().split(":")
        assert [p.rsplit("/", 1)[-1] for p in printed] == ["core-1.0.jar", "annotations-1.0.jar", "util-2.0.jar"]

    def test_blank_arguments_are_absent(self):
        """Test that blank command line values get the same treatment as blank configuration values."""
        parsed_args = argparse.Namespace(
            config=None, settings="ivysettings.xml", manifest=None, dependency=None,
            scope=" ", dir="  ", local_repository=None, verbose=False,
        )

        config = build_config(parsed_args)

        assert config.settings_path == "ivysettings.xml"
        assert config.scope is None
        assert config.target_dir is None

    def test_blank_scope_only_installs_resolver(self, repository, tmp_path, capsys):
        """Test that a blank scope resolves and registers nothing."""
        code = main([
            "--settings", str(repository.settings_path),
            "--manifest", str(repository.manifest_path),
            "--scope", " ",
            "--local-repository", str(tmp_path / "m2"),
        ])

        assert code == 0
        assert capsys.readouterr().out == ""

    def test_missing_settings_fails(self, capsys):
        """Test that a missing settings path exits with an error."""
        assert main(["--scope", "compile"]) == 1
        assert "settingsPath" in capsys.readouterr().err
