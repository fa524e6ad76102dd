"""
Materialization of resolved artifacts: into a build scope, or into a directory.
"""

from .directory import copy_artifacts
from .scope import add_artifacts

__all__ = ["add_artifacts", "copy_artifacts"]
