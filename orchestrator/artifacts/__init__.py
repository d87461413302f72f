"""
Module 03 - Artifact Loader

Reads build artifacts produced by the build tool.
"""

from orchestrator.artifacts.loader import artifact_path, load_artifact

__all__ = [
    "artifact_path",
    "load_artifact",
]
