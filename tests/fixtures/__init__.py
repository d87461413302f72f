"""
Test fixtures package for scanverify tests.

This package provides factory functions for creating test objects:
- common.py: artifacts, options, explorer responses, scripted HTTP client

Usage:
    from fixtures.common import make_artifact, make_http, envelope

    def test_something():
        artifact = make_artifact("Token", network_id=None)
"""

from .common import (
    envelope,
    get_actions,
    json_response,
    make_artifact,
    make_artifact_dict,
    make_http,
    make_options,
    sourcecode_response,
    txlist_response,
    write_artifact,
)

__all__ = [
    "envelope",
    "get_actions",
    "json_response",
    "make_artifact",
    "make_artifact_dict",
    "make_http",
    "make_options",
    "sourcecode_response",
    "txlist_response",
    "write_artifact",
]
