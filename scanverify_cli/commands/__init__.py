"""
CLI command modules.
"""

from scanverify_cli.commands import verify

__all__ = ["verify"]
