"""
scanverify CLI

Command-line interface for block-explorer contract verification.

Usage:
    python -m scanverify_cli verify Token Vault --project scanverify.yaml
    python -m scanverify_cli verify all --network kovan --network-id 42
    python -m scanverify_cli networks
"""

__version__ = "0.1.0"
