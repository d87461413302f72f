"""
Chain Access Module

On-chain lookups used while building verification requests.
"""

from .registry import ProxyRegistryResolver, REGISTRY_ABI, ZERO_ADDRESS

__all__ = [
    "ProxyRegistryResolver",
    "REGISTRY_ABI",
    "ZERO_ADDRESS",
]
