"""
Network Registry

Built-in explorer endpoints keyed by network id. Projects can add or
override entries through the `verify.networks` section of their config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional


@dataclass(frozen=True)
class NetworkInfo:
    """Explorer endpoints for one network."""
    network_id: str
    name: str
    api_url: str
    explorer_url: str


_BUILTIN_NETWORKS: tuple[NetworkInfo, ...] = (
    NetworkInfo("1", "mainnet", "https://blockscout.com/eth/mainnet/api", "https://blockscout.com/eth/mainnet"),
    NetworkInfo("42", "kovan", "https://blockscout.com/eth/kovan/api", "https://blockscout.com/eth/kovan"),
    NetworkInfo("77", "sokol", "https://blockscout.com/poa/sokol/api", "https://blockscout.com/poa/sokol"),
    NetworkInfo("99", "poa", "https://blockscout.com/poa/core/api", "https://blockscout.com/poa/core"),
    NetworkInfo("100", "xdai", "https://blockscout.com/xdai/mainnet/api", "https://blockscout.com/xdai/mainnet"),
    NetworkInfo("42220", "celo", "https://explorer.celo.org/api", "https://explorer.celo.org"),
    NetworkInfo("44787", "alfajores", "https://explorer.celo.org/alfajores/api", "https://explorer.celo.org/alfajores"),
    NetworkInfo("62320", "baklava", "https://explorer.celo.org/baklava/api", "https://explorer.celo.org/baklava"),
)


class NetworkRegistry:
    """
    Lookup table of explorer endpoints.

    Usage:
        registry = NetworkRegistry.default()
        info = registry.get("42")
    """

    def __init__(self, networks: Iterable[NetworkInfo] = ()) -> None:
        self._networks: dict[str, NetworkInfo] = {}
        for info in networks:
            self.register(info)

    @classmethod
    def default(cls) -> "NetworkRegistry":
        """Registry holding the built-in networks."""
        return cls(_BUILTIN_NETWORKS)

    def register(self, info: NetworkInfo) -> None:
        """Add or replace a network entry."""
        self._networks[str(info.network_id)] = info

    def get(self, network_id: str | int) -> Optional[NetworkInfo]:
        return self._networks.get(str(network_id))

    def list(self) -> list[NetworkInfo]:
        """All entries, ordered by numeric network id."""
        return sorted(
            self._networks.values(),
            key=lambda n: (0, int(n.network_id)) if n.network_id.isdigit() else (1, n.network_id),
        )

    def with_overrides(self, overrides: Mapping[str, Any] | None) -> "NetworkRegistry":
        """
        Return a copy extended with entries from a config mapping.

        Each override is keyed by network id and must provide `api_url`
        and `explorer_url`; `name` is optional.
        """
        merged = NetworkRegistry(self._networks.values())
        for network_id, entry in (overrides or {}).items():
            if not isinstance(entry, Mapping):
                continue
            api_url = entry.get("api_url")
            explorer_url = entry.get("explorer_url")
            if not api_url or not explorer_url:
                continue
            merged.register(NetworkInfo(
                network_id=str(network_id),
                name=str(entry.get("name") or network_id),
                api_url=str(api_url),
                explorer_url=str(explorer_url),
            ))
        return merged

    def __contains__(self, network_id: object) -> bool:
        return str(network_id) in self._networks

    def __len__(self) -> int:
        return len(self._networks)
