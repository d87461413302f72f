"""
Proxy Registry Resolver

Looks up the proxy address registered for a contract name in an
on-chain name -> address registry. The web3 connection is created on
first use and owned by the resolver instance.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional


logger = logging.getLogger(__name__)


ZERO_ADDRESS = "0x" + "0" * 40

REGISTRY_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "identifier", "type": "string"}],
        "name": "getAddressForString",
        "outputs": [{"name": "", "type": "address"}],
        "payable": False,
        "stateMutability": "view",
        "type": "function",
    },
]


def _default_web3_factory(rpc_url: str) -> Any:
    from web3 import Web3
    return Web3(Web3.HTTPProvider(rpc_url))


class ProxyRegistryResolver:
    """
    Resolve proxy addresses through a registry contract.

    Resolution never raises: any failure (unreachable RPC, missing
    registration, bad address) is logged and reported as "no proxy".

    Usage:
        resolver = ProxyRegistryResolver(rpc_url, registry_address)
        proxy = resolver.resolve("GoldToken")  # address or None
    """

    def __init__(
        self,
        rpc_url: str,
        registry_address: str,
        *,
        web3_factory: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.registry_address = registry_address
        self._web3_factory = web3_factory or _default_web3_factory
        self._web3 = None
        self._registry = None

    def _get_registry(self) -> Any:
        """Lazy-load the web3 connection and registry contract."""
        if self._registry is None:
            self._web3 = self._web3_factory(self.rpc_url)
            address = self._web3.to_checksum_address(self.registry_address)
            self._registry = self._web3.eth.contract(address=address, abi=REGISTRY_ABI)
        return self._registry

    def resolve(self, contract_name: str) -> Optional[str]:
        """Return the proxy address registered under `contract_name`, or None."""
        try:
            registry = self._get_registry()
            address = registry.functions.getAddressForString(contract_name).call()
        except Exception as e:
            logger.warning(f"Proxy lookup for {contract_name} failed, continuing without proxy: {e}")
            return None

        if not address or str(address).lower() == ZERO_ADDRESS:
            logger.debug(f"No proxy registered for {contract_name}")
            return None
        return str(address)
