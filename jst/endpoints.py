"""Endpoint registry: the fixed mainnet and testnet block-engine lists."""

from jst.models import Endpoint

_MAINNET: tuple[Endpoint, ...] = (
    Endpoint("🇯🇵 Tokyo", "https://tokyo.mainnet.block-engine.jito.wtf"),
    Endpoint("🌐 Mainnet", "https://mainnet.block-engine.jito.wtf"),
    Endpoint("🇳🇱 Amsterdam", "https://amsterdam.mainnet.block-engine.jito.wtf"),
    Endpoint("🇩🇪 Frankfurt", "https://frankfurt.mainnet.block-engine.jito.wtf"),
    Endpoint("🇬🇧 London", "https://london.mainnet.block-engine.jito.wtf"),
    Endpoint("🇺🇸 New York", "https://ny.mainnet.block-engine.jito.wtf"),
    Endpoint("🇺🇸 Salt Lake City", "https://slc.mainnet.block-engine.jito.wtf"),
    Endpoint("🇸🇬 Singapore", "https://singapore.mainnet.block-engine.jito.wtf"),
)

_TESTNET: tuple[Endpoint, ...] = (
    Endpoint("🌍 Testnet", "https://testnet.block-engine.jito.wtf"),
    Endpoint("🇺🇸 Dallas (Testnet)", "https://dallas.testnet.block-engine.jito.wtf"),
    Endpoint("🇺🇸 New York (Testnet)", "https://ny.testnet.block-engine.jito.wtf"),
)

_REGISTRY: dict[str, tuple[Endpoint, ...]] = {
    "mainnet": _MAINNET,
    "testnet": _TESTNET,
}


def get_endpoints(network: str) -> list[Endpoint]:
    """Return the endpoints of the *network* profile, in registry order.

    Args:
        network: Profile name (``"mainnet"`` or ``"testnet"``).

    Returns:
        A fresh list of ``Endpoint`` values.

    Raises:
        ValueError: If *network* is not a known profile.
    """
    endpoints = _REGISTRY.get(network)
    if endpoints is None:
        known = ", ".join(registered_networks())
        raise ValueError(f"Unknown network {network!r}. Known networks: {known}")
    return list(endpoints)


def registered_networks() -> list[str]:
    """Return a sorted list of all profile names."""
    return sorted(_REGISTRY)
