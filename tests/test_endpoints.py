"""Tests for the endpoint registry."""

from urllib.parse import urlsplit

import pytest

from jst.endpoints import get_endpoints, registered_networks
from jst.models import Endpoint


class TestMainnet:
    """The mainnet profile."""

    def test_has_eight_endpoints(self) -> None:
        assert len(get_endpoints("mainnet")) == 8

    def test_registry_order(self) -> None:
        names = [e.name for e in get_endpoints("mainnet")]
        assert names == [
            "🇯🇵 Tokyo",
            "🌐 Mainnet",
            "🇳🇱 Amsterdam",
            "🇩🇪 Frankfurt",
            "🇬🇧 London",
            "🇺🇸 New York",
            "🇺🇸 Salt Lake City",
            "🇸🇬 Singapore",
        ]

    def test_global_endpoint_url(self) -> None:
        urls = [e.url for e in get_endpoints("mainnet")]
        assert "https://mainnet.block-engine.jito.wtf" in urls


class TestTestnet:
    """The testnet profile."""

    def test_has_three_endpoints(self) -> None:
        assert len(get_endpoints("testnet")) == 3

    def test_registry_order(self) -> None:
        names = [e.name for e in get_endpoints("testnet")]
        assert names == ["🌍 Testnet", "🇺🇸 Dallas (Testnet)", "🇺🇸 New York (Testnet)"]

    def test_no_overlap_with_mainnet(self) -> None:
        mainnet = {e.url for e in get_endpoints("mainnet")}
        testnet = {e.url for e in get_endpoints("testnet")}
        assert mainnet.isdisjoint(testnet)


class TestGetEndpoints:
    """General registry behaviour."""

    @pytest.mark.parametrize("network", ["mainnet", "testnet"])
    def test_stable_across_calls(self, network: str) -> None:
        assert get_endpoints(network) == get_endpoints(network)

    @pytest.mark.parametrize("network", ["mainnet", "testnet"])
    def test_returns_fresh_list(self, network: str) -> None:
        first = get_endpoints(network)
        first.clear()
        assert get_endpoints(network) != []

    @pytest.mark.parametrize("network", ["mainnet", "testnet"])
    def test_urls_are_bare_https_origins(self, network: str) -> None:
        for endpoint in get_endpoints(network):
            assert isinstance(endpoint, Endpoint)
            parts = urlsplit(endpoint.url)
            assert parts.scheme == "https"
            assert parts.path == ""
            assert parts.netloc.endswith(".block-engine.jito.wtf")

    def test_unknown_network_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown network 'devnet'"):
            get_endpoints("devnet")

    def test_error_lists_known_networks(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            get_endpoints("devnet")
        msg = str(exc_info.value)
        assert "mainnet" in msg
        assert "testnet" in msg


class TestRegisteredNetworks:
    """registered_networks() returns sorted profile names."""

    def test_names(self) -> None:
        assert registered_networks() == ["mainnet", "testnet"]
