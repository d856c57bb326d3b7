# tests/test_connectivity.py

"""Tests for the network reachability probe."""

import unittest
from unittest.mock import MagicMock, patch

from catalogue.services.connectivity import has_network_route


def _socket_with_address(address: str) -> MagicMock:
    sock = MagicMock()
    sock.__enter__.return_value = sock
    sock.getsockname.return_value = (address, 40000)
    return sock


@patch("catalogue.services.connectivity.socket.socket")
class TestHasNetworkRoute(unittest.TestCase):
    """Route lookup without sending traffic."""

    def test_route_available(self, mock_socket: MagicMock) -> None:
        mock_socket.return_value = _socket_with_address("192.168.1.20")
        self.assertTrue(has_network_route())

    def test_unreachable_network(self, mock_socket: MagicMock) -> None:
        sock = _socket_with_address("0.0.0.0")
        sock.connect.side_effect = OSError(101, "Network is unreachable")
        mock_socket.return_value = sock
        self.assertFalse(has_network_route())

    def test_unbound_local_address(self, mock_socket: MagicMock) -> None:
        mock_socket.return_value = _socket_with_address("0.0.0.0")
        self.assertFalse(has_network_route())

    def test_custom_probe_target(self, mock_socket: MagicMock) -> None:
        sock = _socket_with_address("10.0.0.2")
        mock_socket.return_value = sock
        has_network_route("1.1.1.1", 443)
        sock.connect.assert_called_once_with(("1.1.1.1", 443))


if __name__ == "__main__":
    unittest.main()
