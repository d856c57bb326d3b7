# catalogue/services/connectivity.py

"""Network reachability signal consulted before each dispatch."""

import logging
import socket

from catalogue.config.settings import Settings

logger = logging.getLogger("catalogue.connectivity")


def has_network_route(
    host: str | None = None,
    port: int | None = None,
) -> bool:
    """Return True when the OS has a route towards *host*.

    Connecting a UDP socket only selects a route and a local address;
    no packet is sent, so this is safe to call before every request.
    """
    probe_host = host or Settings.CONNECTIVITY_PROBE_HOST
    probe_port = port or Settings.CONNECTIVITY_PROBE_PORT
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect((probe_host, probe_port))
            local_address = sock.getsockname()[0]
    except OSError as exc:
        logger.info("No network route to %s: %s", probe_host, exc)
        return False
    return not local_address.startswith("0.")
