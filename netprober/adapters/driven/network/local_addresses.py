"""Enumeration of the host's own IPv4 addresses, used for self-exclusion."""

import ipaddress
import logging
import socket

import psutil

__all__ = ["LocalAddressResolutionError", "resolve_local_addresses"]

logger = logging.getLogger(__name__)


class LocalAddressResolutionError(RuntimeError):
    """Network interfaces could not be enumerated."""


def resolve_local_addresses() -> frozenset[str]:
    """Return every non-loopback IPv4 address assigned to this host.

    Returns:
        Frozen set of dotted-quad addresses (may be empty).

    Raises:
        LocalAddressResolutionError: If interfaces cannot be listed.
    """
    try:
        interfaces_addrs = psutil.net_if_addrs()
    except (OSError, psutil.Error) as e:
        raise LocalAddressResolutionError(f"Unable to retrieve interfaces: {e}") from e

    addresses: set[str] = set()
    for iface_name, addrs in interfaces_addrs.items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            try:
                ip = ipaddress.IPv4Address(addr.address)
            except ValueError:
                logger.debug(f"Ignoring unparsable address {addr.address!r} on {iface_name}")
                continue
            if ip.is_loopback:
                continue
            addresses.add(str(ip))

    logger.info(f"Local addresses excluded from probing: {sorted(addresses) or '<none>'}")
    return frozenset(addresses)
