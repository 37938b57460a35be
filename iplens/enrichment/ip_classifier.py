"""
Bogon address classifier

A bogon is an address that is not valid on the public internet: private,
loopback, link-local, documentation, multicast and other reserved ranges,
plus their IPv6 analogues and the 6to4/Teredo translations of the IPv4
ranges. Classification may produce false negatives, never false positives
on malformed input.
"""

import ipaddress
from typing import Optional, Union


IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


BOGON_V4_NETWORKS = tuple(ipaddress.IPv4Network(net) for net in (
    '0.0.0.0/8',
    '10.0.0.0/8',
    '100.64.0.0/10',
    '127.0.0.0/8',
    '169.254.0.0/16',
    '172.16.0.0/12',
    '192.0.0.0/24',
    '192.0.2.0/24',
    '192.168.0.0/16',
    '198.18.0.0/15',
    '198.51.100.0/24',
    '203.0.113.0/24',
    '224.0.0.0/4',
    '240.0.0.0/4',
    '255.255.255.255/32',
))

BOGON_V6_NETWORKS = tuple(ipaddress.IPv6Network(net) for net in (
    '::/128',
    '::1/128',
    '::ffff:0:0/96',
    '::/96',
    '100::/64',
    '2001:10::/28',
    '2001:db8::/32',
    'fc00::/7',
    'fe80::/10',
    'fec0::/10',
    'ff00::/8',
    # 6to4
    '2002::/24',
    '2002:a00::/24',
    '2002:7f00::/24',
    '2002:a9fe::/32',
    '2002:ac10::/28',
    '2002:c000::/40',
    '2002:c000:200::/40',
    '2002:c0a8::/32',
    '2002:c612::/31',
    '2002:c633:6400::/40',
    '2002:cb00:7100::/40',
    '2002:e000::/20',
    '2002:f000::/20',
    '2002:ffff:ffff::/48',
    # Teredo
    '2001::/40',
    '2001:0:a00::/40',
    '2001:0:7f00::/40',
    '2001:0:a9fe::/48',
    '2001:0:ac10::/44',
    '2001:0:c000::/56',
    '2001:0:c000:200::/56',
    '2001:0:c0a8::/48',
    '2001:0:c612::/47',
    '2001:0:c633:6400::/56',
    '2001:0:cb00:7100::/56',
    '2001:0:e000::/36',
    '2001:0:f000::/36',
    '2001:0:ffff:ffff::/64',
))


def _parse(ip: str) -> Optional[IPAddress]:
    if not ip:
        return None
    try:
        return ipaddress.ip_address(ip)
    except ValueError:
        return None


class BogonClassifier:
    """Containment tests against the fixed bogon range lists"""

    @classmethod
    def network_for_addr(cls, addr: IPAddress) -> Optional[IPNetwork]:
        """Return the first bogon range containing addr, or None"""
        networks = BOGON_V4_NETWORKS if addr.version == 4 else BOGON_V6_NETWORKS
        for network in networks:
            if addr in network:
                return network
        return None

    @classmethod
    def network_for(cls, ip: str) -> Optional[IPNetwork]:
        """
        Return the bogon range an address falls in.

        Args:
            ip: IPv4 or IPv6 address string

        Returns:
            Matching network, or None for public or unparseable input
        """
        addr = _parse(ip)
        if addr is None:
            return None
        return cls.network_for_addr(addr)


def is_bogon_addr(addr: IPAddress) -> bool:
    """Check whether an already parsed address is a bogon"""
    return BogonClassifier.network_for_addr(addr) is not None


def is_bogon(ip: str) -> bool:
    """Check whether an address string is a bogon; False when unparseable"""
    addr = _parse(ip)
    return addr is not None and is_bogon_addr(addr)
