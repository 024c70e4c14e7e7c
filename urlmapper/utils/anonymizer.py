"""Privacy-preserving client identity tokens for audit logging

Client addresses are masked *before* hashing, so a brute-force pass over the
(small) address space can only ever recover the masked network, never an
individual client.

Masking rules:
    - IPv4: the last octet is zeroed.
      192.168.123.50 -> 192.168.123.0
    - IPv6: only the first 3 groups (48 bits) are kept, the rest is zeroed.
      2001:db8:85a3:0:0:8a2e:370:7334 -> 2001:db8:85a3:0:0:0:0:0
      Addresses with fewer than 4 groups collapse to 0:0:0:0:0:0:0:0.
    - IPv4-mapped IPv6 addresses are masked as the IPv4 address they carry.
      ::ffff:10.1.2.3 -> 10.1.2.0
    - Anything that doesn't parse as an address is hashed as given.

The masked string is hashed with SHA-256 and truncated to 8 hex characters.
Tokens are never persisted with a mapping and never returned to clients.

Functions:
    anonymize_and_hash(raw_ip: str | None) -> str:
        Mask a raw client address and return its short audit token.

    mask_ip(ip: str) -> str:
        Apply the masking rules above.

Example:
    >>> from urlmapper.utils.anonymizer import anonymize_and_hash
    >>> anonymize_and_hash('192.168.123.50') == anonymize_and_hash('192.168.123.1')
    True
    >>> anonymize_and_hash(None)
    'unknown'
"""

import hashlib
import ipaddress

from urlmapper.constants import Anonymizer


def anonymize_and_hash(raw_ip: str | None) -> str:
    """Mask a raw client address and hash it into a short audit token.

    Args:
        raw_ip (str | None):
            Raw client address. May be IPv4, IPv6, empty, None or garbage.

    Returns:
        str: 8 hex characters, or 'unknown' for missing input and
             'hash-error' if the digest can't be computed.
    """
    if not raw_ip:
        return Anonymizer.UNKNOWN
    return _hash(mask_ip(raw_ip))


def mask_ip(ip: str) -> str:
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return ip

    if isinstance(address, ipaddress.IPv4Address):
        return _mask_ipv4(ip)
    # IPv4-mapped IPv6 addresses (::ffff:a.b.c.d) identify an IPv4 client
    if address.ipv4_mapped is not None:
        return _mask_ipv4(str(address.ipv4_mapped))
    return _mask_ipv6(ip)


def _mask_ipv4(ip: str) -> str:
    return ip[: ip.rindex('.')] + '.0'


def _mask_ipv6(ip: str) -> str:
    # Trailing empty groups ('a:b:c::') don't count as groups
    groups = ip.split(':')
    while groups and not groups[-1]:
        groups.pop()

    if len(groups) > 3:
        return ':'.join(groups[:3]) + ':0:0:0:0:0'
    return Anonymizer.ZEROED_IPV6


def _hash(value: str) -> str:
    try:
        digest = hashlib.new(Anonymizer.HASH_ALGORITHM, value.encode('utf-8'))
    except (ValueError, TypeError):
        return Anonymizer.HASH_ERROR
    return digest.hexdigest()[: Anonymizer.TOKEN_LENGTH]
