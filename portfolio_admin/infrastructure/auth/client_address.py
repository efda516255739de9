# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from ipaddress import IPv4Network, IPv6Network, ip_address

from flask import Request, current_app, g, request

LOOPBACK_PLACEHOLDER = "127.0.0.1"

# Precedence when the peer is a trusted proxy
FORWARDED_HEADERS = ("X-Forwarded-For", "X-Real-IP", "CF-Connecting-IP")


def _is_trusted(peer: str | None, trusted: Sequence[IPv4Network | IPv6Network]) -> bool:
    if not peer or not trusted:
        return False
    try:
        addr = ip_address(peer)
    except ValueError:
        return False
    return any(addr in network for network in trusted)


def resolve_client_address(
    req: Request, trusted_proxies: Sequence[IPv4Network | IPv6Network] = ()
) -> str:
    """Source address used as the login limiter key.

    Forwarded headers can be forged by any direct client, so they are read
    only when the TCP peer is one of ``trusted_proxies``.
    """
    peer = req.remote_addr
    if _is_trusted(peer, trusted_proxies):
        for header in FORWARDED_HEADERS:
            value = req.headers.get(header, "")
            candidate = value.split(",")[0].strip()
            if candidate:
                return candidate
    return peer or LOOPBACK_PLACEHOLDER


def current_client_ip() -> str:
    """Client address for the active request, resolved once and cached on ``g``."""
    ip = getattr(g, "client_ip", None)
    if not ip:
        ip = resolve_client_address(request, current_app.config.get("TRUSTED_PROXIES", ()))
        g.client_ip = ip
    return ip


__all__ = [
    "FORWARDED_HEADERS",
    "LOOPBACK_PLACEHOLDER",
    "current_client_ip",
    "resolve_client_address",
]
