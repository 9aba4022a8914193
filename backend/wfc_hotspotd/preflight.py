from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple

from wfc_hotspotd.config import NetworkConfig
from wfc_hotspotd.engine import commands
from wfc_hotspotd.errors import CommandError, HostEnvironmentError

log = logging.getLogger("wfc_hotspotd.preflight")

# Any well-known public address works; only the chosen route matters.
ROUTE_PROBE_TARGET = "1.1.1.1"

# (binary, env override key)
REQUIRED_BINARIES: Tuple[Tuple[str, Optional[str]], ...] = (
    ("ip", None),
    ("sysctl", None),
    ("iptables", None),
    ("dnsmasq", "DNSMASQ"),
    ("hostapd", "HOSTAPD"),
)

_ROUTE_DEV_RE = re.compile(r"\bdev\s+(\S+)")

NO_INTERNET_MSG = "You don't appear to be connected to the internet. Check your connection and try again."


def check_required_binaries(
    names: Iterable[Tuple[str, Optional[str]]] = REQUIRED_BINARIES,
) -> Dict[str, str]:
    found: Dict[str, str] = {}
    missing: List[str] = []
    for name, env_key in names:
        path = commands.resolve_binary(name, env_key)
        if path:
            found[name] = path
        else:
            missing.append(name)
    if missing:
        raise HostEnvironmentError(f"Required programs not found: {', '.join(missing)}")
    log.debug("binaries: %s", found)
    return found


def parse_route_dev(text: str) -> Optional[str]:
    """
    Pull the outbound device out of `ip route get` output, e.g.
    "1.1.1.1 via 192.168.1.1 dev eth0 src 192.168.1.20 uid 0".
    """
    m = _ROUTE_DEV_RE.search(text or "")
    if not m:
        return None
    return m.group(1)


def detect_internet_iface(target: str = ROUTE_PROBE_TARGET) -> str:
    try:
        _, out = commands.run([commands.binary("ip"), "route", "get", target], check=True)
    except CommandError as exc:
        log.debug("route lookup failed: %s", exc)
        raise HostEnvironmentError(NO_INTERNET_MSG) from exc
    iface = parse_route_dev(out)
    if not iface:
        raise HostEnvironmentError(NO_INTERNET_MSG)
    log.debug("internet iface: %s", iface, extra={"op": "detect", "iface": iface})
    return iface


def check_iface_conflict(cfg: NetworkConfig, inet_iface: str) -> None:
    if cfg.ap_iface == inet_iface:
        raise HostEnvironmentError(f"Can't use {cfg.ap_iface} for both internet connection and a hotspot")
