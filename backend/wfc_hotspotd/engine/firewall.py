import logging
from typing import List

from wfc_hotspotd.config import NetworkConfig
from wfc_hotspotd.engine import commands

log = logging.getLogger("wfc_hotspotd.engine.firewall")


def _sysctl_ip_forward() -> None:
    commands.run([commands.binary("sysctl"), "-w", "net.ipv4.ip_forward=1"])


def _iptables(rule: List[str]) -> str:
    _, out = commands.run([commands.binary("iptables")] + rule)
    return out


def masquerade_rule(inet_iface: str) -> List[str]:
    return ["-t", "nat", "-A", "POSTROUTING", "-o", inet_iface, "-j", "MASQUERADE"]


def forward_rule() -> List[str]:
    return ["-A", "FORWARD", "-p", "all", "-j", "ACCEPT"]


def dump_rules() -> str:
    return _iptables(["-L"])


def configure_forwarding(cfg: NetworkConfig, inet_iface: str) -> List[List[str]]:
    """
    Enable IPv4 forwarding and NAT everything from the hotspot out through
    inet_iface.

    NOTE: `iptables -F` drops every existing rule in the filter table, not just
    ones we added earlier.
    """
    log.info("*** Setting up routing tables ***", extra={"op": "firewall", "iface": inet_iface})
    _sysctl_ip_forward()
    _iptables(["-F"])

    rules = [masquerade_rule(inet_iface), forward_rule()]
    for rule in rules:
        _iptables(rule)

    if cfg.verbose:
        for line in dump_rules().splitlines():
            log.info("%s", line)
    return rules
