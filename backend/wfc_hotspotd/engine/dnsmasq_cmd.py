from typing import List, Optional

from wfc_hotspotd.config import NetworkConfig

STDIN_PATH = "/dev/stdin"


def build_resolv_conf(cfg: NetworkConfig) -> Optional[str]:
    """resolv.conf fed to dnsmasq on stdin; None means use the host's."""
    if not cfg.custom_dns:
        return None
    return f"nameserver {cfg.custom_dns}\n"


def build_dnsmasq_cmd(cfg: NetworkConfig, dnsmasq: str = "dnsmasq") -> List[str]:
    cmd: List[str] = [dnsmasq, "-d"]

    # log every DNS query
    if cfg.verbose:
        cmd += ["-q"]

    cmd += [
        "-i",
        cfg.ap_iface,
        "-G",
        cfg.ap_ip,
        "-F",
        f"{cfg.dhcp_range_start},{cfg.dhcp_range_end},{cfg.dhcp_lease_time}",
        "-l",
        cfg.lease_file,
    ]

    if cfg.custom_dns:
        cmd += ["-r", STDIN_PATH]

    return cmd
