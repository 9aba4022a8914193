import logging
import sys
from typing import List, Optional

from wfc_hotspotd import cli, preflight
from wfc_hotspotd.config import NetworkConfig
from wfc_hotspotd.engine import commands, firewall, netconf
from wfc_hotspotd.engine.dnsmasq_cmd import build_dnsmasq_cmd, build_resolv_conf
from wfc_hotspotd.engine.hostapd_cmd import build_hostapd_cmd, build_hostapd_conf
from wfc_hotspotd.engine.supervisor import ServiceSupervisor
from wfc_hotspotd.errors import ConfigurationError, HotspotError
from wfc_hotspotd.logging import setup_logging

log = logging.getLogger("wfc_hotspotd.main")


def _log_options(cfg: NetworkConfig) -> None:
    log.info("*** Specified Options: ***")
    log.info("  SSID:                   %s", cfg.ssid)
    log.info("  Access point interface: %s", cfg.ap_iface)
    log.info("  Custom DNS server:      %s", cfg.custom_dns or "none")
    log.info("  Verbose:                %s", "yes" if cfg.verbose else "no")


def build_supervisor(cfg: NetworkConfig) -> ServiceSupervisor:
    return ServiceSupervisor(
        dhcp_cmd=build_dnsmasq_cmd(cfg, commands.binary("dnsmasq", "DNSMASQ")),
        dhcp_input=build_resolv_conf(cfg),
        ap_cmd=build_hostapd_cmd(cfg, commands.binary("hostapd", "HOSTAPD")),
        ap_input=build_hostapd_conf(cfg),
        ap_banner=f"*** Creating access point on {cfg.ap_iface} with SSID '{cfg.ssid}' ***",
    )


def run(cfg: NetworkConfig) -> int:
    preflight.check_required_binaries()
    inet_iface = preflight.detect_internet_iface()
    preflight.check_iface_conflict(cfg, inet_iface)

    netconf.configure_ap_iface(cfg)
    firewall.configure_forwarding(cfg, inet_iface)

    supervisor = build_supervisor(cfg)
    return supervisor.run()


def main(argv: Optional[List[str]] = None) -> int:
    try:
        cfg = cli.parse_args(argv)
    except ConfigurationError as exc:
        # usage text is already on stdout
        return exc.exit_code

    setup_logging("DEBUG" if cfg.verbose else None)
    _log_options(cfg)

    try:
        return run(cfg)
    except HotspotError as exc:
        log.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        log.info("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
