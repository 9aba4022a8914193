import logging

from wfc_hotspotd.config import NetworkConfig
from wfc_hotspotd.engine import commands

log = logging.getLogger("wfc_hotspotd.engine.netconf")


def configure_ap_iface(cfg: NetworkConfig) -> None:
    """
    Bring the AP interface up with exactly one address, <prefix>.1/24.
    Flushing first makes repeated runs converge on the same state.
    """
    ip = commands.binary("ip")
    iface = cfg.ap_iface
    log.info("*** Assigning IP address %s to interface %s ***", cfg.ap_ip, iface, extra={"op": "netconf", "iface": iface})
    commands.run([ip, "link", "set", "dev", iface, "up"])
    commands.run([ip, "addr", "flush", "dev", iface])
    commands.run([ip, "addr", "add", cfg.ap_cidr, "dev", iface])
