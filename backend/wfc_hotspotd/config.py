import ipaddress
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from wfc_hotspotd.errors import ConfigurationError

DEFAULT_SSID = "NintendoWifi"
DEFAULT_AP_IFACE = "wlan1"
# 24-bit prefix of the hotspot subnet (clients get 192.168.69.x)
DEFAULT_IP_PREFIX = "192.168.69"

DHCP_LEASE_TIME = "12h"
DHCP_LEASE_FILE = "/tmp/dnsmasq.leases"


def validate_ip_prefix(prefix: str) -> str:
    raw = str(prefix or "").strip()
    try:
        net = ipaddress.IPv4Network(f"{raw}.0/24")
    except ValueError as exc:
        raise ConfigurationError(f"invalid_ip_prefix: {prefix!r}") from exc
    return ".".join(str(b) for b in net.network_address.packed[:3])


@dataclass(frozen=True)
class NetworkConfig:
    ssid: str = DEFAULT_SSID
    ap_iface: str = DEFAULT_AP_IFACE
    ip_prefix: str = DEFAULT_IP_PREFIX
    custom_dns: Optional[str] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "ip_prefix", validate_ip_prefix(self.ip_prefix))

    @property
    def ap_ip(self) -> str:
        return f"{self.ip_prefix}.1"

    @property
    def ap_cidr(self) -> str:
        return f"{self.ap_ip}/24"

    @property
    def dhcp_range_start(self) -> str:
        return f"{self.ip_prefix}.2"

    @property
    def dhcp_range_end(self) -> str:
        return f"{self.ip_prefix}.200"

    @property
    def dhcp_lease_time(self) -> str:
        return DHCP_LEASE_TIME

    @property
    def lease_file(self) -> str:
        return DHCP_LEASE_FILE

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
