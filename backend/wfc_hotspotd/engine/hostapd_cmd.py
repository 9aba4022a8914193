from typing import List

from wfc_hotspotd.config import NetworkConfig

STDIN_PATH = "/dev/stdin"

# DS / Wii radios only do 802.11b/g; keep the network open and on channel 1.
HW_MODE = "g"
CHANNEL = 1


def build_hostapd_conf(cfg: NetworkConfig) -> str:
    lines = [
        f"interface={cfg.ap_iface}",
        f"ssid={cfg.ssid}",
        f"hw_mode={HW_MODE}",
        f"channel={CHANNEL}",
    ]
    return "\n".join(lines) + "\n"


def build_hostapd_cmd(cfg: NetworkConfig, hostapd: str = "hostapd") -> List[str]:
    debug_opt = "-dd" if cfg.verbose else "-d"
    return [hostapd, debug_opt, STDIN_PATH]
