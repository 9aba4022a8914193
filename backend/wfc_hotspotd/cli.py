import argparse
import sys
from typing import List, Optional

from wfc_hotspotd.config import DEFAULT_AP_IFACE, DEFAULT_SSID, NetworkConfig
from wfc_hotspotd.errors import ConfigurationError

PROG = "wfc-hotspot"
DESCRIPTION = "Creates an access point compatible with Nintendo DS and Wii"

# flags whose next token is always their value, even if it starts with "-"
_VALUE_FLAGS = {
    "-d": "--dns",
    "--dns": "--dns",
    "-i": "--interface",
    "--interface": "--interface",
    "-s": "--ssid",
    "--ssid": "--ssid",
}


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input with the full help text and exit code 1."""

    def error(self, message: str):
        sys.stdout.write(f"{message}\n")
        self.print_help(sys.stdout)
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _OptionParser(
        prog=PROG,
        description=DESCRIPTION,
        usage="%(prog)s [OPTION]...",
        add_help=False,
        allow_abbrev=False,
    )
    opts = p.add_argument_group("Options")
    opts.add_argument(
        "-d",
        "--dns",
        dest="custom_dns",
        default=None,
        metavar="ADDR",
        help="Optional IP address of custom DNS server to use. You may specify a Wiimmfi DNS server "
        "here instead of in the Wii/DS settings if so desired.",
    )
    opts.add_argument("-h", "--help", action="store_true", help="Displays this help message")
    opts.add_argument(
        "-i",
        "--interface",
        dest="ap_iface",
        default=DEFAULT_AP_IFACE,
        metavar="IFACE",
        help=f"Network interface to start the hotspot on (default: {DEFAULT_AP_IFACE})",
    )
    opts.add_argument(
        "-s",
        "--ssid",
        default=DEFAULT_SSID,
        metavar="NAME",
        help=f"Network name (default: {DEFAULT_SSID})",
    )
    opts.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enables additional debugging output and logs all DNS queries",
    )
    return p


def _attach_values(argv: List[str]) -> List[str]:
    """Rewrite `-s VALUE` as `--ssid=VALUE` so argparse never reads VALUE as a flag."""
    out: List[str] = []
    i = 0
    while i < len(argv):
        tok = argv[i]
        if tok in _VALUE_FLAGS and i + 1 < len(argv):
            out.append(f"{_VALUE_FLAGS[tok]}={argv[i + 1]}")
            i += 2
            continue
        out.append(tok)
        i += 1
    return out


def parse_args(argv: Optional[List[str]] = None) -> NetworkConfig:
    p = build_parser()
    ns, unknown = p.parse_known_args(_attach_values(sys.argv[1:] if argv is None else list(argv)))

    if unknown:
        p.error(f"Unrecognized option {unknown[0]}")

    if ns.help:
        p.print_help(sys.stdout)
        raise SystemExit(1)

    custom_dns = ns.custom_dns
    if custom_dns is not None and custom_dns.strip().lower() in ("", "none"):
        custom_dns = None

    return NetworkConfig(
        ssid=ns.ssid,
        ap_iface=ns.ap_iface,
        custom_dns=custom_dns,
        verbose=bool(ns.verbose),
    )
