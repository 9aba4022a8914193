import dataclasses

import pytest

from wfc_hotspotd.config import NetworkConfig, validate_ip_prefix
from wfc_hotspotd.errors import ConfigurationError


def test_derived_addresses_default_prefix():
    cfg = NetworkConfig()
    assert cfg.ap_ip == "192.168.69.1"
    assert cfg.ap_cidr == "192.168.69.1/24"
    assert cfg.dhcp_range_start == "192.168.69.2"
    assert cfg.dhcp_range_end == "192.168.69.200"
    assert cfg.dhcp_lease_time == "12h"
    assert cfg.lease_file == "/tmp/dnsmasq.leases"


@pytest.mark.parametrize("prefix", ["10.0.0", "172.16.5", "192.168.1"])
def test_derived_addresses_follow_prefix(prefix):
    cfg = NetworkConfig(ip_prefix=prefix)
    assert cfg.ap_ip == f"{prefix}.1"
    assert cfg.dhcp_range_start == f"{prefix}.2"
    assert cfg.dhcp_range_end == f"{prefix}.200"


@pytest.mark.parametrize("prefix", ["", "192.168", "192.168.69.0", "192.168.256", "a.b.c", "192.168.-1"])
def test_invalid_prefix_rejected(prefix):
    with pytest.raises(ConfigurationError):
        NetworkConfig(ip_prefix=prefix)


def test_prefix_whitespace_is_stripped():
    assert validate_ip_prefix(" 10.0.1 ") == "10.0.1"


@pytest.mark.parametrize("prefix", ["1\u00b2.168.69", "192.168.\u0666\u0669", "192.168.69/24"])
def test_malformed_octets_are_configuration_errors(prefix):
    with pytest.raises(ConfigurationError):
        validate_ip_prefix(prefix)


def test_config_is_immutable():
    cfg = NetworkConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.ssid = "Other"


def test_as_dict():
    cfg = NetworkConfig(ssid="TestNet", custom_dns="1.2.3.4")
    assert cfg.as_dict() == {
        "ssid": "TestNet",
        "ap_iface": "wlan1",
        "ip_prefix": "192.168.69",
        "custom_dns": "1.2.3.4",
        "verbose": False,
    }
