import pytest

from wfc_hotspotd import cli
from wfc_hotspotd.errors import ConfigurationError


def test_defaults():
    cfg = cli.parse_args([])
    assert cfg.ssid == "NintendoWifi"
    assert cfg.ap_iface == "wlan1"
    assert cfg.ip_prefix == "192.168.69"
    assert cfg.custom_dns is None
    assert cfg.verbose is False


def test_short_and_long_flags():
    cfg = cli.parse_args(["-s", "TestNet", "--interface", "wlan2", "-d", "178.62.43.212", "--verbose"])
    assert cfg.ssid == "TestNet"
    assert cfg.ap_iface == "wlan2"
    assert cfg.custom_dns == "178.62.43.212"
    assert cfg.verbose is True


def test_repeated_flags_last_value_wins():
    cfg = cli.parse_args(["-s", "First", "-i", "wlan0", "--ssid", "Second", "-i", "wlan3", "-d", "1.1.1.1", "--dns", "9.9.9.9"])
    assert cfg.ssid == "Second"
    assert cfg.ap_iface == "wlan3"
    assert cfg.custom_dns == "9.9.9.9"


def test_dns_none_means_no_custom_server():
    assert cli.parse_args(["-d", "none"]).custom_dns is None


def test_unknown_flag_prints_usage(capsys):
    with pytest.raises(ConfigurationError):
        cli.parse_args(["--bogus"])
    out = capsys.readouterr().out
    assert "Unrecognized option --bogus" in out
    assert "usage: wfc-hotspot [OPTION]..." in out
    assert "--interface" in out


def test_abbreviated_long_flag_is_rejected():
    with pytest.raises(ConfigurationError):
        cli.parse_args(["--ss", "Foo"])


def test_missing_value_is_rejected(capsys):
    with pytest.raises(ConfigurationError):
        cli.parse_args(["-s"])
    assert "usage:" in capsys.readouterr().out


def test_help_exits_1(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.parse_args(["-h"])
    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert "Creates an access point compatible with Nintendo DS and Wii" in out
    assert "default: NintendoWifi" in out


def test_dash_prefixed_values_are_taken_verbatim():
    cfg = cli.parse_args(["-s", "-MyNet", "-i", "--bogus", "--dns", "-1"])
    assert cfg.ssid == "-MyNet"
    assert cfg.ap_iface == "--bogus"
    assert cfg.custom_dns == "-1"


def test_flag_value_equal_to_another_flag():
    cfg = cli.parse_args(["--ssid", "-v"])
    assert cfg.ssid == "-v"
    assert cfg.verbose is False
