import pytest

from csvlab.anonymize import anonymize_ip


def test_ipv4_last_octet_zeroed():
    assert anonymize_ip("192.168.1.42") == "192.168.1.0"


@pytest.mark.parametrize("ip", ["10.0.0.1", "8.8.4.4", "255.255.255.255"])
def test_ipv4_keeps_prefix(ip):
    result = anonymize_ip(ip)
    assert result.rsplit(".", 1)[0] == ip.rsplit(".", 1)[0]
    assert result.endswith(".0")


def test_ipv6_keeps_four_groups():
    ip = "2001:db8:85a3:0:0:8a2e:370:7334"
    result = anonymize_ip(ip)
    assert result == ":".join(ip.split(":")[:4]) + "::"


def test_ipv4_mapped_treated_as_ipv4():
    assert anonymize_ip("::ffff:1.2.3.4").endswith("1.2.3.0")


def test_anonymize_is_idempotent_for_ipv4():
    once = anonymize_ip("172.16.5.9")
    assert anonymize_ip(once) == once


@pytest.mark.parametrize("ip", ["::1", "garbage"])
def test_too_short_raises(ip):
    with pytest.raises(ValueError):
        anonymize_ip(ip)