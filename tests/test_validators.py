import pytest

from hostdeploy.validators import (
    VALIDATORS,
    is_present,
    is_readable_file,
    is_valid_ip,
    is_valid_port,
    is_valid_repo_url,
)


@pytest.mark.parametrize(
    "url",
    ["https://github.com/acme/shop.git", "git@github.com:acme/shop.git", "ssh://git@host/acme/shop"],
)
def test_repo_url_accepts_supported_schemes(url):
    assert is_valid_repo_url(url)


@pytest.mark.parametrize("url", ["", "http://github.com/acme/shop", "ftp://host/repo", "github.com/acme"])
def test_repo_url_rejects_other_schemes(url):
    assert not is_valid_repo_url(url)


def test_ip_is_dotted_quad_only():
    assert is_valid_ip("203.0.113.10")
    assert is_valid_ip("999.1.1.1")  # octets are not range-checked
    assert not is_valid_ip("203.0.113")
    assert not is_valid_ip("example.com")
    assert not is_valid_ip("1.2.3.4.5")
    assert not is_valid_ip("")
    assert not is_valid_ip("1.2.3.4\n")


@pytest.mark.parametrize("value,expected", [("80", True), ("65535", True), ("0", False), ("65536", False), ("-1", False), ("8o", False), ("", False), ("80\n0", False)])
def test_port_range(value, expected):
    assert is_valid_port(value) is expected


def test_key_must_be_readable_file(tmp_path, monkeypatch):
    key = tmp_path / "id_rsa"
    assert not is_readable_file(str(key))
    key.write_text("key")
    assert is_readable_file(str(key))
    assert not is_readable_file(str(tmp_path))

    monkeypatch.setenv("HOME", str(tmp_path))
    assert is_readable_file("~/id_rsa")


def test_presence():
    assert is_present("main")
    assert not is_present("   ")


def test_every_field_has_a_rejection_message():
    for field, (validator, message) in VALIDATORS.items():
        assert callable(validator)
        assert message
