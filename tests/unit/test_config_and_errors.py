# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx
import pytest

from consul_online import config
from consul_online.config import DEFAULT_ADDRESS, DEFAULT_USER_AGENT, WaitSettings
from consul_online.credentials import resolve_access_token
from consul_online.errors import ConfigError, ErrorCategory, categorize_exception, error_category_to_reason
from consul_online.log import normalize_log_level, resolve_log_level


def test_wait_settings_defaults_without_env():
    settings = config.load_wait_settings()
    assert settings.address == DEFAULT_ADDRESS
    assert settings.force_tls is False
    assert settings.skip_verify is False
    assert settings.timeout is None
    assert settings.interval is None
    assert settings.http_token is None
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_wait_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("CONSUL_HTTP_ADDR", "https://consul.service:8501")
    monkeypatch.setenv("CONSUL_HTTP_SSL", "TRUE")
    monkeypatch.setenv("CONSUL_HTTP_SSL_VERIFY", "false")
    monkeypatch.setenv("CONSUL_CACERT", "/etc/consul/ca.pem")
    monkeypatch.setenv("CONSUL_CLIENT_CERT", "/etc/consul/cli.pem")
    monkeypatch.setenv("CONSUL_CLIENT_KEY", "/etc/consul/cli.key")
    monkeypatch.setenv("CONSUL_HTTP_TOKEN", "secret")
    monkeypatch.setenv("CONSUL_HTTP_TOKEN_FILE", "/run/token")
    monkeypatch.setenv("CONSUL_ONLINE_REQUEST_TIMEOUT", "2.5")

    settings = config.load_wait_settings()

    assert settings.address == "https://consul.service:8501"
    assert settings.force_tls is True
    assert settings.skip_verify is True
    assert settings.ca_cert == "/etc/consul/ca.pem"
    assert settings.client_cert == "/etc/consul/cli.pem"
    assert settings.client_key == "/etc/consul/cli.key"
    assert settings.http_token == "secret"
    assert settings.http_token_file == "/run/token"
    assert settings.request_timeout == 2.5


def test_ssl_verify_true_keeps_verification(monkeypatch):
    monkeypatch.setenv("CONSUL_HTTP_SSL_VERIFY", "true")
    assert config.load_wait_settings().skip_verify is False


@pytest.mark.parametrize("name", ["CONSUL_HTTP_SSL", "CONSUL_HTTP_SSL_VERIFY"])
def test_invalid_bool_env_is_config_error(monkeypatch, name):
    monkeypatch.setenv(name, "yes")
    with pytest.raises(ConfigError) as excinfo:
        config.load_wait_settings()
    assert "could not be parsed as boolean" in str(excinfo.value)
    assert excinfo.value.field == name


def test_invalid_request_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("CONSUL_ONLINE_REQUEST_TIMEOUT", "soon")
    assert config.load_wait_settings().request_timeout == WaitSettings.request_timeout
    monkeypatch.setenv("CONSUL_ONLINE_REQUEST_TIMEOUT", "-1")
    assert config.load_wait_settings().request_timeout == WaitSettings.request_timeout


def test_blank_address_env_uses_default(monkeypatch):
    monkeypatch.setenv("CONSUL_HTTP_ADDR", "  ")
    assert config.load_wait_settings().address == DEFAULT_ADDRESS


def test_categorize_exception_variants():
    request = httpx.Request("GET", "http://agent")
    assert categorize_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused", request=request)) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionRefusedError()) is ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("handshake")) is ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no such host")) is ErrorCategory.DNS_ERROR
    assert categorize_exception(ValueError("odd")) is ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_cause_chain():
    request = httpx.Request("GET", "https://agent")
    try:
        try:
            raise ssl.SSLCertVerificationError("certificate verify failed")
        except ssl.SSLError as inner:
            raise httpx.ConnectError("wrapped", request=request) from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) is ErrorCategory.SSL_ERROR


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.DNS_ERROR) == "DNS resolution failure"
    assert error_category_to_reason(None) == ""
    assert error_category_to_reason(ErrorCategory.NONE) == ""


def test_resolve_log_level(monkeypatch):
    monkeypatch.delenv("CONSUL_ONLINE_LOG", raising=False)
    assert resolve_log_level() == "WARNING"
    monkeypatch.setenv("CONSUL_ONLINE_LOG", "debug")
    assert resolve_log_level() == "DEBUG"
    assert resolve_log_level("info") == "INFO"
    assert resolve_log_level("warn") == "WARNING"
    assert resolve_log_level("chatty") == "DEBUG"
    monkeypatch.setenv("CONSUL_ONLINE_LOG", "chatty")
    assert resolve_log_level() == "WARNING"


@pytest.mark.parametrize(
    ("value", "level"),
    [("warn", "WARNING"), ("trace", "DEBUG"), ("off", "CRITICAL"), (" Error ", "ERROR"), ("verbose", None)],
)
def test_log_level_aliases_apply_to_flag_and_env(monkeypatch, value, level):
    assert normalize_log_level(value) == level
    monkeypatch.setenv("CONSUL_ONLINE_LOG", value)
    assert resolve_log_level() == (level or "WARNING")


def test_token_file_wins_over_inline_token(tmp_path):
    token_file = tmp_path / "token"
    token_file.write_text("  file-token \n")
    assert resolve_access_token("inline", token_file) == "file-token"
    assert resolve_access_token("inline") == "inline"
    assert resolve_access_token(None, None) is None


def test_blank_tokens_count_as_absent(tmp_path):
    token_file = tmp_path / "token"
    token_file.write_text("\n")
    assert resolve_access_token("inline", token_file) is None
    assert resolve_access_token("   ") is None


def test_unreadable_token_file_is_config_error(tmp_path):
    with pytest.raises(ConfigError, match="failed to read token file") as excinfo:
        resolve_access_token(token_file=tmp_path / "missing")
    assert excinfo.value.field == "http_token_file"
