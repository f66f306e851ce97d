import pytest

from pymotorent.config import ENV_API_URL, ENV_STATE_FILE, ENV_TIMEOUT, ClientConfig
from pymotorent.exceptions import ConfigError


def test_from_url_splits_prefix() -> None:
    config = ClientConfig.from_url("https://rent.example:8443/api/v1")
    assert config.base_url == "https://rent.example:8443"
    assert config.api_uri == "/api/v1"


@pytest.mark.parametrize("url", ["", "rent.example/api", "ftp://rent.example"])
def test_from_url_rejects_invalid(url: str) -> None:
    with pytest.raises(ConfigError):
        ClientConfig.from_url(url)


def test_from_env_defaults() -> None:
    config = ClientConfig.from_env({})
    assert config.base_url == "http://localhost:8000"
    assert config.api_uri == "/api/v1"
    assert config.timeout == 120.0
    assert config.state_file is None


def test_from_env_overrides() -> None:
    config = ClientConfig.from_env(
        {
            ENV_API_URL: "https://api.rent.example/v2",
            ENV_TIMEOUT: "15",
            ENV_STATE_FILE: "/tmp/motorent.json",
        }
    )
    assert config.base_url == "https://api.rent.example"
    assert config.api_uri == "/v2"
    assert config.timeout == 15.0
    assert config.state_file == "/tmp/motorent.json"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_from_env_rejects_bad_timeout(value: str) -> None:
    with pytest.raises(ConfigError):
        ClientConfig.from_env({ENV_TIMEOUT: value})
