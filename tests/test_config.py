import pytest

from razorpay_payments import (
    ClientConfig,
    ClientParameters,
    ConfigError,
    build_environment,
    create_client,
    load_client_config,
    load_env_file,
)
from razorpay_payments.core.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT

REQUIRED = {"RAZORPAY_KEY_ID": "rzp_test_key", "RAZORPAY_KEY_SECRET": "rzp_test_secret"}


def test_from_mapping_applies_defaults():
    config = ClientConfig.from_mapping(REQUIRED)

    assert config.credentials.as_auth() == ("rzp_test_key", "rzp_test_secret")
    assert config.base_url == DEFAULT_BASE_URL
    assert config.api_version == "v1"
    assert config.user_agent == DEFAULT_USER_AGENT
    assert config.timeout_seconds is None
    assert config.webhook_secret is None


def test_secrets_are_hidden_from_repr():
    config = ClientConfig.from_mapping(dict(REQUIRED, RAZORPAY_WEBHOOK_SECRET="whsec"))

    assert "rzp_test_secret" not in repr(config)
    assert "whsec" not in repr(config)


@pytest.mark.parametrize("missing", ["RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET"])
def test_missing_credentials_are_rejected(missing):
    values = dict(REQUIRED)
    del values[missing]

    with pytest.raises(ConfigError, match=missing):
        ClientConfig.from_mapping(values)


def test_blank_credentials_are_rejected():
    with pytest.raises(ConfigError, match="must not be empty"):
        ClientConfig.from_mapping(dict(REQUIRED, RAZORPAY_KEY_ID="   "))


def test_base_url_and_version_are_normalised():
    config = ClientConfig.from_mapping(
        dict(REQUIRED, RAZORPAY_BASE_URL="https://api.example.com/", RAZORPAY_API_VERSION="/v2/")
    )

    assert config.base_url == "https://api.example.com"
    assert config.api_version == "v2"


def test_base_url_must_be_http():
    with pytest.raises(ConfigError, match="RAZORPAY_BASE_URL"):
        ClientConfig.from_mapping(dict(REQUIRED, RAZORPAY_BASE_URL="ftp://example.com"))


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_timeout_is_rejected(raw):
    with pytest.raises(ConfigError, match="RAZORPAY_TIMEOUT_SECONDS"):
        ClientConfig.from_mapping(dict(REQUIRED, RAZORPAY_TIMEOUT_SECONDS=raw))


def test_timeout_is_parsed():
    config = ClientConfig.from_mapping(dict(REQUIRED, RAZORPAY_TIMEOUT_SECONDS="12.5"))

    assert config.timeout_seconds == 12.5


def test_env_file_fills_gaps_only(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "RAZORPAY_KEY_ID=from_file\nRAZORPAY_KEY_SECRET=file_secret\n", encoding="utf-8"
    )

    environment = build_environment(
        env_file=str(env_file), base={"RAZORPAY_KEY_ID": "from_base"}
    )

    assert environment.get("RAZORPAY_KEY_ID") == "from_base"
    assert environment.get("RAZORPAY_KEY_SECRET") == "file_secret"


def test_missing_env_file_is_ignored(tmp_path):
    environment = build_environment(env_file=str(tmp_path / "absent.env"), base={})

    assert dict(environment.variables) == {}


def test_load_env_file_does_not_replace_existing_keys(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\n", encoding="utf-8")
    target = {"A": "existing"}

    merged = load_env_file(str(env_file), environ=target)

    assert merged == {"A": "existing", "B": "file"}
    assert target == {"A": "existing", "B": "file"}


def test_keyword_arguments_override_everything(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("RAZORPAY_KEY_ID=from_file\n", encoding="utf-8")

    config = load_client_config(
        env_file=str(env_file),
        base=dict(REQUIRED),
        overrides={"RAZORPAY_KEY_ID": "from_overrides"},
        parameters=ClientParameters(timeout_seconds=5),
        key_id="from_keyword",
    )

    assert config.credentials.key_id == "from_keyword"
    assert config.timeout_seconds == 5.0


def test_parameter_bundle_stringifies_values():
    params = ClientParameters(key_id="k", timeout_seconds=3)

    assert params.as_overrides() == {"RAZORPAY_KEY_ID": "k", "RAZORPAY_TIMEOUT_SECONDS": "3"}


def test_create_client_from_keywords():
    client = create_client(env_file=None, base={}, key_id="rzp_k", key_secret="rzp_s")

    assert client.config.credentials.key_id == "rzp_k"
    assert client.orders is not None
    client.close()


def test_create_client_rejects_config_mixed_with_parameters():
    config = ClientConfig.from_mapping(REQUIRED)

    with pytest.raises(ValueError, match="not both"):
        create_client(config=config, key_id="rzp_other")
