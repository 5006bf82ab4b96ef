import dataclasses

import pytest

from unified_payments import config
from unified_payments.config import PayPalConfig, StripeConfig
from unified_payments.exceptions import ConfigurationError


def test_paypal_config_defaults():
    cfg = PayPalConfig.from_mapping({"client_id": "id", "client_secret": "secret"})
    assert cfg.sandbox is False
    assert cfg.base_url == "https://api.paypal.com"
    assert cfg.environment == "live"
    assert cfg.timeout == 30.0


def test_paypal_config_sandbox_url():
    assert PayPalConfig(sandbox=True).base_url == "https://api.sandbox.paypal.com"


def test_paypal_config_env_fallback(monkeypatch):
    monkeypatch.setenv("PAYPAL_CLIENT_ID", "env-id")
    monkeypatch.setenv("PAYPAL_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("PAYPAL_SANDBOX", "1")
    monkeypatch.setenv("PAYPAL_WEBHOOK_ID", "WH-ENV")
    cfg = PayPalConfig.from_env()
    assert cfg.client_id == "env-id"
    assert cfg.sandbox is True
    assert cfg.webhook_id == "WH-ENV"


def test_mapping_wins_over_environment(monkeypatch):
    monkeypatch.setenv("PAYPAL_CLIENT_ID", "env-id")
    monkeypatch.setenv("PAYPAL_SANDBOX", "true")
    cfg = PayPalConfig.from_mapping({"client_id": "explicit", "sandbox": False})
    assert cfg.client_id == "explicit"
    assert cfg.sandbox is False


def test_config_is_immutable():
    cfg = StripeConfig(api_key="sk_test_1")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.api_key = "sk_test_2"


def test_require_credentials():
    with pytest.raises(ConfigurationError) as exc:
        PayPalConfig(client_secret="secret").require_credentials()
    assert exc.value.config_key == "client_id"


@pytest.mark.parametrize("value", ["0", "-1", "soon"])
def test_invalid_timeout(value):
    with pytest.raises(ConfigurationError):
        StripeConfig.from_mapping({"timeout": value})


def test_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("UnifiedPayments_Timeout", "12.5")
    assert StripeConfig.from_mapping({}).timeout == 12.5


def test_coerce_keeps_instances():
    cfg = StripeConfig(api_key="sk_test_1")
    assert StripeConfig.coerce(cfg) is cfg
    assert StripeConfig.coerce({"api_key": "sk_test_2"}).api_key == "sk_test_2"


def test_enabled_providers_default():
    assert config.get_enabled_providers() == ["paypal", "stripe"]
    assert config.is_provider_enabled("PayPal") is True


def test_enabled_providers_subset(monkeypatch):
    monkeypatch.setenv("UnifiedPayments_EnabledProviders", " stripe ")
    assert config.get_enabled_providers() == ["stripe"]
    assert config.is_provider_enabled("paypal") is False


def test_enabled_providers_invalid_falls_back_to_all(monkeypatch):
    monkeypatch.setenv("UnifiedPayments_EnabledProviders", "paypal,square")
    assert config.get_enabled_providers() == ["paypal", "stripe"]


def test_parse_enabled_providers_dedupes_and_keeps_order():
    assert config._parse_enabled_providers("Stripe, ,paypal,STRIPE") == ["stripe", "paypal"]
    assert config._parse_enabled_providers("") == []


@pytest.mark.parametrize("raw", ["paypal\nstripe", "paypal,square", "paypal," * 100])
def test_parse_enabled_providers_rejects(raw):
    with pytest.raises(ValueError):
        config._parse_enabled_providers(raw)


def test_resolve_provider():
    assert config.resolve_provider({"provider": " PayPal "}) == "paypal"
    assert config.resolve_provider({}) is None


def test_config_summary_hides_secrets():
    summary = config.get_config_summary(
        {"provider": "stripe", "api_key": "sk_live_supersecret", "stripe_webhook_secret": "whsec_x"}
    )
    assert summary["provider"] == "stripe"
    assert summary["settings"]["api_key_set"] is True
    assert "sk_live_supersecret" not in repr(summary)


def test_paypal_summary():
    summary = config.get_config_summary({"provider": "paypal", "client_id": "id", "sandbox": True})
    assert summary["settings"]["base_url"] == "https://api.sandbox.paypal.com"
    assert summary["settings"]["client_secret_set"] is False
