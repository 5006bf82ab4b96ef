import json
import os
import subprocess
import sys

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def run_cli(args, **env_overrides):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [REPO_ROOT, env.get("PYTHONPATH")]))
    env.update(env_overrides)
    cmd = [sys.executable, os.path.join(REPO_ROOT, "cli", "main.py")] + args
    return subprocess.run(cmd, capture_output=True, text=True, cwd=REPO_ROOT, env=env, timeout=60)


def test_cli_help():
    result = run_cli(["--help"])
    assert result.returncode == 0
    assert "usage:" in result.stdout
    assert "create-payment" in result.stdout


def test_cli_without_command_prints_help():
    result = run_cli([])
    assert result.returncode == 1
    assert "usage:" in result.stdout


def test_cli_config_summary_is_redacted():
    result = run_cli(
        ["--provider", "paypal", "--sandbox", "config"],
        PAYPAL_CLIENT_ID="cli-client-id",
        PAYPAL_CLIENT_SECRET="cli-client-secret",
    )
    assert result.returncode == 0, result.stderr
    summary = json.loads(result.stdout)
    assert summary["provider"] == "paypal"
    assert summary["settings"]["environment"] == "sandbox"
    assert summary["settings"]["client_secret_set"] is True
    assert "cli-client-secret" not in result.stdout


def test_cli_invalid_amount_fails_before_network():
    result = run_cli(
        ["--provider", "paypal", "create-payment", json.dumps({"amount": 0, "currency": "usd", "description": "x"})],
        PAYPAL_CLIENT_ID="cli-client-id",
        PAYPAL_CLIENT_SECRET="cli-client-secret",
    )
    assert result.returncode == 1
    assert result.stdout.startswith("Error:")
    assert "Amount must be a positive number" in result.stdout


def test_cli_invalid_json():
    result = run_cli(["--provider", "stripe", "create-payment", "{not json"], STRIPE_API_KEY="sk_test_cli")
    assert result.returncode == 1
    assert "Invalid JSON for payment data" in result.stdout


def test_cli_missing_credentials():
    result = run_cli(["--provider", "stripe", "capture-payment", "pi_1"])
    assert result.returncode == 1
    assert "api_key is required" in result.stdout


def test_cli_requires_provider():
    result = run_cli(["cancel-subscription", "sub_1"])
    assert result.returncode == 1
    assert "No payment provider selected" in result.stdout


def test_cli_disabled_provider():
    result = run_cli(
        ["--provider", "stripe", "cancel-subscription", "sub_1"],
        STRIPE_API_KEY="sk_test_cli",
        UnifiedPayments_EnabledProviders="paypal",
    )
    assert result.returncode == 1
    assert "disabled" in result.stdout
