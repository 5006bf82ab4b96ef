"""
Command-line interface for the Unified Payments SDK.
"""

import argparse
import json
import sys
from typing import Any

from unified_payments import create_payment_client
from unified_payments.config import VALID_PAYMENT_PROVIDERS, get_config_summary, resolve_provider
from unified_payments.gateway import UnifiedPaymentClient
from unified_payments.logging_config import setup_default_logging, setup_logging


def _config_from_args(args: argparse.Namespace) -> dict:
    config: dict[str, Any] = {}
    if args.provider:
        config["provider"] = args.provider
    if args.sandbox:
        config["sandbox"] = True
    return config


def _parse_json_arg(raw: str, name: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise ValueError(f"Invalid JSON for {name}: {e}") from e


def _to_jsonable(result: Any) -> Any:
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return result


def _print_result(result: Any) -> None:
    print(json.dumps(_to_jsonable(result), indent=2, sort_keys=True, default=str))


def create_client(args: argparse.Namespace) -> UnifiedPaymentClient:
    config = _config_from_args(args)
    provider = resolve_provider(config)
    if not provider:
        raise ValueError("No payment provider selected. Use --provider or set UNIFIED_PAYMENTS_PROVIDER.")
    config.pop("provider", None)
    return create_payment_client(provider, **config)


def cmd_config(args: argparse.Namespace) -> None:
    _print_result(get_config_summary(_config_from_args(args)))


def cmd_create_payment(args: argparse.Namespace) -> None:
    payment_data = _parse_json_arg(args.payment_data, "payment data")
    _print_result(create_client(args).create_payment_intent(payment_data))


def cmd_capture_payment(args: argparse.Namespace) -> None:
    _print_result(create_client(args).capture_payment_intent(args.payment_id))


def cmd_refund_payment(args: argparse.Namespace) -> None:
    refund_data = _parse_json_arg(args.refund_data, "refund data") if args.refund_data else None
    _print_result(create_client(args).refund_payment(args.payment_id, refund_data))


def cmd_create_subscription(args: argparse.Namespace) -> None:
    subscription_data = _parse_json_arg(args.subscription_data, "subscription data")
    _print_result(create_client(args).create_subscription(subscription_data))


def cmd_cancel_subscription(args: argparse.Namespace) -> None:
    _print_result(create_client(args).cancel_subscription(args.subscription_id))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unified-payments",
        description="Unified Payments SDK Command Line Interface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --provider paypal config
  %(prog)s --provider paypal --sandbox create-payment '{"amount": 1999, "currency": "usd", "description": "Pro plan"}'
  %(prog)s --provider stripe capture-payment pi_123
  %(prog)s --provider stripe refund-payment pi_123 '{"amount": 500}'
  %(prog)s --provider paypal cancel-subscription I-BW452GLLEP1G
        """,
    )
    parser.add_argument(
        "--provider",
        choices=sorted(VALID_PAYMENT_PROVIDERS),
        help="Payment provider to use (defaults to UNIFIED_PAYMENTS_PROVIDER)",
    )
    parser.add_argument("--sandbox", action="store_true", help="Use the provider's sandbox environment")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    config_parser = subparsers.add_parser("config", help="Show the effective configuration (secrets redacted)")
    config_parser.set_defaults(func=cmd_config)

    create_payment_parser = subparsers.add_parser("create-payment", help="Create a payment")
    create_payment_parser.add_argument("payment_data", help="Payment data as JSON")
    create_payment_parser.set_defaults(func=cmd_create_payment)

    capture_parser = subparsers.add_parser("capture-payment", help="Capture a payment")
    capture_parser.add_argument("payment_id", help="Payment ID")
    capture_parser.set_defaults(func=cmd_capture_payment)

    refund_parser = subparsers.add_parser("refund-payment", help="Refund a payment")
    refund_parser.add_argument("payment_id", help="Payment (PayPal sale) ID")
    refund_parser.add_argument("refund_data", nargs="?", help="Refund data as JSON (omit for a full refund)")
    refund_parser.set_defaults(func=cmd_refund_payment)

    create_subscription_parser = subparsers.add_parser("create-subscription", help="Create a subscription")
    create_subscription_parser.add_argument("subscription_data", help="Subscription data as JSON")
    create_subscription_parser.set_defaults(func=cmd_create_subscription)

    cancel_parser = subparsers.add_parser("cancel-subscription", help="Cancel a subscription")
    cancel_parser.add_argument("subscription_id", help="Subscription ID")
    cancel_parser.set_defaults(func=cmd_cancel_subscription)
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    if args.log_level:
        setup_logging(level=args.log_level, clear_handlers=True)
    else:
        setup_default_logging()
    if not args.command:
        parser.print_help()
        sys.exit(1)
    try:
        args.func(args)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
