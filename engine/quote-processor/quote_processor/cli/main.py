"""
CLI entrypoint for quote-processor.
Consumes quote requests from the request channel, prices them, and publishes quotes
on the result channel until interrupted (or until --max-messages have been handled).

Diagnostics go to stderr via logging.
"""

from __future__ import annotations

import argparse
import logging
import random
import signal
import threading
from decimal import Decimal, InvalidOperation
from typing import Sequence

from quote_processor.broker import BrokerUnavailableError, MessageBroker, create_broker
from quote_processor.cli.logging_setup import setup_cli_logging
from quote_processor.config.default_config import DEFAULT_CONFIG
from quote_processor.contracts.channels import ChannelNames
from quote_processor.pricing import LengthBasedPricing, PricingFunction, fixed_pricing
from quote_processor.processor import QuoteProcessor


logger = logging.getLogger("quote_processor.cli")


def _decimal_arg(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a decimal number: {raw!r}") from exc
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"price must be finite: {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    broker_cfg = DEFAULT_CONFIG["broker"]
    channel_cfg = DEFAULT_CONFIG["channels"]

    p = argparse.ArgumentParser(
        prog="quote-processor",
        description="Consume quote requests from the broker and publish priced quotes.",
    )
    p.add_argument("--broker", choices=["memory", "redis"], default=broker_cfg["backend"])
    p.add_argument("--redis-url", default=broker_cfg["redis_url"])
    p.add_argument("--poll-timeout", type=float, default=broker_cfg["poll_timeout_s"])
    p.add_argument("--request-channel", default=channel_cfg["requests"])
    p.add_argument("--result-channel", default=channel_cfg["results"])
    p.add_argument(
        "--max-messages",
        type=int,
        default=None,
        help="Stop after handling this many messages (default: run until interrupted).",
    )
    p.add_argument(
        "--fixed-price",
        type=_decimal_arg,
        default=None,
        help="Quote every subject at this price instead of the length-based default.",
    )
    p.add_argument("--seed", type=int, default=None, help="Seed for the default pricing randomness.")

    g = p.add_mutually_exclusive_group()
    g.add_argument("--trace", action="store_true", help="Enable DEBUG logs on stderr.")
    g.add_argument("--quiet", action="store_true", help="Only ERROR logs on stderr.")
    return p


def build_pricing(args: argparse.Namespace) -> PricingFunction:
    if args.fixed_price is not None:
        return fixed_pricing(args.fixed_price)

    pricing_cfg = DEFAULT_CONFIG["pricing"]
    rng = random.Random(args.seed) if args.seed is not None else None
    return LengthBasedPricing(
        unit_price=pricing_cfg["unit_price"],
        min_factor=pricing_cfg["min_factor"],
        max_factor=pricing_cfg["max_factor"],
        rng=rng,
    )


def build_processor(args: argparse.Namespace, broker: MessageBroker) -> QuoteProcessor:
    return QuoteProcessor(
        broker,
        pricing=build_pricing(args),
        channels=ChannelNames(requests=args.request_channel, results=args.result_channel),
    )


def main(argv: Sequence[str] | None = None, *, broker: MessageBroker | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_cli_logging(trace=args.trace, quiet=args.quiet)

    if args.max_messages is not None and args.max_messages < 0:
        logger.error("--max-messages must be >= 0")
        return 2

    owns_broker = broker is None
    if broker is None:
        broker = create_broker(args.broker, redis_url=args.redis_url, poll_timeout_s=args.poll_timeout)

    processor = build_processor(args, broker=broker)
    stop_event = threading.Event()

    previous_sigterm = None
    if threading.current_thread() is threading.main_thread():
        previous_sigterm = signal.signal(signal.SIGTERM, lambda *_: stop_event.set())

    logger.info(
        "quote-processor starting (broker=%s requests=%s results=%s)",
        args.broker,
        args.request_channel,
        args.result_channel,
    )
    handled = 0
    exit_code = 0
    try:
        handled = processor.run(stop_event=stop_event, max_messages=args.max_messages)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except BrokerUnavailableError as exc:
        logger.error("Broker unavailable: %s", exc)
        exit_code = 1
    finally:
        if previous_sigterm is not None:
            signal.signal(signal.SIGTERM, previous_sigterm)
        if owns_broker:
            broker.close()

    logger.info("quote-processor stopped after %d message(s)", handled)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
