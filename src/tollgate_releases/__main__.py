"""CLI entry point for the TollGate release browser.

Runs the [ReleaseBrowser][tollgate_releases.services.browser.service.ReleaseBrowser]
either once (``--once``), printing the filtered catalogue and its count
summary, or continuously with a Prometheus metrics server.

Examples:
    ```bash
    python -m tollgate_releases --once
    python -m tollgate_releases --once --channels stable,beta --deduplicate
    python -m tollgate_releases --publisher npub1... --log-level DEBUG
    tollgate-releases --config config/browser.yaml
    ```
"""

import argparse
import asyncio
import logging
import signal
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tollgate_releases.core import start_metrics_server
from tollgate_releases.core.exceptions import ConfigurationError
from tollgate_releases.core.logger import Logger, StructuredFormatter
from tollgate_releases.core.yaml import load_yaml
from tollgate_releases.nips.nip94 import get_release_view
from tollgate_releases.services.browser import ReleaseBrowser
from tollgate_releases.services.common.variants import variant_label


DEFAULT_CONFIG = Path("config") / "browser.yaml"

logger = Logger("cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the release browser."""
    parser = argparse.ArgumentParser(
        prog="tollgate-releases",
        description="TollGate Release Browser",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Browser config path (default: {DEFAULT_CONFIG})",
    )

    parser.add_argument(
        "--publisher",
        help="Release publisher public key, hex or npub (overrides config)",
    )

    parser.add_argument(
        "--channels",
        help="Comma-separated release channels, e.g. stable,beta (overrides config)",
    )

    parser.add_argument(
        "--products",
        help="Comma-separated product types (overrides config)",
    )

    parser.add_argument(
        "--deduplicate",
        action="store_true",
        help="Show one release per version",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit service logs as JSON objects",
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Fetch once, print the catalogue and exit (default: run continuously)",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Configure the root logger with structured formatting.

    Installs a ``StructuredFormatter`` on the root handler so that output
    from ``Logger`` and from plain ``logging.getLogger()`` calls in the
    ``nips`` and ``utils`` layers share one format.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def _load_yaml_dict(path: Path) -> dict[str, Any]:
    """Load a YAML file as a dict, returning ``{}`` if the file does not exist."""
    if not path.exists():
        logger.warning("config_not_found", path=str(path))
        return {}
    return load_yaml(path)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def apply_overrides(config: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    """Merge command-line overrides into a browser configuration dict.

    Only options given on the command line are applied; ``--channels ""``
    clears the channel selection (no restriction).
    """
    if args.publisher is not None:
        config.setdefault("subscription", {})["publisher"] = args.publisher
    if args.channels is not None:
        config.setdefault("filters", {})["channels"] = _split_csv(args.channels)
    if args.products is not None:
        config.setdefault("filters", {})["products"] = _split_csv(args.products)
    if args.deduplicate:
        config["deduplicate"] = True
    return config


def format_catalogue(browser: ReleaseBrowser) -> list[str]:
    """Render the filtered catalogue as aligned text rows plus a summary line."""
    rows = []
    for event in browser.filtered():
        view = get_release_view(event)
        rows.append(
            (
                view.version,
                str(view.channel),
                view.product_display_name,
                variant_label(view),
                view.released_date,
            )
        )

    lines = []
    if rows:
        widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
        for row in rows:
            cells = (cell.ljust(width) for cell, width in zip(row, widths, strict=True))
            lines.append("  ".join(cells).rstrip())
    lines.append(f"({browser.summary().text})")
    return lines


async def run_browser(browser: ReleaseBrowser, *, once: bool) -> int:
    """Run the browser in one-shot or continuous mode.

    Returns:
        Exit code: 0 for success, 1 for failure.
    """
    # One-shot mode: single cycle, no metrics server
    if once:
        try:
            async with browser:
                await browser.run()
        except Exception as e:  # Intentionally broad: CLI error boundary for one-shot mode
            logger.error("browser_failed", error=str(e))
            return 1
        for line in format_catalogue(browser):
            print(line)  # noqa: T201
        logger.info("browser_completed", state=browser.state)
        return 0

    # Continuous mode: metrics server + indefinite operation
    metrics_config = browser.config.metrics
    metrics_server = await start_metrics_server(metrics_config)

    if metrics_config.enabled:
        logger.info(
            "metrics_server_started",
            host=metrics_config.host,
            port=metrics_config.port,
            path=metrics_config.path,
        )

    def handle_signal(sig: signal.Signals) -> None:
        logger.info("shutdown_signal", signal=sig.name)
        browser.request_shutdown()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_signal, sig)

    try:
        async with browser:
            await browser.run_forever()
        return 0
    except Exception as e:  # Intentionally broad: CLI error boundary for continuous mode
        logger.error("browser_failed", error=str(e))
        return 1
    finally:
        await metrics_server.stop()
        if metrics_config.enabled:
            logger.info("metrics_server_stopped")


async def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point: parse args, build the browser from config, and run it."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = apply_overrides(_load_yaml_dict(args.config), args)
        browser = ReleaseBrowser.from_dict(config, json_logs=args.json_logs)
    except (ConfigurationError, ValidationError) as e:
        logger.error("config_invalid", error=str(e))
        return 1

    try:
        return await run_browser(browser, once=args.once)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return 130


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    cli()
