from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from price_alerts.core.config import load_settings
from price_alerts.core.errors import AlertCheckError
from price_alerts.core.logging import configure_logging
from price_alerts.core.runtime import AlertRuntime

logger = logging.getLogger("price_alerts.cli")


async def run_once(runtime: AlertRuntime) -> bool:
    try:
        result = await runtime.alert_service.check_alerts()
    except AlertCheckError as exc:
        logger.error("Price alert check failed (%s): %s", exc.kind, exc)
        return False
    finally:
        await runtime.close()

    for outcome in result.outcomes:
        if outcome.error:
            logger.error("Alert %s failed: %s", outcome.alert_id, outcome.error)
    return result.ok


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check stored price alerts once and email users whose target was reached")
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL, e.g. DEBUG")
    parser.add_argument(
        "--isolate-failures",
        action="store_true",
        help="Keep checking the remaining alerts when one of them fails",
    )
    args = parser.parse_args(argv)

    overrides = {}
    if args.isolate_failures:
        overrides["fail_fast"] = False
    try:
        settings = load_settings(**overrides)
    except AlertCheckError as exc:
        configure_logging(args.log_level or "INFO")
        logger.error("%s", exc)
        return 2

    configure_logging(args.log_level or settings.log_level)
    ok = asyncio.run(run_once(AlertRuntime(settings)))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
