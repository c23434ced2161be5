from __future__ import annotations

import asyncio
import json
import sys

from .app_logging import configure_logging, get_logger
from .config import get_settings
from .exceptions import InvalidFormatError, TransactionNotFoundError
from .resolver import TxResolver

logger = get_logger(__name__)


async def _run(raw_input: str) -> int:
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    logger.info("app_starting", env=settings.app_env)

    try:
        analysis = await TxResolver(settings=settings).resolve_and_analyze(raw_input)
    except InvalidFormatError as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 2
    except TransactionNotFoundError as e:
        print(json.dumps({"error": str(e), "probed_chains": e.probed_chains}), file=sys.stderr)
        return 1

    print(json.dumps(analysis.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    if len(sys.argv) != 2:
        print("usage: tx-resolver <tx hash | signature | explorer url>", file=sys.stderr)
        sys.exit(2)
    sys.exit(asyncio.run(_run(sys.argv[1])))


if __name__ == "__main__":
    main()
