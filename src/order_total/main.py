from __future__ import annotations

import structlog
import uvicorn

from order_total.bootstrap import build_app
from order_total.config import ConfigError, Settings
from order_total.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def main() -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        configure_logging()
        logger.error("invalid_configuration", error=str(e))
        return 2

    configure_logging(settings.log_level, json=settings.log_json)
    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        tax_rate_service=settings.tax_rate_service_url,
    )

    config = uvicorn.Config(
        build_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
    server = uvicorn.Server(config)
    try:
        server.run()
    except (OSError, RuntimeError) as e:
        logger.error("server_error", error=str(e))
        return 1
    # uvicorn reports bind failures by leaving started unset
    if not server.started:
        logger.error("server_error", error="server did not start")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
