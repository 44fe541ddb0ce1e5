"""Runner for the standalone metrics server."""

import asyncio

from expofmt.adapters.metrics_renderer import PrometheusMetricsRenderer
from expofmt.api.metrics_server import MetricsServer
from expofmt.core.config import settings
from expofmt.core.logging import logger as global_logger


async def main() -> None:
    """Serve the default prometheus_client registry until cancelled."""
    logger = global_logger.with_context(context_base="metrics_server", operation="runner")

    renderer = PrometheusMetricsRenderer(allow_experimental=settings.ENABLE_OPENMETRICS)
    server = MetricsServer(
        renderer,
        port=settings.METRICS_PORT,
        host=settings.METRICS_HOST,
        path=settings.METRICS_PATH,
    )
    await server.start()
    logger.info(
        "OpenMetrics negotiation %s",
        "enabled" if settings.ENABLE_OPENMETRICS else "disabled",
    )
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
