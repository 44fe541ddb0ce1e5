"""Sidecar HTTP server exposing negotiated metrics."""

import asyncio
import traceback
from typing import Optional

from aiohttp import web

from expofmt.core.logging import logger
from expofmt.core.protocols.metrics_renderer import MetricsRenderer


class MetricsServer:
    """aiohttp server answering scrapes in the format the client asked for.

    Each request negotiates a format from its ``Accept`` header, renders all
    metrics in that format on a worker thread, since collecting a large
    registry is blocking work, and sends them with the matching Content-Type.
    """

    def __init__(
        self,
        renderer: MetricsRenderer,
        port: int,
        host: str = "0.0.0.0",
        path: str = "/metrics",
    ):
        """Initialize the metrics server.

        Args:
            renderer: Negotiates formats and renders the metrics body.
            port: The port to listen on; ``0`` picks a free one.
            host: The host to listen on.
            path: The route serving the scrape.
        """
        self.renderer = renderer
        self.port = port
        self.host = host
        self.path = path
        self.app = web.Application()
        self.app.add_routes([web.get(path, self._handle_metrics)])
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None
        self.logger = logger.with_context(context_base="metrics_server", path=path)

    async def _handle_metrics(self, request: web.Request) -> web.Response:
        """Render metrics in the negotiated format.

        Args:
            request: The scrape request.

        Returns:
            A 200 with the rendered body, 500 if rendering failed.
        """
        fmt = self.renderer.negotiate(request.headers.get("Accept"))
        try:
            body = await asyncio.to_thread(self.renderer.generate, fmt)
        except Exception as e:
            self.logger.error(f"Error rendering metrics as {fmt.name}: {e}\n{traceback.format_exc()}")
            return web.Response(text="Error rendering metrics\n", status=500)
        return web.Response(body=body, headers={"Content-Type": fmt.content_type})

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually listened on, once started."""
        if self._runner is None:
            return None
        for address in self._runner.addresses:
            return address[1]
        return None

    async def start(self) -> None:
        """Start the AIOHTTP server in the background of the running loop."""
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, host=self.host, port=self.port)
        await self._site.start()
        self.logger.info(f"Metrics server listening on http://{self.host}:{self.bound_port}{self.path}")

    async def stop(self) -> None:
        """Stops the server gracefully."""
        if self._site:
            await self._site.stop()
            self._site = None
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
