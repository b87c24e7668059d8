"""
Drive the document renderer and collect its streamed output.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Protocol

from melon_reports.core.errors import RenderFailure
from melon_reports.schemas import ReportData

logger = logging.getLogger(__name__)


class StreamingRenderer(Protocol):
    def render_stream(self, data: ReportData) -> Iterable[bytes]:
        """Yield the rendered document as a finite, single-pass chunk sequence."""


class DocumentRendererAdapter:
    """Buffer a renderer's chunk stream into one contiguous document."""

    def __init__(self, renderer: StreamingRenderer) -> None:
        self._renderer = renderer

    async def render(self, data: ReportData) -> bytes:
        """Return the full document bytes or raise ``RenderFailure``."""

        def _consume() -> bytes:
            chunks: list[bytes] = []
            for chunk in self._renderer.render_stream(data):
                chunks.append(bytes(chunk))
            return b"".join(chunks)

        try:
            document = await asyncio.to_thread(_consume)
        except Exception as exc:
            logger.error("Error rendering report document: %s", exc)
            raise RenderFailure(details=str(exc)) from exc

        if not document:
            logger.error("Renderer produced an empty document")
            raise RenderFailure(details="Renderer produced an empty document")

        logger.info("Rendered report document", extra={"size_bytes": len(document)})
        return document


__all__ = ["DocumentRendererAdapter", "StreamingRenderer"]
