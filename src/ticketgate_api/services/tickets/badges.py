"""Badge rendering: optional remote collaborator with a local reportlab fallback."""

from __future__ import annotations

import asyncio
import base64
import binascii
import inspect
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Protocol

import httpx
from loguru import logger
from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import qr
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.pdfgen import canvas

from ticketgate_api.core.settings import settings
from ticketgate_api.domain.tickets.badge import BadgeOptions, BadgeView, EventContext, badge_filename
from ticketgate_api.domain.tickets.qr_payload import build_qr_payload, encode_qr_payload
from ticketgate_api.domain.tickets.registrant import RegistrantRecord

from .errors import UnsupportedArtifactError
from .store import describe_error

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True, slots=True)
class BadgeArtifact:
    content: bytes
    media_type: str
    filename: str
    renderer: str


class BadgeRenderer(Protocol):
    """Returns bytes, a binary stream, or a ``data:<mime>;base64,`` URL."""

    async def render(self, view: BadgeView, options: BadgeOptions) -> Any: ...


def _decode_data_url(value: str) -> tuple[bytes, str]:
    header, separator, data = value.partition(",")
    if not separator or not header.startswith("data:") or not header.endswith(";base64"):
        raise UnsupportedArtifactError("Renderer returned a string that is not a base64 data URL")
    media_type = header[len("data:") : -len(";base64")] or PDF_MEDIA_TYPE
    try:
        content = base64.b64decode("".join(data.split()), validate=True)
    except binascii.Error as exc:
        raise UnsupportedArtifactError("Renderer data URL is not valid base64") from exc
    return content, media_type


async def read_artifact(result: Any) -> tuple[bytes, str]:
    """Coerce any supported renderer result into ``(content, media_type)``."""

    media_type = PDF_MEDIA_TYPE
    if isinstance(result, (bytes, bytearray, memoryview)):
        content = bytes(result)
    elif isinstance(result, str):
        content, media_type = _decode_data_url(result)
    elif hasattr(result, "__aiter__"):
        chunks = bytearray()
        async for chunk in result:
            if not isinstance(chunk, (bytes, bytearray, memoryview)):
                raise UnsupportedArtifactError("Renderer stream yielded non-binary chunks")
            chunks.extend(chunk)
        content = bytes(chunks)
    elif callable(getattr(result, "read", None)):
        data = result.read()
        if inspect.isawaitable(data):
            data = await data
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise UnsupportedArtifactError("Renderer stream returned non-binary data")
        content = bytes(data)
    else:
        raise UnsupportedArtifactError(
            f"Renderer returned unsupported result type {type(result).__name__}"
        )

    if not content:
        raise UnsupportedArtifactError("Renderer returned an empty artifact")
    return content, media_type


class HttpBadgeRenderer:
    """Forwards badge requests to an external rendering service."""

    def __init__(
        self,
        endpoint_url: str,
        *,
        api_key: str | None = None,
        template_url: str = "",
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._api_key = api_key
        self._template_url = template_url
        self._timeout = timeout_seconds
        self._client = client

    async def render(self, view: BadgeView, options: BadgeOptions) -> Any:
        payload = {
            "registrant": view.as_payload(),
            "templateUrl": self._template_url,
            "options": options.as_payload(),
        }
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        if self._client is not None:
            response = await self._client.post(
                self._endpoint_url, json=payload, headers=headers, timeout=self._timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self._endpoint_url, json=payload, headers=headers)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            body = response.json()
            data_url = body.get("dataUrl") if isinstance(body, dict) else None
            if not isinstance(data_url, str):
                raise UnsupportedArtifactError("Renderer JSON response carried no dataUrl")
            return data_url
        return response.content


def _hex(rgb: str) -> colors.Color:
    rgb = rgb.lstrip("#")
    r, g, b = (int(rgb[i : i + 2], 16) / 255 for i in (0, 2, 4))
    return colors.Color(r, g, b)


BRAND = _hex("#196e87")
MUTED = _hex("#555555")
RIBBON = _hex("#e54b4b")
PLACEHOLDER = _hex("#cccccc")


class LocalBadgeRenderer:
    """Minimal 300x450pt badge drawn in-process; always available."""

    width = 300
    height = 450
    qr_size = 120
    ribbon_height = 48

    async def render(self, view: BadgeView, options: BadgeOptions) -> bytes:
        return await asyncio.to_thread(self.draw, view, options)

    def draw(self, view: BadgeView, options: BadgeOptions) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(self.width, self.height))
        pdf.setTitle(f"Ticket {view.ticket_code}")
        center = self.width / 2

        pdf.setFillColor(colors.white)
        pdf.rect(0, 0, self.width, self.height, fill=1, stroke=0)

        pdf.setFillColor(BRAND)
        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawCentredString(center, self.height - 30, options.event.name)

        pdf.setFillColor(colors.black)
        pdf.setFont("Helvetica-Bold", 18)
        pdf.drawCentredString(center, self.height - 80, view.name or view.company or "")
        if view.company:
            pdf.setFillColor(MUTED)
            pdf.setFont("Helvetica", 11)
            pdf.drawCentredString(center, self.height - 100, view.company)

        qr_x = (self.width - self.qr_size) / 2
        qr_y = self.height - 120 - self.qr_size
        if options.include_qr_code:
            data = encode_qr_payload(options.qr_payload) if options.qr_payload else view.ticket_code
            widget = qr.QrCodeWidget(data)
            x1, y1, x2, y2 = widget.getBounds()
            drawing = Drawing(
                self.qr_size,
                self.qr_size,
                transform=[self.qr_size / (x2 - x1), 0, 0, self.qr_size / (y2 - y1), 0, 0],
            )
            drawing.add(widget)
            renderPDF.draw(drawing, pdf, qr_x, qr_y)
        else:
            pdf.setStrokeColor(PLACEHOLDER)
            pdf.rect(qr_x, qr_y, self.qr_size, self.qr_size, fill=0, stroke=1)

        ribbon_y = 12
        pdf.setFillColor(RIBBON)
        pdf.rect(0, ribbon_y, self.width, self.ribbon_height, fill=1, stroke=0)
        pdf.setFillColor(colors.white)
        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawCentredString(center, ribbon_y + 22, (view.category or "DELEGATE").upper())
        pdf.setFont("Helvetica", 8)
        pdf.drawString(8, ribbon_y + 4, f"Ticket: {view.ticket_code}")

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()


class BadgeService:
    """Renders the badge for an admitted registrant.

    The remote renderer is preferred when configured; any failure there
    (transport, status code, unsupported result) falls back to the local
    renderer so admission never fails on rendering.
    """

    def __init__(
        self,
        *,
        event: EventContext,
        remote: BadgeRenderer | None = None,
        local: LocalBadgeRenderer | None = None,
    ) -> None:
        self._event = event
        self._remote = remote
        self._local = local or LocalBadgeRenderer()

    @property
    def event(self) -> EventContext:
        return self._event

    def options_for(self, record: RegistrantRecord) -> BadgeOptions:
        return BadgeOptions(
            event=self._event,
            include_qr_code=True,
            qr_payload=build_qr_payload(record, event=self._event),
        )

    async def render(self, record: RegistrantRecord) -> BadgeArtifact:
        view = BadgeView.from_record(record)
        options = self.options_for(record)
        filename = badge_filename(record.ticket_code)

        if self._remote is not None:
            try:
                result = await self._remote.render(view, options)
                content, media_type = await read_artifact(result)
            except Exception as exc:  # noqa: BLE001 - any collaborator failure falls back
                logger.warning(
                    "Remote badge rendering failed, falling back to local renderer",
                    ticket_code=record.ticket_code,
                    error=describe_error(exc),
                )
            else:
                return BadgeArtifact(content=content, media_type=media_type, filename=filename, renderer="remote")

        content = await self._local.render(view, options)
        return BadgeArtifact(content=content, media_type=PDF_MEDIA_TYPE, filename=filename, renderer="local")


def build_badge_service() -> BadgeService:
    event = EventContext(name=settings.event_name, date=settings.event_date, venue=settings.event_venue)
    remote: BadgeRenderer | None = None
    if settings.badge_renderer_url:
        remote = HttpBadgeRenderer(
            settings.badge_renderer_url,
            api_key=settings.badge_renderer_api_key,
            template_url=settings.badge_template_url,
            timeout_seconds=settings.badge_renderer_timeout_seconds,
        )
    return BadgeService(event=event, remote=remote)


__all__ = [
    "BadgeArtifact",
    "BadgeRenderer",
    "BadgeService",
    "HttpBadgeRenderer",
    "LocalBadgeRenderer",
    "PDF_MEDIA_TYPE",
    "build_badge_service",
    "read_artifact",
]
