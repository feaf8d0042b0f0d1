from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ticketgate_api.api.dependencies.scanning import get_scan_service
from ticketgate_api.api.dependencies.security import require_scan_api_key
from ticketgate_api.observability.scans import get_scan_store
from ticketgate_api.services.tickets.errors import BadInputError, TicketScanError
from ticketgate_api.services.tickets.scan_service import TicketScanService


router = APIRouter(prefix="/tickets", tags=["tickets"])

TICKETS_PATH_PREFIX = "/api/v1/tickets/"


class ScanRequest(BaseModel):
    """Either a known ticket identifier or the raw string read by a scanner."""

    model_config = ConfigDict(populate_by_name=True)

    # Any JSON value; key extraction decides whether it carries a ticket key.
    ticket_id: Any = Field(None, alias="ticketId", description="Known ticket identifier")
    raw: Any = Field(None, description="Raw scanned payload")


class ErrorResponse(BaseModel):
    success: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Human readable failure reason")


class ValidateResponse(BaseModel):
    success: bool = Field(True, description="Whether a registrant was found")
    ticket: Dict[str, Any] = Field(..., description="Normalized registrant view")


_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "No ticket id could be extracted"},
    401: {"description": "Invalid API key"},
    404: {"model": ErrorResponse, "description": "No registrant holds this ticket"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
    503: {"model": ErrorResponse, "description": "Registrant store unavailable"},
}


def _error_response(exc: TicketScanError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


def _unexpected_failure(action: str, exc: Exception) -> JSONResponse:
    logger.exception(f"Ticket {action} failed unexpectedly", error=str(exc))
    get_scan_store().record_failure("error", str(exc) or exc.__class__.__name__)
    return _error_response(TicketScanError())


async def ticket_request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer unreadable ticket request bodies with the scan error shape."""

    if not request.url.path.startswith(TICKETS_PATH_PREFIX):
        return await request_validation_exception_handler(request, exc)

    error = BadInputError()
    logger.info("Ticket request body rejected", path=request.url.path, errors=len(exc.errors()))
    get_scan_store().record_failure(error.outcome, error.message)
    return _error_response(error)


@router.post(
    "/scan",
    dependencies=[Depends(require_scan_api_key)],
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Rendered badge"},
        402: {"model": ErrorResponse, "description": "Paid ticket without accepted payment"},
        **_ERROR_RESPONSES,
    },
)
async def scan_ticket(
    payload: ScanRequest | None = Body(None),
    service: TicketScanService = Depends(get_scan_service),
) -> Response:
    """Admit the scanned ticket and return its printable badge.

    The ticket key is recovered from ``ticketId`` or ``raw``, matched against
    the registrant collections, checked for payment and marked redeemed. A
    repeated scan of the same ticket is admitted again.
    """
    request = payload or ScanRequest()
    try:
        outcome = await service.scan(ticket_id=request.ticket_id, raw=request.raw)
    except TicketScanError as exc:
        return _error_response(exc)
    except Exception as exc:
        return _unexpected_failure("scan", exc)

    artifact = outcome.artifact
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={
            "Content-Disposition": f"inline; filename={artifact.filename}",
            "X-Badge-Renderer": artifact.renderer,
        },
    )


@router.post(
    "/validate",
    dependencies=[Depends(require_scan_api_key)],
    response_model=ValidateResponse,
    responses=_ERROR_RESPONSES,
)
async def validate_ticket(
    payload: ScanRequest | None = Body(None),
    service: TicketScanService = Depends(get_scan_service),
) -> Any:
    """Look up the registrant for a scan without admitting or redeeming it."""
    request = payload or ScanRequest()
    try:
        record = await service.lookup(ticket_id=request.ticket_id, raw=request.raw)
    except TicketScanError as exc:
        return _error_response(exc)
    except Exception as exc:
        return _unexpected_failure("validation", exc)

    return ValidateResponse(success=True, ticket=record.as_payload())


@router.get("/observability", dependencies=[Depends(require_scan_api_key)])
async def scan_observability() -> Dict[str, object]:
    return get_scan_store().snapshot().as_dict()
