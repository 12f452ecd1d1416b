"""GET /api/data: unified read endpoint."""

from fastapi import APIRouter, Query, Request

from api.base import request_id_of, success_response
from core.exceptions import InvoiceNotFoundError
from core.models import InvoiceStatus


VALID_TYPES = {"invoices", "invoice", "summary", "state"}


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    controller = services["controller"]

    @router.get("/data")
    async def get_data(
        request: Request,
        type: str | None = Query(None),
        id: str | None = Query(None),
        status: str | None = Query(None),
    ):
        if type is None:
            raise ValueError("'type' query parameter is required")

        if type not in VALID_TYPES:
            raise ValueError(f"Unknown type '{type}'. Valid types: {', '.join(sorted(VALID_TYPES))}")

        request_id = request_id_of(request)

        if type == "invoices":
            return _handle_invoices(controller, status, request_id)

        if type == "invoice":
            return _handle_invoice(controller, id, request_id)

        if type == "summary":
            summary = controller.summary()
            return success_response({
                "totalRevenue": summary.total_revenue,
                "pendingAmount": summary.pending_amount,
                "totalInvoices": summary.total_invoices,
            }, request_id).model_dump(mode="json")

        return success_response(controller.snapshot(), request_id).model_dump(mode="json")

    return router


def _handle_invoices(controller, status, request_id):
    invoices = controller.invoices
    if status:
        wanted = InvoiceStatus(status)
        invoices = [i for i in invoices if i.status == wanted]

    return success_response(
        [i.to_document() for i in invoices],
        request_id,
    ).model_dump(mode="json")


def _handle_invoice(controller, id, request_id):
    if not id:
        raise ValueError("'invoice' type requires 'id' parameter")

    invoice = controller.store.get_by_id(id)
    if invoice is None:
        raise InvoiceNotFoundError(id)

    return success_response(invoice.to_document(), request_id).model_dump(mode="json")
