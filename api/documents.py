"""GET /api/invoices/{id}/pdf: invoice PDF download."""

from fastapi import APIRouter
from starlette.responses import Response

from core.exceptions import ExportError, InvoiceNotFoundError


def create_documents_router(services: dict) -> APIRouter:
    router = APIRouter()

    store = services["store"]
    export_service = services["export"]

    @router.get("/invoices/{invoice_id}/pdf")
    async def download_pdf(invoice_id: str):
        invoice = store.get_by_id(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)

        result = export_service.export(invoice)
        if not result.ok:
            raise ExportError(result.error)

        artifact = result.artifact
        return Response(
            content=artifact.content,
            media_type=artifact.media_type,
            headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
        )

    return router
