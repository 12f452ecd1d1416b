"""POST /api/actions: unified mutation endpoint."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from api.base import request_id_of, success_response
from core.exceptions import (
    ExportError,
    InvalidTransitionError,
    InvoiceNotFoundError,
    ShareError,
    ValidationFailedError,
)
from core.services.share_service import ShareTarget


class ActionRequest(BaseModel):
    domain: str
    action: str
    data: dict = Field(default_factory=dict)


def create_actions_router(services: dict) -> APIRouter:
    router = APIRouter()

    controller = services["controller"]
    handlers = {
        "view": ViewHandler(controller),
        "editor": EditorHandler(controller),
        "share": ShareHandler(controller, services["export"], services["share"]),
    }

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        handler = handlers.get(body.domain)
        if handler is None:
            raise ValueError(
                f"Unknown domain '{body.domain}'. "
                f"Valid domains: {', '.join(sorted(handlers.keys()))}"
            )

        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Action '{body.action}' not allowed on '{body.domain}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        method = getattr(handler, f"_handle_{body.action}", None)
        result = method(body.data)
        return success_response(result, request_id_of(request)).model_dump(mode="json")

    return router


def _require(data: dict, key: str = "id"):
    value = data.get(key)
    if value is None or value == "":
        raise ValueError(f"'{key}' is required")
    return value


# =============================================================================
# HANDLER CLASSES
# =============================================================================


class ViewHandler:
    ALLOWED_ACTIONS = {"create", "edit", "view", "back", "cancel", "save", "delete", "refresh"}

    def __init__(self, controller):
        self.controller = controller

    def _handle_create(self, data: dict):
        self.controller.create()
        return self.controller.snapshot()

    def _handle_edit(self, data: dict):
        self.controller.edit(_require(data))
        return self.controller.snapshot()

    def _handle_view(self, data: dict):
        self.controller.view(_require(data))
        return self.controller.snapshot()

    def _handle_back(self, data: dict):
        self.controller.back()
        return self.controller.snapshot()

    def _handle_cancel(self, data: dict):
        self.controller.cancel()
        return self.controller.snapshot()

    def _handle_save(self, data: dict):
        result = self.controller.save()
        if not result.ok:
            raise ValidationFailedError(result.violations)
        return self.controller.snapshot()

    def _handle_delete(self, data: dict):
        deleted = self.controller.delete(_require(data), data.get("confirmed") is True)
        return {"deleted": deleted, **self.controller.snapshot()}

    def _handle_refresh(self, data: dict):
        self.controller.refresh()
        return self.controller.snapshot()


class EditorHandler:
    ALLOWED_ACTIONS = {"set_customer", "set_field", "add_item", "update_item", "remove_item"}

    def __init__(self, controller):
        self.controller = controller

    @property
    def editor(self):
        if self.controller.editor is None:
            raise InvalidTransitionError("change the draft", self.controller.mode.value)
        return self.controller.editor

    def _handle_set_customer(self, data: dict):
        invoice = self.editor.set_customer_field(_require(data, "field"), data.get("value", ""))
        return invoice.to_document()

    def _handle_set_field(self, data: dict):
        invoice = self.editor.set_field(_require(data, "field"), data.get("value"))
        return invoice.to_document()

    def _handle_add_item(self, data: dict):
        editor = self.editor
        editor.add_item()
        return editor.invoice.to_document()

    def _handle_update_item(self, data: dict):
        editor = self.editor
        editor.update_item(_require(data), _require(data, "field"), data.get("value"))
        return editor.invoice.to_document()

    def _handle_remove_item(self, data: dict):
        editor = self.editor
        if not editor.remove_item(_require(data)):
            raise ValueError(f"Item {data['id']} not found")
        return editor.invoice.to_document()


class ShareHandler:
    ALLOWED_ACTIONS = {"email", "mailto", "whatsapp", "download", "send_pdf"}

    def __init__(self, controller, export_service, share_service):
        self.controller = controller
        self.export_service = export_service
        self.share_service = share_service

    def _invoice(self, data: dict):
        invoice_id = _require(data)
        invoice = self.controller.store.get_by_id(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def _artifact(self, invoice):
        result = self.export_service.export(invoice)
        if not result.ok:
            raise ExportError(result.error)
        return result.artifact

    def _share(self, data: dict, target: ShareTarget, needs_pdf: bool):
        invoice = self._invoice(data)
        artifact = self._artifact(invoice) if needs_pdf else None
        result = self.share_service.share(invoice, target, artifact)
        if not result.ok:
            raise ShareError(result.error)
        return {"target": result.target.value, "url": result.url, "path": result.path}

    def _handle_email(self, data: dict):
        return self._share(data, ShareTarget.EMAIL, needs_pdf=True)

    def _handle_mailto(self, data: dict):
        return self._share(data, ShareTarget.MAILTO, needs_pdf=False)

    def _handle_whatsapp(self, data: dict):
        return self._share(data, ShareTarget.WHATSAPP, needs_pdf=False)

    def _handle_download(self, data: dict):
        return self._share(data, ShareTarget.DOWNLOAD, needs_pdf=True)

    def _handle_send_pdf(self, data: dict):
        invoice = self._invoice(data)
        result = self.share_service.send_pdf(invoice, self._artifact(invoice))
        if not result.ok:
            raise ShareError(result.error)
        return {"target": result.target.value, "url": result.url, "path": result.path}
