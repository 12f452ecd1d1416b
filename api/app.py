"""
Application factory.

Serve with any ASGI server, e.g.:
    uvicorn api.app:create_app --factory
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.actions import create_actions_router
from api.data import create_data_router
from api.documents import create_documents_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from clients.email_client import EmailGatewayClient
from clients.pdf_renderer import PdfRenderer
from clients.storage import open_storage
from core.config import AppConfig, load_config
from core.controller import InvoiceController
from core.services.export_service import ExportService
from core.services.invoice_store import InvoiceStore
from core.services.share_service import ShareService

logger = logging.getLogger(__name__)


def build_services(config: AppConfig) -> dict:
    """Wire storage, store, controller, export and share services."""
    storage = open_storage(config.storage_url)
    store = InvoiceStore(
        storage,
        storage_key=config.storage_key,
        invoice_prefix=config.invoice_prefix,
    )

    email_client = None
    if config.email_gateway_enabled:
        email_client = EmailGatewayClient(
            gateway_url=config.email_gateway_url,
            api_key=config.email_gateway_api_key,
            hmac_secret=config.email_gateway_hmac_secret,
        )
    else:
        logger.info("Email gateway not configured; PDFs will be shared via download + mailto")

    return {
        "storage": storage,
        "store": store,
        "controller": InvoiceController(store, new_item_gst_rate=config.default_gst_rate),
        "export": ExportService(PdfRenderer(config.business)),
        "share": ShareService(config.business, config.outbox_dir, email_client),
    }


def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Settings to use. Loaded from the environment (and .env) when None.
    """
    if config is None:
        config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    services = build_services(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        services["storage"].close()

    app = FastAPI(title=f"{config.business.name} Invoicing", lifespan=lifespan)
    app.state.config = config
    app.state.services = services

    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")
    app.include_router(create_documents_router(services), prefix="/api")

    logger.info(f"Invoicing app ready (storage: {config.storage_url})")
    return app
