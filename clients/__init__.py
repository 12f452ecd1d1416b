# Infrastructure clients
from clients.base import KeyValueStorage
from clients.file_storage_client import FileStorageClient
from clients.valkey_client import ValkeyClient
from clients.storage import open_storage
from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.pdf_renderer import ExportArtifact, PdfRenderer
