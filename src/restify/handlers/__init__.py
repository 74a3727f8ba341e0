"""Request body and response body handlers."""

from restify.handlers.body_handlers import (
    ByteArrayBodyHandler,
    FileUpload,
    FormDataBodyHandler,
    JSONBodyHandler,
    MultipartBodyHandler,
    Multiparts,
    SimpleFormDataBodyHandler,
    StreamBodyHandler,
)
from restify.handlers.response_handlers import (
    ByteArrayResponseHandler,
    JSONResponseHandler,
    TextResponseHandler,
)

__all__ = [
    "ByteArrayBodyHandler",
    "ByteArrayResponseHandler",
    "FileUpload",
    "FormDataBodyHandler",
    "JSONBodyHandler",
    "JSONResponseHandler",
    "MultipartBodyHandler",
    "Multiparts",
    "SimpleFormDataBodyHandler",
    "StreamBodyHandler",
    "TextResponseHandler",
]
