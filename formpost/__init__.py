from formpost.multipart import (
    MultipartBuilder,
    TextField,
    FileField,
    StreamField,
    build_multipart,
    random_boundary,
)
from formpost.models import Method, Request, Response, PartialResponse
from formpost.headers import headers
from formpost.errors import (
    FormpostError,
    MultipartError,
    MultipartIOError,
    BuilderConsumedError,
)

__all__ = [
    "MultipartBuilder",
    "TextField",
    "FileField",
    "StreamField",
    "build_multipart",
    "random_boundary",
    "Method",
    "Request",
    "Response",
    "PartialResponse",
    "headers",
    "FormpostError",
    "MultipartError",
    "MultipartIOError",
    "BuilderConsumedError",
]
