class FormpostError(Exception):
    """Base error for formpost."""


class MultipartError(FormpostError):
    """Raised when a multipart body cannot be built."""


class MultipartIOError(MultipartError, OSError):
    """Raised when a file or stream source fails to open or read."""


class BuilderConsumedError(MultipartError):
    """Raised when a finished or aborted builder is used again."""
