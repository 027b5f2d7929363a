"""Custom exceptions for paged export."""


class ExportError(Exception):
    """Base exception for all export errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class InvalidInputError(ExportError):
    """Raised when a source raster or page geometry cannot be exported."""

    def __init__(self, message: str, field: str | None = None, *args, **kwargs):
        self.field = field
        super().__init__(message, *args, **kwargs)


class RasterizationError(ExportError):
    """Raised when a document cannot be rendered to a raster."""

    pass


class WriterError(ExportError):
    """Raised when a page writer is used out of order or after closing."""

    pass


class DocumentRenderError(ExportError):
    """Raised when a business document template fails to render."""

    def __init__(self, message: str, template_name: str | None = None, *args, **kwargs):
        self.template_name = template_name
        super().__init__(message, *args, **kwargs)
