class SigningApiError(Exception):
    """Base exception for signing API errors.

    ``expose`` controls whether ``message`` is returned to the caller. Internal
    faults keep their detail in the logs and answer with a generic message.
    """
    def __init__(self, code: str, message: str, status_code: int = 400, field: str = None,
                 details: dict = None, expose: bool = True):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.field = field
        self.details = details or {}
        self.expose = expose
        super().__init__(self.message)


class ValidationError(SigningApiError):
    def __init__(self, message: str, field: str = None, details: dict = None):
        super().__init__("VALIDATION_ERROR", message, 400, field, details)


class NotFoundError(SigningApiError):
    def __init__(self, resource: str, resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message += f": {resource_id}"
        super().__init__("NOT_FOUND", message, 404, details={"resource": resource, "resource_id": resource_id})


class UnsupportedFormat(SigningApiError):
    def __init__(self, reason: str = None, detected_format: str = None):
        message = "Signature image is not a supported PNG or JPEG image"
        if reason:
            message += f": {reason}"
        super().__init__(
            "UNSUPPORTED_FORMAT",
            message,
            400,
            field="signatureBase64",
            details={"detected_format": detected_format}
        )


class DocumentProcessingError(SigningApiError):
    """Base for faults while loading or compositing the document (never exposed)"""
    def __init__(self, code: str, message: str, details: dict = None):
        super().__init__(code, message, 500, details=details, expose=False)


class SourceDocumentMissingError(DocumentProcessingError):
    def __init__(self, document_id: str, file_path: str):
        super().__init__(
            "SOURCE_DOCUMENT_MISSING",
            f"Source document for {document_id} not found at {file_path}",
            details={"document_id": document_id, "file_path": file_path}
        )


class DocumentLoadError(DocumentProcessingError):
    def __init__(self, reason: str = None):
        message = "Source document could not be parsed"
        if reason:
            message += f": {reason}"
        super().__init__("DOCUMENT_LOAD_ERROR", message)


class PageNotFound(DocumentProcessingError):
    def __init__(self, page_number: int, page_count: int):
        super().__init__(
            "PAGE_NOT_FOUND",
            f"Page {page_number} is outside the document's page range (1-{page_count})",
            details={"page": page_number, "page_count": page_count}
        )


class ImageEmbedError(DocumentProcessingError):
    def __init__(self, image_format: str, reason: str = None):
        message = f"Could not embed {image_format} signature image"
        if reason:
            message += f": {reason}"
        super().__init__("IMAGE_EMBED_ERROR", message, details={"format": image_format})


class FileOperationError(SigningApiError):
    def __init__(self, operation: str, file_path: str, reason: str = None):
        message = f"File {operation} failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(
            "FILE_OPERATION_ERROR",
            message,
            500,
            details={"operation": operation, "file_path": file_path},
            expose=False
        )


class PersistenceError(SigningApiError):
    def __init__(self, operation: str, reason: str = None):
        message = f"Audit store {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__("PERSISTENCE_ERROR", message, 500, details={"operation": operation}, expose=False)
