# interlinear/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Resource Errors ---

class ResourceUnavailableError(DomainError):
    """Raised by fetchers when a static document cannot be retrieved (network, 404, bad JSON)."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Resource '{path}' is unavailable: {reason}")

class MalformedResourceError(ResourceUnavailableError):
    """Raised when a document was fetched but does not have the expected shape."""
    def __init__(self, path: str, detail: str):
        super().__init__(path, f"malformed document ({detail})")

# --- Translation Errors ---

class TranslationFailedError(DomainError):
    """Raised by translators when the external service produced no usable result."""
    def __init__(self, strongs_id: str, reason: str):
        self.strongs_id = strongs_id
        self.reason = reason
        super().__init__(f"Translation failed for '{strongs_id}': {reason}")
