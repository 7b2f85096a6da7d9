class AttachmentFetchError(Exception):
    """Raised when an attachment URL cannot be retrieved as text."""
