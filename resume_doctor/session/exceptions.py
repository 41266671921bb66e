class CredentialStoreError(Exception):
    """Raised when stored credentials cannot be read or written."""
