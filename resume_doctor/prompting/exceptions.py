class PromptError(Exception):
    """Raised when prompts cannot be built."""


class TemplateNotFoundError(PromptError):
    """Raised when no template exists for a (depth, domain) pair."""
