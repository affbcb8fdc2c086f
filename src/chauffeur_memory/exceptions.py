class ReplyGenerationError(RuntimeError):
    """The reply completion failed; the chat turn cannot be answered."""
