"""Token counting wrapper around litellm.

Reports how much of a model's context window a rendered summary takes.
"""

from litellm import token_counter

DEFAULT_MODEL = "claude-sonnet-4-20250514"


class TokenCounter:
    """Counts tokens for any model supported by litellm."""

    def __init__(self, model: str | None = None):
        self.model = model or DEFAULT_MODEL

    def count(self, text: str) -> int:
        return token_counter(model=self.model, text=text)
