"""Provider response helpers — pull assistant text out of decoded bodies."""

from .response import PROVIDERS, extract_text_by_provider, has_structured_payload

__all__ = ["PROVIDERS", "extract_text_by_provider", "has_structured_payload"]
