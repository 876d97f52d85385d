"""Per-request authentication context."""

from .context import RequestContext, extract_bearer_token

__all__ = ["RequestContext", "extract_bearer_token"]
