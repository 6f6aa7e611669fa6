"""Browser-facing routes: form pages and the short link redirect."""

from .routes import router as web_router

__all__ = ["web_router"]
