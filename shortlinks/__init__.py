"""Core business logic for the short link service."""

from .shortcode import ShortCodeGenerator
from .registry import CodeRegistry

__all__ = ["ShortCodeGenerator", "CodeRegistry"]
