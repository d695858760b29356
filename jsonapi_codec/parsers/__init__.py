"""Parsers for JSON:API documents."""

from .base import JSONAPIParser

__all__ = ["JSONAPIParser"]
