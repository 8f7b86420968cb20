"""Errors raised while rendering tables."""

from __future__ import annotations


class TableRenderError(Exception):
    """Base class for rendering failures surfaced to the caller."""


class InvalidDataShape(TableRenderError, TypeError):
    """The record collection is not a sequence of uniform records."""


class TemplateError(TableRenderError):
    """A literal markup template could not be loaded or filled."""
