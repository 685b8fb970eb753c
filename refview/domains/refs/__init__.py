"""Ref list filtering."""

from .filter import REF_FIELDS, RefFilter, RenderedRef, RenderedRefType

__all__ = ["REF_FIELDS", "RefFilter", "RenderedRef", "RenderedRefType"]
