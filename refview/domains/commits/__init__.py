"""Commit list filtering."""

from .filter import COMMIT_FIELDS, CommitFilter, CommitRecord, Signature

__all__ = ["COMMIT_FIELDS", "CommitFilter", "CommitRecord", "Signature"]
