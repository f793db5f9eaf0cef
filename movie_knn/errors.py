"""Exceptions raised by the index builder, the scanner and the catalog lookups."""

from __future__ import annotations


class MovieKNNError(Exception):
    """Base class for errors that abort a single recommendation run."""


class EmptyInputError(MovieKNNError, ValueError):
    """No ratings were provided, so the user dimension cannot be derived."""


class NotFoundError(MovieKNNError, KeyError):
    """A movie id or title has no entry in the catalog."""

    def __str__(self) -> str:
        # KeyError.__str__ wraps the message in quotes.
        return str(self.args[0]) if self.args else ""


class InvalidArgumentError(MovieKNNError, ValueError):
    """Bad K, mismatched vector lengths or an unknown option."""
