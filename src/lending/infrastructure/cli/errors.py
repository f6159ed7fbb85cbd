"""Translate core errors into click's error reporting."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import click

from lending.domain.exceptions import DomainException, InvariantViolation, StorageError

logger = logging.getLogger(__name__)

DATE = click.DateTime(formats=["%Y-%m-%d"])
TIMESTAMP = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"])


@contextmanager
def reported_errors() -> Iterator[None]:
    """Business rejections become a one-line message; internal faults are logged."""
    try:
        yield
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except (InvariantViolation, StorageError) as exc:
        logger.exception("Internal error")
        raise click.ClickException(f"Internal error: {exc}")
