# core/errors.py

from fastapi import HTTPException

from core.logging_config import logger


class PermissionStoreError(RuntimeError):
    """A permission lookup against the database failed."""


def extract_supabase_error(error: Exception) -> str:
    """
    Readable detail from a Supabase client error.
    Handles PostgREST errors (``.message``), GoTrue errors (``.args``)
    and plain exceptions.
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)

    if getattr(error, "args", None):
        return str(error.args[0])

    return str(error) or error.__class__.__name__


def authorization_error(error: Exception) -> HTTPException:
    """
    Convert a failed permission lookup into the 500 returned by guards.
    Returns the HTTPException (doesn't raise) so the caller can re-raise
    with ``from``.
    """
    logger.error(f"Authorization lookup failed: {extract_supabase_error(error)}")
    return HTTPException(status_code=500, detail="Authorization error")
