"""
Error types raised by the ripper.

Every user-facing failure derives from RipperError so the CLI can print a
concise message without a traceback. Transport errors from httpx are not
wrapped and propagate as-is.
"""

from __future__ import annotations


class RipperError(Exception):
    """Base user-facing error for cgpripper."""


class ConfigMissingError(RipperError):
    """The session config file does not exist or lacks the session id."""


class InvalidArgumentError(RipperError):
    """A command-line value (page count, quality tier) is out of range."""


class AuthorizationError(RipperError):
    """The platform did not issue any access-grant cookies."""


class AssetFetchError(RipperError):
    """A page background could not be fetched in either encoding."""


class RenderError(RipperError):
    """A composed page could not be rendered to PDF."""
