"""Errors raised while reading collabsync settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, e.g. a non-numeric timeout."""


class MissingConfigurationError(ConfigurationError):
    """One or more required ``COLLABSYNC_*`` variables are unset or blank."""
