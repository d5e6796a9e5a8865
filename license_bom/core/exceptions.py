"""
Fatal errors of a license scan.

Per-package problems (a transitive import that cannot be resolved, an
unreadable license file) are not exceptions: they are reported inline in the
scan results. Only the errors below abort a run.
"""


class LicenseBomError(Exception):
    """Base class for errors that abort a scan."""


class MissingPackageError(LicenseBomError):
    """An explicitly requested package specifier could not be resolved."""

    def __init__(self, specifier: str, reason: str):
        self.specifier = specifier
        self.reason = reason
        super().__init__(f"cannot resolve package {specifier!r}: {reason}")


class ConfigError(LicenseBomError):
    """The override document is malformed."""
