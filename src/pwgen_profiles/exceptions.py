"""
Custom exceptions for pwgen-profiles.
"""


class PwGenProfilesError(Exception):
    """Base exception for pwgen-profiles."""

    pass


class InvalidNameError(PwGenProfilesError):
    """Profile name is empty or collides with a reserved label."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid profile name {name!r}: {reason}")


class DuplicateProfileError(PwGenProfilesError):
    """A user profile with the same name already exists in the store."""

    pass


class UnresolvedCustomAlgorithm(PwGenProfilesError):
    """Custom algorithm identifier is empty, malformed or not registered."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Custom algorithm not found: {identifier!r}")


class GeneratorError(PwGenProfilesError):
    """Password generation failed."""

    pass


class ProfileStoreError(PwGenProfilesError):
    """Profile store could not be read or written."""

    pass
