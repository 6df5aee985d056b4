"""Domain exceptions raised by the services.

InvalidDate and InvalidRange subclass ValueError so the global ValueError
handler in main.py maps them to 400 responses without extra wiring.
PermissionDenied has its own handler and answers 403.
"""


class InvalidDate(ValueError):
    """Raised when a timestamp on a stored record cannot be parsed."""


class InvalidRange(ValueError):
    """Raised when a reporting window starts after it ends."""


class PermissionDenied(Exception):
    """Raised when the user's role does not grant access to a feature."""
