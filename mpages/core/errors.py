"""
Exceptions raised by the session core.
"""


class MpagesError(Exception):
    """Base class for mpages errors."""


class AlreadyActiveError(MpagesError):
    """A session was started on a surface that already has a live one."""

    def __init__(self, surface_id: str):
        self.surface_id = surface_id
        super().__init__(f"A writing session is already active for: {surface_id}")
