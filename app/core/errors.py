"""Error taxonomy shared by the gateway client and the client-side stores."""


class WorkoutTrackerError(Exception):
    """Base exception for workout tracker errors."""

    pass


class NotFound(WorkoutTrackerError):
    """Entity absent (get/update/delete by unknown id)."""

    def __init__(self, message: str, status_code: int = 404):
        super().__init__(message)
        self.status_code = status_code


class PersistenceFailure(WorkoutTrackerError):
    """Network or server error on a persistence call.

    status_code is None when the request never produced a response
    (connection refused, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidState(WorkoutTrackerError):
    """Operation attempted without its precondition (e.g. no current workout)."""

    pass
