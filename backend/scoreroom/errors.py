"""Client-facing failures of session operations.

Every error here is recoverable: the protocol handler sends ``message`` to
the originating connection on the ``error`` event and nothing is mutated.
"""


class SessionError(Exception):
    message = 'Session request failed'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class SessionNotFound(SessionError):
    message = 'Session not found'


class SessionCompleted(SessionError):
    message = 'Session is already completed'


class DuplicateMemberName(SessionError):
    message = 'A member with this name is already in the session'


class CategoryMismatch(SessionError):
    message = 'Scores can only be submitted for the current category'


class MalformedRequest(SessionError):
    message = 'Malformed request'
