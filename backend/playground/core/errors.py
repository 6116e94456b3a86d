from fastapi import status


class ExecutionError(Exception):
    """Terminal failure of one execution request.

    Each subclass maps to the HTTP status the responder uses.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class IoFailure(ExecutionError):
    # workspace unwritable or toolchain could not be spawned
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class CompileFailure(ExecutionError):
    status_code = status.HTTP_400_BAD_REQUEST


class RuntimeFailure(ExecutionError):
    status_code = status.HTTP_400_BAD_REQUEST
