from fastapi import status

from src.domain.result import Error

INTERNAL_ERROR_BODY = {"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}}


class ClientError(Exception):
    """Expected failure reported to the caller with its own code and message"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ServerError(Exception):
    """Unexpected failure; only the code reaches the caller"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
