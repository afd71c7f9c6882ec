from typing import Any, Dict

from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """A 4xx response carrying a use case Error"""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_dict(self) -> Dict[str, Any]:
        error_dict = {"code": self.base_error.code, "message": self.base_error.message}
        if self.base_error.details:
            error_dict["details"] = self.base_error.details
        return error_dict


class ServerError(Exception):
    """A 500 response; the Error message is logged, never returned"""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)
