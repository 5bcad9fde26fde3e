# fintrack/client/http.py
from typing import Any, Optional

import httpx

class ApiError(Exception):
    """A non-2xx answer from the Fintrack API."""

    def __init__(self, status_code: int, message: str, data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.data = data

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and "statusMessage" in body:
            return cls(response.status_code, body["statusMessage"], body.get("data"))
        return cls(response.status_code, response.reason_phrase or f"HTTP {response.status_code}")

# What a store records in its `error` field: API answers, transport failures, bad payloads
CLIENT_ERRORS = (ApiError, httpx.HTTPError, ValueError)

async def request_json(http: httpx.AsyncClient, method: str, url: str, **kwargs) -> Optional[Any]:
    response = await http.request(method, url, **kwargs)
    if response.is_error:
        raise ApiError.from_response(response)
    if response.status_code == 204 or not response.content:
        return None
    return response.json()

def describe_error(exc: Exception, fallback: str) -> str:
    """Human-readable message for the reactive `error` field."""
    message = str(exc)
    return message or fallback
