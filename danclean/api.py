"""HTTP client for the Dan Clean backend."""

from __future__ import annotations

from typing import Any

import requests

from danclean.config import API_RETRIES, resolve_api_timeout, resolve_api_url
from danclean.models import User


class ApiError(Exception):
    """An API call failed; ``message`` is safe to show to the operator."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthorizedError(ApiError):
    """The session cookie is missing, expired or invalid."""

    def __init__(self, message: str = "Token inválido") -> None:
        super().__init__(message, status_code=401)


def _error_message(response: requests.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return fallback


class ApiClient:
    """Cookie-session JSON client bound to one backend base URL."""

    def __init__(
        self,
        base_url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
        retries: int = API_RETRIES,
    ) -> None:
        self.base_url = (base_url or resolve_api_url()).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.timeout = timeout if timeout is not None else resolve_api_timeout()
        self.retries = max(0, retries)

    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        attempt = 0
        while True:
            try:
                return self.session.get(url, timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt >= self.retries:
                    raise ApiError(f"Request to {path} failed: {exc}") from exc
                attempt += 1

    def fetch_me(self) -> User | None:
        """Fetch the authenticated user; ``None`` when the backend has no record for the session.

        Raises:
            UnauthorizedError: the backend rejected the session (HTTP 401).
            ApiError: transport failure, any other error status, or a malformed body.
        """
        response = self._get("/me")

        if response.status_code == 401:
            raise UnauthorizedError(_error_message(response, "Token inválido"))
        if response.status_code == 404:
            return None
        if not response.ok:
            raise ApiError(
                _error_message(response, f"HTTP {response.status_code}"),
                status_code=response.status_code,
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise ApiError("Respuesta inválida del servidor", status_code=response.status_code) from exc
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise ApiError("Respuesta inválida del servidor", status_code=response.status_code)

        try:
            return User.from_payload(payload)
        except (KeyError, ValueError) as exc:
            raise ApiError(f"Usuario inválido: {exc}", status_code=response.status_code) from exc
