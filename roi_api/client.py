# roi_api/client.py
# -----------------------------------------------------------------------------
# Async HTTP client for the calculations API (httpx)
# - calculate / list / get / delete
# - non-2xx responses raise ApiClientError with the server's field errors
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import httpx
from loguru import logger

from roi_api.schemas.calculation import (
    CalculationInput,
    CalculationRecord,
    CalculationResult,
)
from roi_api.services.history import CalculationHistory

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 30.0

InputLike = Union[CalculationInput, Mapping[str, Any]]


class ApiClientError(Exception):
    def __init__(self, status_code: int, message: str, errors: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors or {}
        super().__init__(f"{status_code}: {message}")


class RoiApiClient:
    """
    Thin wrapper over /api/calculations.

        async with RoiApiClient("http://localhost:3000") as api:
            record = await api.calculate({...})
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        api_prefix: str = "api",
        timeout: float = DEFAULT_TIMEOUT,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._prefix = "/" + api_prefix.strip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers, transport=transport
        )

    async def __aenter__(self) -> RoiApiClient:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self._prefix}/calculations{path}"
        logger.debug("API request {} {} {}", method, url, kwargs.get("json"))
        r = await self._client.request(method, url, **kwargs)
        logger.debug("API response {} {}", r.status_code, url)
        if r.is_error:
            try:
                body = r.json()
            except ValueError:
                body = {}
            message = body.get("message") or r.reason_phrase
            logger.error("API error {}: {}", r.status_code, message)
            raise ApiClientError(r.status_code, message, body.get("errors"))
        return r

    @staticmethod
    def _payload(data: InputLike) -> Dict[str, Any]:
        if isinstance(data, CalculationInput):
            return data.model_dump(by_alias=True)
        return dict(data)

    async def calculate(self, data: InputLike) -> CalculationRecord:
        """Compute and store; returns the stored record."""
        r = await self._request("POST", "", json=self._payload(data))
        return CalculationRecord.model_validate(r.json())

    async def preview(self, data: InputLike) -> CalculationResult:
        """Compute without storing."""
        r = await self._request(
            "POST", "", json=self._payload(data), params={"save": "false"}
        )
        return CalculationResult.model_validate(r.json())

    async def list_calculations(self) -> List[CalculationRecord]:
        r = await self._request("GET", "")
        return [CalculationRecord.model_validate(x) for x in r.json()]

    async def get_calculation(self, calculation_id: int) -> CalculationRecord:
        r = await self._request("GET", f"/{calculation_id}")
        return CalculationRecord.model_validate(r.json())

    async def delete_calculation(self, calculation_id: int) -> None:
        await self._request("DELETE", f"/{calculation_id}")

    async def calculate_into(
        self, history: CalculationHistory, data: InputLike
    ) -> Tuple[CalculationHistory, CalculationRecord]:
        """calculate() and append the result to history; the new history is returned"""
        record = await self.calculate(data)
        return history.append(record.result), record
