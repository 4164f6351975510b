import logging
from typing import Optional

import requests
from pydantic import ValidationError

from ..config import ANALYZE_PATH, HEALTH_PATH, backend_url
from ..schemas.analysis import AnalysisRequest, AnalysisResult

logger = logging.getLogger("services.client")


class AnalysisError(Exception):
    """Base class for every failure of a single submission."""


class NetworkFailure(AnalysisError):
    pass


class HttpFailure(AnalysisError):
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Request failed ({status}): {body}")


class DecodeFailure(AnalysisError):
    pass


class AnalysisClient:
    """Sends one analysis request per call to the remote analysis service.

    No timeout and no retry: a failure is final for that submission and is
    raised as one of ``NetworkFailure``, ``HttpFailure`` or ``DecodeFailure``.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or backend_url()).rstrip("/")
        self._http = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{ANALYZE_PATH}"

    @property
    def health_url(self) -> str:
        return f"{self.base_url}{HEALTH_PATH}"

    def submit(self, request: AnalysisRequest) -> AnalysisResult:
        url = self.endpoint
        logger.info(
            "POST %s market=%s top_n=%s wishlist=%d",
            url, request.market, request.top_n, len(request.wishlist),
        )
        try:
            r = self._http.post(
                url,
                json=request.to_payload(),
                headers={"Content-Type": "application/json"},
            )
        except requests.RequestException as e:
            logger.warning("network error calling %s: %s", url, e)
            raise NetworkFailure(f"Could not reach analysis service at {url}: {e}") from e

        if not 200 <= r.status_code < 300:
            logger.warning("analysis service answered %s", r.status_code)
            raise HttpFailure(r.status_code, r.text)

        try:
            data = r.json()
        except ValueError as e:
            raise DecodeFailure(f"Invalid JSON from analysis service: {e}") from e

        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as e:
            loc = ".".join(str(p) for p in e.errors()[0]["loc"]) or "body"
            logger.warning("unexpected response shape: %s", e)
            raise DecodeFailure(f"Unexpected response shape from analysis service (at {loc})") from e
