"""
Request dispatch with host failover

Each logical request is tried against up to MAX_RETRIES hosts. Connect and
read timeouts grow linearly with the attempt number. Only transport-level
failures move on to the next host: a response with any status ends the
dispatch.
"""
import json
import logging
import ssl
from typing import List, Optional, Tuple

import httpx
from tenacity import (
    AsyncRetrying, RetryCallState, RetryError, Retrying,
    retry_if_exception_type, stop_after_attempt
)

from .config import AlgoliaConfig
from .constants import (
    API_KEY_HEADER, APPLICATION_ID_HEADER, BASE_CONNECT_TIMEOUT,
    BASE_READ_TIMEOUT, MAX_RETRIES, UNREACHABLE_MESSAGE
)
from .types import HttpError, Mode, Request, Result, Success, TransportFailure

logger = logging.getLogger(__name__)


def create_ssl_context() -> ssl.SSLContext:
    """Default SSL context with TLS 1.2 as the minimum version"""
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


class BaseDispatcher:
    """URL, header and timeout building shared by both dispatchers"""

    def __init__(self, config: AlgoliaConfig, max_retries: int = MAX_RETRIES):
        self.config = config
        self.max_retries = max_retries

    def build_url(self, mode: Mode, path: str, retry: int) -> str:
        host = self.config.host_resolver(mode, self.config.application_id, retry)
        return f"https://{host}{path}"

    def build_headers(self, request: Request) -> List[Tuple[str, str]]:
        """Caller headers first, then the identity headers"""
        headers = list(request.options.headers)
        if request.body is not None:
            headers.append(("Content-Type", "application/json; charset=utf-8"))
        headers.extend([
            (API_KEY_HEADER, self.config.api_key),
            (APPLICATION_ID_HEADER, self.config.application_id),
        ])
        return headers

    @staticmethod
    def build_timeout(retry: int) -> httpx.Timeout:
        scale = retry + 1
        return httpx.Timeout(
            BASE_READ_TIMEOUT * scale,
            connect=BASE_CONNECT_TIMEOUT * scale,
        )

    @staticmethod
    def interpret(response: httpx.Response) -> Result:
        if 200 <= response.status_code <= 299:
            return Success(json.loads(response.text))
        return HttpError(status_code=response.status_code, body=response.text)

    def _retry_kwargs(self) -> dict:
        return {
            "stop": stop_after_attempt(self.max_retries),
            "retry": retry_if_exception_type(httpx.TransportError),
            "before_sleep": self._log_failover,
        }

    @staticmethod
    def _log_failover(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception()
        logger.warning(
            f"Attempt {retry_state.attempt_number} failed "
            f"({type(error).__name__}: {error}), trying next host"
        )

    def _exhausted(self, error: RetryError) -> TransportFailure:
        cause = error.last_attempt.exception()
        logger.error(f"{UNREACHABLE_MESSAGE} after {self.max_retries} attempts: {cause}")
        return TransportFailure(
            message=UNREACHABLE_MESSAGE,
            attempts=self.max_retries,
            cause=cause,
        )

    def _log_request(self, mode: Mode, request: Request, url: str, retry: int) -> None:
        logger.debug(
            f"{request.method} {url} (mode={mode.value}, attempt={retry + 1}/{self.max_retries})"
        )


class RequestDispatcher(BaseDispatcher):
    """Blocking dispatcher on top of ``httpx.Client``"""

    def __init__(
        self,
        config: AlgoliaConfig,
        http_client: Optional[httpx.Client] = None,
        max_retries: int = MAX_RETRIES
    ):
        super().__init__(config, max_retries)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(verify=create_ssl_context())

    def send(self, mode: Mode, request: Request) -> Result:
        """
        Send a request, failing over across hosts

        Args:
            mode: Read or write traffic
            request: Request to send

        Returns:
            Success, HttpError or TransportFailure
        """
        try:
            for attempt in Retrying(**self._retry_kwargs()):
                with attempt:
                    response = self._send_once(
                        mode, request, attempt.retry_state.attempt_number - 1
                    )
        except RetryError as e:
            return self._exhausted(e)

        return self.interpret(response)

    def _send_once(self, mode: Mode, request: Request, retry: int) -> httpx.Response:
        url = self.build_url(mode, request.path, retry)
        self._log_request(mode, request, url, retry)
        return self.http_client.request(
            request.method,
            url,
            headers=self.build_headers(request),
            content=request.body,
            timeout=self.build_timeout(retry),
        )

    def close(self) -> None:
        """Close the HTTP client if this dispatcher created it"""
        if self._owns_client:
            self.http_client.close()


class AsyncRequestDispatcher(BaseDispatcher):
    """Async dispatcher on top of ``httpx.AsyncClient``"""

    def __init__(
        self,
        config: AlgoliaConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        max_retries: int = MAX_RETRIES
    ):
        super().__init__(config, max_retries)
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(verify=create_ssl_context())

    async def send(self, mode: Mode, request: Request) -> Result:
        """
        Send a request, failing over across hosts

        Args:
            mode: Read or write traffic
            request: Request to send

        Returns:
            Success, HttpError or TransportFailure
        """
        try:
            async for attempt in AsyncRetrying(**self._retry_kwargs()):
                with attempt:
                    response = await self._send_once(
                        mode, request, attempt.retry_state.attempt_number - 1
                    )
        except RetryError as e:
            return self._exhausted(e)

        return self.interpret(response)

    async def _send_once(self, mode: Mode, request: Request, retry: int) -> httpx.Response:
        url = self.build_url(mode, request.path, retry)
        self._log_request(mode, request, url, retry)
        return await self.http_client.request(
            request.method,
            url,
            headers=self.build_headers(request),
            content=request.body,
            timeout=self.build_timeout(retry),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
