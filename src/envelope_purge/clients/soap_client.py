"""
HTTP client for the DocumentNOW envelope SOAP endpoint.

Handles:
- Connection management with a shared httpx.AsyncClient
- Provider-required SOAP headers
- Total per-request deadline with explicit cancellation
- Classification of transport failures into typed batch errors
"""

import asyncio
from dataclasses import dataclass

import httpx

from ..config import config
from ..errors import (
    RemoteError,
    RemoteTimeoutError,
    ResponseReadError,
    wrap_httpx_error,
)


@dataclass
class SoapResponse:
    """A fully read 2xx response from the document service."""

    status_code: int
    text: str
    content: bytes = b''


class DocumentServiceClient:
    """
    Async client posting SOAP documents to the envelope service.

    Configuration via environment variables:
    - SOAP_URL: Envelope service endpoint
    - SOAP_ACTION: SOAPAction header value for DeleteEnvelope
    - SOAP_USER_AGENT: User-Agent header value
    - REQUEST_TIMEOUT_MS: Total deadline per request (default: 30000)
    """

    ACCEPT = 'text/xml, application/soap+xml, application/xml'
    CONTENT_TYPE = 'text/xml; charset=utf-8'

    def __init__(
        self,
        url: str | None = None,
        soap_action: str | None = None,
        user_agent: str | None = None,
        timeout_ms: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the document service client.

        Args:
            url: Endpoint URL (defaults to SOAP_URL env var)
            soap_action: SOAP action URI (defaults to SOAP_ACTION env var)
            user_agent: User-Agent header (defaults to SOAP_USER_AGENT env var)
            timeout_ms: Per-request deadline in milliseconds
            http_client: Pre-built httpx client (tests inject a MockTransport here)
        """
        self.url = url or config.SOAP_URL
        self.soap_action = soap_action or config.SOAP_ACTION
        self.user_agent = user_agent or config.SOAP_USER_AGENT
        self.timeout_ms = timeout_ms if timeout_ms is not None else config.REQUEST_TIMEOUT_MS

        if not self.url:
            raise ValueError('SOAP_URL environment variable is required')
        if not self.soap_action:
            raise ValueError('SOAP_ACTION environment variable is required')
        if self.timeout_ms <= 0:
            raise ValueError('timeout_ms must be positive')

        self._client = http_client
        self._owns_client = http_client is None

    @property
    def headers(self) -> dict[str, str]:
        return {
            'Content-Type': self.CONTENT_TYPE,
            'SOAPAction': self.soap_action,
            'Accept': self.ACCEPT,
            'User-Agent': self.user_agent,
        }

    async def connect(self) -> None:
        """Create the underlying HTTP client if one was not injected."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout_ms / 1000)
            self._owns_client = True

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def post_envelope(self, xml_body: str) -> SoapResponse:
        """
        POST one SOAP document and return the read response.

        Args:
            xml_body: Serialized SOAP request

        Returns:
            SoapResponse for a 2xx status with a readable body

        Raises:
            RemoteTimeoutError: Deadline exceeded; the request was cancelled
            ServiceUnavailableError: No response could be obtained
            RemoteError: Non-2xx status (carries status, reason and body)
            ResponseReadError: Body could not be read
        """
        await self.connect()
        try:
            return await asyncio.wait_for(
                self._send(xml_body),
                timeout=self.timeout_ms / 1000,
            )
        except asyncio.TimeoutError as e:
            raise RemoteTimeoutError(
                f'Request timed out after {self.timeout_ms / 1000:g} seconds',
                context={'timeout_ms': self.timeout_ms},
            ) from e

    async def _send(self, xml_body: str) -> SoapResponse:
        try:
            request = self._client.build_request(
                'POST',
                self.url,
                content=xml_body.encode('utf-8'),
                headers=self.headers,
            )
            response = await self._client.send(request, stream=True)
        except httpx.TransportError as e:
            raise wrap_httpx_error(e, context={'url': self.url}) from e

        try:
            if not response.is_success:
                try:
                    await response.aread()
                    error_text = response.text
                except httpx.TimeoutException as e:
                    raise wrap_httpx_error(e, context={'url': self.url}) from e
                except Exception as e:
                    error_text = f'Could not read error response: {e}'
                raise RemoteError(
                    f'SOAP service returned {response.status_code}: {response.reason_phrase}',
                    status_code=response.status_code,
                    reason=response.reason_phrase,
                    body=error_text,
                )

            try:
                await response.aread()
                text = response.text
            except httpx.TimeoutException as e:
                raise wrap_httpx_error(e, context={'url': self.url}) from e
            except Exception as e:
                raise ResponseReadError(
                    f'Failed to read SOAP response: {e}',
                    context={'status_code': response.status_code},
                ) from e

            return SoapResponse(
                status_code=response.status_code,
                text=text,
                content=response.content,
            )
        finally:
            await response.aclose()
