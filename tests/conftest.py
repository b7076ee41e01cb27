"""
Pytest configuration and shared fixtures.

Key fixtures:
- make_soap_client: DocumentServiceClient backed by an httpx.MockTransport
- make_records: Factory for spreadsheet-style rows
- soap_success_body: Well-formed DeleteEnvelope SOAP response

No network access is required: every remote call goes through a mock
transport.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

import httpx

from envelope_purge.clients.soap_client import DocumentServiceClient

TEST_SOAP_URL = 'https://soap.test/Envelopes/text'
TEST_SOAP_ACTION = 'https://soap.test/Envelopes/IEnvelopeService/DeleteEnvelope'

SOAP_SUCCESS_BODY = """<?xml version="1.0" encoding="utf-8"?>
<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">
  <s:Body>
    <DeleteEnvelopeResponse xmlns="https://www.assuresign.net/Services/DocumentNOW/Envelopes">
      <DeleteEnvelopeResult>
        <Results>
          <DeleteEnvelopeResult EnvelopeId="E1" Success="true" />
        </Results>
      </DeleteEnvelopeResult>
    </DeleteEnvelopeResponse>
  </s:Body>
</s:Envelope>"""


@pytest.fixture
def soap_success_body() -> str:
    """Well-formed SOAP response for a DeleteEnvelope call."""
    return SOAP_SUCCESS_BODY


@pytest.fixture
def make_soap_client():
    """Factory building a DocumentServiceClient around a mock request handler."""

    def _make(handler, timeout_ms: int = 1000) -> DocumentServiceClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return DocumentServiceClient(
            url=TEST_SOAP_URL,
            soap_action=TEST_SOAP_ACTION,
            user_agent='envelope-purge tests',
            timeout_ms=timeout_ms,
            http_client=http_client,
        )

    return _make


@pytest.fixture
def make_records():
    """Factory for spreadsheet rows with EnvelopeId/AuthToken columns."""

    def _make(count: int) -> list[dict[str, str]]:
        return [
            {'EnvelopeId': f'env-{i:04d}', 'AuthToken': f'tok-{i:04d}'}
            for i in range(count)
        ]

    return _make


@pytest.fixture
def context_id() -> str:
    """Sample provider context identifier."""
    return 'ctx-550e8400-e29b-41d4'
