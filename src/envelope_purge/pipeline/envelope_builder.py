"""
SOAP request construction for the DocumentNOW ``DeleteEnvelope`` operation.

The document is assembled with lxml so that attribute values coming from the
uploaded spreadsheet are escaped on serialization.
"""

from typing import Any, Mapping, Sequence

from lxml import etree

from ..errors import InvalidInputError
from ..models.records import DeletionRecord

SOAP_ENV_NS = 'http://schemas.xmlsoap.org/soap/envelope/'
XSI_NS = 'http://www.w3.org/2001/XMLSchema-instance'
XSD_NS = 'http://www.w3.org/2001/XMLSchema'
ENVELOPES_NS = 'https://www.assuresign.net/Services/DocumentNOW/Envelopes'


def _record_fields(record: DeletionRecord | Mapping[str, Any], index: int) -> tuple[str, str]:
    """Return the trimmed (EnvelopeId, AuthToken) pair for one record."""
    if isinstance(record, DeletionRecord):
        return record.envelope_id, record.auth_token

    values = []
    for key in ('EnvelopeId', 'AuthToken'):
        raw = record.get(key)
        text = str(raw).strip() if raw is not None else ''
        if not text:
            raise InvalidInputError(
                f'Record is missing {key}',
                context={'record_index': index, 'field': key},
            )
        values.append(text)
    return values[0], values[1]


def build_delete_envelope(
    chunk: Sequence[DeletionRecord | Mapping[str, Any]],
    context_id: str,
) -> str:
    """
    Render the SOAP request deleting every envelope in ``chunk``.

    One ``DeleteEnvelopeRequest`` element is emitted per record, in chunk
    order, each carrying the context identifier and the record's trimmed
    envelope ID and auth token.

    Args:
        chunk: Records for a single batch
        context_id: Provider context identifier scoping the requests

    Returns:
        UTF-8 XML document as a string

    Raises:
        InvalidInputError: If the context identifier is blank or a record
            lacks EnvelopeId or AuthToken
    """
    context_id = (context_id or '').strip()
    if not context_id:
        raise InvalidInputError('ContextId is required')

    # Validate every record before building anything
    pairs = [_record_fields(record, i) for i, record in enumerate(chunk)]

    envelope = etree.Element(f'{{{SOAP_ENV_NS}}}Envelope', nsmap={'s': SOAP_ENV_NS})
    body = etree.SubElement(
        envelope,
        f'{{{SOAP_ENV_NS}}}Body',
        nsmap={'xsi': XSI_NS, 'xsd': XSD_NS},
    )
    operation = etree.SubElement(
        body, f'{{{ENVELOPES_NS}}}DeleteEnvelope', nsmap={None: ENVELOPES_NS}
    )
    requests = etree.SubElement(operation, f'{{{ENVELOPES_NS}}}Requests')

    for index, (envelope_id, auth_token) in enumerate(pairs):
        request = etree.SubElement(requests, f'{{{ENVELOPES_NS}}}DeleteEnvelopeRequest')
        try:
            request.set('ContextIdentifier', context_id)
            request.set('EnvelopeId', envelope_id)
            request.set('EnvelopeAuthToken', auth_token)
        except ValueError as e:
            # lxml rejects control characters that cannot appear in XML
            raise InvalidInputError(
                'Record contains characters that cannot be encoded in XML',
                context={'record_index': index, 'error': str(e)},
            ) from e

    return etree.tostring(
        envelope,
        xml_declaration=True,
        encoding='utf-8',
        pretty_print=True,
    ).decode('utf-8')
