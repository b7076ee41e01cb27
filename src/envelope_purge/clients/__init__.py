"""
Client wrappers for external services.
"""

from .soap_client import DocumentServiceClient, SoapResponse

__all__ = [
    'DocumentServiceClient',
    'SoapResponse',
]
