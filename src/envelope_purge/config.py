"""
Configuration management for the envelope purge pipeline.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


class Config:
    """Configuration settings loaded from environment."""

    # Remote document service (AssureSign DocumentNOW v2)
    SOAP_URL: str = os.getenv(
        'SOAP_URL',
        'https://www.assuresign.net/Services/DocumentNOW/v2/DocumentNOW.svc/Envelopes/text',
    )
    SOAP_ACTION: str = os.getenv(
        'SOAP_ACTION',
        'https://www.assuresign.net/Services/DocumentNOW/Envelopes/IEnvelopeService/DeleteEnvelope',
    )
    SOAP_USER_AGENT: str = os.getenv('SOAP_USER_AGENT', 'envelope-purge SOAP client')

    # Pipeline
    BATCH_SIZE: int = int(os.getenv('BATCH_SIZE', '50'))
    REQUEST_TIMEOUT_MS: int = int(os.getenv('REQUEST_TIMEOUT_MS', '30000'))
    # Pause between consecutive batches to stay under the provider's rate limit
    INTER_BATCH_DELAY_MS: int = int(os.getenv('INTER_BATCH_DELAY_MS', '10000'))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate that required configuration is present and sane.

        Returns:
            List of missing or invalid configuration keys
        """
        invalid = []
        if not cls.SOAP_URL:
            invalid.append('SOAP_URL')
        if not cls.SOAP_ACTION:
            invalid.append('SOAP_ACTION')
        if cls.BATCH_SIZE <= 0:
            invalid.append('BATCH_SIZE')
        if cls.REQUEST_TIMEOUT_MS <= 0:
            invalid.append('REQUEST_TIMEOUT_MS')
        if cls.INTER_BATCH_DELAY_MS < 0:
            invalid.append('INTER_BATCH_DELAY_MS')
        return invalid


# Singleton config instance
config = Config()
