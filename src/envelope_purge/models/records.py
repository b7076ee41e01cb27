"""
Input model for one row of a bulk envelope deletion run.

Field names follow the spreadsheet column headers the operator uploads
(``EnvelopeId``, ``AuthToken``).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeletionRecord(BaseModel):
    """One spreadsheet row identifying an envelope to delete."""

    # Spreadsheets routinely carry extra columns; only the two below matter
    model_config = ConfigDict(extra='ignore', populate_by_name=True, frozen=True)

    envelope_id: str = Field(..., alias='EnvelopeId', description='Provider envelope ID')
    auth_token: str = Field(..., alias='AuthToken', description='Envelope auth token')

    @field_validator('envelope_id', 'auth_token', mode='before')
    @classmethod
    def _strip_and_require(cls, value: object) -> str:
        if value is None:
            raise ValueError('field is required')
        text = str(value).strip()
        if not text:
            raise ValueError('field must not be blank')
        return text

