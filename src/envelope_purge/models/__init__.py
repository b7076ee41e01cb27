"""
Data models for the envelope purge pipeline.
"""

from .records import DeletionRecord
from .results import BatchResult, RunSummary

__all__ = [
    'DeletionRecord',
    'BatchResult',
    'RunSummary',
]
