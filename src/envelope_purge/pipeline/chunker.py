"""Split an ordered record sequence into fixed-size batches."""

from typing import Sequence, TypeVar

from ..errors import InvalidInputError

T = TypeVar('T')


def chunk_records(records: Sequence[T], size: int) -> list[list[T]]:
    """
    Partition ``records`` into consecutive chunks of at most ``size`` items.

    Order is preserved and the last chunk may be short. Empty input yields
    no chunks.

    Raises:
        InvalidInputError: If size is not a positive integer
    """
    if size <= 0:
        raise InvalidInputError(
            'Chunk size must be a positive integer',
            context={'size': size},
        )
    return [list(records[i:i + size]) for i in range(0, len(records), size)]
