#!/usr/bin/env python3
"""
Delete every envelope listed in a CSV export, without the web uploader.

The CSV must have ``EnvelopeId`` and ``AuthToken`` columns; other columns
are ignored. Rows are submitted in batches exactly as the HTTP service does,
and the run summary is printed as JSON on stdout. Logs go to stderr, so
stdout can be redirected straight into a file.

Prerequisites:
    - Optionally override SOAP_URL, SOAP_ACTION, BATCH_SIZE,
      REQUEST_TIMEOUT_MS, INTER_BATCH_DELAY_MS in .env

Usage:
    python scripts/purge_from_csv.py envelopes.csv --context-id <ContextIdentifier>
"""

import argparse
import asyncio
import csv
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / '.env')

from envelope_purge.clients.soap_client import DocumentServiceClient
from envelope_purge.errors import InvalidInputError
from envelope_purge.logging import configure_logging
from envelope_purge.pipeline import DeletionPipeline


def load_rows(path: Path) -> list[dict]:
    """Read the CSV, skipping rows that are entirely blank."""
    with open(path, newline='', encoding='utf-8-sig') as f:
        return [row for row in csv.DictReader(f) if any((v or '').strip() for v in row.values())]


async def main(args: argparse.Namespace) -> int:
    rows = load_rows(args.csv_path)
    print(f"Loaded {len(rows)} rows from {args.csv_path}", file=sys.stderr)

    client = DocumentServiceClient()
    try:
        pipeline = DeletionPipeline(
            client,
            batch_size=args.batch_size,
            inter_batch_delay_ms=args.delay_ms,
        )
        summary = await pipeline.run(rows, args.context_id)
    except InvalidInputError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    finally:
        await client.close()

    print(json.dumps(summary.to_dict(), indent=2))
    return 0 if summary.success and not summary.aborted else 1


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('csv_path', type=Path)
    parser.add_argument('--context-id', required=True)
    parser.add_argument('--batch-size', type=int, default=None)
    parser.add_argument('--delay-ms', type=int, default=None)
    configure_logging(stream=sys.stderr)
    sys.exit(asyncio.run(main(parser.parse_args())))
