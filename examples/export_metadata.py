"""Example: export the data dictionary and a few records from a REDCap project.

Reads REDCAP_API_URL and REDCAP_API_TOKEN from the environment.

Usage:
    export REDCAP_API_URL=https://redcap.example.org/api/
    export REDCAP_API_TOKEN=your_token_here
    python examples/export_metadata.py [record_ids]
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from redcap_client import InputFormat, RedcapClient, RedcapConfig


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    if not os.environ.get("REDCAP_API_TOKEN"):
        print("Set REDCAP_API_URL and REDCAP_API_TOKEN first.")
        sys.exit(1)

    client = RedcapClient(RedcapConfig.from_env())

    version = client.export_version()
    print(f"REDCap version: {version}")

    metadata = client.export_metadata(input_format=InputFormat.csv)
    if not metadata.ok:
        print(f"Metadata export failed: {metadata.error}")
        sys.exit(1)
    print("\nData dictionary (CSV):")
    print(metadata.text)

    record_ids = sys.argv[1] if len(sys.argv) > 1 else ""
    records = client.export_record(record_ids) if record_ids else client.export_records()
    print("\nRecords:")
    print(records.text if records.ok else f"failed: {records.error}")


if __name__ == "__main__":
    main()
