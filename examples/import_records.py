"""Example: flatten a typed record and (mock-)import it into REDCap.

Usage:
    python examples/import_records.py
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from redcap_client import OverwriteBehavior, PayloadBuilder, RedcapClient, RedcapConfig, RedcapRecord


class Enrollment(RedcapRecord):
    firstName: str | None = None
    lastName: str | None = None
    dob: date | None = None
    consented: bool | None = None
    withdrawal_reason: str | None = None


SAMPLE_RECORDS = [
    Enrollment(record_id="1001", firstName="Ada", lastName="Lovelace", dob=date(1815, 12, 10), consented=True),
    Enrollment(record_id="1002", firstName="Alan", lastName="Turing", dob=date(1912, 6, 23), consented=False),
]


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    print("=== REDCap Record Import Demo ===\n")

    # 1. Show the payload that would be sent
    payload = PayloadBuilder.import_records("demo-token", SAMPLE_RECORDS, date_format="YMD")
    print("Form payload (token hidden):")
    print(json.dumps({k: v for k, v in payload.items() if k != "token"}, indent=2))
    print()

    # 2. Mock the REDCap endpoint and import through the client
    mock_response = MagicMock()
    mock_response.ok = True
    mock_response.status_code = 200
    mock_response.text = '{"count": 2}'
    mock_session = MagicMock()
    mock_session.post.return_value = mock_response

    client = RedcapClient(
        RedcapConfig(api_url="https://redcap.example.org/api/", api_token="demo-token"),
        session=mock_session,
    )
    response = client.import_records(
        SAMPLE_RECORDS,
        overwrite_behavior=OverwriteBehavior.normal,
        date_format="YMD",
    )
    print(f"Import ok: {response.ok}")
    print(f"Response body: {response.text}")

    # 3. A record-scoped export with no IDs never reaches the network
    missing = client.export_record("")
    print(f"\nExport without record IDs ok: {missing.ok} ({missing.error})")


if __name__ == "__main__":
    main()
