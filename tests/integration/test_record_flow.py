"""Integration tests: client -> payload -> requests, against requests-mock."""

from __future__ import annotations

import json
from urllib.parse import parse_qs

import requests_mock as req_mock

from redcap_client import (
    Arm,
    InputFormat,
    OverwriteBehavior,
    RedcapClient,
    RedcapConfig,
    RedcapDataType,
    ReturnFormat,
)
from tests.fixtures.records import Demographics

API_URL = "https://redcap.example.org/api/"


def _form(request) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(request.text, keep_blank_values=True).items()}


def _client() -> RedcapClient:
    return RedcapClient(RedcapConfig(api_url=API_URL, api_token="TOKEN42"))


class TestRecordFlow:
    def test_export_then_import(self, demographics: Demographics) -> None:
        client = _client()
        with req_mock.Mocker() as m:
            m.post(API_URL, [
                {"text": '[{"record_id": "1", "firstname": "Ada"}]'},
                {"text": '{"count": 1}'},
            ])

            exported = client.export_record(
                "1",
                input_format=InputFormat.json,
                return_format=ReturnFormat.json,
                data_type=RedcapDataType.flat,
                fields="record_id firstname",
            )
            imported = client.import_records(demographics, overwrite_behavior=OverwriteBehavior.overwrite)

            export_form = _form(m.request_history[0])
            import_form = _form(m.request_history[1])

        assert exported.text == '[{"record_id": "1", "firstname": "Ada"}]'
        assert imported.text == '{"count": 1}'

        assert export_form == {
            "token": "TOKEN42",
            "content": "record",
            "format": "json",
            "returnFormat": "json",
            "type": "flat",
            "records": "1",
            "fields": "record_id,firstname",
        }
        assert import_form["overwriteBehavior"] == "overwrite"
        assert import_form["dateFormat"] == "MDY"
        rows = json.loads(import_form["data"])
        assert rows[0]["firstname"] == "Ada"
        assert rows[0]["consented"] == "1"

    def test_missing_record_ids_sends_nothing(self) -> None:
        client = _client()
        with req_mock.Mocker() as m:
            m.post(API_URL, text="should not be called")
            response = client.export_record("")
            assert m.call_count == 0
        assert not response.ok

    def test_server_error_body_returned(self) -> None:
        client = _client()
        with req_mock.Mocker() as m:
            m.post(API_URL, status_code=400, text='{"error": "The value of the parameter \\"content\\" is not valid"}')
            response = client.export_records()
        assert response.ok
        assert "not valid" in response.text


class TestArmFlow:
    def test_import_and_delete_arms(self) -> None:
        client = _client()
        with req_mock.Mocker() as m:
            m.post(API_URL, [{"text": "2"}, {"text": "1"}])
            client.import_arms([Arm(arm_num=1, name="Drug A"), Arm(arm_num=2, name="Placebo")], override=1)
            client.delete_arms([2])
            import_form = _form(m.request_history[0])
            delete_form = _form(m.request_history[1])

        assert import_form["action"] == "import"
        assert import_form["override"] == "1"
        assert json.loads(import_form["data"])[1] == {"arm_num": 2, "name": "Placebo"}
        assert delete_form == {"token": "TOKEN42", "content": "arm", "action": "delete", "arms": "2"}

    def test_metadata_scenario(self) -> None:
        client = _client()
        with req_mock.Mocker() as m:
            m.post(API_URL, text="field_name,form_name\n")
            client.export_metadata(input_format="csv")
            form = _form(m.last_request)
        assert form == {"token": "TOKEN42", "content": "metadata", "format": "csv", "returnFormat": "json"}
