"""Tests for definition loading helpers."""

import json
from unittest.mock import Mock

import pytest
import requests

from optionhandler import utils
from optionhandler.codegen.core.schema import SchemaError
from optionhandler.utils import (
    DefinitionIOError,
    is_url,
    load_definition,
    load_definition_data,
    load_json_from_file,
    load_json_from_url,
)


def _response(payload=None, status=200, content_type="application/json", body_error=None):
    response = Mock()
    response.status_code = status
    response.headers = {"content-type": content_type}
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    if body_error is not None:
        response.json.side_effect = body_error
    else:
        response.json.return_value = payload
    return response


@pytest.mark.parametrize(
    "source, expected",
    [
        ("https://example.com/my_svm.json", True),
        ("http://example.com/a.json", True),
        ("ftp://example.com/a.json", False),
        ("defs/my_svm.json", False),
    ],
)
def test_is_url(source, expected):
    assert is_url(source) is expected


class TestLoadJsonFromFile:
    def test_load(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text('{"name": "A"}')

        assert load_json_from_file(path) == {"name": "A"}

    def test_missing(self, tmp_path):
        with pytest.raises(DefinitionIOError, match="File not found"):
            load_json_from_file(tmp_path / "missing.json")

    def test_invalid(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text("{oops")

        with pytest.raises(DefinitionIOError, match="Invalid JSON"):
            load_json_from_file(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_bytes(b'{"name": "X\xff"}')

        with pytest.raises(DefinitionIOError, match="not UTF-8 encoded"):
            load_json_from_file(path)

    def test_other_extension(self, tmp_path):
        path = tmp_path / "a.def"
        path.write_text("[1]")

        assert load_json_from_file(path) == [1]


class TestLoadJsonFromUrl:
    URL = "https://example.com/my_svm.json"

    def test_load(self, monkeypatch):
        get = Mock(return_value=_response({"name": "A"}))
        monkeypatch.setattr(utils.requests, "get", get)

        assert load_json_from_url(self.URL, timeout=5) == {"name": "A"}
        get.assert_called_once_with(self.URL, timeout=5)

    def test_invalid_url(self):
        with pytest.raises(DefinitionIOError, match="Invalid URL"):
            load_json_from_url("https://")

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(utils.requests, "get", Mock(return_value=_response(status=404)))

        with pytest.raises(DefinitionIOError, match="HTTP error 404"):
            load_json_from_url(self.URL)

    def test_timeout(self, monkeypatch):
        monkeypatch.setattr(
            utils.requests, "get", Mock(side_effect=requests.exceptions.Timeout())
        )

        with pytest.raises(DefinitionIOError, match="timeout"):
            load_json_from_url(self.URL)

    def test_connection_error(self, monkeypatch):
        monkeypatch.setattr(
            utils.requests, "get", Mock(side_effect=requests.exceptions.ConnectionError())
        )

        with pytest.raises(DefinitionIOError, match="Connection error"):
            load_json_from_url(self.URL)

    def test_bad_body(self, monkeypatch):
        response = _response(content_type="text/html", body_error=ValueError("Expecting value"))
        monkeypatch.setattr(utils.requests, "get", Mock(return_value=response))

        with pytest.raises(DefinitionIOError, match="Invalid JSON response"):
            load_json_from_url(self.URL)


class TestLoadDefinition:
    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(DefinitionIOError, match="must be a JSON object"):
            load_definition_data(path)

    def test_from_file(self, write_definition, capacity_data):
        source = write_definition(capacity_data)

        definition = load_definition(source)

        assert definition.class_name == "AbstractMySVM"
        assert definition.source == str(source)

    def test_from_url(self, monkeypatch, capacity_data):
        monkeypatch.setattr(utils.requests, "get", Mock(return_value=_response(capacity_data)))

        definition = load_definition("https://example.com/my_svm.json")

        assert definition.name == "MySVM"

    def test_invalid_definition(self, write_definition):
        source = write_definition({"name": "NoAuthor", "organization": "ACME"})

        with pytest.raises(SchemaError, match="author"):
            load_definition(source)

    def test_file_roundtrip_of_written_json(self, tmp_path, capacity_data):
        path = tmp_path / "svm.json"
        path.write_text(json.dumps(capacity_data))

        assert load_definition_data(str(path)) == capacity_data
