"""Tests for the blocking client against a stubbed HTTP transport."""

import json

import httpx
import pytest

from ossclient.schemas.domain import Found, NotFound
from ossclient.storage.client import StorageClient
from ossclient.storage.contracts import ConfigError, ObjectStorage, Presigner, TransportError
from ossclient.storage.signer import compute_signature

from tests.conftest import ENDPOINT, FIXED_NOW


@pytest.fixture
def build(credentials, fixed_clock):
    def _build(handler, **kwargs):
        http = httpx.Client(transport=httpx.MockTransport(handler))
        return StorageClient(credentials, http_client=http, clock=fixed_clock, **kwargs)

    return _build


def test_satisfies_protocols(build, make_handler):
    client = build(make_handler())
    assert isinstance(client, ObjectStorage)
    assert isinstance(client, Presigner)


class TestGetObject:
    def test_found_bytes_and_text(self, build, make_handler):
        handler = make_handler(200, "héllo".encode("utf-8"), {"content-type": "text/plain; charset=utf-8"})
        client = build(handler)

        result = client.get_object_content("b", "notes/a.txt")

        assert isinstance(result, Found)
        assert result.content == "héllo".encode("utf-8")
        assert result.text == "héllo"
        assert client.get_object_bytes("b", "notes/a.txt") == "héllo".encode("utf-8")
        assert client.get_object_text("b", "notes/a.txt") == "héllo"

        request = handler.last
        assert request.method == "GET"
        assert request.url.host == f"b.{ENDPOINT}"
        assert request.url.path == "/notes/a.txt"

    def test_invalid_utf8_body_decodes_lossily(self, build, make_handler):
        client = build(make_handler(200, b"\xff\xfeabc"))

        assert client.get_object_text("b", "k") == "\ufffd\ufffdabc"
        assert client.get_object_bytes("b", "k") == b"\xff\xfeabc"

    def test_unknown_charset_falls_back_to_utf8(self):
        found = Found(bucket="b", key="k", content=b"ok\xff", encoding="no-such-codec")
        assert found.text == "ok\ufffd"

    def test_not_found_is_not_an_error(self, build, make_handler):
        client = build(make_handler(404, b"<Error>NoSuchKey</Error>"))

        assert client.get_object_content("b", "missing") == NotFound(bucket="b", key="missing")
        assert client.get_object_bytes("b", "missing") is None
        assert client.get_object_text("b", "missing") is None

    def test_other_status_raises(self, build, make_handler):
        client = build(make_handler(500, b"oops"))

        with pytest.raises(TransportError) as excinfo:
            client.get_object_content("b", "k")

        err = excinfo.value
        assert err.op == "get"
        assert err.bucket == "b"
        assert err.key == "k"
        assert err.status_code == 500
        assert "500" in err.response
        assert "b/k" in err.message

    def test_no_content_status_raises(self, build, make_handler):
        with pytest.raises(TransportError) as excinfo:
            build(make_handler(204)).get_object_bytes("b", "k")
        assert excinfo.value.status_code == 204

    def test_uses_default_expiry_window(self, build, make_handler):
        handler = make_handler(200, b"x")
        build(handler).get_object_bytes("b", "k")

        params = handler.last.url.params
        expires = FIXED_NOW + 30
        assert params["Expires"] == str(expires)
        assert params["OSSAccessKeyId"] == "test-ak"
        assert params["Signature"] == compute_signature("testsecret", f"GET\n\n\n{expires}\n/b/k")

    def test_connection_failure_wrapped(self, build, make_handler):
        client = build(make_handler(exc=httpx.ConnectError))

        with pytest.raises(TransportError) as excinfo:
            client.get_object_content("b", "k")

        err = excinfo.value
        assert err.op == "get"
        assert err.status_code is None
        assert isinstance(err.__cause__, httpx.ConnectError)


class TestPutObject:
    def test_sends_whole_body_without_signed_headers(self, build, make_handler):
        handler = make_handler(200)
        client = build(handler)

        response = client.put_object("b", "k", b"payload", expire_in_seconds=120)

        assert response.status_code == 200
        request = handler.last
        assert request.method == "PUT"
        assert request.content == b"payload"
        assert "content-type" not in request.headers
        assert "content-md5" not in request.headers
        expires = FIXED_NOW + 120
        assert request.url.params["Expires"] == str(expires)
        assert request.url.params["Signature"] == compute_signature("testsecret", f"PUT\n\n\n{expires}\n/b/k")

    def test_put_text_encodes_utf8(self, build, make_handler):
        handler = make_handler(200)
        build(handler).put_object_text("b", "k", "grüße")
        assert handler.last.content == "grüße".encode("utf-8")

    def test_put_file_reads_into_memory(self, build, make_handler, tmp_path):
        source = tmp_path / "data.bin"
        source.write_bytes(b"\x00\x01\x02")
        handler = make_handler(200)

        build(handler).put_file("b", "bin/data.bin", source, expire_in_seconds=5)

        assert handler.last.content == b"\x00\x01\x02"
        assert handler.last.url.params["Expires"] == str(FIXED_NOW + 5)

    def test_put_file_missing_source(self, build, make_handler, tmp_path):
        handler = make_handler(200)
        with pytest.raises(FileNotFoundError):
            build(handler).put_file("b", "k", tmp_path / "nope.bin")
        assert handler.requests == []

    @pytest.mark.parametrize("data", [3, "text", None])
    def test_rejects_non_bytes_body(self, build, make_handler, data):
        handler = make_handler(200)

        with pytest.raises(TypeError):
            build(handler).put_object("b", "k", data)

        assert handler.requests == []

    def test_accepts_bytearray_and_memoryview(self, build, make_handler):
        handler = make_handler(200)
        client = build(handler)

        client.put_object("b", "k", bytearray(b"ab"))
        assert handler.last.content == b"ab"
        client.put_object("b", "k", memoryview(b"cd"))
        assert handler.last.content == b"cd"

    def test_non_2xx_raises(self, build, make_handler):
        client = build(make_handler(403, b"<Error>SignatureDoesNotMatch</Error>"))

        with pytest.raises(TransportError) as excinfo:
            client.put_object("b", "k", b"x")

        assert excinfo.value.op == "put"
        assert excinfo.value.status_code == 403


class TestDeleteObject:
    def test_delete_without_body(self, build, make_handler):
        handler = make_handler(204)

        response = build(handler, default_expire_seconds=10).delete_object("b", "k")

        assert response.status_code == 204
        request = handler.last
        assert request.method == "DELETE"
        assert request.content == b""
        assert request.url.params["Expires"] == str(FIXED_NOW + 10)

    def test_delete_failure(self, build, make_handler):
        with pytest.raises(TransportError) as excinfo:
            build(make_handler(exc=httpx.ReadTimeout)).delete_object("b", "k")
        assert excinfo.value.op == "delete"


class TestConstruction:
    def test_from_json(self):
        document = json.dumps({"endpoint": ENDPOINT, "accessKeyId": "id", "accessKeySecret": "sec"})
        client = StorageClient.from_json(document)
        try:
            assert client.credentials.endpoint == ENDPOINT
            assert client.credentials.access_key_id == "id"
            assert client.credentials.access_key_secret.get_secret_value() == "sec"
        finally:
            client.close()

    def test_from_json_invalid(self):
        with pytest.raises(ConfigError):
            StorageClient.from_json('{"endpoint": "e", "accessKeyId": "id"}')

    def test_from_file_with_home(self, tmp_path, monkeypatch):
        config_dir = tmp_path / ".oss"
        config_dir.mkdir()
        (config_dir / "credentials.json").write_text(
            json.dumps({"endpoint": "e", "accessKeyId": "id", "accessKeySecret": "sec"}), encoding="utf-8"
        )
        monkeypatch.setenv("HOME", str(tmp_path))

        with StorageClient.from_file("~/.oss/credentials.json") as client:
            assert client.credentials.endpoint == "e"

    def test_owned_http_client_closed(self, credentials):
        with StorageClient(credentials) as client:
            http = client._http
        assert http.is_closed

    def test_injected_http_client_left_open(self, credentials):
        http = httpx.Client()
        with StorageClient(credentials, http_client=http):
            pass
        assert not http.is_closed
        http.close()

    def test_use_https_setting(self, credentials, monkeypatch, make_handler):
        monkeypatch.setenv("OSS_USE_HTTPS", "false")
        handler = make_handler(200, b"x")
        http = httpx.Client(transport=httpx.MockTransport(handler))

        StorageClient(credentials, http_client=http).get_object_bytes("b", "k")

        assert handler.last.url.scheme == "http"

    def test_generate_signed_url_delegates(self, build, make_handler):
        url = build(make_handler()).generate_signed_url("GET", "b", "k", 60)
        assert url.startswith(f"https://b.{ENDPOINT}/k?Expires={FIXED_NOW + 60}&")

    def test_signed_url_scheme_follows_client_setting(self, credentials, fixed_clock, make_handler):
        handler = make_handler(200, b"x")
        http = httpx.Client(transport=httpx.MockTransport(handler))
        client = StorageClient(credentials, http_client=http, use_https=False, clock=fixed_clock)

        url = client.generate_signed_url("GET", "b", "k", 60)
        client.get_object_bytes("b", "k")

        assert url.startswith(f"http://b.{ENDPOINT}/k?")
        assert handler.last.url.scheme == "http"
        assert client.generate_signed_url("GET", "b", "k", 60, use_https=True).startswith("https://")
