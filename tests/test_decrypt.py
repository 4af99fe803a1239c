import json

import pytest

from ncmkit.decrypt import (
    EAPI_SEPARATOR,
    Payload,
    Request,
    Response,
    api_kind,
    is_match,
    split_eapi_plaintext,
)


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        ("*", "/api/song", True),
        ("*", "", True),
        ("/eapi/*", "/eapi/song/detail", True),
        ("/eapi/*", "/weapi/song", False),
        ("/a.b", "/a.b", True),
        ("/a.b", "/axb", False),
        ("/song", "/song/extra", False),
        ("/x%2Ay", "/x-anything-y", True),
    ],
)
def test_is_match(pattern, text, expected):
    assert is_match(pattern, text) is expected


def test_is_match_malformed_escape_becomes_empty_pattern():
    assert is_match("%zz", "") is True
    assert is_match("%zz", "/api") is False


def test_is_match_invalid_regex_is_false():
    assert is_match("(", "(") is False


def test_is_match_end_anchor_rejects_trailing_newline():
    assert is_match("/api", "/api\n") is False


def test_split_three_parts():
    text = EAPI_SEPARATOR.join(["/api/x", '{"a":1}', "abc"])
    assert split_eapi_plaintext(text) == ("/api/x", '{"a":1}', "abc")


def test_split_plain_payload():
    text = '{"a":1}'
    assert split_eapi_plaintext(text) == ("", text, "")


def test_split_too_many_parts_kept_whole():
    text = EAPI_SEPARATOR.join(["a", "b", "c", "d"])
    assert split_eapi_plaintext(text) == ("", text, "")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/api/eapi/nos/token/alloc", "eapi"),
        ("/weapi/song/detail", "weapi"),
        ("/api/song/detail", "api"),
        ("/eapi/a/weapi/b", "weapi"),
    ],
)
def test_api_kind(path, expected):
    assert api_kind(path, "linux") == expected


def test_api_kind_without_segments_uses_default():
    assert api_kind("", "linux") == "linux"
    assert api_kind("song", "linux") == "linux"


def test_payload_to_dict_omits_empty_fields():
    payload = Payload(kind="eapi", status="ok", request=Request(ciphertext="abc"))
    assert payload.to_dict() == {
        "kind": "eapi",
        "status": "ok",
        "request": {"ciphertext": "abc"},
        "response": {},
    }


def test_plaintext_is_embedded_as_json():
    request = Request(url="/api/x", digest="d", plaintext=b'{"a": [1, 2]}')
    assert request.to_dict() == {"url": "/api/x", "digest": "d", "plaintext": {"a": [1, 2]}}


def test_response_round_trip_through_json():
    response = Response(ciphertext="ff", plaintext=b'{"code": 200}')
    encoded = json.dumps(Payload(response=response).to_dict())
    decoded = json.loads(encoded)
    assert decoded["response"]["plaintext"] == {"code": 200}
    assert decoded["response"]["ciphertext"] == "ff"


def test_invalid_plaintext_raises():
    with pytest.raises(ValueError, match="not valid JSON"):
        Response(plaintext=b"not json").to_dict()


def test_full_payload_keys():
    payload = Payload(
        api="https://music.163.com/eapi/x",
        method="POST",
        kind="eapi",
        status="ok",
        request=Request(raw_plaintext="raw"),
    )
    result = payload.to_dict()
    assert list(result) == ["api", "method", "kind", "status", "request", "response"]
    assert result["request"] == {"rawPlaintext": "raw"}