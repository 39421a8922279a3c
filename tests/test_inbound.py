"""Tests for webhook body decoding and chat identity extraction."""

import json

import pytest

from chatrelay.chatguru.inbound import as_text, decode_body, extract_last_chat, extract_phone


class TestDecodeBody:
    def test_json_object(self):
        raw = json.dumps({"celular": "5511999999999"}).encode()
        assert decode_body(raw, "application/json") == {"celular": "5511999999999"}

    def test_json_with_charset_parameter(self):
        assert decode_body(b'{"a": 1}', "application/json; charset=utf-8") == {"a": 1}

    def test_unlabelled_json(self):
        assert decode_body(b'{"a": 1}', None) == {"a": 1}

    def test_form_encoded(self):
        raw = "celular=5511999999999&nome=Jo%C3%A3o&vazio=".encode()
        assert decode_body(raw, "application/x-www-form-urlencoded") == {
            "celular": "5511999999999",
            "nome": "João",
            "vazio": "",
        }

    @pytest.mark.parametrize(
        "raw,content_type",
        [
            (b"", "application/json"),
            (b"{broken", "application/json"),
            (b"[1, 2, 3]", "application/json"),
            (b'"just a string"', "application/json"),
            (b"\xff\xfe\x00", "application/octet-stream"),
            (b"\xff\xfe", "application/x-www-form-urlencoded"),
            (b"plain words", "text/plain"),
        ],
    )
    def test_undecodable_gives_empty_dict(self, raw, content_type):
        assert decode_body(raw, content_type) == {}


class TestAsText:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("abc", "abc"),
            (5511999999999, "5511999999999"),
            (1.5, "1.5"),
            (True, "true"),
            (None, None),
            (False, None),
            ("", None),
            (0, None),
            (0.0, None),
            ({"a": 1}, None),
            ([1, 2], None),
        ],
    )
    def test_scalars_only(self, value, expected):
        assert as_text(value) == expected


class TestExtractPhone:
    def test_priority_order(self):
        body = {"telefone": "3", "chat_number": "2", "celular": "1"}
        assert extract_phone(body) == "1"

    def test_skips_empty_values(self):
        assert extract_phone({"celular": "", "chat_number": None, "telefone": "3"}) == "3"

    def test_numbers_are_stringified(self):
        assert extract_phone({"chat_number": 5511999999999}) == "5511999999999"

    def test_zero_counts_as_absent(self):
        assert extract_phone({"celular": 0, "telefone": "5511"}) == "5511"

    def test_none_when_absent(self):
        assert extract_phone({"nome": "Ana"}) is None


class TestExtractLastChat:
    def test_full_record(self):
        body = {
            "celular": "5511999999999",
            "chat_id": "c-1",
            "nome": "Ana",
            "phone_id": "p-1",
            "origem": "whatsapp",
            "texto_mensagem": "oi",
            "ignored": "x",
        }
        last_chat = extract_last_chat(body, updated_at="2026-10-19T12:00:00.000Z")
        assert last_chat.to_dict() == {
            "updatedAt": "2026-10-19T12:00:00.000Z",
            "celular": "5511999999999",
            "chat_id": "c-1",
            "nome": "Ana",
            "phone_id": "p-1",
            "origem": "whatsapp",
            "texto_mensagem": "oi",
        }

    def test_absent_fields_are_none(self):
        last_chat = extract_last_chat({"telefone": "5511"})
        assert last_chat.celular == "5511"
        assert last_chat.nome is None
        assert last_chat.texto_mensagem is None
        assert last_chat.updated_at.endswith("Z")

    def test_boolean_fields_render_lowercase(self):
        last_chat = extract_last_chat({"celular": "5511", "origem": True, "nome": False})
        assert last_chat.origem == "true"
        assert last_chat.nome is None

    def test_no_phone_gives_none(self):
        assert extract_last_chat({"nome": "Ana", "texto_mensagem": "oi"}) is None
