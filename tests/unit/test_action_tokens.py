"""Unit tests for action tokens and callback data encoding."""

import pytest

from src.schemas import ActionToken, ActionType
from src.services.callback_codec import MAX_CALLBACK_BYTES, CallbackCodec


class TestActionToken:
    @pytest.mark.parametrize(
        "raw,action,path",
        [
            ("enter-directory:src/utils", ActionType.ENTER_DIRECTORY, "src/utils"),
            ("fetch-file:docs/a:b.md", ActionType.FETCH_FILE, "docs/a:b.md"),
            ("page-next", ActionType.PAGE_NEXT, None),
            ("page-prev", ActionType.PAGE_PREV, None),
            ("back", ActionType.BACK, None),
            ("start-search", ActionType.START_SEARCH, None),
            ("cancel-search", ActionType.CANCEL_SEARCH, None),
        ],
    )
    def test_parse(self, raw, action, path):
        token = ActionToken.parse(raw)
        assert token.action == action
        assert token.path == path
        assert token.encode() == raw

    @pytest.mark.parametrize("raw", ["", "explode", "fetch-file", "enter-directory"])
    def test_parse_rejects_invalid(self, raw):
        with pytest.raises(ValueError):
            ActionToken.parse(raw)


class TestCallbackCodec:
    def setup_method(self):
        self.codec = CallbackCodec()

    def test_short_tokens_pass_through(self):
        assert self.codec.encode("fetch-file:README.md") == "fetch-file:README.md"
        assert self.codec.decode("fetch-file:README.md") == "fetch-file:README.md"

    def test_long_tokens_are_shortened(self):
        token = "fetch-file:" + "/".join(["very-long-directory-name"] * 5) + "/file.py"
        data = self.codec.encode(token)

        assert data != token
        assert len(data.encode("utf-8")) <= MAX_CALLBACK_BYTES
        assert self.codec.decode(data) == token

    def test_multibyte_paths_count_bytes(self):
        token = "fetch-file:" + "ü" * 30
        assert len(token) < MAX_CALLBACK_BYTES
        assert self.codec.encode(token) != token

    def test_unknown_digest_decodes_to_none(self):
        assert self.codec.decode("#deadbeef") is None

    def test_oldest_long_tokens_are_forgotten(self):
        codec = CallbackCodec(max_tokens=2)
        tokens = [f"enter-directory:{name * 70}" for name in "abc"]
        keys = [codec.encode(token) for token in tokens]

        assert codec.decode(keys[0]) is None
        assert codec.decode(keys[1]) == tokens[1]
        assert codec.decode(keys[2]) == tokens[2]

    def test_reissued_token_stays_remembered(self):
        codec = CallbackCodec(max_tokens=2)
        first = "enter-directory:" + "a" * 70
        key = codec.encode(first)
        codec.encode("enter-directory:" + "b" * 70)
        codec.encode(first)
        codec.encode("enter-directory:" + "c" * 70)

        assert codec.decode(key) == first
