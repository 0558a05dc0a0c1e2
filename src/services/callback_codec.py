"""Fits action tokens into Telegram's callback_data size limit."""

import hashlib
from collections import OrderedDict
from typing import Optional

MAX_CALLBACK_BYTES = 64
MAX_REMEMBERED_TOKENS = 10000
DIGEST_PREFIX = "#"


class CallbackCodec:
    """Maps action tokens to callback_data strings and back.

    Short tokens pass through unchanged. Longer ones are replaced with a
    digest key. Only the most recently issued keys are remembered; an evicted
    key decodes to None like any unknown one.
    """

    def __init__(self, max_bytes: int = MAX_CALLBACK_BYTES, max_tokens: int = MAX_REMEMBERED_TOKENS):
        self.max_bytes = max_bytes
        self.max_tokens = max_tokens
        self._long_tokens: "OrderedDict[str, str]" = OrderedDict()

    def encode(self, token: str) -> str:
        if len(token.encode("utf-8")) <= self.max_bytes:
            return token
        digest = hashlib.sha1(token.encode("utf-8")).hexdigest()[:32]
        key = f"{DIGEST_PREFIX}{digest}"
        self._long_tokens[key] = token
        self._long_tokens.move_to_end(key)
        while len(self._long_tokens) > self.max_tokens:
            self._long_tokens.popitem(last=False)
        return key

    def decode(self, data: str) -> Optional[str]:
        """Return the original token, or None for an unknown digest key."""
        if data.startswith(DIGEST_PREFIX):
            return self._long_tokens.get(data)
        return data
