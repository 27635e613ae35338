# ABOUTME: Key/value translator used while rendering article text
# ABOUTME: Unknown keys fall back to the key itself, like a catalog without an entry

from collections.abc import Mapping

from authorinfo.config import get_config


class MappingTranslator:
    """Translator backed by a plain mapping of message keys to strings."""

    def __init__(self, messages: Mapping[str, str] | None = None):
        self.messages = dict(messages) if messages is not None else dict(get_config().translations)

    def translate(self, key: str) -> str:
        return self.messages.get(key, key)
