"""Textual integration: key translation and the key adapter."""

from .controller import TextualKeyAdapter, TextualUIHooks
from .keys import textual_key_to_token

__all__ = ["TextualKeyAdapter", "TextualUIHooks", "textual_key_to_token"]
