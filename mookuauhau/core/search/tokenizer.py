"""
Tokenizer shared by index building and query parsing.

A token is a case-folded, whitespace-delimited piece of text. Indexing and
searching must use the same tokenizer so that query tokens line up with
indexed ones.
"""

import unicodedata


class Tokenizer:
    """
    Case-folding whitespace tokenizer.

    Usage:
        tokenizer = Tokenizer()
        tokenizer.tokenize("Jason  MOMOA")      # ["jason", "momoa"]
        tokenizer.tokenize_all(["Hilo", None])  # {"hilo"}
    """

    def normalize(self, text: str) -> str:
        """
        Compose and case-fold text.

        Args:
            text: Raw text

        Returns:
            NFC-composed, case-folded text, so a kahakō typed as a combining
            macron matches the precomposed letter
        """
        return unicodedata.normalize("NFC", text).casefold()

    def tokenize(self, text: str | None) -> list[str]:
        """
        Split text into unique tokens, keeping first-seen order.

        Args:
            text: Text to tokenize

        Returns:
            List of tokens; empty for None, empty or whitespace-only text
        """
        if not text:
            return []
        return list(dict.fromkeys(self.normalize(text).split()))

    def tokenize_all(self, texts) -> set[str]:
        """Union of the tokens of several fields, skipping empty ones."""
        tokens: set[str] = set()
        for text in texts:
            tokens.update(self.tokenize(text))
        return tokens
