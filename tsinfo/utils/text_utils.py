"""Text processing utilities for source analysis."""

from __future__ import annotations

import re
from typing import List


class TextUtils:
    """Centralized text manipulation utilities."""

    # Compiled regex patterns for better performance
    _QUOTED_PATTERN = re.compile(r"^(['\"`]?)(.*)\1$", flags=re.DOTALL)
    _OPENERS = "<({["
    _CLOSERS = ">)}]"

    @staticmethod
    def sanitize_text(text: object) -> str:
        """
        Remove one pair of surrounding quote characters.

        Parameters
        ----------
        text : object
            Text (or value convertible to text) to sanitize.

        Returns
        -------
        str
            Text without surrounding ``'``, ``"`` or backtick quotes.
        """
        return TextUtils._QUOTED_PATTERN.sub(r"\2", str(text))

    @staticmethod
    def is_capital_case(text: str) -> bool:
        """
        Test whether text starts with an upper case character.

        Characters without case (digits, ``_``, ``$``) count as upper case.
        """
        first = str(text)[:1]
        return first == first.upper()

    @staticmethod
    def split_top_level(text: str, separator: str = ",") -> List[str]:
        """
        Split text on a separator that is not nested in brackets.

        Parameters
        ----------
        text : str
            Text to split, e.g. ``"A<B, C>, D"``.
        separator : str, optional
            Single separator character, by default ",".

        Returns
        -------
        List[str]
            Stripped, non-empty parts, e.g. ``["A<B, C>", "D"]``.
        """
        parts: List[str] = []
        depth = 0
        current = []
        for char in text or "":
            if char in TextUtils._OPENERS:
                depth += 1
            elif char in TextUtils._CLOSERS and depth > 0:
                # "=>" in function types is not a closing bracket
                if not (char == ">" and current and current[-1] == "="):
                    depth -= 1
            if char == separator and depth == 0:
                parts.append("".join(current).strip())
                current = []
                continue
            current.append(char)
        parts.append("".join(current).strip())
        return [part for part in parts if part]

    @staticmethod
    def strip_braced_prefix(text: str) -> str:
        """
        Remove a leading balanced ``{...}`` group, e.g. a JSDoc type.

        Parameters
        ----------
        text : str
            Text that may start with a braced type expression.

        Returns
        -------
        str
            Remaining text, stripped. Unbalanced input is returned as is.
        """
        text = (text or "").lstrip()
        if not text.startswith("{"):
            return text
        depth = 0
        for index, char in enumerate(text):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[index + 1:].strip()
        return text

    @staticmethod
    def pad(indent: object) -> str:
        """Turn an indent given as a count of spaces or a string into a string."""
        if isinstance(indent, int):
            return " " * indent
        return str(indent or "")
