# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Parser for Cypher procedure script files.

A script file holds named procedures, each one a parameterized Cypher body::

    // Find people by exact name
    def find_by_name(name) {
        MATCH (p:Person) WHERE p.name = $name RETURN p.name AS name
    }

:class:`CypherParser` scans such a text into a mapping of procedure name to
:class:`CypherScript`. Malformed text raises :class:`ValueError` and never
produces a partial mapping.
"""

from __future__ import annotations

import logging
import re
import textwrap
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import ahocorasick

from .constants import ErrorMessages, LoggingConstants, ScriptConstants

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"def\s+([A-Za-z_]\w*)\s*\(([^)]*)\)\s*\{")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_]\w*\Z")
# String literals, escaped identifiers and comments; stripped before keyword detection
_NON_CODE_RE = re.compile(
    r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"|`[^`]*`|//[^\n]*|/\*.*?\*/",
    re.DOTALL,
)
_WORD_CHARS = frozenset("_$.")
# Keyword used as an alias: `... AS remove`
_ALIAS_TAIL_RE = re.compile(r"(?:^|[^\w$.])as$")


def _line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


@dataclass(frozen=True)
class CypherScript:
    """
    A single named procedure parsed from a script file.

    :param name: Procedure name, as written after ``def``
    :param params: Declared parameter names, in order
    :param body: Cypher text run when the procedure is invoked
    :param is_write: True when the body contains an updating clause
    """

    name: str
    params: Tuple[str, ...]
    body: str
    is_write: bool = False

    def bind(self, values: Sequence[Any]) -> Dict[str, Any]:
        """
        Map positional values onto the declared parameter names.

        :raises ValueError: If the number of values differs from the declared parameters
        """
        if len(values) != len(self.params):
            raise ValueError(ErrorMessages.PROCEDURE_ARITY.format(
                name=self.name,
                expected=len(self.params),
                params=", ".join(self.params),
                actual=len(values),
            ))
        return dict(zip(self.params, values))

    def __str__(self) -> str:
        return self.body


class CypherParser:
    """
    Scanner turning script text into named :class:`CypherScript` objects.

    :class: CypherParser
    :synopsis: Parses ``def name(params) { body }`` blocks
    """

    # Class-level Aho-Corasick automaton for updating-clause detection
    _WRITE_AUTOMATON = None

    @classmethod
    def _get_write_automaton(cls):
        """Get or create the updating-clause keyword automaton."""
        if cls._WRITE_AUTOMATON is None:
            automaton = ahocorasick.Automaton()
            for keyword in ScriptConstants.WRITE_KEYWORDS:
                automaton.add_word(keyword, keyword)
            automaton.make_automaton()
            cls._WRITE_AUTOMATON = automaton
        return cls._WRITE_AUTOMATON

    @classmethod
    def is_write(cls, body: str) -> bool:
        """
        Check whether a Cypher body contains an updating clause.

        Keywords inside string literals, escaped identifiers, comments, or
        forming part of a longer identifier (``n.created``, ``$set``) are ignored,
        as are keywords used as a label or relationship type (``:Set``), a map
        key (``{create: ...}``) or an alias (``AS remove``).

        :param body: Cypher text
        :type body: str
        :returns: True if the body writes to the graph
        :rtype: bool
        """
        code = _NON_CODE_RE.sub(" ", body).lower()
        for end_index, keyword in cls._get_write_automaton().iter(code):
            start = end_index - len(keyword) + 1
            before = code[start - 1] if start > 0 else " "
            after = code[end_index + 1] if end_index + 1 < len(code) else " "
            if before.isalnum() or before in _WORD_CHARS:
                continue
            if after.isalnum() or after in "_.":
                continue

            preceding = code[:start].rstrip()
            if preceding.endswith(":") or _ALIAS_TAIL_RE.search(preceding):
                continue
            if code[end_index + 1:].lstrip().startswith(":"):
                continue
            return True
        return False

    def scan(self, text: str) -> Dict[str, CypherScript]:
        """
        Scan script text for procedure definitions.

        :param text: Raw content of a script file; empty text is valid
        :type text: str
        :returns: Procedures keyed by name, in definition order
        :rtype: Dict[str, CypherScript]
        :raises ValueError: If the text is malformed
        """
        procedures: Dict[str, CypherScript] = {}
        length = len(text)
        pos = 0

        while True:
            # @@ STEP 1: Skip whitespace and comments between definitions
            pos = self._skip_trivia(text, pos)
            if pos >= length:
                break

            # @@ STEP 2: Parse the `def name(params) {` header
            match = _HEADER_RE.match(text, pos)
            line = _line_of(text, pos)
            if match is None:
                snippet = text[pos:].splitlines()[0][:40]
                raise ValueError(ErrorMessages.SCRIPT_UNEXPECTED.format(line=line, snippet=snippet))

            name = match.group(1)
            if name in procedures:
                raise ValueError(ErrorMessages.SCRIPT_DUPLICATE_PROCEDURE.format(name=name, line=line))
            params = self._parse_params(match.group(2), name, line)

            # @@ STEP 3: Find the matching closing brace and extract the body
            body_end = self._find_block_end(text, match.end(), name, line)
            body = textwrap.dedent(text[match.end():body_end]).strip()
            if not body:
                raise ValueError(ErrorMessages.SCRIPT_EMPTY_BODY.format(name=name, line=line))

            procedures[name] = CypherScript(
                name=name,
                params=params,
                body=body,
                is_write=self.is_write(body),
            )
            pos = body_end + 1

        logger.debug(LoggingConstants.SCRIPT_SCANNED, len(procedures))
        return procedures

    @staticmethod
    def _parse_params(raw: str, name: str, line: int) -> Tuple[str, ...]:
        if not raw.strip():
            return ()

        params = []
        for param in raw.split(ScriptConstants.PARAM_SEPARATOR):
            param = param.strip()
            if not _IDENTIFIER_RE.match(param):
                raise ValueError(ErrorMessages.SCRIPT_BAD_PARAMETER.format(param=param, name=name, line=line))
            if param in params:
                raise ValueError(ErrorMessages.SCRIPT_DUPLICATE_PARAMETER.format(param=param, name=name, line=line))
            params.append(param)
        return tuple(params)

    @staticmethod
    def _skip_comment(text: str, pos: int) -> int:
        """Return the position after a comment starting at ``pos``, or ``pos`` if there is none."""
        if text.startswith(ScriptConstants.LINE_COMMENT, pos):
            newline = text.find("\n", pos)
            return len(text) if newline == -1 else newline + 1
        if text.startswith(ScriptConstants.BLOCK_COMMENT_OPEN, pos):
            end = text.find(ScriptConstants.BLOCK_COMMENT_CLOSE, pos + 2)
            if end == -1:
                raise ValueError(ErrorMessages.SCRIPT_UNTERMINATED_COMMENT.format(line=_line_of(text, pos)))
            return end + len(ScriptConstants.BLOCK_COMMENT_CLOSE)
        return pos

    def _skip_trivia(self, text: str, pos: int) -> int:
        length = len(text)
        while pos < length:
            if text[pos].isspace():
                pos += 1
                continue
            after_comment = self._skip_comment(text, pos)
            if after_comment == pos:
                break
            pos = after_comment
        return pos

    @staticmethod
    def _skip_string(text: str, pos: int) -> int:
        """Return the position just after the string literal opening at ``pos``."""
        quote = text[pos]
        i = pos + 1
        length = len(text)
        while i < length:
            char = text[i]
            if char == ScriptConstants.ESCAPE:
                i += 2
                continue
            if char == quote:
                return i + 1
            i += 1
        raise ValueError(ErrorMessages.SCRIPT_UNTERMINATED_STRING.format(line=_line_of(text, pos)))

    def _find_block_end(self, text: str, start: int, name: str, line: int) -> int:
        """Return the index of the brace closing the block whose body starts at ``start``."""
        depth = 1
        i = start
        length = len(text)
        while i < length:
            char = text[i]
            if char in ScriptConstants.QUOTES:
                i = self._skip_string(text, i)
                continue
            after_comment = self._skip_comment(text, i)
            if after_comment != i:
                i = after_comment
                continue
            if char == ScriptConstants.BLOCK_OPEN:
                depth += 1
            elif char == ScriptConstants.BLOCK_CLOSE:
                depth -= 1
                if depth == 0:
                    return i
            i += 1
        raise ValueError(ErrorMessages.SCRIPT_UNTERMINATED_BODY.format(name=name, line=line))
