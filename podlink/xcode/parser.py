"""
Xcode project file parser.

Reads the old-style (OpenStep) ASCII property list format used by .pbxproj
files into plain Python dictionaries, lists and strings. Dictionary insertion
order follows the file so that a later save keeps unrelated content stable.
Numbers are kept as strings; the formatter writes them back verbatim.
"""

import re
from typing import Any, Dict, List, Union

PlistValue = Union[str, List[Any], Dict[str, Any]]

_BARE_STRING = re.compile(r"[A-Za-z0-9_$+/:.\-]+")

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "'": "'",
    "\\": "\\",
    "\n": "\n",
}


class ProjectParseError(ValueError):
    pass


class _Reader:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> ProjectParseError:
        line = self.text.count("\n", 0, self.pos) + 1
        return ProjectParseError(f"line {line}: {message}")

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        self.skip()
        if self.peek() != char:
            found = self.peek() or "end of file"
            raise self.error(f"expected '{char}', found '{found}'")
        self.pos += 1

    def skip(self) -> None:
        # Whitespace and both comment styles
        text = self.text
        while self.pos < len(text):
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith("/*", self.pos):
                end = text.find("*/", self.pos + 2)
                if end < 0:
                    raise self.error("unterminated comment")
                self.pos = end + 2
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end < 0 else end + 1
            else:
                break

    def value(self) -> PlistValue:
        self.skip()
        char = self.peek()
        if char == "{":
            return self.dictionary()
        if char == "(":
            return self.array()
        if char == '"':
            return self.quoted_string()
        match = _BARE_STRING.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            return match.group(0)
        if not char:
            raise self.error("unexpected end of file")
        raise self.error(f"unexpected character '{char}'")

    def dictionary(self) -> Dict[str, Any]:
        self.pos += 1
        result: Dict[str, Any] = {}
        while True:
            self.skip()
            if self.peek() == "}":
                self.pos += 1
                return result
            key = self.value()
            if not isinstance(key, str):
                raise self.error("dictionary keys must be strings")
            self.expect("=")
            result[key] = self.value()
            self.expect(";")

    def array(self) -> List[Any]:
        self.pos += 1
        result: List[Any] = []
        while True:
            self.skip()
            if self.peek() == ")":
                self.pos += 1
                return result
            result.append(self.value())
            self.skip()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != ")":
                raise self.error("expected ',' or ')' in array")

    def quoted_string(self) -> str:
        self.pos += 1
        text = self.text
        chunks: List[str] = []
        while True:
            if self.pos >= len(text):
                raise self.error("unterminated string")
            char = text[self.pos]
            if char == '"':
                self.pos += 1
                return "".join(chunks)
            if char != "\\":
                chunks.append(char)
                self.pos += 1
                continue
            escape = text[self.pos + 1 : self.pos + 2]
            if escape == "U":
                digits = text[self.pos + 2 : self.pos + 6]
                if len(digits) != 4:
                    raise self.error("truncated unicode escape")
                try:
                    chunks.append(chr(int(digits, 16)))
                except ValueError:
                    raise self.error("malformed unicode escape") from None
                self.pos += 6
            elif escape in _ESCAPES:
                chunks.append(_ESCAPES[escape])
                self.pos += 2
            else:
                raise self.error(f"unknown escape '\\{escape}'")


def parse_pbxproj(text: str) -> Dict[str, Any]:
    reader = _Reader(text)
    reader.skip()
    if reader.peek() != "{":
        raise reader.error("project file must start with a dictionary")
    root = reader.dictionary()
    reader.skip()
    if reader.pos != len(text):
        raise reader.error("trailing content after root dictionary")
    if not isinstance(root.get("objects"), dict):
        raise ProjectParseError("project file has no objects dictionary")
    if root.get("rootObject") not in root["objects"]:
        raise ProjectParseError("project file root object is missing")
    return root
