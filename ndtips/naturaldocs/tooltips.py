from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ndtips.core.registry import TooltipRegistry

LOADER_CALL = "NDSummary.OnToolTipsLoaded"
PAYLOAD_GLOB = "*-SummaryToolTips.js"

_DIGITS = "0123456789"

_SIMPLE_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_TERMINATORS = ("\r\n", "\n", "\r", "\u2028", "\u2029")


class TooltipPayloadError(ValueError):
    def __init__(self, message: str, offset: int, source: str | None = None) -> None:
        self.message = message
        self.offset = offset
        self.source = source
        where = f"{source}: " if source else ""
        super().__init__(f"{where}{message} at offset {offset}")

    def with_source(self, source: str) -> TooltipPayloadError:
        return TooltipPayloadError(self.message, self.offset, source)


@dataclass
class TooltipPayload:
    namespace: str
    entries: dict[int, str] = field(default_factory=dict)


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> TooltipPayloadError:
        return TooltipPayloadError(message, self.pos)

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, token: str) -> None:
        self.skip_ws()
        if not self.text.startswith(token, self.pos):
            raise self.error(f"expected {token!r}")
        self.pos += len(token)

    def accept(self, token: str) -> bool:
        self.skip_ws()
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def integer(self) -> int:
        self.skip_ws()
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _DIGITS:
            self.pos += 1
        if start == self.pos:
            raise self.error("expected integer topic id")
        return int(self.text[start : self.pos])

    def key(self) -> int:
        self.skip_ws()
        if self.peek() in ('"', "'"):
            start = self.pos
            raw = self.string()
            if not raw or any(c not in _DIGITS for c in raw):
                self.pos = start
                raise self.error(f"topic id must be an integer, got {raw!r}")
            return int(raw)
        return self.integer()

    def string(self) -> str:
        self.skip_ws()
        quote = self.peek()
        if quote not in ('"', "'"):
            raise self.error("expected string literal")
        start = self.pos
        self.pos += 1
        out: list[str] = []
        text = self.text
        while True:
            if self.pos >= len(text):
                self.pos = start
                raise self.error("unterminated string literal")
            char = text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(out)
            if char in "\r\n":
                self.pos = start
                raise self.error("unterminated string literal")
            if char == "\\":
                out.append(self._escape())
                continue
            out.append(char)
            self.pos += 1

    def _escape(self) -> str:
        text = self.text
        self.pos += 1
        if self.pos >= len(text):
            raise self.error("dangling escape")
        for terminator in _LINE_TERMINATORS:
            if text.startswith(terminator, self.pos):
                self.pos += len(terminator)
                return ""
        char = text[self.pos]
        if char in _SIMPLE_ESCAPES:
            self.pos += 1
            return _SIMPLE_ESCAPES[char]
        if char == "0" and not text[self.pos + 1 : self.pos + 2].isdigit():
            self.pos += 1
            return "\0"
        if char == "x":
            return chr(self._hex(self.pos + 1, 2))
        if char == "u":
            if text.startswith("{", self.pos + 1):
                end = text.find("}", self.pos + 2)
                if end == -1:
                    raise self.error("unterminated unicode escape")
                return chr(self._hex(self.pos + 2, end - self.pos - 2, skip=1))
            code = self._hex(self.pos + 1, 4)
            if 0xD800 <= code <= 0xDBFF and text.startswith("\\u", self.pos):
                low_start = self.pos
                self.pos += 1
                low = self._hex(self.pos + 1, 4)
                if 0xDC00 <= low <= 0xDFFF:
                    return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
                self.pos = low_start
            return chr(code)
        # unknown escapes stand for the character itself
        self.pos += 1
        return char

    def _hex(self, start: int, length: int, skip: int = 0) -> int:
        digits = self.text[start : start + length]
        if not digits or len(digits) != length or any(c not in "0123456789abcdefABCDEF" for c in digits):
            raise self.error("invalid hex escape")
        value = int(digits, 16)
        if value > 0x10FFFF:
            raise self.error("unicode escape out of range")
        self.pos = start + length + skip
        return value


def parse_payload(text: str) -> TooltipPayload:
    """
    Parse a Natural Docs ``NDSummary.OnToolTipsLoaded(...)`` tooltip payload.

    Fragments are returned exactly as the generator wrote them, with only the
    JavaScript string escapes decoded.
    """
    scanner = _Scanner(text.lstrip("\ufeff"))
    scanner.expect(LOADER_CALL)
    scanner.expect("(")
    namespace = scanner.string()
    scanner.expect(",")
    scanner.expect("{")
    entries: dict[int, str] = {}
    if not scanner.accept("}"):
        while True:
            key_start = scanner.pos
            topic_id = scanner.key()
            if topic_id in entries:
                scanner.pos = key_start
                scanner.skip_ws()
                raise scanner.error(f"duplicate topic id {topic_id}")
            scanner.expect(":")
            entries[topic_id] = scanner.string()
            if scanner.accept("}"):
                break
            scanner.expect(",")
            if scanner.accept("}"):
                break
    scanner.expect(")")
    scanner.accept(";")
    scanner.skip_ws()
    if scanner.pos != len(scanner.text):
        raise scanner.error("unexpected trailing content")
    return TooltipPayload(namespace=namespace, entries=entries)


def load_file(path: Path) -> TooltipPayload:
    text = path.read_text(encoding="utf-8")
    try:
        return parse_payload(text)
    except TooltipPayloadError as exc:
        raise exc.with_source(str(path)) from None


def discover(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    return sorted(path for path in root.rglob(PAYLOAD_GLOB) if path.is_file())


def load_files(
    paths: Iterable[Path],
    registry: TooltipRegistry | None = None,
    strict: bool = False,
) -> TooltipRegistry:
    target = registry if registry is not None else TooltipRegistry()
    for path in paths:
        try:
            payload = load_file(path)
        except (OSError, UnicodeDecodeError, TooltipPayloadError) as exc:
            if strict:
                raise
            logging.warning("skipping tooltip file %s: %s", path, exc)
            continue
        target.register(payload.namespace, payload.entries)
        logging.debug("loaded %d tooltips for %s from %s", len(payload.entries), payload.namespace, path)
    return target


def load_directory(
    root: Path,
    registry: TooltipRegistry | None = None,
    strict: bool = False,
) -> TooltipRegistry:
    return load_files(discover(root), registry=registry, strict=strict)
