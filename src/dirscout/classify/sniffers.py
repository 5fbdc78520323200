"""Content sniffers: infer a Mode from a sample of file bytes.

Each sniffer either returns a Mode (a confident match) or None to defer to
the next one. `SnifferChain` evaluates them in a fixed order.
"""
from __future__ import annotations

import re
from typing import Callable, Iterable, Protocol

from .modes import Mode

# First-line budget handed to the head sniffers.
HEAD_LIMIT = 512

ContentFn = Callable[[], bytes]

INTERPRETERS: dict[str, Mode] = {
    "python": Mode.PYTHON,
    "python2": Mode.PYTHON,
    "python3": Mode.PYTHON,
    "pypy": Mode.PYTHON,
    "pypy3": Mode.PYTHON,
    "sh": Mode.SHELL,
    "bash": Mode.SHELL,
    "dash": Mode.SHELL,
    "zsh": Mode.SHELL,
    "ksh": Mode.SHELL,
    "fish": Mode.SHELL,
    "perl": Mode.PERL,
    "ruby": Mode.RUBY,
    "node": Mode.JAVASCRIPT,
    "nodejs": Mode.JAVASCRIPT,
    "deno": Mode.TYPESCRIPT,
    "lua": Mode.LUA,
    "php": Mode.PHP,
    "make": Mode.MAKEFILE,
    "swipl": Mode.PROLOG,
    "escript": Mode.ERLANG,
    "elixir": Mode.ELIXIR,
}

# Names accepted in `-*- mode: x -*-` and `vim: ft=x` modelines.
MODELINE_NAMES: dict[str, Mode] = {
    "python": Mode.PYTHON,
    "sh": Mode.SHELL,
    "bash": Mode.SHELL,
    "shell-script": Mode.SHELL,
    "perl": Mode.PERL,
    "cperl": Mode.PERL,
    "ruby": Mode.RUBY,
    "c": Mode.C,
    "c++": Mode.CPP,
    "cpp": Mode.CPP,
    "go": Mode.GO,
    "rust": Mode.RUST,
    "lua": Mode.LUA,
    "lisp": Mode.LISP,
    "emacs-lisp": Mode.LISP,
    "markdown": Mode.MARKDOWN,
    "conf": Mode.CONFIG,
    "conf-unix": Mode.CONFIG,
    "dosini": Mode.INI,
    "ini": Mode.INI,
    "yaml": Mode.YAML,
    "toml": Mode.TOML,
    "json": Mode.JSON,
    "javascript": Mode.JAVASCRIPT,
    "js": Mode.JAVASCRIPT,
    "make": Mode.MAKEFILE,
    "makefile": Mode.MAKEFILE,
    "prolog": Mode.PROLOG,
    "asm": Mode.ASSEMBLY,
    "xml": Mode.XML,
    "html": Mode.HTML,
    "tex": Mode.TEX,
    "nroff": Mode.NROFF,
}

EMACS_MODELINE_RE = re.compile(rb"-\*-.*?(?:mode:\s*)?([\w+-]+)\s*(?:;.*)?-\*-", re.IGNORECASE)
VIM_MODELINE_RE = re.compile(rb"vim?:.*?\b(?:ft|filetype)=([\w+-]+)", re.IGNORECASE)
INI_SECTION_RE = re.compile(rb"^\[[\w .\"-]+\]$")
PERL_MARKERS = (b"use strict", b"use warnings", b"my $", b"package ", b"sub ", b"=pod", b"__END__")
GO_ASM_MARKERS = (b"TEXT \xc2\xb7", b"TEXT\t\xc2\xb7", b'#include "textflag.h"', b"GLOBL \xc2\xb7")
ARM64_RE = re.compile(
    rb"^\s*(?:ldp|stp|adrp|ldr|str|mov|add|sub|bl|ret)\s+(?:x\d{1,2}|w\d{1,2}|sp|lr)\b",
    re.MULTILINE | re.IGNORECASE,
)
ARM64_DIRECTIVE_RE = re.compile(rb"\.arch\s+armv8|\.arch\s+armv9|aarch64", re.IGNORECASE)


class ContentSniffer(Protocol):
    name: str

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        ...


def first_line(data: bytes, limit: int = HEAD_LIMIT) -> bytes:
    """The first line of `data` (the whole of it if there is no newline), capped at `limit` bytes."""
    idx = data.find(b"\n")
    head = data[:idx] if idx > 0 else data
    return head[:limit]


class ShebangSniffer:
    name = "shebang"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        if not head.startswith(b"#!"):
            return None
        words = head[2:].decode("utf-8", errors="replace").split()
        if not words:
            return None
        interpreter = words[0].rsplit("/", 1)[-1]
        if interpreter == "env":
            args = [w for w in words[1:] if not w.startswith("-")]
            if not args:
                return None
            interpreter = args[0]
        # python3.12, perl5.36 and so on
        interpreter = re.sub(r"[\d.]+$", "", interpreter) or interpreter
        return INTERPRETERS.get(interpreter)


class ModelineSniffer:
    name = "modeline"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        for pattern in (EMACS_MODELINE_RE, VIM_MODELINE_RE):
            m = pattern.search(head)
            if m:
                return MODELINE_NAMES.get(m.group(1).decode("ascii", errors="replace").lower())
        return None


class MarkupSniffer:
    name = "markup"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        text = head.lstrip(b"\xef\xbb\xbf").lstrip().lower()
        if text.startswith(b"<?xml"):
            return Mode.XML
        if text.startswith(b"<!doctype html") or text.startswith(b"<html"):
            return Mode.HTML
        return None


class PerlSniffer:
    """Tell Perl apart from Prolog for `.pl` files."""

    name = "perl"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        if current is not Mode.PROLOG:
            return None
        data = content()
        if any(marker in data for marker in PERL_MARKERS):
            return Mode.PERL
        return None


class ConfigShapeSniffer:
    name = "config-shape"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        if current not in (Mode.BLANK, Mode.CONFIG):
            return None
        text = head.strip()
        if text == b"---" or text.startswith(b"%YAML"):
            return Mode.YAML
        if INI_SECTION_RE.match(text):
            return Mode.INI
        return None


class DiffSniffer:
    name = "diff"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        if head.startswith(b"diff --git ") or head.startswith(b"Index: "):
            return Mode.DIFF
        if head.startswith(b"--- ") and b"\n+++ " in content()[:HEAD_LIMIT * 2]:
            return Mode.DIFF
        return None


class AssemblySniffer:
    """Pick an assembly dialect by looking through the whole file."""

    name = "assembly"

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        if current is not Mode.ASSEMBLY:
            return None
        data = content()
        if any(marker in data for marker in GO_ASM_MARKERS):
            return Mode.GO_ASSEMBLY
        if ARM64_DIRECTIVE_RE.search(data) or ARM64_RE.search(data):
            return Mode.ARM64_ASSEMBLY
        return None


class SnifferChain:
    def __init__(self, sniffers: Iterable[ContentSniffer]) -> None:
        self._sniffers: list[ContentSniffer] = list(sniffers)

    def __iter__(self):
        return iter(self._sniffers)

    def register(self, sniffer: ContentSniffer) -> None:
        self._sniffers.append(sniffer)

    def sniff(self, current: Mode, head: bytes, content: ContentFn) -> Mode | None:
        for sniffer in self._sniffers:
            found = sniffer.sniff(current, head, content)
            if found is not None:
                return found
        return None


def default_head_chain() -> SnifferChain:
    return SnifferChain([
        ShebangSniffer(),
        ModelineSniffer(),
        MarkupSniffer(),
        PerlSniffer(),
        ConfigShapeSniffer(),
        DiffSniffer(),
    ])


def default_assembly_chain() -> SnifferChain:
    return SnifferChain([AssemblySniffer()])
