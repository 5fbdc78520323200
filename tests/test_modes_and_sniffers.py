"""Tests for filename-based mode detection and the content sniffers."""
from __future__ import annotations

import pytest

from dirscout.classify.modes import Mode, detect_mode, needs_content_check
from dirscout.classify.sniffers import (
    AssemblySniffer,
    ConfigShapeSniffer,
    DiffSniffer,
    MarkupSniffer,
    ModelineSniffer,
    PerlSniffer,
    ShebangSniffer,
    SnifferChain,
    default_head_chain,
    first_line,
)


def _sniff(sniffer, data: bytes, current: Mode = Mode.BLANK) -> Mode | None:
    return sniffer.sniff(current, first_line(data), lambda: data)


class TestDetectMode:
    @pytest.mark.parametrize("filename,expected", [
        ("main.go", Mode.GO),
        ("src/app.py", Mode.PYTHON),
        ("src/APP.PY", Mode.PYTHON),
        ("Makefile", Mode.MAKEFILE),
        ("Dockerfile.dev", Mode.DOCKER),
        ("notes.txt", Mode.MARKDOWN),
        ("README", Mode.MARKDOWN),
        ("rules.pl", Mode.PROLOG),
        ("boot.s", Mode.ASSEMBLY),
        (".vimrc", Mode.CONFIG),
        ("nginx.conf", Mode.CONFIG),
        ("COMMIT_EDITMSG", Mode.GIT),
    ])
    def test_known_names(self, filename, expected):
        assert detect_mode(filename) is expected

    def test_unknown_is_blank(self):
        assert detect_mode("some-binary") is Mode.BLANK
        assert detect_mode("archive.tar") is Mode.BLANK

    def test_value_is_display_name(self):
        assert Mode.CPP.value == "C++"
        assert str(Mode.PYTHON) == "Python"


class TestNeedsContentCheck:
    def test_ambiguous_modes(self):
        assert needs_content_check(Mode.BLANK, "x")
        assert needs_content_check(Mode.PROLOG, "x.pl")
        assert needs_content_check(Mode.CONFIG, "x.conf")

    def test_markdown_only_without_md_extension(self):
        assert needs_content_check(Mode.MARKDOWN, "README")
        assert needs_content_check(Mode.MARKDOWN, "notes.txt")
        assert not needs_content_check(Mode.MARKDOWN, "README.md")
        assert not needs_content_check(Mode.MARKDOWN, "NOTES.MD")

    def test_specific_modes_trusted(self):
        assert not needs_content_check(Mode.PYTHON, "x.py")


class TestShebangSniffer:
    @pytest.mark.parametrize("line,expected", [
        (b"#!/bin/sh\necho hi\n", Mode.SHELL),
        (b"#!/usr/bin/env python3\n", Mode.PYTHON),
        (b"#!/usr/bin/python3.12 -u\n", Mode.PYTHON),
        (b"#!/usr/bin/env -S node --harmony\n", Mode.JAVASCRIPT),
        (b"#!/usr/bin/perl -w\n", Mode.PERL),
    ])
    def test_interpreters(self, line, expected):
        assert _sniff(ShebangSniffer(), line) is expected

    def test_unknown_interpreter_defers(self):
        assert _sniff(ShebangSniffer(), b"#!/opt/bin/frobnicate\n") is None

    def test_no_shebang_defers(self):
        assert _sniff(ShebangSniffer(), b"echo hi\n") is None

    def test_bare_shebang_defers(self):
        assert _sniff(ShebangSniffer(), b"#!\n") is None


class TestOtherSniffers:
    def test_emacs_modeline(self):
        assert _sniff(ModelineSniffer(), b"# -*- mode: python -*-\n") is Mode.PYTHON

    def test_vim_modeline(self):
        assert _sniff(ModelineSniffer(), b"# vim: set ft=yaml :\n") is Mode.YAML

    def test_coding_cookie_is_not_a_mode(self):
        assert _sniff(ModelineSniffer(), b"# -*- coding: utf-8 -*-\n") is None

    def test_xml_and_html(self):
        assert _sniff(MarkupSniffer(), b'<?xml version="1.0"?>\n<a/>') is Mode.XML
        assert _sniff(MarkupSniffer(), b"<!DOCTYPE html>\n<html>") is Mode.HTML
        assert _sniff(MarkupSniffer(), b"  <html lang='en'>") is Mode.HTML

    def test_perl_only_for_prolog_guess(self):
        data = b"use strict;\nmy $x = 1;\n"
        assert _sniff(PerlSniffer(), data, Mode.PROLOG) is Mode.PERL
        assert _sniff(PerlSniffer(), data, Mode.BLANK) is None

    def test_real_prolog_kept(self):
        assert _sniff(PerlSniffer(), b"parent(tom, bob).\n", Mode.PROLOG) is None

    def test_config_shapes(self):
        assert _sniff(ConfigShapeSniffer(), b"[server]\nport = 80\n", Mode.CONFIG) is Mode.INI
        assert _sniff(ConfigShapeSniffer(), b"---\nkey: value\n") is Mode.YAML
        assert _sniff(ConfigShapeSniffer(), b"[server]\n", Mode.PYTHON) is None

    def test_diff(self):
        assert _sniff(DiffSniffer(), b"diff --git a/x b/x\n") is Mode.DIFF
        assert _sniff(DiffSniffer(), b"--- a/x\n+++ b/x\n@@ -1 +1 @@\n") is Mode.DIFF
        assert _sniff(DiffSniffer(), b"--- just a rule\ntext\n") is None


class TestAssemblySniffer:
    def test_go_assembly(self):
        data = '#include "textflag.h"\n\nTEXT ·add(SB),NOSPLIT,$0\n\tRET\n'.encode("utf-8")
        assert AssemblySniffer().sniff(Mode.ASSEMBLY, data, lambda: data) is Mode.GO_ASSEMBLY

    def test_arm64_assembly(self):
        data = b".text\n_start:\n\tstp x29, x30, [sp, -16]!\n\tmov x0, #0\n\tret\n"
        assert AssemblySniffer().sniff(Mode.ASSEMBLY, data, lambda: data) is Mode.ARM64_ASSEMBLY

    def test_generic_assembly_defers(self):
        data = b"section .text\nglobal _start\n_start:\n\tmov eax, 1\n\tint 0x80\n"
        assert AssemblySniffer().sniff(Mode.ASSEMBLY, data, lambda: data) is None

    def test_only_for_assembly(self):
        data = b"TEXT \xc2\xb7add(SB)\n"
        assert AssemblySniffer().sniff(Mode.C, data, lambda: data) is None


class TestSnifferChain:
    def test_first_match_wins(self):
        class Always:
            name = "always"

            def __init__(self, mode):
                self.mode = mode

            def sniff(self, current, head, content):
                return self.mode

        chain = SnifferChain([Always(Mode.RUST), Always(Mode.GO)])
        assert chain.sniff(Mode.BLANK, b"", lambda: b"") is Mode.RUST

    def test_all_defer(self):
        assert default_head_chain().sniff(Mode.BLANK, b"hello", lambda: b"hello") is None

    def test_register_appends(self):
        chain = SnifferChain([])
        chain.register(ShebangSniffer())
        assert [s.name for s in chain] == ["shebang"]


class TestFirstLine:
    def test_cut_at_newline(self):
        assert first_line(b"abc\ndef") == b"abc"

    def test_no_newline_uses_everything(self):
        assert first_line(b"abc") == b"abc"

    def test_capped(self):
        assert len(first_line(b"x" * 2000)) == 512

    def test_leading_newline_uses_everything(self):
        assert first_line(b"\nabc", limit=10) == b"\nabc"
