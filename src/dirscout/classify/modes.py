"""Content-type labels and the filename/extension lookup table."""
from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath


class Mode(Enum):
    """Content-type label. The value is the display name."""

    BLANK = "Blank"
    ADA = "Ada"
    ARM64_ASSEMBLY = "AArch64 Assembly"
    ASCIIDOC = "AsciiDoc"
    ASSEMBLY = "Assembly"
    C = "C"
    CLOJURE = "Clojure"
    CMAKE = "CMake"
    CONFIG = "Config"
    CPP = "C++"
    CSHARP = "C#"
    CSS = "CSS"
    D = "D"
    DART = "Dart"
    DIFF = "Diff"
    DOCKER = "Dockerfile"
    ELIXIR = "Elixir"
    ERLANG = "Erlang"
    FORTRAN = "Fortran"
    GIT = "Git"
    GO = "Go"
    GO_ASSEMBLY = "Go Assembly"
    HASKELL = "Haskell"
    HTML = "HTML"
    INI = "INI"
    JAVA = "Java"
    JAVASCRIPT = "JavaScript"
    JSON = "JSON"
    KOTLIN = "Kotlin"
    LISP = "Lisp"
    LUA = "Lua"
    MAKEFILE = "Makefile"
    MARKDOWN = "Markdown"
    NIM = "Nim"
    NROFF = "Nroff"
    OCAML = "OCaml"
    PERL = "Perl"
    PHP = "PHP"
    PROLOG = "Prolog"
    PYTHON = "Python"
    RESTRUCTURED = "reStructuredText"
    RUBY = "Ruby"
    RUST = "Rust"
    SCALA = "Scala"
    SCDOC = "scdoc"
    SHELL = "Shell"
    SQL = "SQL"
    SWIFT = "Swift"
    TEX = "TeX"
    TEXT = "Text"
    TOML = "TOML"
    TYPESCRIPT = "TypeScript"
    XML = "XML"
    YAML = "YAML"
    ZIG = "Zig"

    def __str__(self) -> str:
        return self.value


# Exact (case-sensitive) basenames, checked before extensions.
MODES_BY_NAME: dict[str, Mode] = {
    "Makefile": Mode.MAKEFILE,
    "makefile": Mode.MAKEFILE,
    "GNUmakefile": Mode.MAKEFILE,
    "CMakeLists.txt": Mode.CMAKE,
    "Dockerfile": Mode.DOCKER,
    "Containerfile": Mode.DOCKER,
    "PKGBUILD": Mode.SHELL,
    "APKBUILD": Mode.SHELL,
    "Rakefile": Mode.RUBY,
    "Gemfile": Mode.RUBY,
    "COMMIT_EDITMSG": Mode.GIT,
    "MERGE_MSG": Mode.GIT,
    "git-rebase-todo": Mode.GIT,
    ".gitignore": Mode.CONFIG,
    ".gitattributes": Mode.CONFIG,
    ".gitmodules": Mode.CONFIG,
    ".editorconfig": Mode.INI,
    ".bashrc": Mode.SHELL,
    ".bash_profile": Mode.SHELL,
    ".profile": Mode.SHELL,
    ".zshrc": Mode.SHELL,
    "README": Mode.MARKDOWN,
    "TODO": Mode.MARKDOWN,
    "CHANGELOG": Mode.MARKDOWN,
    "NEWS": Mode.MARKDOWN,
    "INSTALL": Mode.TEXT,
    "AUTHORS": Mode.TEXT,
    "LICENSE": Mode.TEXT,
    "COPYING": Mode.TEXT,
}

MODES_BY_EXTENSION: dict[str, Mode] = {
    ".adb": Mode.ADA,
    ".ads": Mode.ADA,
    ".adoc": Mode.ASCIIDOC,
    ".asciidoc": Mode.ASCIIDOC,
    ".asm": Mode.ASSEMBLY,
    ".s": Mode.ASSEMBLY,
    ".S": Mode.ASSEMBLY,
    ".inc": Mode.ASSEMBLY,
    ".c": Mode.C,
    ".h": Mode.C,
    ".clj": Mode.CLOJURE,
    ".cljs": Mode.CLOJURE,
    ".cmake": Mode.CMAKE,
    ".conf": Mode.CONFIG,
    ".cfg": Mode.CONFIG,
    ".config": Mode.CONFIG,
    ".cpp": Mode.CPP,
    ".cc": Mode.CPP,
    ".cxx": Mode.CPP,
    ".hpp": Mode.CPP,
    ".hh": Mode.CPP,
    ".cs": Mode.CSHARP,
    ".css": Mode.CSS,
    ".d": Mode.D,
    ".dart": Mode.DART,
    ".diff": Mode.DIFF,
    ".patch": Mode.DIFF,
    ".ex": Mode.ELIXIR,
    ".exs": Mode.ELIXIR,
    ".erl": Mode.ERLANG,
    ".hrl": Mode.ERLANG,
    ".f": Mode.FORTRAN,
    ".f90": Mode.FORTRAN,
    ".f95": Mode.FORTRAN,
    ".go": Mode.GO,
    ".hs": Mode.HASKELL,
    ".lhs": Mode.HASKELL,
    ".html": Mode.HTML,
    ".htm": Mode.HTML,
    ".ini": Mode.INI,
    ".java": Mode.JAVA,
    ".js": Mode.JAVASCRIPT,
    ".mjs": Mode.JAVASCRIPT,
    ".cjs": Mode.JAVASCRIPT,
    ".jsx": Mode.JAVASCRIPT,
    ".json": Mode.JSON,
    ".kt": Mode.KOTLIN,
    ".kts": Mode.KOTLIN,
    ".lisp": Mode.LISP,
    ".el": Mode.LISP,
    ".scm": Mode.LISP,
    ".lua": Mode.LUA,
    ".mk": Mode.MAKEFILE,
    ".md": Mode.MARKDOWN,
    ".markdown": Mode.MARKDOWN,
    ".txt": Mode.MARKDOWN,
    ".nim": Mode.NIM,
    ".1": Mode.NROFF,
    ".5": Mode.NROFF,
    ".8": Mode.NROFF,
    ".ml": Mode.OCAML,
    ".mli": Mode.OCAML,
    ".pm": Mode.PERL,
    ".t": Mode.PERL,
    ".php": Mode.PHP,
    ".pl": Mode.PROLOG,
    ".pro": Mode.PROLOG,
    ".py": Mode.PYTHON,
    ".pyw": Mode.PYTHON,
    ".pyi": Mode.PYTHON,
    ".rst": Mode.RESTRUCTURED,
    ".rb": Mode.RUBY,
    ".rs": Mode.RUST,
    ".scala": Mode.SCALA,
    ".sc": Mode.SCALA,
    ".scd": Mode.SCDOC,
    ".sh": Mode.SHELL,
    ".bash": Mode.SHELL,
    ".zsh": Mode.SHELL,
    ".ksh": Mode.SHELL,
    ".sql": Mode.SQL,
    ".swift": Mode.SWIFT,
    ".tex": Mode.TEX,
    ".sty": Mode.TEX,
    ".toml": Mode.TOML,
    ".ts": Mode.TYPESCRIPT,
    ".tsx": Mode.TYPESCRIPT,
    ".xml": Mode.XML,
    ".svg": Mode.XML,
    ".xsd": Mode.XML,
    ".yaml": Mode.YAML,
    ".yml": Mode.YAML,
    ".zig": Mode.ZIG,
}

# `.pl` is claimed by Prolog but is usually Perl, and `.txt`/README-like names
# may hold anything; these labels are re-checked against file content.
AMBIGUOUS_MODES = frozenset({Mode.BLANK, Mode.PROLOG, Mode.CONFIG})


def detect_mode(filename: str) -> Mode:
    """Guess a Mode from the filename alone."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    if name in MODES_BY_NAME:
        return MODES_BY_NAME[name]
    if name.startswith("Dockerfile."):
        return Mode.DOCKER

    suffix = PurePosixPath(name).suffix
    if suffix in MODES_BY_EXTENSION:
        return MODES_BY_EXTENSION[suffix]
    lowered = suffix.lower()
    if lowered in MODES_BY_EXTENSION:
        return MODES_BY_EXTENSION[lowered]

    if name.endswith("rc") and name.startswith("."):
        return Mode.CONFIG
    return Mode.BLANK


def needs_content_check(mode: Mode, filename: str) -> bool:
    """Whether a filename-based label should be re-derived from content."""
    if mode in AMBIGUOUS_MODES:
        return True
    return mode is Mode.MARKDOWN and not filename.lower().endswith(".md")
