"""
Module 04 - Source Assembler
File: assembler.py

Purpose: Flatten a contract's multi-file source into a single
compilable unit for submission to the explorer.

The explorer recompiles exactly the submitted text, so the output must
be byte-for-byte reproducible:
- dependencies are inlined before their dependents (depth-first, in
  import order)
- every file is inlined once
- import statements are removed
- repeated SPDX license lines and pragma directives are dropped after
  their first occurrence
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Sequence

from core.schemas import SourceNotFound


logger = logging.getLogger(__name__)


# import "a.sol"; import "a.sol" as A; import * as A from "a.sol"; import {A, B as C} from "a.sol";
_IMPORT_RE = re.compile(
    r"""^[ \t]*import\s+(?:[^;"']*?\bfrom\s+)?["'](?P<path>[^"']+)["'][^;]*;[ \t]*\r?\n?""",
    re.MULTILINE,
)
_SPDX_RE = re.compile(r"^[ \t]*//[ \t]*SPDX-License-Identifier:.*(?:\r?\n|$)", re.MULTILINE)
_PRAGMA_RE = re.compile(r"^[ \t]*pragma\s+[^;]+;[ \t]*(?:\r?\n|$)", re.MULTILINE)
_COMMENT_TERMINATOR_RE = re.compile(r"\*+/")
# Comments and string literals, scanned together so that "//" inside a string is not a comment.
_LEXICAL_RE = re.compile(
    r"""//[^\n]*|/\*.*?(?:\*/|\Z)|"(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*'""",
    re.DOTALL,
)


def _mask_comments(text: str) -> str:
    """Blank out comments, keeping every offset and newline, so commented-out code is not parsed."""
    def _blank(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("/"):
            return re.sub(r"[^\n]", " ", token)
        return token

    return _LEXICAL_RE.sub(_blank, text)


def _find_imports(text: str) -> list[re.Match]:
    """Import statements outside comments; spans index into `text`."""
    return list(_IMPORT_RE.finditer(_mask_comments(text)))


def _strip_spans(text: str, matches: list[re.Match]) -> str:
    parts: list[str] = []
    position = 0
    for match in matches:
        parts.append(text[position:match.start()])
        position = match.end()
    parts.append(text[position:])
    return "".join(parts)


def sanitize_preamble(preamble: str) -> str:
    """Remove every comment terminator so the preamble cannot escape its comment block."""
    return _COMMENT_TERMINATOR_RE.sub("", preamble)


def with_preamble(source: str, preamble: Optional[str]) -> str:
    """Prefix `source` with `preamble` wrapped in a block comment."""
    if not preamble:
        return source
    return f"/**\n{sanitize_preamble(preamble)}\n*/\n\n{source}"


class SourceAssembler:
    """
    Depth-first Solidity import flattener.

    Relative imports ("./", "../") resolve against the importing file;
    any other import is looked up in `import_paths`, in order.

    Usage:
        assembler = SourceAssembler(import_paths=[project_dir, project_dir / "node_modules"])
        merged = assembler.flatten("contracts/Token.sol")
    """

    def __init__(self, import_paths: Iterable[str | Path] = ()) -> None:
        self.import_paths = [Path(p) for p in import_paths]

    def _resolve_import(self, importer: Path, target: str) -> Path:
        if target.startswith("./") or target.startswith("../"):
            candidate = (importer.parent / target).resolve()
            if candidate.is_file():
                return candidate
        else:
            for root in self.import_paths:
                candidate = (root / target).resolve()
                if candidate.is_file():
                    return candidate
        raise SourceNotFound(
            f"Could not resolve import {target!r} from {importer}",
            path=target,
            details={"importer": str(importer)},
        )

    def _collect(self, path: Path, visited: set[Path], ordered: list[tuple[Path, str]]) -> None:
        if path in visited:
            return
        visited.add(path)

        text = path.read_text(encoding="utf-8")
        imports = _find_imports(text)
        for match in imports:
            dependency = self._resolve_import(path, match.group("path"))
            self._collect(dependency, visited, ordered)

        ordered.append((path, _strip_spans(text, imports)))

    def flatten(self, source_path: str | Path) -> str:
        """
        Flatten `source_path` and its imports into one source text.

        Raises:
            SourceNotFound: if the file or any of its imports is missing
        """
        entry = Path(source_path)
        if not entry.is_file():
            raise SourceNotFound(f"Could not find source file at {entry}", path=str(entry))

        ordered: list[tuple[Path, str]] = []
        self._collect(entry.resolve(), set(), ordered)
        logger.debug(f"Flattening {entry}: {len(ordered)} file(s)")

        seen_spdx = False
        seen_pragmas: set[str] = set()
        parts: list[str] = []

        for _, body in ordered:
            def _keep_first_spdx(match: re.Match) -> str:
                nonlocal seen_spdx
                if seen_spdx:
                    return ""
                seen_spdx = True
                return match.group(0)

            def _keep_first_pragma(match: re.Match) -> str:
                directive = " ".join(match.group(0).split())
                if directive in seen_pragmas:
                    return ""
                seen_pragmas.add(directive)
                return match.group(0)

            body = _SPDX_RE.sub(_keep_first_spdx, body)
            body = _PRAGMA_RE.sub(_keep_first_pragma, body)
            body = body.strip()
            if body:
                parts.append(body)

        return "\n\n".join(parts) + "\n"


def assemble_source(
    source_path: str | Path,
    preamble: Optional[str] = None,
    *,
    import_paths: Sequence[str | Path] = (),
) -> str:
    """
    Flatten a contract source and prepend the optional preamble.

    Args:
        source_path: The contract's main source file
        preamble: Optional text placed in a leading block comment
        import_paths: Roots for non-relative imports

    Returns:
        The merged source text

    Raises:
        SourceNotFound: if the file or any of its imports is missing
    """
    merged = SourceAssembler(import_paths).flatten(source_path)
    return with_preamble(merged, preamble)
