"""Project normalization: ignore rules, hard caps and bounded file reading."""

from __future__ import annotations

import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .config import ConfigError, IngestionSettings, load_config
from .logging import get_logger
from .models import NormalizedProject

logger = get_logger("normalizer")

# Matched against individual path segments, case-insensitively.
_IGNORED_SEGMENTS = {
    ".git",
    "node_modules",
    "dist",
    "build",
    "coverage",
    ".next",
    ".idea",
    ".vscode",
    ".ds_store",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "__pycache__",
    ".venv",
}

_TEXT_EXTENSIONS = {
    ".js",
    ".ts",
    ".jsx",
    ".tsx",
    ".mjs",
    ".cjs",
    ".json",
    ".md",
    ".mdx",
    ".txt",
    ".css",
    ".scss",
    ".html",
    ".xml",
    ".yaml",
    ".yml",
    ".toml",
    ".py",
    ".java",
    ".go",
    ".rs",
    ".php",
    ".rb",
    ".sh",
    ".vue",
    ".svelte",
    ".dart",
    ".kt",
    ".swift",
}


class IngestionError(RuntimeError):
    """Base class for failures that prevent a project from being analyzed."""


class EmptyProjectError(IngestionError):
    """Raised when a project yields zero analyzable files."""


class IngestionLimitError(IngestionError):
    """Raised when a project exceeds a hard file-count or size cap."""


class IngestionCancelledError(IngestionError):
    """Raised when a run is cancelled or runs past its deadline."""


@dataclass
class RunBudget:
    """Cancellation and deadline guard shared by every stage of one run."""

    cancel_event: Optional[threading.Event] = None
    deadline: Optional[float] = None

    @classmethod
    def start(
        cls,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> "RunBudget":
        deadline = time.monotonic() + timeout if timeout is not None else None
        return cls(cancel_event=cancel_event, deadline=deadline)

    def check(self, stage: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise IngestionCancelledError(f"Analysis cancelled during {stage}")
        if self.deadline is not None and time.monotonic() > self.deadline:
            raise IngestionCancelledError(f"Analysis timed out during {stage}")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .contextgen.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def parse_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.is_file():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = parse_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _load_ignore_rules(root: Path, extra_patterns: Sequence[str]) -> List[IgnoreRule]:
    rules = _parse_gitignore(root / ".gitignore")
    for pattern in extra_patterns:
        rule = parse_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def is_builtin_ignored(rel_path: str) -> bool:
    """True when any segment of ``rel_path`` is a tooling/VCS/build artifact."""
    for segment in rel_path.lower().split("/"):
        if segment in _IGNORED_SEGMENTS:
            return True
        if segment == ".env" or segment.startswith(".env."):
            return True
    return False


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    if is_builtin_ignored(rel_path):
        return True
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def is_text_file(path: str) -> bool:
    name = path.rsplit("/", 1)[-1].lower()
    if "." not in name:
        return True
    return name[name.rfind("."):] in _TEXT_EXTENSIONS


def _walk(
    root: Path,
    rules: Sequence[IgnoreRule],
    settings: IngestionSettings,
    budget: RunBudget,
) -> Tuple[List[str], List[str], Dict[str, int]]:
    files: List[str] = []
    folders: List[str] = []
    sizes: Dict[str, int] = {}
    total_bytes = 0

    for dirpath, dirnames, filenames in os.walk(root):
        budget.check("normalization")
        current = Path(dirpath)
        rel_dir = current.relative_to(root).as_posix() if current != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            if (current / name).is_symlink():
                continue
            kept_dirs.append(name)
            folders.append(rel_path)
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            full_path = current / filename
            if full_path.is_symlink() or not full_path.is_file():
                continue
            size = full_path.stat().st_size
            if size > settings.max_file_bytes:
                logger.debug("Skipping %s (%d bytes exceeds per-file cap)", rel_path, size)
                continue
            files.append(rel_path)
            sizes[rel_path] = size
            total_bytes += size
            if len(files) > settings.max_files:
                raise IngestionLimitError(
                    f"Project exceeds the maximum of {settings.max_files} files"
                )
            if total_bytes > settings.max_total_bytes:
                raise IngestionLimitError(
                    f"Project exceeds the maximum total size of {settings.max_total_bytes} bytes"
                )

    return sorted(files), sorted(folders), sizes


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _read_contents(
    root: Path,
    paths: Sequence[str],
    settings: IngestionSettings,
    budget: RunBudget,
) -> Dict[str, str]:
    def _load(rel_path: str) -> Tuple[str, Optional[str]]:
        budget.check("file reading")
        return rel_path, _read_text(root / rel_path)

    file_map: Dict[str, str] = {}
    with ThreadPoolExecutor(max_workers=settings.workers) as pool:
        for rel_path, text in pool.map(_load, paths):
            if text is None:
                logger.debug("Could not read %s as UTF-8 text", rel_path)
                continue
            file_map[rel_path] = text
    return file_map


def normalize_project(
    root: str | Path,
    *,
    settings: IngestionSettings | None = None,
    budget: RunBudget | None = None,
) -> NormalizedProject:
    """Walk ``root`` and return a capped, ignore-filtered NormalizedProject."""
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Project path not found: {root}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")

    if settings is None:
        try:
            settings = load_config(root_path).ingestion
        except ConfigError as exc:
            logger.warning("Ignoring invalid configuration: %s", exc)
            settings = IngestionSettings()
    budget = budget or RunBudget.start(settings.timeout)

    rules = _load_ignore_rules(root_path, settings.exclude_paths)
    files, folders, _ = _walk(root_path, rules, settings, budget)
    if not files:
        raise EmptyProjectError(
            "No analyzable files found. The project may be empty or unsupported."
        )

    text_paths = [path for path in files if is_text_file(path)]
    file_map = _read_contents(root_path, text_paths, settings, budget)
    logger.debug(
        "Normalized %s: %d files, %d folders, %d readable",
        root_path,
        len(files),
        len(folders),
        len(file_map),
    )
    return NormalizedProject(files=tuple(files), folders=tuple(folders), file_map=file_map)


def _clean_path(path: str) -> str:
    cleaned = path.replace("\\", "/").strip()
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    return cleaned.strip("/")


def _excluded(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    # A flat path list has no walk to prune, so parents are checked explicitly.
    parts = rel_path.split("/")
    for index in range(1, len(parts)):
        if _should_ignore("/".join(parts[:index]), True, rules):
            return True
    return _should_ignore(rel_path, is_dir, rules)


def _parent_folders(paths: Iterable[str]) -> List[str]:
    folders = set()
    for path in paths:
        parts = path.split("/")[:-1]
        for index in range(1, len(parts) + 1):
            folders.add("/".join(parts[:index]))
    return sorted(folders)


def normalize_mapping(
    files: Iterable[str],
    folders: Iterable[str] | None = None,
    file_map: Mapping[str, str] | None = None,
    *,
    settings: IngestionSettings | None = None,
) -> NormalizedProject:
    """Build a NormalizedProject from the ``{files, folders, fileMap}`` contract.

    Paths are cleaned and sorted so the same logical input always yields the
    same record, whatever order the caller supplied.
    """
    settings = settings or IngestionSettings()
    rules = [rule for rule in (parse_ignore_rule(p) for p in settings.exclude_paths) if rule]

    cleaned_files = sorted(
        {
            cleaned
            for cleaned in (_clean_path(path) for path in files)
            if cleaned and not _excluded(cleaned, False, rules)
        }
    )
    if not cleaned_files:
        raise EmptyProjectError(
            "No analyzable files found. The project may be empty or unsupported."
        )
    if len(cleaned_files) > settings.max_files:
        raise IngestionLimitError(f"Project exceeds the maximum of {settings.max_files} files")

    if folders is None:
        cleaned_folders = _parent_folders(cleaned_files)
    else:
        cleaned_folders = sorted(
            {
                cleaned
                for cleaned in (_clean_path(folder) for folder in folders)
                if cleaned and not _excluded(cleaned, True, rules)
            }
        )

    known = set(cleaned_files)
    contents: Dict[str, str] = {}
    total_bytes = 0
    for raw_path, text in sorted((file_map or {}).items()):
        path = _clean_path(raw_path)
        if path not in known or not isinstance(text, str):
            continue
        try:
            size = len(text.encode("utf-8"))
        except UnicodeEncodeError:
            # Lone surrogates are not file text; list the path like an undecodable file.
            continue
        if size > settings.max_file_bytes:
            continue
        total_bytes += size
        if total_bytes > settings.max_total_bytes:
            raise IngestionLimitError(
                f"Project exceeds the maximum total size of {settings.max_total_bytes} bytes"
            )
        contents[path] = text

    return NormalizedProject(
        files=tuple(cleaned_files),
        folders=tuple(cleaned_folders),
        file_map=contents,
    )


__all__ = [
    "EmptyProjectError",
    "IgnoreRule",
    "IngestionCancelledError",
    "IngestionError",
    "IngestionLimitError",
    "RunBudget",
    "is_builtin_ignored",
    "is_text_file",
    "normalize_mapping",
    "normalize_project",
    "parse_ignore_rule",
]
