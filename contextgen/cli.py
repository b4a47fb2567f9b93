"""CLI entrypoints for contextgen commands."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict

from .config import OUTPUT_FORMATS, ConfigError, ContextGenConfig, load_config
from .logging import configure_logging, get_logger
from .normalizer import IngestionError
from .pipeline import AnalysisResult, Pipeline
from .validators import ValidationError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contextgen",
        description="Deterministically classify a code project and emit its canonical context.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a project directory or a files/folders/fileMap JSON document.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--name",
        default=None,
        help="Repository name to report (defaults to the directory name).",
    )
    analyze_parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output to print (defaults to output.format in .contextgen.yml, else json).",
    )
    analyze_parser.add_argument(
        "--input-json",
        type=Path,
        default=None,
        help="Read the project from a JSON document with files, folders and fileMap keys.",
    )
    analyze_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort the analysis after this many seconds.",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the output to this file instead of stdout.",
    )
    analyze_parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def _load_input_json(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("files"), list):
        raise ValueError(f"{path} must contain an object with a 'files' list")
    return data


def _analyze(args: argparse.Namespace, config: ContextGenConfig) -> AnalysisResult:
    pipeline = Pipeline(strict=config.output.strict)
    if args.input_json is not None:
        data = _load_input_json(args.input_json)
        return pipeline.analyze_mapping(
            data["files"],
            data.get("folders"),
            data.get("fileMap") or data.get("file_map"),
            repo_name=args.name or data.get("repoName") or data.get("repo_name"),
            timeout=args.timeout,
        )
    return pipeline.analyze_path(args.path, repo_name=args.name, timeout=args.timeout)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for contextgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(getattr(args, "quiet", False)),
        log_file=args.log_file,
    )
    logger = get_logger("cli")

    if args.command == "serve":
        from .service.app import run_service

        run_service(host=args.host, port=args.port)
        return

    config_root = Path.cwd() if args.input_json is not None else Path(args.path)
    try:
        config = load_config(config_root)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    try:
        result = _analyze(args, config)
    except (FileNotFoundError, NotADirectoryError, ValueError) as exc:
        parser.exit(1, f"{exc}\n")
    except IngestionError as exc:
        parser.exit(1, f"contextgen analyze failed: {exc}\n")
    except ValidationError as exc:
        parser.exit(1, f"contextgen analyze failed: {exc}\nRun with --verbose for more details.\n")

    output_format = args.format or config.output.format
    text = result.render(output_format)
    if args.output is not None:
        args.output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        logger.info("Wrote %s output to %s", output_format, _relativize(args.output))
    else:
        print(text)


if __name__ == "__main__":  # pragma: no cover
    main()
