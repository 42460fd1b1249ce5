from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, TextIO, Tuple

from rich.markup import escape

from .config import (
    DEFAULT_ALGORITHMS,
    DEFAULT_ANSAETZE,
    DEFAULT_REPRESENTATIONS,
    AlgorithmKind,
    AnsatzKind,
    RepresentationKind,
    RunConfiguration,
)
from .errors import BackendUnavailableError, LoadError, UsageError
from .reporting import ResultReporter, print_summary_table
from .runner import Dispatcher, build_registry, run_sweep
from .utils.logging_utils import LOGGER, init_logger, print_banner, timed_section
from .utils.run_utils import (
    ResultRecorder,
    create_run_folder,
    get_log_file_path,
    save_config,
    save_summary,
)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class _UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageErrorParser(
        prog="phat-benchmark",
        usage="%(prog)s [options] input_filename_0 input_filename_1 ... input_filename_N",
        description="Time every combination of boundary-matrix representation, "
                    "reduction algorithm and primal/dual ansatz.",
        add_help=False,
        allow_abbrev=False,
    )

    # --- File format (the later flag wins) ---
    parser.add_argument("--ascii", dest="use_binary", action="store_const", const=False,
                        help="Use ascii file format.")
    parser.add_argument("--binary", dest="use_binary", action="store_const", const=True,
                        help="Use binary file format (default).")
    parser.set_defaults(use_binary=True)

    parser.add_argument("--help", action="store_true", help="Print this screen.")

    # --- Selections (repeatable, duplicates are benchmarked again) ---
    parser.add_argument("--primal", dest="ansaetze", action="append_const", const=AnsatzKind.PRIMAL,
                        help="Use the primal approach.")
    parser.add_argument("--dual", dest="ansaetze", action="append_const", const=AnsatzKind.DUAL,
                        help="Use the dualization approach.")

    for kind in RepresentationKind:
        parser.add_argument(f"--{kind.value}", dest="representations", action="append_const", const=kind,
                            help=f"Benchmark the {kind.value} representation.")

    for kind in AlgorithmKind:
        parser.add_argument(f"--{kind.value}", dest="algorithms", action="append_const", const=kind,
                            help=f"Benchmark {kind.label}.")

    # --- Recording ---
    parser.add_argument("--output-dir", type=Path, default=None, metavar="DIR",
                        help="Write config, log, results.csv, summary.csv and plots "
                             "to a timestamped folder under DIR (use --output-dir=DIR).")
    parser.add_argument("--verbose", action="store_true", help="Log every run.")

    return parser


def print_help(parser: Optional[argparse.ArgumentParser] = None) -> None:
    parser = parser or build_parser()
    parser.print_help(sys.stderr)


def _split_arguments(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Separate ``--flag`` tokens from input file names, keeping their order."""
    flags: List[str] = []
    paths: List[str] = []
    for argument in argv:
        if len(argument) > 2 and argument.startswith("--"):
            flags.append(argument)
        else:
            paths.append(argument)
    return flags, paths


def parse_command_line(argv: Sequence[str], parser: Optional[argparse.ArgumentParser] = None) -> RunConfiguration:
    """
    Turn raw arguments into a RunConfiguration.

    Raises:
        UsageError: empty argument list, unknown flag, or --help.
    """
    if not argv:
        raise UsageError("no arguments given")

    parser = parser or build_parser()
    flags, paths = _split_arguments(argv)
    args = parser.parse_args(flags)

    if args.help:
        raise UsageError("help requested")

    return RunConfiguration(
        use_binary=args.use_binary,
        representations=tuple(args.representations or DEFAULT_REPRESENTATIONS),
        algorithms=tuple(args.algorithms or DEFAULT_ALGORITHMS),
        ansaetze=tuple(args.ansaetze or DEFAULT_ANSAETZE),
        input_paths=tuple(paths),
        output_dir=args.output_dir,
        verbose=args.verbose,
    )


def _finish_run_folder(recorder: ResultRecorder, run_dir: Path) -> None:
    # Imported here so that plain sweeps never pay for matplotlib.
    from .plotting import plot_results

    if not recorder.csv_path.exists():
        LOGGER.info("No runs recorded; skipping summary and plots.")
        return

    with timed_section("Writing summary"):
        summary = save_summary(recorder.csv_path, run_dir)
    print_summary_table(summary)

    with timed_section("Generating runtime plots"):
        plot_results(recorder.csv_path, run_dir / "plots")


def run(argv: Sequence[str], backend: Any = None, stdout: Optional[TextIO] = None) -> int:
    """
    Parse ``argv``, run the sweep, and return the process exit status.

    ``backend`` defaults to the phat bindings.
    """
    parser = build_parser()
    try:
        config = parse_command_line(argv, parser)
    except UsageError as exc:
        LOGGER.debug(f"Usage error: {escape(str(exc))}")
        print_help(parser)
        return EXIT_FAILURE

    level = logging.DEBUG if config.verbose else logging.INFO
    init_logger(level)

    try:
        if backend is None:
            from .backends.phat_backend import PhatBackend
            backend = PhatBackend()
        registry = build_registry(backend)
    except BackendUnavailableError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FAILURE

    recorder = None
    run_dir = None
    if config.output_dir is not None:
        run_dir = create_run_folder(config.output_dir)
        init_logger(level, log_file=get_log_file_path(run_dir))
        save_config(config, run_dir)
        recorder = ResultRecorder(run_dir)
        LOGGER.info(f"Recording results to [cyan]{escape(str(run_dir))}[/cyan]")

    dispatcher = Dispatcher(registry, use_binary=config.use_binary)
    reporter = ResultReporter(stdout)

    try:
        try:
            run_sweep(config, dispatcher, reporter, recorder)
        except LoadError as exc:
            print(f"\n {exc}", file=sys.stderr)
            print_help(parser)
            return EXIT_FAILURE

        if recorder is not None:
            _finish_run_folder(recorder, run_dir)
            print_banner("Benchmark complete - data saved")
    finally:
        if run_dir is not None:
            # Release log.txt of this run folder.
            init_logger(level)

    return EXIT_SUCCESS


def main(argv: Optional[Sequence[str]] = None) -> None:
    sys.exit(run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
