from __future__ import annotations

import itertools
import time
from functools import partial
from typing import Any, Callable, Dict, Iterator, NamedTuple, Optional, Tuple

from rich.markup import escape

from .config import AlgorithmKind, AnsatzKind, RepresentationKind, RunConfiguration
from .errors import LoadError
from .reporting import ResultReporter
from .utils.logging_utils import LOGGER
from .utils.run_utils import ResultRecorder
from .utils.stats import RunResult

# (path, use_binary, ansatz) -> elapsed seconds
ComputeFn = Callable[[str, bool, AnsatzKind], float]
Registry = Dict[Tuple[RepresentationKind, AlgorithmKind], ComputeFn]


class Strategy(NamedTuple):
    path: str
    algorithm: AlgorithmKind
    representation: RepresentationKind
    ansatz: AnsatzKind


# ------------------------------------------------------------
# Strategy space
# ------------------------------------------------------------
class StrategySpace:
    """
    Every (path, algorithm, representation, ansatz) combination of a
    configuration, in nested selection order (path outermost, ansatz
    innermost). Iterating again starts over.
    """

    def __init__(self, config: RunConfiguration):
        self.config = config

    def __iter__(self) -> Iterator[Strategy]:
        for combo in itertools.product(
            self.config.input_paths,
            self.config.algorithms,
            self.config.representations,
            self.config.ansaetze,
        ):
            yield Strategy(*combo)

    def __len__(self) -> int:
        return self.config.num_runs


# ------------------------------------------------------------
# Registry of compute routines, one per (representation, algorithm)
# ------------------------------------------------------------
def _compute(
    backend: Any,
    representation: Any,
    reduction: Any,
    path: str,
    use_binary: bool,
    ansatz: AnsatzKind,
) -> float:
    """
    Load ``path`` into a fresh matrix and time a single reduction.

    The matrix lives only for this call. Persistence pairs are discarded.
    """
    matrix = backend.new_matrix(representation)
    backend.load(matrix, path, use_binary)

    start = time.perf_counter()
    backend.compute_pairs(matrix, reduction, dualized=ansatz is AnsatzKind.DUAL)
    return time.perf_counter() - start


def build_registry(backend: Any) -> Registry:
    """
    Resolve every (representation, algorithm) cell against ``backend`` once.

    Unsupported kinds fail here, before any file is loaded.
    """
    registry: Registry = {}
    for rep_kind, alg_kind in itertools.product(RepresentationKind, AlgorithmKind):
        registry[(rep_kind, alg_kind)] = partial(
            _compute,
            backend,
            backend.representation(rep_kind),
            backend.reduction(alg_kind),
        )
    return registry


class Dispatcher:
    """
    Runs a single Strategy through the registry and wraps the timing in a
    RunResult. LoadError propagates unchanged.
    """

    def __init__(self, registry: Registry, use_binary: bool = True):
        self.registry = registry
        self.use_binary = use_binary

    def run(self, strategy: Strategy) -> RunResult:
        compute = self.registry[(strategy.representation, strategy.algorithm)]
        elapsed = compute(strategy.path, self.use_binary, strategy.ansatz)
        return RunResult(
            input_path=strategy.path,
            representation=strategy.representation,
            algorithm=strategy.algorithm,
            ansatz=strategy.ansatz,
            elapsed_seconds=elapsed,
        )


# ------------------------------------------------------------
# Sequential sweep
# ------------------------------------------------------------
def run_sweep(
    config: RunConfiguration,
    dispatcher: Dispatcher,
    reporter: ResultReporter,
    recorder: Optional[ResultRecorder] = None,
) -> int:
    """
    Execute the sweep one combination at a time and return the number of
    completed runs.

    The first LoadError aborts the sweep; lines already reported stay valid.
    """
    space = StrategySpace(config)
    LOGGER.info(
        f"[bold yellow]Starting sweep[/bold yellow] | "
        f"files={len(config.input_paths)}, algorithms={len(config.algorithms)}, "
        f"representations={len(config.representations)}, "
        f"ansaetze={len(config.ansaetze)}, runs={len(space)}"
    )

    completed = 0
    for strategy in space:
        LOGGER.debug(
            f"Running {escape(strategy.path)} {strategy.representation.label} "
            f"{strategy.algorithm.label} {strategy.ansatz.label}"
        )
        try:
            result = dispatcher.run(strategy)
        except LoadError:
            LOGGER.error(f"[red]Aborting sweep after {completed} of {len(space)} runs[/red]")
            raise

        reporter.emit(result)
        if recorder is not None:
            recorder.record(result)
        completed += 1

    LOGGER.info(f"[bold green]Sweep completed:[/bold green] {completed} runs.")
    return completed
