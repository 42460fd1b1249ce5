from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

from ..config import AlgorithmKind, RepresentationKind
from ..errors import BackendUnavailableError, LoadError


class PhatBackend:
    """
    Adapter around the ``phat`` Python bindings.

    Representation and reduction handles are looked up by name on
    ``phat.representations`` / ``phat.reductions``; the names follow the
    toolkit's own spelling (``vector_vector``, ``twist_reduction``, ...).

    Args:
        module: Already imported ``phat`` module. Imported lazily when omitted.
    """

    def __init__(self, module: Any = None):
        if module is None:
            try:
                module = importlib.import_module("phat")
            except ImportError as exc:
                raise BackendUnavailableError(
                    "The 'phat' package is required to run benchmarks "
                    "(pip install 'phat-benchmark[phat]')."
                ) from exc
        self._phat = module

    def representation(self, kind: RepresentationKind) -> Any:
        try:
            return getattr(self._phat.representations, kind.value)
        except AttributeError as exc:
            raise BackendUnavailableError(
                f"phat does not provide representation '{kind.value}'"
            ) from exc

    def reduction(self, kind: AlgorithmKind) -> Any:
        try:
            return getattr(self._phat.reductions, kind.label)
        except AttributeError as exc:
            raise BackendUnavailableError(
                f"phat does not provide reduction '{kind.label}'"
            ) from exc

    def new_matrix(self, representation: Any) -> Any:
        return self._phat.boundary_matrix(representation=representation)

    def load(self, matrix: Any, path: str, use_binary: bool) -> None:
        """
        Fill ``matrix`` from ``path``; raises LoadError on any failure.
        """
        if not Path(path).is_file():
            raise LoadError(path, "no such file")

        mode = "b" if use_binary else "t"
        try:
            loaded = matrix.load(path, mode=mode)
        except (OSError, RuntimeError, ValueError) as exc:
            raise LoadError(path, str(exc)) from exc

        # The bindings report a failed read through a False return value.
        if loaded is False:
            fmt = "binary" if use_binary else "ascii"
            raise LoadError(path, f"not a valid {fmt} boundary matrix")

    def compute_pairs(self, matrix: Any, reduction: Any, dualized: bool) -> Any:
        if dualized:
            return matrix.compute_persistence_pairs_dualized(reduction=reduction)
        return matrix.compute_persistence_pairs(reduction=reduction)
