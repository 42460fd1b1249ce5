from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


class RepresentationKind(str, Enum):
    """Sparse-column storage strategies for a boundary matrix."""

    VECTOR_VECTOR = "vector_vector"
    VECTOR_SET = "vector_set"
    VECTOR_LIST = "vector_list"
    FULL_PIVOT_COLUMN = "full_pivot_column"
    BIT_TREE_PIVOT_COLUMN = "bit_tree_pivot_column"
    SPARSE_PIVOT_COLUMN = "sparse_pivot_column"

    @property
    def label(self) -> str:
        return self.value


class AlgorithmKind(str, Enum):
    """Column-reduction strategies for computing persistence pairs."""

    STANDARD = "standard"
    TWIST = "twist"
    ROW = "row"
    CHUNK = "chunk"

    @property
    def label(self) -> str:
        return f"{self.value}_reduction"


class AnsatzKind(str, Enum):
    """Reduce the loaded matrix directly (primal) or its dualized form."""

    PRIMAL = "primal"
    DUAL = "dual"

    @property
    def label(self) -> str:
        return self.value


# Canonical order used when a category is left unselected.
DEFAULT_REPRESENTATIONS: Tuple[RepresentationKind, ...] = (
    RepresentationKind.VECTOR_VECTOR,
    RepresentationKind.VECTOR_SET,
    RepresentationKind.VECTOR_LIST,
    RepresentationKind.FULL_PIVOT_COLUMN,
    RepresentationKind.BIT_TREE_PIVOT_COLUMN,
    RepresentationKind.SPARSE_PIVOT_COLUMN,
)
DEFAULT_ALGORITHMS: Tuple[AlgorithmKind, ...] = (
    AlgorithmKind.STANDARD,
    AlgorithmKind.TWIST,
    AlgorithmKind.ROW,
    AlgorithmKind.CHUNK,
)
DEFAULT_ANSAETZE: Tuple[AnsatzKind, ...] = (AnsatzKind.PRIMAL, AnsatzKind.DUAL)


@dataclass(frozen=True)
class RunConfiguration:
    """
    Immutable description of one benchmark sweep.

    The three selection sequences behave as multisets: a kind listed twice
    is benchmarked twice.
    """

    use_binary: bool = True                                   # binary vs ascii input format
    representations: Tuple[RepresentationKind, ...] = DEFAULT_REPRESENTATIONS
    algorithms: Tuple[AlgorithmKind, ...] = DEFAULT_ALGORITHMS
    ansaetze: Tuple[AnsatzKind, ...] = DEFAULT_ANSAETZE
    input_paths: Tuple[str, ...] = ()                         # may be empty: zero runs
    output_dir: Optional[Path] = None                         # record results under this folder
    verbose: bool = False                                     # DEBUG logging

    def __post_init__(self) -> None:
        for name in ("representations", "algorithms", "ansaetze"):
            if not getattr(self, name):
                raise ValueError(f"RunConfiguration.{name} must not be empty")

    @property
    def num_runs(self) -> int:
        return (
            len(self.input_paths)
            * len(self.algorithms)
            * len(self.representations)
            * len(self.ansaetze)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "use_binary": self.use_binary,
            "representations": [r.value for r in self.representations],
            "algorithms": [a.value for a in self.algorithms],
            "ansaetze": [a.value for a in self.ansaetze],
            "input_paths": list(self.input_paths),
            "output_dir": str(self.output_dir) if self.output_dir is not None else None,
            "verbose": self.verbose,
        }
