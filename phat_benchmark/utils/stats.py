from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..config import AlgorithmKind, AnsatzKind, RepresentationKind


@dataclass
class RunResult:
    """
    Timing of one (path, algorithm, representation, ansatz) combination.

    Only the reduction is timed; loading the matrix is excluded.
    """

    input_path: str
    representation: RepresentationKind
    algorithm: AlgorithmKind
    ansatz: AnsatzKind
    elapsed_seconds: float

    def as_row(self) -> Dict[str, Any]:
        return {
            "input_path": self.input_path,
            "algorithm": self.algorithm.label,
            "representation": self.representation.label,
            "ansatz": self.ansatz.label,
            "elapsed_seconds": self.elapsed_seconds,
        }
