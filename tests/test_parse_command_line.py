from pathlib import Path

import pytest

from phat_benchmark.cli import parse_command_line
from phat_benchmark.config import (
    AlgorithmKind,
    AnsatzKind,
    RepresentationKind,
    RunConfiguration,
)
from phat_benchmark.errors import UsageError


def test_empty_argument_list_is_usage_error():
    with pytest.raises(UsageError):
        parse_command_line([])


@pytest.mark.parametrize("argv", [["--bogus", "a.bin"], ["--help"], ["a.bin", "--help"], ["--stand", "a.bin"]])
def test_unknown_flag_help_and_abbreviation_are_usage_errors(argv):
    with pytest.raises(UsageError):
        parse_command_line(argv)


def test_defaults_fill_every_unselected_category():
    config = parse_command_line(["a.bin"])

    assert config.representations == (
        RepresentationKind.VECTOR_VECTOR,
        RepresentationKind.VECTOR_SET,
        RepresentationKind.VECTOR_LIST,
        RepresentationKind.FULL_PIVOT_COLUMN,
        RepresentationKind.BIT_TREE_PIVOT_COLUMN,
        RepresentationKind.SPARSE_PIVOT_COLUMN,
    )
    assert config.algorithms == (
        AlgorithmKind.STANDARD,
        AlgorithmKind.TWIST,
        AlgorithmKind.ROW,
        AlgorithmKind.CHUNK,
    )
    assert config.ansaetze == (AnsatzKind.PRIMAL, AnsatzKind.DUAL)
    assert config.use_binary is True
    assert config.input_paths == ("a.bin",)
    assert config.output_dir is None


def test_selection_order_follows_argument_order():
    config = parse_command_line(
        ["--sparse_pivot_column", "--vector_set", "--chunk", "--standard", "--dual", "x"]
    )
    assert config.representations == (
        RepresentationKind.SPARSE_PIVOT_COLUMN,
        RepresentationKind.VECTOR_SET,
    )
    assert config.algorithms == (AlgorithmKind.CHUNK, AlgorithmKind.STANDARD)
    assert config.ansaetze == (AnsatzKind.DUAL,)


def test_repeated_flags_are_kept():
    config = parse_command_line(["--standard", "--standard", "--primal", "--primal", "--primal", "x"])
    assert config.algorithms == (AlgorithmKind.STANDARD, AlgorithmKind.STANDARD)
    assert config.ansaetze == (AnsatzKind.PRIMAL,) * 3


def test_selecting_one_category_leaves_others_defaulted():
    config = parse_command_line(["--twist", "x"])
    assert config.algorithms == (AlgorithmKind.TWIST,)
    assert len(config.representations) == 6
    assert len(config.ansaetze) == 2


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--ascii", "x"], False),
        (["--binary", "x"], True),
        (["--ascii", "--binary", "x"], True),
        (["--binary", "--ascii", "x"], False),
    ],
)
def test_later_format_flag_wins(argv, expected):
    assert parse_command_line(argv).use_binary is expected


def test_positional_paths_keep_order_around_flags():
    config = parse_command_line(["b.bin", "--row", "a.bin", "-", "--", "-odd.bin", "c.bin"])
    assert config.input_paths == ("b.bin", "a.bin", "-", "--", "-odd.bin", "c.bin")


def test_flags_only_gives_empty_path_list():
    config = parse_command_line(["--standard"])
    assert config.input_paths == ()
    assert config.num_runs == 0


def test_output_dir_and_verbose(tmp_path):
    config = parse_command_line([f"--output-dir={tmp_path}", "--verbose", "x"])
    assert config.output_dir == Path(tmp_path)
    assert config.verbose is True
    assert config.input_paths == ("x",)


def test_output_dir_requires_inline_value():
    # "runs" is a separate token and therefore an input path.
    with pytest.raises(UsageError):
        parse_command_line(["--output-dir", "runs"])


def test_configuration_rejects_empty_selection():
    with pytest.raises(ValueError):
        RunConfiguration(algorithms=())


def test_configuration_to_dict_is_plain():
    config = parse_command_line(["--ascii", "--row", "--row", "x"])
    data = config.to_dict()
    assert data["use_binary"] is False
    assert data["algorithms"] == ["row", "row"]
    assert data["ansaetze"] == ["primal", "dual"]
    assert data["input_paths"] == ["x"]
