"""Tests for the ExportConfig frozen dataclass and DivergenceKind StrEnum.

Covers:
- Default values (both checks enabled, ASCII output, compact form)
- Immutability (FrozenInstanceError on assignment)
- Validation: indent must be None or >= 0
- DivergenceKind has exactly five lowercase values
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from red_black_node_visualizer.config import ExportConfig
from red_black_node_visualizer.tree.sanitizer import DivergenceKind

# ---------------------------------------------------------------------------
# DivergenceKind
# ---------------------------------------------------------------------------


class TestDivergenceKind:
    def test_has_exactly_five_members(self) -> None:
        assert len(list(DivergenceKind)) == 5

    def test_all_expected_members_exist(self) -> None:
        names = {m.name for m in DivergenceKind}
        assert names == {"RANK", "OUTSIDE", "ABSENT", "SELF", "CYCLIC"}

    def test_is_str_subclass(self) -> None:
        assert isinstance(DivergenceKind.RANK, str)
        assert DivergenceKind.OUTSIDE == "outside"


# ---------------------------------------------------------------------------
# ExportConfig
# ---------------------------------------------------------------------------


class TestExportConfigDefaults:
    def test_defaults(self) -> None:
        config = ExportConfig()
        assert config.run_node_checks is True
        assert config.run_subtree_check is True
        assert config.ensure_ascii is True
        assert config.indent is None

    def test_equality(self) -> None:
        assert ExportConfig() == ExportConfig()
        assert ExportConfig(indent=2) != ExportConfig()


class TestExportConfigImmutability:
    def test_cannot_assign(self) -> None:
        config = ExportConfig()
        with pytest.raises(FrozenInstanceError):
            config.indent = 4  # type: ignore[misc]


class TestExportConfigValidation:
    @pytest.mark.parametrize("indent", [0, 1, 4])
    def test_accepts_non_negative_indent(self, indent: int) -> None:
        assert ExportConfig(indent=indent).indent == indent

    def test_rejects_negative_indent(self) -> None:
        with pytest.raises(ValueError, match=r"indent must be None or >= 0, got -1"):
            ExportConfig(indent=-1)
