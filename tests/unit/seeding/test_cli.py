"""Unit tests for the seeding command line."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest

from foodies.seeding import __main__ as seed_cli
from foodies.seeding.seeder import SeedReport


if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


class TestParser:
    """Tests for build_parser."""

    def test_requires_data_dir(self) -> None:
        with pytest.raises(SystemExit):
            seed_cli.build_parser().parse_args([])

    def test_paths(self, tmp_path: Path) -> None:
        args = seed_cli.build_parser().parse_args(
            ["--data-dir", str(tmp_path), "--images-dir", str(tmp_path / "img")]
        )

        assert args.data_dir == tmp_path
        assert args.images_dir == tmp_path / "img"


class TestMain:
    """Tests for main."""

    def test_success(self, tmp_path: Path) -> None:
        with patch.object(
            seed_cli, "seed", AsyncMock(return_value=SeedReport(users=1))
        ) as seed:
            assert seed_cli.main(["--data-dir", str(tmp_path)]) == 0

        data_dir, images_dir, _settings = seed.call_args.args
        assert data_dir == tmp_path
        assert images_dir is None

    def test_images_dir_from_settings(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SEED__CATEGORY_IMAGES_DIR", str(tmp_path / "images"))

        with patch.object(seed_cli, "seed", AsyncMock()) as seed:
            seed_cli.main(["--data-dir", str(tmp_path)])

        assert seed.call_args.args[1] == tmp_path / "images"

    def test_failure_exit_code(self, tmp_path: Path) -> None:
        with patch.object(
            seed_cli, "seed", AsyncMock(side_effect=OSError("connection refused"))
        ):
            assert seed_cli.main(["--data-dir", str(tmp_path)]) == 1
