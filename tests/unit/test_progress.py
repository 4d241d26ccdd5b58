from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from imigrate.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:

    def test_init_with_tty_enabled(self):
        with patch("imigrate.services.progress.is_tty_enabled", return_value=True), \
             patch("imigrate.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(2, description="Reading files")

            assert tracker.enabled is True
            assert tracker.files_read == 0
            mock_tqdm.assert_called_once_with(
                total=2,
                desc="Reading files",
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch("imigrate.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(2)
            assert tracker.enabled is False
            assert tracker.pbar is None
            tracker.start_file(Path("mix-list.csv"))
            tracker.finish_file("Sheet1", rows=10)
            tracker.close()
            # counters are kept even without a bar
            assert tracker.files_read == 1
            assert tracker.rows_read == 10

    def test_file_lifecycle_updates_bar(self):
        mock_pbar = Mock()
        with patch("imigrate.services.progress.is_tty_enabled", return_value=True), \
             patch("imigrate.services.progress.tqdm", return_value=mock_pbar):
            with ProgressTracker(2, description="Reading files") as tracker:
                tracker.start_file(Path("data/mix-list.csv"))
                mock_pbar.set_description.assert_called_with("Reading files (mix-list.csv)")
                tracker.finish_file("Sheet1", rows=42)
                tracker.start_file(Path("data/materials.xlsx"))
                tracker.finish_file("Materials", rows=8)

                assert mock_pbar.update.call_count == 2
                mock_pbar.set_postfix.assert_called_with(sheet="Materials", rows=50)
                mock_pbar.set_description.assert_called_with("Reading files")

            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None

    def test_close_is_idempotent(self):
        mock_pbar = Mock()
        with patch("imigrate.services.progress.is_tty_enabled", return_value=True), \
             patch("imigrate.services.progress.tqdm", return_value=mock_pbar):
            tracker = ProgressTracker(1)
            tracker.close()
            tracker.close()
            mock_pbar.close.assert_called_once()
