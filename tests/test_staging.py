"""Tests for workspace staging."""

import pytest

from qsubmit.errors import StagingError
from qsubmit.staging import find_restart_files, stage_workspace


class TestFindRestartFiles:
    """Tests for restart reference scanning."""

    def test_keyword_and_filename(self):
        """Test a keyword followed by a file name."""
        text = "method hf\nrestart previous.chk\nbasis sto-3g\n"
        assert find_restart_files(text) == ["previous.chk"]

    def test_equals_and_case(self):
        """Test the '=' form and case-insensitive keywords."""
        text = "  RESTART = a.chk\nRestart=b.chk\n"
        assert find_restart_files(text) == ["a.chk", "b.chk"]

    def test_no_references(self):
        """Test input without restart references."""
        assert find_restart_files("method hf\nbasis sto-3g\n") == []

    def test_comments_and_longer_keywords_ignored(self):
        """Test that comments and keyword prefixes do not match."""
        text = "# restart old.chk\n! restart older.chk\nrestart_freq 10\n"
        assert find_restart_files(text) == []

    def test_duplicates_collapse(self):
        """Test that a file referenced twice is listed once."""
        text = "restart a.chk\nrestart a.chk\n"
        assert find_restart_files(text) == ["a.chk"]

    def test_custom_keywords(self):
        """Test configured keyword lists."""
        text = "guess scf.chk\nrestart geom.chk\n"
        assert find_restart_files(text, ["guess"]) == ["scf.chk"]
        assert find_restart_files(text, ["guess", "restart"]) == ["scf.chk", "geom.chk"]


class TestStageWorkspace:
    """Tests for work directory creation and copying."""

    @pytest.fixture
    def dirs(self, tmp_path):
        invoking = tmp_path / "home"
        scratch = tmp_path / "scratch"
        invoking.mkdir()
        scratch.mkdir()
        return invoking, scratch

    def test_copies_input_only(self, dirs):
        """Test staging an input with no restart files."""
        invoking, scratch = dirs
        (invoking / "water.inp").write_text("method hf\n")

        work_dir = stage_workspace("water.inp", invoking, scratch, pid=4242)

        assert work_dir == scratch / "water.inp.4242"
        assert sorted(p.name for p in work_dir.iterdir()) == ["water.inp"]
        assert (work_dir / "water.inp").read_text() == "method hf\n"

    def test_copies_input_and_restarts(self, dirs):
        """Test that exactly the input and its N restart files are copied."""
        invoking, scratch = dirs
        (invoking / "water.inp").write_text("restart a.chk\nrestart b.chk\n")
        (invoking / "a.chk").write_text("A")
        (invoking / "b.chk").write_text("B")
        (invoking / "unrelated.chk").write_text("X")

        work_dir = stage_workspace("water.inp", invoking, scratch, pid=7)

        names = sorted(p.name for p in work_dir.iterdir())
        assert names == ["a.chk", "b.chk", "water.inp"]

    def test_missing_input_creates_nothing(self, dirs):
        """Test that a missing input fails before any directory exists."""
        invoking, scratch = dirs

        with pytest.raises(StagingError, match="water.inp"):
            stage_workspace("water.inp", invoking, scratch, pid=1)

        assert list(scratch.iterdir()) == []

    def test_missing_restart_leaves_partial_workspace(self, dirs):
        """Test that a missing restart file leaves earlier copies in place."""
        invoking, scratch = dirs
        (invoking / "water.inp").write_text("restart a.chk\nrestart gone.chk\n")
        (invoking / "a.chk").write_text("A")

        with pytest.raises(StagingError, match="gone.chk"):
            stage_workspace("water.inp", invoking, scratch, pid=9)

        work_dir = scratch / "water.inp.9"
        assert sorted(p.name for p in work_dir.iterdir()) == ["a.chk", "water.inp"]
