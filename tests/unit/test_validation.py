"""
Unit tests for path and filename validation utilities.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from script_tester.core.errors import NotDirectoryError, NotFoundError
from script_tester.utils.validation import (
    ValidationError,
    require_directory,
    require_file,
    validate_output_filename,
)


class TestRequireDirectory:
    """Tests for require_directory"""

    def test_existing_directory(self, tmp_path):
        assert require_directory(str(tmp_path), "Input file directory") == tmp_path

    def test_missing_directory(self, tmp_path):
        with pytest.raises(NotFoundError) as exc_info:
            require_directory(tmp_path / "absent", "Input file directory")
        assert exc_info.value.exit_code == 3
        assert exc_info.value.message.startswith("Input file directory does not exist:")

    def test_file_is_not_directory(self, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("x")
        with pytest.raises(NotDirectoryError) as exc_info:
            require_directory(path, "Success output directory")
        assert exc_info.value.exit_code == 4

    def test_never_creates_directory(self, tmp_path):
        with pytest.raises(NotFoundError):
            require_directory(tmp_path / "new", "Failure output directory")
        assert not (tmp_path / "new").exists()


class TestRequireFile:
    """Tests for require_file"""

    def test_missing_file_uses_given_exit_code(self, tmp_path):
        with pytest.raises(NotFoundError) as exc_info:
            require_file(tmp_path / "script.py", "Script file", 2)
        assert exc_info.value.exit_code == 2


class TestValidateOutputFilename:
    """Tests for validate_output_filename"""

    @pytest.mark.parametrize("filename", ["x.txt", "no_extension", ".hidden", "with space.csv"])
    def test_valid(self, filename):
        assert validate_output_filename(filename) == filename

    @pytest.mark.parametrize("filename,message", [
        (None, "no 'filename' attribute"),
        ("", "non-empty"),
        ("   ", "non-empty"),
        ("a\x00b", "null bytes"),
        ("../x", "path separators"),
        ("a\\b", "path separators"),
        ("..", "relative directory"),
        (".", "relative directory"),
        ("x" * 256, "255 bytes"),
    ])
    def test_invalid(self, filename, message):
        with pytest.raises(ValidationError, match=message):
            validate_output_filename(filename)

    @given(st.text(min_size=1, max_size=40))
    def test_accepted_names_stay_in_directory(self, filename):
        try:
            name = validate_output_filename(filename)
        except ValidationError:
            return
        assert "/" not in name and "\\" not in name
        assert name not in (".", "..")
