import pytest

from winenvedit.core.validation import (
    MAX_NAME_LENGTH,
    MAX_VALUE_LENGTH,
    is_valid_path,
    looks_like_path,
    validate_data,
    validate_data_all_errors,
    validate_for_add,
    validate_name,
    validate_name_all_errors,
)


class TestValidateName:
    @pytest.mark.parametrize("name", ["PATH", "JAVA_HOME", "x", "Program.Files(x86)", "a" * MAX_NAME_LENGTH])
    def test_valid_names(self, name):
        result = validate_name(name)
        assert result.is_valid
        assert result.error_message == ""

    @pytest.mark.parametrize("name,message", [
        ("", "cannot be empty"),
        ("A=B", "cannot contain '=' characters"),
        ("A;B", "cannot contain ';' characters"),
        ("%A%", "cannot contain '%' characters"),
        ("MY VAR", "cannot contain spaces"),
        ("TAB\tVAR", "cannot contain spaces"),
        ("NUL\0", "cannot contain null characters"),
        ("a" * (MAX_NAME_LENGTH + 1), "cannot exceed 255 characters"),
    ])
    def test_invalid_names(self, name, message):
        result = validate_name(name)
        assert not result.is_valid
        assert result.error_message == message

    def test_first_rule_wins(self):
        result = validate_name("A = B")
        assert result.error_message == "cannot contain '=' characters"

    def test_all_errors(self):
        errors = validate_name_all_errors("A = B;")
        assert errors == [
            "cannot contain '=' characters",
            "cannot contain ';' characters",
            "cannot contain spaces",
        ]

    def test_all_errors_valid(self):
        assert validate_name_all_errors("PATH") == []


class TestValidateData:
    def test_empty_is_valid(self):
        assert validate_data("").is_valid

    def test_too_long(self):
        result = validate_data("x" * (MAX_VALUE_LENGTH + 1))
        assert result.error_message == "cannot exceed 32767 characters"

    def test_null_character(self):
        assert validate_data("a\0b").error_message == "cannot contain null characters"
        assert validate_data_all_errors("a\0b") == ["cannot contain null characters"]


class TestValidateForAdd:
    def test_valid(self):
        assert validate_for_add("EDITOR", "vim") == (True, "")

    def test_invalid_name_reported_first(self):
        assert validate_for_add("", "a\0") == (False, "cannot be empty")

    def test_invalid_data(self):
        assert validate_for_add("EDITOR", "a\0") == (False, "cannot contain null characters")


class TestLooksLikePath:
    @pytest.mark.parametrize("value", [r"C:\Windows", "D:", " c:/tools ", r"%SystemRoot%\system32", "%USERPROFILE%"])
    def test_paths(self, value):
        assert looks_like_path(value)

    @pytest.mark.parametrize("value", ["", "   ", "vim", "%", "%%", "%1abc%", "1:", "https://example.com", "%NOEND"])
    def test_not_paths(self, value):
        assert not looks_like_path(value)


class TestIsValidPath:
    def test_existing_directory(self, temp_dir):
        assert is_valid_path(str(temp_dir))

    def test_existing_file(self, temp_dir):
        f = temp_dir / "tool.exe"
        f.touch()
        assert is_valid_path(str(f))

    def test_missing(self, temp_dir):
        assert not is_valid_path(str(temp_dir / "missing"))

    def test_empty(self):
        assert not is_valid_path("")
        assert not is_valid_path("  ")

    def test_expands_percent_variables(self, temp_dir, monkeypatch):
        monkeypatch.setenv("WINENVEDIT_TEST_ROOT", str(temp_dir))
        assert is_valid_path("%WINENVEDIT_TEST_ROOT%")
