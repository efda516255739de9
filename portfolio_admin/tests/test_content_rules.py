from __future__ import annotations

from pathlib import Path

import pytest

from portfolio_admin.application.use_cases.content.delete_content import DeleteContentUseCase
from portfolio_admin.domain.content.exceptions import (
    ContentNotFoundError,
    FilenameRequiredError,
    InvalidFilenameError,
    InvalidFileTypeError,
)
from portfolio_admin.domain.content.rules import (
    is_valid_content_filename,
    validate_content_filename,
)
from portfolio_admin.infrastructure.storage import LocalContentStorage


@pytest.mark.parametrize("name", ["post-1.mdx", "hello_world.mdx", "2025.notes.mdx"])
def test_accepts_plain_content_names(name: str) -> None:
    assert validate_content_filename(name) == name
    assert is_valid_content_filename(name) is True


@pytest.mark.parametrize(
    ("name", "error"),
    [
        (None, FilenameRequiredError),
        ("", FilenameRequiredError),
        ("post-1", InvalidFileTypeError),
        ("post-1.md", InvalidFileTypeError),
        (".mdx", InvalidFileTypeError),
        ("../../etc/passwd.mdx", InvalidFilenameError),
        ("a/b.mdx", InvalidFilenameError),
        ("a\\b.mdx", InvalidFilenameError),
        ("..secret.mdx", InvalidFilenameError),
    ],
)
def test_rejects_unsafe_or_foreign_names(name: str | None, error: type[Exception]) -> None:
    with pytest.raises(error):
        validate_content_filename(name)
    assert is_valid_content_filename(name) is False


def test_error_codes_and_statuses() -> None:
    assert FilenameRequiredError().code == "filename_required"
    assert InvalidFileTypeError().status == 400
    assert InvalidFilenameError().code == "invalid_filename"
    assert ContentNotFoundError().status == 404


def test_delete_use_case_removes_only_the_named_file(tmp_path: Path) -> None:
    (tmp_path / "post-1.mdx").write_text("x", encoding="utf-8")
    (tmp_path / "post-2.mdx").write_text("y", encoding="utf-8")
    use_case = DeleteContentUseCase(storage=LocalContentStorage(tmp_path))

    assert use_case.execute("post-1.mdx", actor="admin") == "post-1.mdx"

    assert not (tmp_path / "post-1.mdx").exists()
    assert (tmp_path / "post-2.mdx").exists()


def test_delete_use_case_reports_missing_file(tmp_path: Path) -> None:
    use_case = DeleteContentUseCase(storage=LocalContentStorage(tmp_path))

    with pytest.raises(ContentNotFoundError) as excinfo:
        use_case.execute("absent.mdx", actor="admin")

    assert excinfo.value.code == "file_not_found"
