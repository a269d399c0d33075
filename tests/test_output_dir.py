"""Tests for output directory management."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pubsubschema_gen.exceptions import GeneratorIOError
from pubsubschema_gen.output_dir import remove_generated_schemas, write_file


class TestWriteFile:
    """Test write_file."""

    def test_creates_parent_directories(self, tmp_path):
        path = write_file(tmp_path / "a" / "b" / "c.yaml", "x: 1\n")
        assert path.read_bytes() == b"x: 1\n"

    def test_crlf_is_written_as_lf(self, tmp_path):
        path = write_file(tmp_path / "c.yaml", "a\r\nb\r\n")
        assert path.read_bytes() == b"a\nb\n"

    def test_replaces_existing_file(self, tmp_path):
        target = tmp_path / "c.yaml"
        target.write_text("old content that is longer\n")
        write_file(target, "new\n")
        assert target.read_bytes() == b"new\n"

    def test_parent_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(GeneratorIOError) as exc_info:
            write_file(blocker / "c.yaml", "x\n")
        assert exc_info.value.context["operation"] == "mkdir"
        assert isinstance(exc_info.value.cause, OSError)

    def test_write_failure_is_wrapped(self, tmp_path):
        with patch.object(Path, "write_bytes", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(GeneratorIOError, match="Permission denied") as exc_info:
                write_file(tmp_path / "c.yaml", "x\n")
        assert exc_info.value.context["operation"] == "write"
        assert exc_info.value.context["path"] == str(tmp_path / "c.yaml")


class TestRemoveGeneratedSchemas:
    """Test stale manifest cleanup."""

    def test_missing_directory_is_a_no_op(self, tmp_path):
        assert remove_generated_schemas(tmp_path / "missing") == []
        assert not (tmp_path / "missing").exists()

    def test_only_schema_manifests_are_removed(self, tmp_path):
        (tmp_path / "old.schema.yaml").write_text("stale")
        (tmp_path / "other.schema.yaml").write_text("stale")
        (tmp_path / "kustomization.yaml").write_text("index")
        (tmp_path / "notes.txt").write_text("keep")
        (tmp_path / "dir.schema.yaml").mkdir()
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "nested.schema.yaml").write_text("keep")

        removed = remove_generated_schemas(tmp_path)

        assert [p.name for p in removed] == ["old.schema.yaml", "other.schema.yaml"]
        assert not (tmp_path / "old.schema.yaml").exists()
        assert not (tmp_path / "other.schema.yaml").exists()
        assert (tmp_path / "kustomization.yaml").exists()
        assert (tmp_path / "notes.txt").exists()
        assert (tmp_path / "dir.schema.yaml").is_dir()
        assert (tmp_path / "sub" / "nested.schema.yaml").exists()

    def test_output_dir_is_a_file(self, tmp_path):
        not_a_dir = tmp_path / "out"
        not_a_dir.write_text("")
        with pytest.raises(GeneratorIOError) as exc_info:
            remove_generated_schemas(not_a_dir)
        assert exc_info.value.context["operation"] == "list"

    def test_remove_failure_is_wrapped(self, tmp_path):
        (tmp_path / "old.schema.yaml").write_text("stale")
        with patch.object(Path, "unlink", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(GeneratorIOError) as exc_info:
                remove_generated_schemas(tmp_path)
        assert exc_info.value.context["operation"] == "remove"
