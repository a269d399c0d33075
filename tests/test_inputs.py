"""Tests for input resolution."""

import os

import pytest

from pubsubschema_gen.exceptions import PatternError
from pubsubschema_gen.inputs import DEFAULT_GLOB, resolve_inputs, validate_glob_pattern


class TestResolveInputs:
    """Test resolve_inputs."""

    def test_matches_are_sorted(self, tmp_path, write_proto):
        for name in ["b.pubsub.proto", "c.pubsub.proto", "a.pubsub.proto"]:
            write_proto(tmp_path, name, "message X {}\n")

        files = resolve_inputs(tmp_path, DEFAULT_GLOB)

        assert [p.name for p in files] == [
            "a.pubsub.proto",
            "b.pubsub.proto",
            "c.pubsub.proto",
        ]

    def test_non_matching_files_are_ignored(self, tmp_path, write_proto):
        write_proto(tmp_path, "a.pubsub.proto", "")
        write_proto(tmp_path, "a.proto", "")
        write_proto(tmp_path, "README.md", "")

        assert [p.name for p in resolve_inputs(tmp_path, DEFAULT_GLOB)] == ["a.pubsub.proto"]

    def test_directories_are_skipped(self, tmp_path, write_proto):
        (tmp_path / "nested.pubsub.proto").mkdir()
        write_proto(tmp_path, "real.pubsub.proto", "")

        assert [p.name for p in resolve_inputs(tmp_path, DEFAULT_GLOB)] == ["real.pubsub.proto"]

    def test_dangling_symlinks_are_skipped(self, tmp_path, write_proto):
        os.symlink(tmp_path / "missing-target", tmp_path / "dangling.pubsub.proto")
        write_proto(tmp_path, "real.pubsub.proto", "")

        assert [p.name for p in resolve_inputs(tmp_path, DEFAULT_GLOB)] == ["real.pubsub.proto"]

    def test_symlink_to_file_is_kept(self, tmp_path, write_proto):
        target = write_proto(tmp_path / "elsewhere", "target.txt", "message X {}\n")
        os.symlink(target, tmp_path / "linked.pubsub.proto")

        assert [p.name for p in resolve_inputs(tmp_path, DEFAULT_GLOB)] == ["linked.pubsub.proto"]

    def test_custom_pattern(self, tmp_path, write_proto):
        write_proto(tmp_path, "a.pubsub.proto", "")
        write_proto(tmp_path, "b.pubsub.proto", "")

        assert [p.name for p in resolve_inputs(tmp_path, "[a]*.pubsub.proto")] == [
            "a.pubsub.proto"
        ]

    def test_wildcard_matches_dot_files(self, tmp_path, write_proto):
        """A leading * also matches names starting with a dot."""
        write_proto(tmp_path, ".hidden.pubsub.proto", "")
        write_proto(tmp_path, "b.pubsub.proto", "")

        assert [p.name for p in resolve_inputs(tmp_path, DEFAULT_GLOB)] == [
            ".hidden.pubsub.proto",
            "b.pubsub.proto",
        ]

    def test_pattern_with_subdirectory(self, tmp_path, write_proto):
        write_proto(tmp_path / "v1", "a.pubsub.proto", "")
        write_proto(tmp_path / "v2", "b.pubsub.proto", "")
        write_proto(tmp_path, "c.pubsub.proto", "")

        assert resolve_inputs(tmp_path, "v*/*.pubsub.proto") == [
            tmp_path / "v1" / "a.pubsub.proto",
            tmp_path / "v2" / "b.pubsub.proto",
        ]

    def test_empty_pattern_matches_nothing(self, tmp_path, write_proto):
        """An empty pattern names the directory itself, which is not a file."""
        write_proto(tmp_path, "a.pubsub.proto", "")

        assert resolve_inputs(tmp_path, "") == []

    def test_empty_directory_returns_empty_list(self, tmp_path):
        assert resolve_inputs(tmp_path, DEFAULT_GLOB) == []

    def test_missing_directory_returns_empty_list(self, tmp_path):
        assert resolve_inputs(tmp_path / "does-not-exist", DEFAULT_GLOB) == []

    def test_directory_with_glob_characters(self, tmp_path, write_proto):
        """Only the pattern is a glob; the directory path is taken literally."""
        directory = tmp_path / "protos[v1]"
        write_proto(directory, "a.pubsub.proto", "")

        assert [p.name for p in resolve_inputs(directory, DEFAULT_GLOB)] == ["a.pubsub.proto"]

    def test_malformed_pattern_raises(self, tmp_path):
        with pytest.raises(PatternError) as exc_info:
            resolve_inputs(tmp_path, "[abc*.pubsub.proto")
        assert exc_info.value.context["pattern"] == "[abc*.pubsub.proto"


class TestValidateGlobPattern:
    """Test glob pattern validation."""

    @pytest.mark.parametrize(
        "pattern",
        ["*.pubsub.proto", "[ab]*.proto", "[!a]*", "[]]x", "[^]]*", "sub/*.proto", "?.proto", ""],
    )
    def test_valid_patterns(self, pattern):
        validate_glob_pattern(pattern)

    @pytest.mark.parametrize("pattern", ["[", "[abc", "*.proto[", "[]", "abc\\"])
    def test_malformed_patterns(self, pattern):
        with pytest.raises(PatternError, match="syntax error in pattern"):
            validate_glob_pattern(pattern)
