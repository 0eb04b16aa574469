"""Unit tests for storage_service."""
import json
import os

import pytest

from src.services import storage_service
from src.services.storage_service import load_json, save_json, lock_file


class TestLoadJson:
    """Test load_json function."""

    def test_load_valid_json(self, tmp_path):
        """Test loading valid JSON file."""
        file_path = tmp_path / "data.json"
        file_path.write_text(json.dumps({"test": "data", "number": 42}), encoding="utf-8")

        data = load_json(str(file_path))

        assert data == {"test": "data", "number": 42}

    def test_load_json_with_utf8(self, tmp_path):
        """Test loading JSON with non-ASCII names."""
        file_path = tmp_path / "names.json"
        file_path.write_text(json.dumps({"name": "അനു"}, ensure_ascii=False), encoding="utf-8")

        assert load_json(str(file_path))["name"] == "അനു"

    def test_load_nonexistent_file_raises_error(self, tmp_path):
        """Test missing file without default raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="File not found"):
            load_json(str(tmp_path / "missing.json"))

    def test_load_nonexistent_file_returns_default_copy(self, tmp_path):
        """Test missing file returns a copy of the default."""
        default = {"records": {}}

        data = load_json(str(tmp_path / "missing.json"), default=default)
        data["records"]["k"] = {}

        assert default == {"records": {}}

    def test_load_malformed_json_raises_error(self, tmp_path):
        """Test loading malformed JSON raises JSONDecodeError."""
        file_path = tmp_path / "malformed.json"
        file_path.write_text("{invalid json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError, match="Malformed JSON"):
            load_json(str(file_path))


class TestSaveJson:
    """Test save_json function."""

    def test_save_valid_json(self, tmp_path):
        """Test saving valid JSON data."""
        file_path = tmp_path / "test.json"

        save_json(str(file_path), {"key": "value"})

        assert json.loads(file_path.read_text(encoding="utf-8")) == {"key": "value"}

    def test_save_keeps_non_ascii(self, tmp_path):
        """Test non-ASCII text is written unescaped."""
        file_path = tmp_path / "test.json"

        save_json(str(file_path), {"name": "അനു"})

        assert "അനു" in file_path.read_text(encoding="utf-8")

    def test_save_creates_directory(self, tmp_path):
        """Test save_json creates parent directory if needed."""
        file_path = tmp_path / "subdir" / "test.json"

        save_json(str(file_path), {"test": "data"})

        assert file_path.exists()

    def test_save_overwrites_existing_file(self, tmp_path):
        """Test save_json overwrites existing file."""
        file_path = tmp_path / "test.json"

        save_json(str(file_path), {"version": 1})
        save_json(str(file_path), {"version": 2})

        assert load_json(str(file_path))["version"] == 2

    def test_save_leaves_no_temp_files(self, tmp_path):
        """Test the temp file is renamed into place."""
        save_json(str(tmp_path / "test.json"), {"a": 1})

        assert os.listdir(tmp_path) == ["test.json"]

    def test_failed_write_raises_ioerror_and_cleans_up(self, tmp_path, monkeypatch):
        """Test a failed rename raises IOError and removes the temp file."""
        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(storage_service.os, "replace", broken_replace)

        with pytest.raises(IOError, match="Failed to write file"):
            save_json(str(tmp_path / "test.json"), {"a": 1})

        assert os.listdir(tmp_path) == []


class TestLockFile:
    """Test lock_file context manager."""

    def test_lock_file_basic(self, tmp_path):
        """Test lock can be taken on a file that doesn't exist yet."""
        file_path = str(tmp_path / "data.json")

        with lock_file(file_path):
            save_json(file_path, {"count": 1})

        assert load_json(file_path)["count"] == 1

    def test_lock_file_releases_lock(self, tmp_path):
        """Test lock is released after context exits."""
        file_path = str(tmp_path / "data.json")

        with lock_file(file_path, timeout=0.2):
            pass

        with lock_file(file_path, timeout=0.2):
            pass

    def test_lock_released_after_exception(self, tmp_path):
        """Test lock is released when the critical section raises."""
        file_path = str(tmp_path / "data.json")

        with pytest.raises(RuntimeError):
            with lock_file(file_path):
                raise RuntimeError("boom")

        with lock_file(file_path, timeout=0.2):
            pass

    def test_lock_timeout(self, tmp_path, monkeypatch):
        """Test TimeoutError when the lock can't be acquired."""
        monkeypatch.setattr(storage_service, "_try_lock", lambda fd: False)

        with pytest.raises(TimeoutError, match="Could not acquire lock"):
            with lock_file(str(tmp_path / "data.json"), timeout=0.1):
                pass
