import subprocess
import pytest
from pathlib import Path
from media_renamer.metadata.extract import MetadataReader
from media_renamer.metadata import extract as extract_module
from media_renamer.models import TagRecord
from media_renamer.exceptions import (
    ExifToolExecutionError,
    ExifToolNotFoundError,
    MalformedMetadataError,
    MetadataExtractionError,
    NoMetadataRecordsError,
)

def _fake_run(monkeypatch, returncode=0, stdout="", stderr="", calls=None):
    def fake_run(cmd, **kwargs):
        if calls is not None:
            calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)
    monkeypatch.setattr(extract_module.subprocess, "run", fake_run)

def test_read_tags_decodes_first_record(monkeypatch):
    calls = []
    stdout = """[{
        "SourceFile": "IMG_7429.JPG",
        "FileName": "IMG_7429.JPG",
        "DateTimeOriginal": "2016:05:24 22:14:54",
        "CreateDate": "2016:05:24 22:14:54",
        "Model": "Canon EOS 40D",
        "FileNumber": "100-7429"
    }, {"FileName": "ignored.jpg"}]"""
    _fake_run(monkeypatch, stdout=stdout, calls=calls)

    tags = MetadataReader(timeout=5).read_tags(Path("IMG_7429.JPG"))

    assert tags == TagRecord(
        date_time_original="2016:05:24 22:14:54",
        create_date="2016:05:24 22:14:54",
        source_file_name="IMG_7429.JPG",
        file_number="100-7429",
        device_model="Canon EOS 40D",
    )
    cmd, kwargs = calls[0]
    assert cmd == ["exiftool", "-j", "IMG_7429.JPG"]
    assert kwargs["timeout"] == 5

def test_non_string_tags_are_stringified():
    tags = TagRecord.from_exiftool({"FileNumber": 1007429, "Model": None, "ModifyDate": "2010:01:01 00:00:00"})
    assert tags.file_number == "1007429"
    assert tags.device_model == ""
    assert tags.captured_at == "2010:01:01 00:00:00"

def test_with_file_name_only_fills_empty():
    assert TagRecord().with_file_name("a.jpg").source_file_name == "a.jpg"
    assert TagRecord(source_file_name="b.jpg").with_file_name("a.jpg").source_file_name == "b.jpg"

def test_non_zero_exit(monkeypatch):
    _fake_run(monkeypatch, returncode=1, stderr="Error: Unknown file type - notes.txt")
    with pytest.raises(ExifToolExecutionError, match="Unknown file type"):
        MetadataReader().read_tags(Path("notes.txt"))

def test_malformed_output(monkeypatch):
    _fake_run(monkeypatch, stdout="not json")
    with pytest.raises(MalformedMetadataError):
        MetadataReader().read_tags(Path("a.jpg"))

def test_output_not_a_list(monkeypatch):
    _fake_run(monkeypatch, stdout='{"FileName": "a.jpg"}')
    with pytest.raises(MalformedMetadataError):
        MetadataReader().read_tags(Path("a.jpg"))

def test_zero_records(monkeypatch):
    _fake_run(monkeypatch, stdout="[]")
    with pytest.raises(NoMetadataRecordsError):
        MetadataReader().read_tags(Path("a.jpg"))

def test_timeout_is_per_file_error(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])
    monkeypatch.setattr(extract_module.subprocess, "run", fake_run)
    with pytest.raises(MetadataExtractionError):
        MetadataReader(timeout=0.1).read_tags(Path("a.jpg"))

def test_missing_executable_is_fatal(monkeypatch):
    monkeypatch.setattr(extract_module.shutil, "which", lambda exe: None)
    with pytest.raises(ExifToolNotFoundError):
        MetadataReader().ensure_available()

def test_executable_vanishing_is_fatal(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])
    monkeypatch.setattr(extract_module.subprocess, "run", fake_run)
    with pytest.raises(ExifToolNotFoundError):
        MetadataReader().read_tags(Path("a.jpg"))
