import json
import subprocess
import pytest
from media_renamer.metadata import extract as extract_module

@pytest.fixture
def fake_exiftool(monkeypatch):
    """
    Replaces the exiftool subprocess with a lookup table.
    Returns the dict: file name -> exiftool record (or a CompletedProcess to return as-is).
    """
    records = {}

    def fake_run(cmd, **kwargs):
        name = cmd[-1].replace("\\", "/").rsplit("/", 1)[-1]
        entry = records.get(name)
        if isinstance(entry, subprocess.CompletedProcess):
            return entry
        if entry is None:
            return subprocess.CompletedProcess(cmd, 1, "", f"Error: File not found - {name}")
        return subprocess.CompletedProcess(cmd, 0, json.dumps([entry]), "")

    monkeypatch.setattr(extract_module.shutil, "which", lambda exe: "/usr/bin/" + exe)
    monkeypatch.setattr(extract_module.subprocess, "run", fake_run)
    return records
