# tests/conftest.py

from pathlib import Path

import pytest
from helpers import document_xml


EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "tools" / "zwave_codegen" / "examples"


@pytest.fixture
def write_document(tmp_path):
    def _write(*classes: str, name: str = "classes.xml") -> Path:
        path = tmp_path / name
        path.write_text(document_xml(*classes), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def example_input() -> Path:
    return EXAMPLES_DIR / "ZWave_custom_cmd_classes.xml"
