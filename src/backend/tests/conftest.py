import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work,
# even when pytest's rootdir is the repository root.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import json
from pathlib import Path

import pytest


RULES_MANIFEST = Path(__file__).parent / "compliance_engine" / "fixtures" / "rules.json"


@pytest.fixture
def rules_manifest_path() -> Path:
    return RULES_MANIFEST


@pytest.fixture
def rules_manifest(rules_manifest_path) -> dict:
    return json.loads(rules_manifest_path.read_text(encoding="utf-8"))
