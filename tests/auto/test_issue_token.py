# tests/auto/test_issue_token.py
"""Tests for the development token CLI."""

from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from types import ModuleType
from uuid import uuid4

import orjson
import pytest

from app.managers.token_manager import decode_access_token

SCRIPT = Path(__file__).parents[2] / "auto" / "issue_token.py"


@pytest.fixture(scope="module")
def issue_token() -> ModuleType:
    spec = spec_from_file_location("issue_token", SCRIPT)
    assert spec is not None
    assert spec.loader is not None
    module = module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_decodable_token(issue_token: ModuleType, capsys: pytest.CaptureFixture) -> None:
    user_id = uuid4()

    assert issue_token.main(["--username", "writer", "--user-id", str(user_id)]) == 0

    output = orjson.loads(capsys.readouterr().out)
    assert output["token_type"] == "bearer"
    data = decode_access_token(output["access_token"])
    assert data is not None
    assert data.user_id == user_id
    assert data.username == "writer"


def test_rejects_non_positive_lifetime(
    issue_token: ModuleType,
    capsys: pytest.CaptureFixture,
) -> None:
    assert issue_token.main(["--username", "writer", "--minutes", "0"]) == 1
    assert "--minutes must be positive" in capsys.readouterr().out
