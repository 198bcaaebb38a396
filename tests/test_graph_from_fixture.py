from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

import pytest

from artifacts.generators.graph import GraphGenerator
from contract.artifacts import MODELS_JSONL, RESOURCES_JSONL, SUMMARY_JSON
from contract.validation import validate_artifacts
from rules.config import ExtractionConfig

FIXTURE_REPO = Path(__file__).parent / "fixtures" / "shop_api"


def _read_jsonl(path: Path) -> list[dict[str, Any]]:
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


@pytest.fixture
def generated(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, root)
    out_dir = tmp_path / "out"
    GraphGenerator().generate(root=root, out_dir=out_dir)
    return out_dir


def _endpoints(out_dir: Path) -> dict[str, dict[str, Any]]:
    return {
        endpoint["name"]: endpoint
        for record in _read_jsonl(out_dir / RESOURCES_JSONL)
        for endpoint in record["endpoints"]
    }


def test_resources_are_sorted_by_path(generated: Path) -> None:
    records = _read_jsonl(generated / RESOURCES_JSONL)

    assert [(r["path"], r["base_path"]) for r in records] == [
        ("shop_api/resources/orders.py", "/orders"),
        ("shop_api/resources/users.py", "/users"),
    ]
    assert records[1]["skipped_operations"] == ["audit"]


def test_get_user_endpoint(generated: Path) -> None:
    endpoint = _endpoints(generated)["get_user"]

    assert endpoint == {
        "method": "GET",
        "name": "get_user",
        "path": "/users/{id}",
        "parameters": [
            {
                "kind": "path",
                "name": "id",
                "description": "The user identifier.",
                "type": "integer",
            }
        ],
        "responses": [
            {"code": 404, "message": "Not Found"},
            {"code": 410, "message": "Gone"},
        ],
        "summary": "Fetch one user. Auth is required: No",
        "description": "Returns the full record.\nROLES: Any",
        "return_type": "User",
    }


def test_resource_roles_and_collection_returns(generated: Path) -> None:
    endpoint = _endpoints(generated)["list_users"]

    assert endpoint["summary"] == "List users. Auth is required: Yes"
    assert endpoint["description"] == "ROLES: 'admin'"
    assert endpoint["return_type"] == "List[User]"
    assert [(p["kind"], p["name"]) for p in endpoint["parameters"]] == [
        ("query", "limit")
    ]


def test_post_parameters(generated: Path) -> None:
    endpoints = _endpoints(generated)

    assert [
        (p["kind"], p["name"], p["type"]) for p in endpoints["create_user"]["parameters"]
    ] == [("body", "user", "User"), ("header", "X-Trace", "string")]
    assert [
        (p["kind"], p["name"]) for p in endpoints["upload_avatar"]["parameters"]
    ] == [("path", "id"), ("form", "file")]
    assert endpoints["upload_avatar"]["return_type"] == "void"


def test_models_catalog(generated: Path) -> None:
    models = {m["id"]: m for m in _read_jsonl(generated / MODELS_JSONL)}

    assert list(models) == ["Order", "item", "User", "Address"]

    user = models["User"]["properties"]
    assert list(user) == [
        "name",
        "email",
        "status",
        "addresses",
        "friends",
        "tags",
        "createdBy",
        "display",
        "initials",
        "id",
    ]
    assert user["name"]["description"] == "Display name."
    assert user["email"]["description"] == "VIEWS: Public,Admin"
    assert user["status"] == {
        "kind": "enum",
        "values": ["ACTIVE", "SUSPENDED"],
        "description": None,
    }
    assert user["addresses"]["type"] == "List"
    assert user["addresses"]["items"] == "Address"
    assert user["tags"]["type"] == "Map"
    assert user["tags"]["items"] == "string"
    assert user["id"]["description"] == "Unique identifier."

    order = models["Order"]["properties"]
    assert order["items"]["items"] == "item"
    assert order["owner"]["type"] == "User"


def test_summary_and_contract(generated: Path) -> None:
    summary = json.loads((generated / SUMMARY_JSON).read_text(encoding="utf-8"))

    assert summary["resource_count"] == 2
    assert summary["endpoint_count"] == 5
    assert summary["model_count"] == 4
    assert summary["skipped_operation_count"] == 1
    assert validate_artifacts(generated).ok


def test_generation_is_byte_stable(tmp_path: Path, generated: Path) -> None:
    root = tmp_path / "repo"
    second = tmp_path / "again"
    GraphGenerator().generate(root=root, out_dir=second)

    for name in (RESOURCES_JSONL, MODELS_JSONL, SUMMARY_JSON):
        assert (generated / name).read_bytes() == (second / name).read_bytes()


def test_disabling_model_parsing(tmp_path: Path) -> None:
    root = tmp_path / "repo"
    shutil.copytree(FIXTURE_REPO, root)
    out_dir = tmp_path / "out"

    GraphGenerator().generate(
        root=root, out_dir=out_dir, extraction=ExtractionConfig(parse_models=False)
    )

    assert _read_jsonl(out_dir / MODELS_JSONL) == []
