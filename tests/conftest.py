from __future__ import annotations

from typing import Any

from compat_fixtures import SAMPLE_PROPERTIES, SAMPLE_SELECTORS, make_document
import pytest

from csscompat.compat_data import KnowledgeBase


@pytest.fixture
def sample_document() -> dict[str, Any]:
    return make_document(SAMPLE_PROPERTIES, SAMPLE_SELECTORS)


@pytest.fixture
def knowledge_base(sample_document: dict[str, Any]) -> KnowledgeBase:
    return KnowledgeBase.from_bcd(sample_document)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CSSCOMPAT_DATA",
        "CSSCOMPAT_DATA_URL",
        "CSSCOMPAT_CACHE_DIR",
        "CSSCOMPAT_TIMEOUT",
        "CSSCOMPAT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
