"""Shared fixtures"""

# tests/conftest.py
import logging
from pathlib import Path
from typing import Iterator

import pytest

from minutes2docx.internals.config.define_config import UserConfig
from minutes2docx.internals.run_context import get_session_id
from minutes2docx.themes import ThemeId

SAMPLE_MINUTES = """# Compte Rendu

## Synthèse
La réunion a validé le **budget Q4** et le calendrier de *déploiement*.

## Points clés
- Budget marketing validé
  - Enveloppe **digitale** en hausse
- Recrutement d'un chef de projet

## Actions
| Action | Responsable |
| :--- | :--- |
| Relancer le fournisseur | Alice |
| Préparer la démo | Bob |

## Transcription
Alice : bonjour à tous.
"""


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory for test output files"""
    output = tmp_path / "output"
    output.mkdir()
    return output


@pytest.fixture
def sample_minutes_text() -> str:
    """Generated minutes covering every block kind, plus a transcript to be cut."""
    return SAMPLE_MINUTES


@pytest.fixture
def path_to_sample_minutes(tmp_path: Path, sample_minutes_text: str) -> Path:
    """The sample minutes written to a .md file."""
    path = tmp_path / "comite.md"
    path.write_text(sample_minutes_text, encoding="utf-8")
    return path


@pytest.fixture
def sample_cfg(path_to_sample_minutes: Path, temp_output_dir: Path) -> UserConfig:
    """Sample config object pointing at the sample minutes."""
    return UserConfig(
        input_text=path_to_sample_minutes,
        output_folder=temp_output_dir,
        title="Comité de pilotage",
        date="2024-03-05",
        theme=ThemeId.CORPORATE,
    )


@pytest.fixture
def fake_documents_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~/Documents at a temp folder so nothing is written into the real user folders."""
    documents = tmp_path / "Documents"
    documents.mkdir()
    monkeypatch.setattr(
        "minutes2docx.internals.paths.user_documents_dir", lambda: str(documents)
    )
    return documents / "minutes2docx"


@pytest.fixture
def clean_debug_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Ensure debug env var is not set before test.
    Used by at least test_utils + test_startup."""
    monkeypatch.delenv("MINUTES2DOCX_DEBUG", raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def propagate_app_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    """setup_logger() turns propagation off; turn it back on so caplog sees our records."""
    monkeypatch.setattr(logging.getLogger("minutes2docx"), "propagate", True)


@pytest.fixture
def fresh_session_id() -> Iterator[None]:
    """Forget the cached session id before and after the test."""
    get_session_id.cache_clear()
    yield
    get_session_id.cache_clear()
