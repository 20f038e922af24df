"""Shared fixtures for the FormVault test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read when ``formvault.infrastructure.database`` is first imported.
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="formvault-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'api.db'}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["STORAGE_ROOT"] = str(_TEST_ROOT / "storage")
os.environ["OTP_CONSOLE_DELIVERY"] = "false"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from formvault.config import get_settings  # noqa: E402

get_settings.cache_clear()

from formvault.domain.entities import AttachmentPayload  # noqa: E402
from formvault.infrastructure.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    initialize_database,
)
from formvault.infrastructure.storage import LocalContentSink  # noqa: E402

MAX_BYTES = 1024


@pytest.fixture()
def max_bytes() -> int:
    return MAX_BYTES


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'unit.db'}")
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    factory = build_session_factory(engine)
    with factory() as db:
        yield db


@pytest.fixture()
def content_root(tmp_path) -> Path:
    return tmp_path / "content"


@pytest.fixture()
def sink(content_root) -> LocalContentSink:
    return LocalContentSink(content_root)


@pytest.fixture()
def make_record(session, sink, max_bytes):
    """Create a record, optionally with attachments, and return it."""

    from formvault.application.use_cases import create_record

    def _make(*payloads: AttachmentPayload, **kwargs):
        return create_record(
            session,
            payloads=list(payloads),
            sink=sink,
            max_bytes=max_bytes,
            **kwargs,
        )

    return _make
