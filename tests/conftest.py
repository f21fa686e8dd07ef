"""Shared fixtures."""

import logging
from pathlib import Path

import pytest

from leakguard.utils.config import Config

# 22-char salt + 31-char hash
BCRYPT_BODY = "N9qo8uLOickgx2ZMRZoMye" + "IjZAgcfl7p92ldGxad68LJZdL17lhWy"
BCRYPT_HASH = "$2b$12$" + BCRYPT_BODY


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user/project config files and LEAKGUARD_* env vars out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(Config, "USER_CONFIG_DIR", home / ".leakguard")
    monkeypatch.setattr(Config, "USER_CONFIG_FILE", home / ".leakguard" / "config.yml")
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    for var in ("LEAKGUARD_MAX_WORKERS", "LEAKGUARD_OUTPUT_FORMAT", "LEAKGUARD_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    yield home
    # CLI runs attach handlers to streams that are closed after the test
    logging.getLogger("leakguard").handlers.clear()


def write_tree(root: Path, files: dict) -> Path:
    """Create ``{relative_path: text}`` under root."""
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root
