"""Tests for per-session vault selection."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from obsidian_editor import session
from obsidian_editor.core.vault_operations import FileSystemVaultManager
from obsidian_editor.data_models import VaultConfiguration, VaultMetadata


@pytest.fixture
def configuration(monkeypatch, tmp_path):
    """Two configured vaults with ``personal`` as the default."""
    vaults = {
        name: VaultMetadata(name=name, path=tmp_path / name, description="", exists=False)
        for name in ("personal", "work")
    }
    config = VaultConfiguration(default_vault="personal", vaults=vaults)
    monkeypatch.setattr(session, "get_vault_configuration", lambda: config)
    monkeypatch.setattr(session, "_ACTIVE_VAULTS", {})
    return config


def _context():
    return SimpleNamespace(session=object())


def test_default_vault_without_context(configuration):
    """Without a context the configured default is used."""
    assert session.resolve_vault(None).name == "personal"


def test_explicit_vault_wins(configuration):
    """An explicit vault name overrides the active vault."""
    ctx = _context()
    session.set_active_vault(ctx, "personal")
    assert session.resolve_vault("work", ctx).name == "work"


def test_active_vault_is_per_session(configuration):
    """Each client session keeps its own active vault."""
    first, second = _context(), _context()
    session.set_active_vault(first, "work")
    assert session.resolve_vault(None, first).name == "work"
    assert session.resolve_vault(None, second).name == "personal"


def test_unknown_vault(configuration):
    """Selecting an unconfigured vault fails."""
    with pytest.raises(ValueError, match="Unknown vault 'archive'"):
        session.set_active_vault(_context(), "archive")


def test_resolve_vault_manager(configuration):
    """The manager is rooted at the vault's configured path."""
    manager = session.resolve_vault_manager("work")
    assert isinstance(manager, FileSystemVaultManager)
    assert Path(manager.vault_path) == configuration.get("work").path
