import pytest

from inf2json.core.models import ConversionOptions


@pytest.fixture
def opts():
    """Build ConversionOptions from keyword overrides."""

    def _make(**kw):
        return ConversionOptions(**kw)

    return _make


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ at an empty directory so no global config is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def strip_comments():
    """Drop every `//` line from JSONC output."""

    def _strip(text):
        kept = [line for line in text.splitlines() if not line.lstrip().startswith("//")]
        return "\n".join(kept) + "\n"

    return _strip
