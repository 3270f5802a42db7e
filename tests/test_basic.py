"""Basic smoke tests for slashterm."""

from slashterm.config.paths import SlashtermPaths


def test_slashterm_importable():
    """Verify the slashterm package can be imported."""
    import slashterm

    assert slashterm.__version__ == "0.1.0"


def test_paths_created(tmp_path):
    """Verify SlashtermPaths lays out its directories."""
    paths = SlashtermPaths(config_dir=tmp_path / "config", cache_dir=tmp_path / "cache")
    paths.ensure_directories()
    assert paths.models_dir.is_dir()
    assert paths.log_dir.is_dir()
    assert paths.config_file == tmp_path / "config" / "config.yaml"
    assert paths.config_exists() is False


def test_default_paths():
    paths = SlashtermPaths()
    assert paths.config_dir is not None
    assert paths.models_dir.parent == paths.cache_dir
