import pytest
from pydantic import ValidationError

from starship_shop.dependencies import build_storage
from starship_shop.utils.config_loader import DEFAULT_CONFIG_PATH, PROJECT_ROOT, load_shop_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SHOP_CONFIG_PATH", "SHOP_CATALOG_BACKEND", "SWAPI_BASE_URL", "REDIS_URL", "SHOP_STORAGE_PATH"):
        monkeypatch.delenv(name, raising=False)


def test_bundled_config_loads():
    assert DEFAULT_CONFIG_PATH.exists()
    cfg = load_shop_config()
    assert cfg.checkout.tax_rate == 0.05
    assert cfg.gates.cart_action_interval_ms == 300
    assert cfg.gates.search_interval_ms == 600
    assert cfg.storage.credits_key == "@starship_shop_credits"


def test_partial_yaml_uses_defaults(tmp_path):
    path = tmp_path / "shop.yml"
    path.write_text("checkout:\n  tax_rate: 0.1\n", encoding="utf-8")
    cfg = load_shop_config(path)
    assert cfg.checkout.tax_rate == 0.1
    assert cfg.checkout.delay_seconds == 0.8
    assert cfg.catalog.backend == "swapi"


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_shop_config(tmp_path / "missing.yml")


def test_invalid_values_raise(tmp_path):
    path = tmp_path / "shop.yml"
    path.write_text("storage:\n  backend: floppy\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_shop_config(path)


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "shop.yml"
    path.write_text("storage:\n  backend: memory\n", encoding="utf-8")
    monkeypatch.setenv("SHOP_CATALOG_BACKEND", "local")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/1")
    cfg = load_shop_config(path)
    assert cfg.catalog.backend == "local"
    assert cfg.storage.backend == "redis"
    assert cfg.storage.redis_url == "redis://cache:6379/1"


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "other.yml"
    path.write_text("gates:\n  search_min_length: 3\n", encoding="utf-8")
    monkeypatch.setenv("SHOP_CONFIG_PATH", str(path))
    assert load_shop_config().gates.search_min_length == 3


def test_relative_storage_path_is_anchored_at_project_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_shop_config()
    assert cfg.storage.resolved_path() == PROJECT_ROOT / "data" / "credits.json"
    assert build_storage(cfg).path == PROJECT_ROOT / "data" / "credits.json"


def test_absolute_storage_path_is_kept(tmp_path, monkeypatch):
    target = tmp_path / "credits.json"
    monkeypatch.setenv("SHOP_STORAGE_PATH", str(target))
    cfg = load_shop_config()
    assert cfg.storage.backend == "file"
    assert cfg.storage.resolved_path() == target
