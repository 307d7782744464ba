import pytest

from imgcache.cache.disk import DiskStore
from imgcache.cache.manager import ImageCacheManager
from imgcache.fetch.static import StaticFetcher


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    import io

    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (1, 1), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def not_an_image_bytes():
    return b"not an image"


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / "ImageCache"


@pytest.fixture
def store(cache_root):
    return DiskStore(cache_root)


@pytest.fixture
def fetcher():
    return StaticFetcher()


@pytest.fixture
def manager(store, fetcher):
    return ImageCacheManager(store=store, fetcher=fetcher)


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Keep user/global config and env vars out of tests."""
    import imgcache.config.hierarchy as hierarchy
    from imgcache.config.schema import CacheSettings

    monkeypatch.setattr(hierarchy, "_GLOBAL_CONFIG_PATH", tmp_path / "no-global.yaml")
    for name in CacheSettings.model_fields:
        monkeypatch.delenv(hierarchy.env_var_for(name), raising=False)
