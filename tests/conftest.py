import pytest

from pyreselect import config


@pytest.fixture(autouse=True)
def _restore_global_stability_check():
    # 全域設定在測試之間不應互相影響
    previous = config.get_input_stability_check()
    yield
    config.set_input_stability_check_enabled(previous)


@pytest.fixture
def production_build(monkeypatch):
    monkeypatch.setattr(config, "PRODUCTION", True)
