from securewallet_client.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.api_base_url == "http://localhost:8080/api/v1"
    assert settings.renewal.single_flight
    assert not settings.renewal.proactive
    assert settings.refresh_page_size == 20


def test_nested_environment_overrides(monkeypatch):
    monkeypatch.setenv("SECUREWALLET_API__BASE_URL", "https://wallet.example.com/")
    monkeypatch.setenv("SECUREWALLET_RENEWAL__SINGLE_FLIGHT", "false")
    monkeypatch.setenv("SECUREWALLET_LEDGER__REFRESH_PAGE_SIZE", "50")
    monkeypatch.setenv("SECUREWALLET_STORAGE__BACKEND", "memory")

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://wallet.example.com/api/v1"
    assert not settings.renewal.single_flight
    assert settings.refresh_page_size == 50
    assert settings.storage.backend == "memory"
