from pathlib import Path

from rentscout.core.settings import load_search_settings


def test_load_search_settings_defaults(monkeypatch):
    for name in (
        "RENTSCOUT_MIN_DELAY_MS",
        "RENTSCOUT_MAX_DELAY_MS",
        "RENTSCOUT_MAX_PAGES",
        "RENTSCOUT_SAVE",
        "RENTSCOUT_CURLS_DIR",
        "RENTSCOUT_FETCH_MULTIPLE_PAGES",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_search_settings()

    assert settings.min_delay_seconds == 2.0
    assert settings.max_delay_seconds == 5.0
    assert settings.max_pages == 0
    assert settings.save_to_file is True
    assert settings.fetch_multiple_pages is False
    assert settings.curls_dir == Path("curls")


def test_load_search_settings_reads_env(monkeypatch):
    monkeypatch.setenv("RENTSCOUT_MIN_DELAY_MS", "500")
    monkeypatch.setenv("RENTSCOUT_MAX_DELAY_MS", "100")
    monkeypatch.setenv("RENTSCOUT_MAX_PAGES", "oops")
    monkeypatch.setenv("RENTSCOUT_SAVE", "false")
    monkeypatch.setenv("RENTSCOUT_FETCH_MULTIPLE_PAGES", "yes")

    settings = load_search_settings()

    assert settings.min_delay_ms == 500
    assert settings.max_delay_ms == 500
    assert settings.max_pages == 0
    assert settings.save_to_file is False
    assert settings.fetch_multiple_pages is True
