from jobtracker.core.filters import SortOrder
from jobtracker.utils.config import Settings


def test_defaults_without_yaml(tmp_path):
    settings = Settings.load(tmp_path / "missing.yaml")

    assert settings.database.path == "data/applications.db"
    assert settings.display.locale == "en_US"
    assert settings.display.default_sort == SortOrder.DATE_DESCENDING
    assert settings.notifications.reminder_lead_hours == 24


def test_yaml_overrides(tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text(
        "database:\n"
        "  path: /tmp/tracker.db\n"
        "display:\n"
        "  locale: en_GB\n"
        "  default_sort: asc\n"
        "notifications:\n"
        "  reminder_lead_hours: 2\n",
        encoding="utf-8",
    )

    settings = Settings.load(config)

    assert settings.database.path == "/tmp/tracker.db"
    assert settings.display.locale == "en_GB"
    assert settings.display.default_sort == SortOrder.DATE_ASCENDING
    assert settings.notifications.reminder_lead_hours == 2


def test_ntfy_topic_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("NTFY_TOPIC", "jobtracker-abc")
    assert Settings.load(tmp_path / "missing.yaml").ntfy_topic == "jobtracker-abc"
