"""Tests for Settings service."""
import json


class TestSettings:
    def test_get_singleton(self):
        from linguapo.services.settings import Settings
        s1 = Settings.get()
        s2 = Settings.get()
        assert s1 is s2

    def test_defaults(self):
        from linguapo.services.settings import DEFAULTS, Settings
        s = Settings.get()
        for key, default_val in DEFAULTS.items():
            assert s.get_value(key) == default_val, f"Default mismatch for {key}"

    def test_get_value(self):
        from linguapo.services.settings import Settings
        s = Settings.get()
        assert s.get_value("wrap_width") == 0
        assert s.get_value("nonexistent", "fallback") == "fallback"

    def test_bracket_access(self):
        from linguapo.services.settings import Settings
        s = Settings.get()
        assert s["log_level"] == "WARNING"
        s["log_level"] = "DEBUG"
        assert s["log_level"] == "DEBUG"

    def test_save_and_load(self, isolate_settings):
        from linguapo.services.settings import Settings
        s = Settings.get()
        assert not s.exists
        s.set_value("wrap_width", 76)
        s.save()
        assert isolate_settings.exists()
        Settings.reset_instance()
        assert Settings.get().wrap_width == 76

    def test_wrap_width(self):
        from linguapo.services.settings import Settings
        s = Settings.get()
        assert s.wrap_width is None
        s["wrap_width"] = "80"
        assert s.wrap_width == 80
        s["wrap_width"] = -5
        assert s.wrap_width is None
        s["wrap_width"] = "wide"
        assert s.wrap_width is None

    def test_log_level(self):
        from linguapo.services.settings import Settings
        s = Settings.get()
        s["log_level"] = "info"
        assert s.log_level == "INFO"
        s["log_level"] = "chatty"
        assert s.log_level == "WARNING"


# ── Broken files ─────────────────────────────────────────────────

class TestBrokenSettings:
    def test_invalid_json(self, isolate_settings, caplog):
        from linguapo.services.settings import Settings
        isolate_settings.write_text("{not json", "utf-8")
        with caplog.at_level("WARNING", logger="linguapo.services.settings"):
            s = Settings.get()
        assert s.wrap_width is None
        assert "could not read" in caplog.text

    def test_not_an_object(self, isolate_settings):
        from linguapo.services.settings import Settings
        isolate_settings.write_text(json.dumps([1, 2]), "utf-8")
        assert Settings.get().get_value("log_level") == "WARNING"

    def test_partial_file_keeps_defaults(self, isolate_settings):
        from linguapo.services.settings import Settings
        isolate_settings.write_text(json.dumps({"log_level": "ERROR"}), "utf-8")
        s = Settings.get()
        assert s.log_level == "ERROR"
        assert s.get_value("wrap_width") == 0
