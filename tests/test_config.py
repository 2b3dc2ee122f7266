"""Tests for configuration loading and validation."""

import pytest

from resume_studio.config import (
    Severity,
    StudioSettings,
    apply_env_overrides,
    has_errors,
    load_raw_config,
    load_settings,
    validate_config,
)


def _fields(issues, severity=Severity.ERROR):
    return {issue.field for issue in issues if issue.severity == severity}


class TestValidateConfig:
    def test_empty_config_only_warns(self):
        issues = validate_config({})
        assert not has_errors(issues)
        assert _fields(issues, Severity.WARNING) == {"analysis_url"}

    def test_valid_config(self):
        issues = validate_config(
            {
                "analysis_url": "https://analysis.example.test",
                "tailoring_url": "http://localhost:9000/tailor",
                "enhancement_url": "https://assist.example.test/enhance-keywords",
                "skills_url": "https://assist.example.test/polish-resume",
                "request_timeout": 10,
                "default_tier": "premium",
                "server": {"port": 8080},
            }
        )
        assert issues == []

    def test_invalid_values(self):
        issues = validate_config(
            {
                "analysis_url": "ftp://analysis.example.test",
                "tailoring_url": "localhost",
                "skills_url": "assist.example.test",
                "request_timeout": 0,
                "default_tier": "gold",
                "server": {"port": 70000},
            }
        )
        assert has_errors(issues)
        assert _fields(issues) == {
            "analysis_url",
            "tailoring_url",
            "skills_url",
            "request_timeout",
            "default_tier",
            "server.port",
        }

    @pytest.mark.parametrize("timeout", ["abc", True, -1])
    def test_bad_timeout(self, timeout):
        assert "request_timeout" in _fields(validate_config({"request_timeout": timeout}))


class TestEnvOverrides:
    def test_typed_overrides(self):
        raw = apply_env_overrides(
            {"request_timeout": 30, "verbose": False},
            environ={
                "RESUME_STUDIO_REQUEST_TIMEOUT": "12.5",
                "RESUME_STUDIO_VERBOSE": "yes",
                "RESUME_STUDIO_DEFAULT_TIER": "basic",
                "RESUME_STUDIO_ENHANCEMENT_URL": "https://assist.example.test",
                "OTHER_VAR": "ignored",
            },
        )
        assert raw == {
            "request_timeout": 12.5,
            "verbose": True,
            "default_tier": "basic",
            "enhancement_url": "https://assist.example.test",
        }

    def test_unparseable_number_is_reported(self):
        raw = apply_env_overrides({}, environ={"RESUME_STUDIO_REQUEST_TIMEOUT": "soon"})
        assert raw["request_timeout"] == "soon"
        assert "request_timeout" in _fields(validate_config(raw))

    def test_input_is_not_mutated(self):
        raw = {"verbose": False}
        apply_env_overrides(raw, environ={"RESUME_STUDIO_VERBOSE": "1"})
        assert raw == {"verbose": False}


class TestLoadConfig:
    def test_default_config_ships_with_repo(self):
        raw = load_raw_config()
        assert raw["request_timeout"] == 30
        assert raw["server"]["port"] == 8000

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_raw_config(str(tmp_path / "missing.yaml"))

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_raw_config(str(path))

    def test_load_settings_applies_env(self, tmp_path, monkeypatch):
        path = tmp_path / "studio.yaml"
        path.write_text(
            'analysis_url: "https://analysis.example.test"\n'
            'service_key: "${STUDIO_TEST_KEY}"\n'
            "server:\n  port: 9001\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("STUDIO_TEST_KEY", "secret")
        monkeypatch.setenv("RESUME_STUDIO_DEFAULT_TIER", "premium")

        settings = load_settings(str(path))

        assert settings.analysis_url == "https://analysis.example.test"
        assert settings.default_tier == "premium"
        assert settings.port == 9001
        assert settings.service_headers == {"Authorization": "Bearer secret"}

    def test_load_settings_rejects_errors(self, tmp_path):
        path = tmp_path / "studio.yaml"
        path.write_text("default_tier: gold\n", encoding="utf-8")
        with pytest.raises(ValueError, match="default_tier"):
            load_settings(str(path))


def test_settings_without_key_send_no_auth_header():
    assert StudioSettings().service_headers == {}
