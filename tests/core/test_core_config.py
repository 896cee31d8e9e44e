"""
tests/core/test_core_config.py - core/config.py 테스트
"""

from pathlib import Path

import pytest

from core.config import (
    BrowserConfig,
    LogConfig,
    get_default_profile,
    get_default_region,
    get_env_bool,
    get_env_int,
    get_version,
    load_browser_config,
    settings,
)
from core.exceptions import ConfigError


class TestSettings:
    """Settings 데이터클래스 테스트"""

    def test_settings_is_frozen(self):
        """설정이 불변인지 확인"""
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.DEFAULT_REGION = "eu-west-1"

    def test_default_values(self):
        """기본값 확인"""
        assert settings.DEFAULT_REGION == "us-east-1"
        assert settings.DEFAULT_PROFILE == "default"
        assert settings.REFRESH_INTERVAL_SECONDS == 10
        assert settings.ACTION_SETTLE_SECONDS == 1.0
        assert settings.API_RETRY_MODE == "adaptive"

    def test_paths(self):
        """설정 파일 경로"""
        assert settings.CONFIG_DIR == Path.home() / ".a9s"
        assert settings.CONFIG_FILE_NAME == "config.yaml"

    def test_supported_langs(self):
        assert settings.SUPPORTED_LANGS == ("ko", "en")


class TestEnvHelpers:
    """환경변수 헬퍼 테스트"""

    @pytest.mark.parametrize("value", ["true", "1", "YES", " on "])
    def test_env_bool_true(self, monkeypatch, value):
        monkeypatch.setenv("A9S_TEST_FLAG", value)
        assert get_env_bool("A9S_TEST_FLAG") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "OFF"])
    def test_env_bool_false(self, monkeypatch, value):
        monkeypatch.setenv("A9S_TEST_FLAG", value)
        assert get_env_bool("A9S_TEST_FLAG", default=True) is False

    def test_env_bool_unrecognized_uses_default(self, monkeypatch):
        """인식할 수 없는 값은 기본값"""
        monkeypatch.setenv("A9S_TEST_FLAG", "maybe")
        assert get_env_bool("A9S_TEST_FLAG", default=True) is True

    def test_env_bool_missing(self):
        assert get_env_bool("A9S_TEST_MISSING") is False

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("A9S_TEST_INT", "42")
        assert get_env_int("A9S_TEST_INT", 1) == 42

    def test_env_int_invalid(self, monkeypatch):
        """변환 실패 시 기본값"""
        monkeypatch.setenv("A9S_TEST_INT", "abc")
        assert get_env_int("A9S_TEST_INT", 7) == 7


class TestDefaults:
    """기본 프로파일/리전 결정"""

    def test_region_prefers_aws_region(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        assert get_default_region() == "eu-west-1"

    def test_region_falls_back_to_default_region_env(self):
        """conftest가 AWS_DEFAULT_REGION=ap-northeast-2 설정"""
        assert get_default_region() == "ap-northeast-2"

    def test_region_falls_back_to_settings(self, monkeypatch):
        monkeypatch.delenv("AWS_DEFAULT_REGION")
        assert get_default_region() == settings.DEFAULT_REGION

    def test_profile(self, monkeypatch):
        assert get_default_profile() is None
        monkeypatch.setenv("AWS_DEFAULT_PROFILE", "legacy")
        assert get_default_profile() == "legacy"
        monkeypatch.setenv("AWS_PROFILE", "dev")
        assert get_default_profile() == "dev"

    def test_version_is_string(self):
        assert isinstance(get_version(), str)
        assert get_version()


class TestLogConfig:
    """LogConfig 테스트"""

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_FILE", raising=False)
        config = LogConfig.from_env()
        assert config.level == "INFO"
        assert config.file == settings.CONFIG_DIR / settings.LOG_FILE_NAME

    def test_from_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FILE", str(tmp_path / "custom.log"))
        config = LogConfig.from_env()
        assert config.level == "DEBUG"
        assert config.file == tmp_path / "custom.log"


class TestBrowserConfig:
    """BrowserConfig / load_browser_config 테스트"""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_browser_config(tmp_path / "missing.yaml")
        assert config == BrowserConfig()
        assert config.auto_refresh is True
        assert config.refresh_interval == 10

    def test_yaml_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("auto_refresh: false\nrefresh_interval: 30\nlang: en\nstart_resource: s3\n")
        config = load_browser_config(path)
        assert config.auto_refresh is False
        assert config.refresh_interval == 30
        assert config.lang == "en"
        assert config.start_resource == "s3"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """A9S_* 환경변수가 파일 값보다 우선"""
        path = tmp_path / "config.yaml"
        path.write_text("auto_refresh: false\nrefresh_interval: 30\n")
        monkeypatch.setenv("A9S_AUTO_REFRESH", "true")
        monkeypatch.setenv("A9S_REFRESH_INTERVAL", "5")
        monkeypatch.setenv("A9S_RESOURCE", "lambda")
        config = load_browser_config(path)
        assert config.auto_refresh is True
        assert config.refresh_interval == 5
        assert config.start_resource == "lambda"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("auto_refresh: [unclosed\n")
        with pytest.raises(ConfigError):
            load_browser_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- ec2\n- s3\n")
        with pytest.raises(ConfigError):
            load_browser_config(path)

    def test_wrong_types(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("auto_refresh: sometimes\n")
        with pytest.raises(ConfigError) as exc_info:
            load_browser_config(path)
        assert exc_info.value.config_key == "auto_refresh"

    def test_interval_must_be_positive(self):
        with pytest.raises(ConfigError):
            BrowserConfig(refresh_interval=0)

    def test_unsupported_lang(self):
        with pytest.raises(ConfigError):
            BrowserConfig(lang="fr")
