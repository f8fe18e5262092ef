"""Tests for settings validation and transcriber selection."""

from __future__ import annotations

import pytest

from intake import create_app
from intake.config import Settings
from intake.errors import ConfigError
from intake.transcribers import create_transcriber
from intake.transcribers.assemblyai_transcriber import AssemblyAITranscriber
from intake.transcribers.deepgram_transcriber import DeepgramTranscriber


def _settings(**overrides) -> Settings:
    values = {
        "transcriber_type": "assemblyai",
        "assemblyai_api_key": "aai-key",
        "deepgram_api_key": "",
        "llm_api_key": "llm-key",
    }
    values.update(overrides)
    return Settings(**values)


class TestValidate:
    def test_valid_default_backend(self):
        _settings().validate()

    def test_missing_assemblyai_key(self):
        with pytest.raises(ConfigError, match="ASSEMBLYAI_API_KEY"):
            _settings(assemblyai_api_key="").validate()

    def test_missing_deepgram_key(self):
        with pytest.raises(ConfigError, match="DEEPGRAM_API_KEY"):
            _settings(transcriber_type="deepgram").validate()

    def test_only_selected_backend_needs_key(self):
        _settings(transcriber_type="deepgram", assemblyai_api_key="", deepgram_api_key="dg-key").validate()

    def test_missing_llm_key(self):
        with pytest.raises(ConfigError, match="LLM_API_KEY"):
            _settings(llm_api_key="").validate()

    def test_unknown_backend(self):
        with pytest.raises(ConfigError, match="TRANSCRIBER_TYPE"):
            _settings(transcriber_type="whisper").validate()

    def test_cors_origin_list(self):
        assert _settings(cors_origins="http://a, http://b").cors_origin_list == ["http://a", "http://b"]


class TestCreateTranscriber:
    def test_assemblyai(self):
        assert isinstance(create_transcriber(_settings()), AssemblyAITranscriber)

    def test_deepgram(self):
        transcriber = create_transcriber(_settings(transcriber_type="Deepgram", deepgram_api_key="dg-key"))
        assert isinstance(transcriber, DeepgramTranscriber)

    def test_unknown(self):
        with pytest.raises(ConfigError):
            create_transcriber(_settings(transcriber_type="groq"))


class TestCreateApp:
    def test_missing_credential_is_fatal(self, tmp_path):
        with pytest.raises(ConfigError):
            create_app(settings=_settings(assemblyai_api_key="", upload_dir=tmp_path))

    def test_builds_services_from_settings(self, tmp_path):
        app = create_app(settings=_settings(upload_dir=tmp_path))
        assert isinstance(app.state.transcription_service.transcriber, AssemblyAITranscriber)
