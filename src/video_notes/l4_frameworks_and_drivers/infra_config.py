"""Infrastructure provider configs -- lives in L4, not domain."""

from __future__ import annotations

import copy

from pydantic import BaseModel, Field

from video_notes.l1_entities.config import AppConfig

APP_CONFIG_DEFAULTS: dict = {
    'camera': {
        'default_facing': 'environment',
    },
    'transcription': {
        'model': 'base',
        'language': 'en',
        'chunk_duration': 15.0,
        'silence_threshold': 0.01,
        'pause_duration': 1.0,
    },
    'speech': {
        'rate': 180,
        'volume': 1.0,
    },
    'submission': {
        'endpoint': '/api/summarize',
        'timeout': 60.0,
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)


class OpenCVProviderConfig(BaseModel):
    environment_index: int = 0
    user_index: int = 1
    jpeg_quality: int = Field(default=90, ge=1, le=100)


class ServerProviderConfig(BaseModel):
    base_url: str = 'http://localhost:3000'


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    opencv: OpenCVProviderConfig = Field(default_factory=OpenCVProviderConfig)
    server: ServerProviderConfig = Field(default_factory=ServerProviderConfig)
