"""Configuration Pydantic models -- pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field

from video_notes.l1_entities.camera import Facing


class CameraConfig(BaseModel):
    default_facing: Facing


class TranscriptionConfig(BaseModel):
    model: str
    language: str
    chunk_duration: float
    silence_threshold: float
    pause_duration: float


class SpeechConfig(BaseModel):
    rate: int
    volume: float = Field(ge=0.0, le=1.0)


class SubmissionConfig(BaseModel):
    endpoint: str
    timeout: float


class AppConfig(BaseModel):
    camera: CameraConfig
    transcription: TranscriptionConfig
    speech: SpeechConfig
    submission: SubmissionConfig
