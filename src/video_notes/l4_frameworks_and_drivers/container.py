"""Dependency container -- composition root for wiring all layers together."""

from __future__ import annotations

from video_notes.l1_entities.camera import Facing
from video_notes.l1_entities.config import AppConfig
from video_notes.l2_use_cases.ports.camera import CameraDevice
from video_notes.l2_use_cases.ports.config_loader import ConfigLoader
from video_notes.l2_use_cases.ports.image_encoder import ImageEncoder
from video_notes.l2_use_cases.ports.speech_recognizer import SpeechRecognizer
from video_notes.l2_use_cases.ports.speech_synthesizer import SpeechSynthesizer
from video_notes.l2_use_cases.ports.summarizer import SummarizationService
from video_notes.l2_use_cases.ports.transcriber import Transcriber
from video_notes.l3_interface_adapters.controllers.recording_controller import RecordingController
from video_notes.l3_interface_adapters.gateways.httpx_summarization_client import HttpxSummarizationClient
from video_notes.l3_interface_adapters.gateways.opencv_camera import OpenCVCameraDevice
from video_notes.l3_interface_adapters.gateways.opencv_image_encoder import OpenCVJpegEncoder
from video_notes.l3_interface_adapters.gateways.pyttsx3_speech_synthesizer import Pyttsx3SpeechSynthesizer
from video_notes.l3_interface_adapters.gateways.sounddevice_audio_source import (
    SounddeviceAudioSource,
    has_input_device,
)
from video_notes.l3_interface_adapters.gateways.whisper_speech_recognizer import WhisperSpeechRecognizer
from video_notes.l3_interface_adapters.gateways.whisper_transcriber import WhisperTranscriber
from video_notes.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader
from video_notes.l4_frameworks_and_drivers.infra_config import InfraConfig
from video_notes.l4_frameworks_and_drivers.messages import MessagePostingObserver


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        config: AppConfig,
        infra: InfraConfig | None = None,
    ) -> None:
        self.config = config
        self.infra = infra or InfraConfig()

        opencv = self.infra.opencv
        self.camera_device: CameraDevice = OpenCVCameraDevice(
            {Facing.ENVIRONMENT: opencv.environment_index, Facing.USER: opencv.user_index},
        )
        self.image_encoder: ImageEncoder = OpenCVJpegEncoder(quality=opencv.jpeg_quality)

        tx = config.transcription
        self.transcriber: Transcriber = WhisperTranscriber()
        self.recognizer: SpeechRecognizer = WhisperSpeechRecognizer(
            audio_source_factory=SounddeviceAudioSource,
            transcriber=self.transcriber,
            model=tx.model,
            language=tx.language,
            chunk_duration=tx.chunk_duration,
            silence_threshold=tx.silence_threshold,
            pause_duration=tx.pause_duration,
            device_check=has_input_device,
        )
        self.synthesizer: SpeechSynthesizer = Pyttsx3SpeechSynthesizer(
            rate=config.speech.rate,
            volume=config.speech.volume,
        )
        self.summarizer: SummarizationService = HttpxSummarizationClient(
            base_url=self.infra.server.base_url,
            endpoint=config.submission.endpoint,
            timeout=config.submission.timeout,
        )

        self.observer = MessagePostingObserver()
        self.controller = RecordingController(
            config=config,
            camera_device=self.camera_device,
            image_encoder=self.image_encoder,
            recognizer=self.recognizer,
            synthesizer=self.synthesizer,
            summarizer=self.summarizer,
            observer=self.observer,
        )

    @staticmethod
    def config_loader() -> ConfigLoader:
        return YamlConfigLoader()
