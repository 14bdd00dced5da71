"""Audio format shared by the capture source and the recognizer."""

SAMPLE_RATE = 16000
