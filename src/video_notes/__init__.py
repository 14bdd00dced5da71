"""video-notes -- narrate what the camera sees, snapshot it, and get a summary back."""

__version__ = '0.1.0'
