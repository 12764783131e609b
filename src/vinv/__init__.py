"""Video Inventory - catalogue a video collection with ffprobe."""

__version__ = "0.3.0"
