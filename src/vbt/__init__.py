"""Video Batch Transcoder - drive ffmpeg over a directory of video files."""

__version__ = "0.1.0"
