"""Camera pose logging helpers, a recording stream and a threaded image-sequence player."""

__version__ = "0.1.0"