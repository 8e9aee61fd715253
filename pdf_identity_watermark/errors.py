"""
Exception types raised by the watermark engine.
"""


class WatermarkError(Exception):
	"""Base exception for all watermarking failures."""


class InvalidRequestError(WatermarkError):
	"""Raised when watermark request parameters are invalid."""


class MalformedDocumentError(WatermarkError):
	"""Raised when input bytes cannot be parsed as a PDF document."""


class FontEmbeddingError(WatermarkError):
	"""Raised when the watermark font cannot be registered or embedded."""


class SerializationError(WatermarkError):
	"""Raised when the watermarked document cannot be written to bytes."""
