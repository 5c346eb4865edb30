"""
Custom exceptions for Outpainter
"""

from typing import Optional


class OutpainterError(Exception):
    """Base exception for Outpainter"""
    def __init__(self, message: str, stage: Optional[str] = None):
        self.message = message
        self.stage = stage
        super().__init__(message)


class DecodeError(OutpainterError):
    """Source bytes could not be decoded as a supported raster format"""
    def __init__(self, message: str, size_bytes: Optional[int] = None):
        self.size_bytes = size_bytes
        super().__init__(message, stage="decode")


class EncodeError(OutpainterError):
    """Encoding a canvas or mask failed"""
    def __init__(self, message: str, output: Optional[str] = None):
        self.output = output
        super().__init__(message, stage="encode")


class AspectLookupError(OutpainterError, LookupError):
    """Unknown aspect ratio label"""
    def __init__(self, label: str, available: Optional[list] = None):
        self.label = label
        self.available = available or []
        message = f"Unknown aspect ratio: {label!r}"
        if self.available:
            message = f"{message}. Available: {', '.join(self.available)}"
        super().__init__(message, stage="catalog")
