"""Mock implementations for testing and development."""

from .client import MockCaptureClient

__all__ = ["MockCaptureClient"]
