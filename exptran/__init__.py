"""Face tensor model, SVD helpers, marking canvases and camera geometry for expression transfer."""

__version__ = "0.1.0"
__all__ = ["camera", "errors", "linalg", "markers", "tensor"]