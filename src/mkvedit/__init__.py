"""
mkvedit - Edit Matroska file metadata in your text editor
"""

__version__ = "0.1.0"
__description__ = "Edit Matroska file metadata in your text editor"

# Core exports for easy access
from .core.sync import run
from .core.text_format import decode, encode

__all__ = [
    "__version__",
    "__description__",
    "run",
    "decode",
    "encode",
]
