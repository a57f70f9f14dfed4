"""
hypertoon: a compact, indentation-based notation for JSON data.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    hypertoon encode data.json
    hypertoon decode data.toon

Library Usage:
    from hypertoon import decode, encode

    text = encode({"users": [{"id": 1, "name": "Ada"}, {"id": 2, "name": "Lin"}]})
    # users[2]{id,name}:
    #     1,Ada
    #     2,Lin
    data = decode(text)
"""

from .config import ConfigError, ToonConfig
from .decoder import decode
from .encoder import encode
from .exceptions import InvalidInputError, ToonError
from .models import UNDEFINED

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "encode",
    "decode",
    # Configuration
    "ToonConfig",
    # Markers
    "UNDEFINED",
    # Exceptions
    "ConfigError",
    "InvalidInputError",
    "ToonError",
    # Version
    "__version__",
]
