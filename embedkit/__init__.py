"""QR code encoding and generic array, list and hashed-container algorithms."""

__version__ = "0.1.0"

__all__ = [
    "arrays",
    "dlists",
    "lists",
    "qrencode",
    "qrframe",
]