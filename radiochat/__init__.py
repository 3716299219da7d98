"""Text messaging over LoRa radio modules: key handling, menu UI, message queue, radio protocol and sound."""

__version__ = "0.1.0"