"""Messaging enums."""

from enum import Enum


class MediaType(str, Enum):
    """Kind of attachment on a message."""

    IMAGE = "image"
    FILE = "file"
