#!/usr/bin/env python3
# image_banner/errors.py
"""
Error kinds raised or reported by the banner pipeline.

Only two exceptions ever leave the package: ResourceNotFoundError at
construction time and InvalidParameterError before a render starts.
Everything that goes wrong during a render is classified into a
FailureKind and reported through RenderResult instead.
"""

from __future__ import annotations

import enum

import requests
from PIL import Image, UnidentifiedImageError

__all__ = [
    "FailureKind",
    "BannerError",
    "ResourceNotFoundError",
    "DecodeError",
    "InvalidParameterError",
    "classify",
]


class FailureKind(enum.Enum):
    RESOURCE_NOT_FOUND = "resource_not_found"
    DECODE_ERROR = "decode_error"
    IO_ERROR = "io_error"
    INTERNAL_ERROR = "internal_error"
    INVALID_PARAMETER = "invalid_parameter"


class BannerError(Exception):
    """Base class for banner errors."""
    kind = FailureKind.INTERNAL_ERROR


class ResourceNotFoundError(BannerError, FileNotFoundError):
    kind = FailureKind.RESOURCE_NOT_FOUND


class DecodeError(BannerError):
    kind = FailureKind.DECODE_ERROR


class InvalidParameterError(BannerError, ValueError):
    kind = FailureKind.INVALID_PARAMETER


def classify(exc: BaseException) -> FailureKind:
    """Map an exception caught during a render onto a FailureKind."""
    if isinstance(exc, BannerError):
        return exc.kind
    # Pillow's decode errors subclass OSError, so check them first.
    if isinstance(exc, (UnidentifiedImageError, Image.DecompressionBombError)):
        return FailureKind.DECODE_ERROR
    if isinstance(exc, (OSError, requests.RequestException)):
        return FailureKind.IO_ERROR
    return FailureKind.INTERNAL_ERROR
