#!/usr/bin/env python3
# image_banner/source.py
"""
Image resources for banners: a local file or an http(s) URL.

Files are checked at construction and re-read on every render.
URLs are fetched once at construction (a missing remote image is as fatal
as a missing file) through a session with urllib3 Retry.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from image_banner.errors import ResourceNotFoundError

__all__ = ["ImageSource", "FileImageSource", "UrlImageSource", "open_source", "make_session", "is_url"]

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "image-banner/1.0"


def is_url(resource) -> bool:
    return isinstance(resource, str) and resource.lower().startswith(("http://", "https://"))


def make_session(user_agent: str = DEFAULT_USER_AGENT, retries: int = 3) -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class ImageSource:
    """Interface: something with a name that can produce encoded image bytes."""
    name: str = "<image>"

    def read_bytes(self) -> bytes:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


class FileImageSource(ImageSource):
    def __init__(self, path: Union[str, os.PathLike]):
        self.path = Path(path).expanduser()
        if not self.path.is_file():
            raise ResourceNotFoundError(f"Image not found: {self.path}")
        self.name = str(self.path)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class UrlImageSource(ImageSource):
    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
    ):
        self.url = url
        self.name = url
        self.session = session or make_session()
        try:
            r = self.session.get(url, timeout=(connect_timeout, read_timeout))
        except requests.RequestException as exc:
            raise ResourceNotFoundError(f"Image not found: {url} ({exc})") from exc
        if r.status_code != 200 or not r.content:
            raise ResourceNotFoundError(f"Image not found: {url} (HTTP {r.status_code})")
        self._content = r.content
        log.debug("Fetched %d bytes from %s", len(self._content), url)

    def read_bytes(self) -> bytes:
        return self._content


def open_source(resource, **kwargs) -> ImageSource:
    """Return an ImageSource for a path, URL string or an existing ImageSource."""
    if resource is None:
        raise ResourceNotFoundError("Image not found: no image given")
    if isinstance(resource, ImageSource):
        return resource
    if is_url(resource):
        return UrlImageSource(resource, **kwargs)
    return FileImageSource(resource)
