import io

import pytest
import requests
from PIL import Image

from image_banner.errors import ResourceNotFoundError
from image_banner.rendering.renderer import BannerRenderer
from image_banner.source import FileImageSource, UrlImageSource, is_url, make_session, open_source


def _png_bytes(color=(255, 255, 255), size=(1, 1)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, "PNG")
    return buf.getvalue()


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc:
            raise self.exc
        return self.response


def test_is_url():
    assert is_url("https://example.com/logo.png")
    assert is_url("HTTP://example.com/logo.png")
    assert not is_url("/tmp/logo.png")
    assert not is_url(None)


def test_open_source_picks_file(make_image):
    src = open_source(make_image())
    assert isinstance(src, FileImageSource)
    assert open_source(src) is src


def test_url_source_is_fetched_once():
    session = FakeSession(FakeResponse(200, _png_bytes()))
    renderer = BannerRenderer("https://example.com/logo.png", session=session, connect_timeout=1.0, read_timeout=2.0)
    assert isinstance(renderer.source, UrlImageSource)
    assert session.calls == [("https://example.com/logo.png", (1.0, 2.0))]
    text = renderer.render(10, 1.0, False)
    assert text == "${AnsiBackground.DEFAULT}${AnsiColor.BRIGHT_WHITE} ${AnsiColor.DEFAULT}\n"
    renderer.render(10, 1.0, False)
    assert len(session.calls) == 1


@pytest.mark.parametrize("response", [FakeResponse(404, b"missing"), FakeResponse(200, b"")])
def test_missing_url_is_fatal(response):
    with pytest.raises(ResourceNotFoundError):
        UrlImageSource("https://example.com/logo.png", session=FakeSession(response))


def test_connection_error_is_fatal():
    session = FakeSession(exc=requests.ConnectionError("refused"))
    with pytest.raises(ResourceNotFoundError):
        BannerRenderer("http://example.invalid/logo.png", session=session)


def test_make_session_sets_user_agent_and_retries():
    session = make_session("banner-test/0.1", retries=5)
    assert session.headers["User-Agent"] == "banner-test/0.1"
    adapter = session.get_adapter("https://example.com")
    assert adapter.max_retries.total == 5
