import pytest

from photofunia.errors import (
    ImageNotFoundError, ResultPageError, SrcAttributeError, UnterminatedAttributeError,
)
from photofunia.scrape import extract_image_url


def test_extracts_src_value():
    html = b'<html><body><img id="result-image" src="https://example.com/image.jpg" alt="Result"></body></html>'
    assert extract_image_url(html) == "https://example.com/image.jpg"

def test_accepts_text():
    assert extract_image_url('<img id="result-image" src="https://x/y.jpg">') == "https://x/y.jpg"

def test_value_is_taken_verbatim():
    html = b'<img id="result-image" class="big" src=" https://x/a b.jpg ">'
    assert extract_image_url(html) == " https://x/a b.jpg "

def test_ignores_src_before_marker():
    html = b'<img src="https://x/logo.png"><img id="result-image" src="https://x/result.jpg">'
    assert extract_image_url(html) == "https://x/result.jpg"

def test_src_search_runs_past_the_tag():
    # plain text scan: the first src after the marker wins, wherever it is
    html = b'<img id="result-image" alt="r"><img src="https://x/next.jpg">'
    assert extract_image_url(html) == "https://x/next.jpg"

def test_missing_marker():
    with pytest.raises(ImageNotFoundError):
        extract_image_url(b"<html><body><div>No image here</div></body></html>")

def test_marker_without_src():
    with pytest.raises(SrcAttributeError):
        extract_image_url(b'<html><body><img id="result-image" alt="Result"></body></html>')

def test_unterminated_src():
    with pytest.raises(UnterminatedAttributeError):
        extract_image_url(b'<img id="result-image" src="https://x/y.jpg')

@pytest.mark.parametrize("html, expected", [
    (b"<p>nothing</p>", ImageNotFoundError),
    (b'<img id="result-image">', SrcAttributeError),
    (b'<img id="result-image" src="abc', UnterminatedAttributeError),
])
def test_failures_are_distinct(html, expected):
    with pytest.raises(ResultPageError) as excinfo:
        extract_image_url(html)
    assert type(excinfo.value) is expected
    assert excinfo.value.step == "scrape"
