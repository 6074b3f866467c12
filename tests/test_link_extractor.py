# File: tests/test_link_extractor.py
from domain_crawler.crawler.link_extractor import LinkExtractor

BASE = "https://example.com/docs/index"

HTML = """
<html><body>
  <a href="/about">About</a>
  <a href="guide/">Guide</a>
  <a href="https://example.com/team#people">Team</a>
  <a href="https://other.example/">Elsewhere</a>
  <a href="mailto:hello@example.com">Mail</a>
  <a href="tel:+441234">Call</a>
  <a href="javascript:void(0)">JS</a>
  <a href="/files/report.PDF">Report</a>
  <a href="/img/logo.png">Logo</a>
  <a href="/archive.tar">Tarball</a>
  <a href="   ">Blank</a>
  <a>No href</a>
  <link href="/style.css" rel="stylesheet">
</body></html>
"""


def test_extracts_absolute_page_links():
    links = LinkExtractor().extract(HTML, BASE)
    assert links == {
        "https://example.com/about",
        "https://example.com/docs/guide/",
        "https://example.com/team#people",
        "https://other.example/",
    }


def test_blank_content_yields_nothing():
    extractor = LinkExtractor()
    assert extractor.extract("", BASE) == set()
    assert extractor.extract("   \n", BASE) == set()
    assert extractor.extract(None, BASE) == set()


def test_duplicates_collapse():
    html = '<a href="/a">1</a><a href="https://example.com/a">2</a>'
    assert LinkExtractor().extract(html, BASE) == {"https://example.com/a"}


def test_is_page_link():
    assert LinkExtractor.is_page_link("http://example.com/page")
    assert not LinkExtractor.is_page_link("https://example.com/movie.MKV")
    assert not LinkExtractor.is_page_link("ftp://example.com/")
    assert LinkExtractor.is_page_link("https://example.com/docs.html")
