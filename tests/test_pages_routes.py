"""Tests for the server-rendered page routes.

The record store is replaced with the in-memory FakeRecords fixture so the
tests run without a Supabase project.
"""

import json

import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from pandit_site.config import Settings, get_settings
from pandit_site.dependencies import get_record_store
from pandit_site.main import app

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Clear the slowapi in-memory counter before every test."""
    app.state.limiter._storage.reset()
    yield


@pytest.fixture(autouse=True)
def records(fake_records):
    app.dependency_overrides[get_record_store] = lambda: fake_records
    app.dependency_overrides[get_settings] = lambda: Settings(site_url="https://panditrajesh.ie")
    yield fake_records
    app.dependency_overrides.clear()


def _head(response):
    soup = BeautifulSoup(response.text, "lxml")
    canonical = soup.find("link", rel="canonical")
    return soup, soup.title.string, canonical["href"] if canonical else None


class TestSitePages:
    def test_home(self):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")

        soup, title, canonical = _head(response)
        assert title == "Hindu Pooja Ireland"
        assert canonical == "https://panditrajesh.ie/"
        assert soup.find("meta", attrs={"name": "keywords"})["content"] == "Hindu Pooja, Hindu Pandit"
        assert soup.find(id="root")["data-page"] == "home"

    def test_home_alias(self):
        _, title, canonical = _head(client.get("/home"))
        assert title == "Hindu Pooja Ireland"
        assert canonical == "https://panditrajesh.ie/"

    @pytest.mark.parametrize(
        "path, title",
        [
            ("/about", "About Pandit Rajesh Joshi"),
            ("/contact", "Contact Hindu Pandit"),
            ("/services", "Default Title"),
        ],
    )
    def test_page_titles(self, path, title):
        response = client.get(path)
        assert response.status_code == 200
        _, actual, canonical = _head(response)
        assert actual == title
        assert canonical == f"https://panditrajesh.ie{path}"

    def test_head_tags_appear_once(self):
        soup, _, _ = _head(client.get("/about"))
        assert len(soup.find_all("title")) == 1
        assert len(soup.find_all("link", rel="canonical")) == 1
        assert len(soup.find_all("script", type="application/ld+json")) == 1

    def test_structured_data_is_valid_json(self):
        soup, _, _ = _head(client.get("/"))
        data = json.loads(soup.find("script", type="application/ld+json").string)
        assert data["@context"] == "https://schema.org"

    def test_record_store_failure_still_renders(self, records):
        records.fail_pages = True
        records.fail_defaults = True
        response = client.get("/about")
        assert response.status_code == 200
        assert _head(response)[1] == "Pandit Rajesh Joshi - Hindu Priest & Spiritual Guide"

    @pytest.mark.parametrize("path", ["/nonexistent", "/blog-detail", "/Services"])
    def test_unknown_path_is_404(self, path):
        response = client.get(path)
        assert response.status_code == 404
        assert "Page Not Found" in response.text

    def test_health_is_not_a_page(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestBlogPages:
    def test_blog_list(self):
        response = client.get("/blog")
        assert response.status_code == 200
        assert 'href="/blog/significance-pooja"' in response.text

    def test_blog_article(self, records):
        response = client.get("/blog/significance-pooja")
        assert response.status_code == 200

        soup, title, canonical = _head(response)
        assert title == "The Significance of Pooja | Spiritual Wisdom Blog"
        assert canonical == "https://panditrajesh.ie/blog/significance-pooja"
        assert soup.find("meta", attrs={"property": "og:image"})["content"] == "https://cdn.example.com/pooja.jpg"
        assert soup.find("h1").string == "The Significance of Pooja"
        assert "alert(1)" not in response.text
        assert records.blog_calls == 1

    def test_missing_article_is_404(self):
        response = client.get("/blog/missing")
        assert response.status_code == 404
        assert "Article Not Found" in response.text

    def test_blog_unavailable_is_502(self, records):
        records.fail_blogs = True
        response = client.get("/blog/significance-pooja")
        assert response.status_code == 502
        assert "temporarily unavailable" in response.json()["detail"]
