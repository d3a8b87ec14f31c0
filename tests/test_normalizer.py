"""Tests for normalizer.generate_slug."""

import pytest

from pandit_site.services.normalizer import generate_slug


class TestGenerateSlug:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Griha Pravesh", "griha-pravesh"),
            ("Diwali Pooja: A Guide", "diwali-pooja-a-guide"),
            ("  Leading and trailing  ", "leading-and-trailing"),
            ("Café Ganesha", "cafe-ganesha"),
            ("Satyanarayan -- Katha!!", "satyanarayan-katha"),
        ],
    )
    def test_slugs(self, title, expected):
        assert generate_slug(title) == expected

    def test_non_ascii_only_title_falls_back(self):
        assert generate_slug("गणेश") == "page"

    def test_empty_title_falls_back(self):
        assert generate_slug("") == "page"
