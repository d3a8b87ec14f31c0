"""Tests for injector.apply_metadata head mutations."""

import json

from bs4 import BeautifulSoup

from pandit_site.models.metadata import EffectiveMetadata
from pandit_site.services.injector import JSON_LD_TYPE, apply_metadata, new_document, read_metadata


def _metadata(**overrides) -> EffectiveMetadata:
    values = dict(
        title="Hindu Pooja Ireland",
        description="Authentic Hindu Pooja in Ireland.",
        keywords="Hindu Pooja, Hindu Pandit",
        robots="index, follow",
        author="Pandit Rajesh Joshi",
        og_title="Hindu Pooja Ireland",
        og_description="Authentic Hindu Pooja in Ireland.",
        og_image="https://cdn.example.com/og.png",
        canonical_url="https://panditrajesh.ie/",
        structured_data={"@context": "https://schema.org", "@type": "Organization"},
    )
    values.update(overrides)
    return EffectiveMetadata(**values)


def _count(document: BeautifulSoup, tag_name: str, **attrs) -> int:
    return len(document.find_all(tag_name, attrs=attrs))


class TestApplyMetadata:
    def test_sets_title(self):
        document = new_document()
        apply_metadata(document, _metadata())
        assert document.title.string == "Hindu Pooja Ireland"

    def test_name_meta_tags(self):
        document = new_document()
        apply_metadata(document, _metadata())
        values = read_metadata(document)
        assert values["description"] == "Authentic Hindu Pooja in Ireland."
        assert values["keywords"] == "Hindu Pooja, Hindu Pandit"
        assert values["robots"] == "index, follow"
        assert values["author"] == "Pandit Rajesh Joshi"

    def test_open_graph_uses_property_attribute(self):
        document = new_document()
        apply_metadata(document, _metadata())
        assert document.find("meta", attrs={"property": "og:title"})["content"] == "Hindu Pooja Ireland"
        assert document.find("meta", attrs={"name": "og:title"}) is None

    def test_empty_og_image_is_not_created(self):
        document = new_document()
        apply_metadata(document, _metadata(og_image=""))
        assert document.find("meta", attrs={"property": "og:image"}) is None

    def test_empty_og_image_leaves_existing_tag_untouched(self):
        document = new_document()
        apply_metadata(document, _metadata(og_image="https://cdn.example.com/first.png"))
        apply_metadata(document, _metadata(og_image=""))
        assert read_metadata(document)["og:image"] == "https://cdn.example.com/first.png"

    def test_canonical_link(self):
        document = new_document()
        apply_metadata(document, _metadata(canonical_url="https://panditrajesh.ie/services"))
        assert document.find("link", rel="canonical")["href"] == "https://panditrajesh.ie/services"

    def test_structured_data_is_serialized(self):
        document = new_document()
        apply_metadata(document, _metadata())
        script = document.find("script", attrs={"type": JSON_LD_TYPE})
        assert json.loads(script.string) == {"@context": "https://schema.org", "@type": "Organization"}

    def test_structured_data_cannot_close_the_script_element(self):
        document = new_document()
        apply_metadata(document, _metadata(structured_data={"name": "</script><b>x</b>"}))
        html = str(document)
        assert "</script><b>" not in html
        assert json.loads(read_metadata(document)["structured_data"]) == {"name": "</script><b>x</b>"}

    def test_ampersand_survives_in_structured_data(self):
        document = new_document()
        apply_metadata(document, _metadata(structured_data={"name": "Pooja & Sanatan Dharma"}))
        assert "Pooja & Sanatan Dharma" in str(document)

    def test_existing_head_tags_are_reused(self):
        document = BeautifulSoup(
            '<html><head><title>Old</title><meta name="description" content="old">'
            '<link rel="canonical" href="/old"></head><body></body></html>',
            "lxml",
        )
        apply_metadata(document, _metadata())
        assert _count(document, "meta", name="description") == 1
        assert _count(document, "link", rel="canonical") == 1
        assert read_metadata(document)["description"] == "Authentic Hindu Pooja in Ireland."


class TestIdempotentInjection:
    def test_applying_twice_equals_applying_once(self):
        once = new_document()
        apply_metadata(once, _metadata())

        twice = new_document()
        apply_metadata(twice, _metadata())
        apply_metadata(twice, _metadata())

        assert str(twice) == str(once)

    def test_single_instance_of_each_tag(self):
        document = new_document()
        for _ in range(3):
            apply_metadata(document, _metadata())

        assert _count(document, "title") == 1
        assert _count(document, "link", rel="canonical") == 1
        assert _count(document, "script", type=JSON_LD_TYPE) == 1
        for name in ("description", "keywords", "robots", "author"):
            assert _count(document, "meta", name=name) == 1
        for prop in ("og:title", "og:description", "og:image"):
            assert _count(document, "meta", property=prop) == 1

    def test_new_values_replace_previous_ones(self):
        document = new_document()
        apply_metadata(document, _metadata())
        apply_metadata(
            document,
            _metadata(title="Contact", canonical_url="https://panditrajesh.ie/contact", structured_data={"@type": "Person"}),
        )

        values = read_metadata(document)
        assert values["title"] == "Contact"
        assert values["canonical"] == "https://panditrajesh.ie/contact"
        assert json.loads(values["structured_data"]) == {"@type": "Person"}
        assert _count(document, "script", type=JSON_LD_TYPE) == 1

    def test_preexisting_duplicate_json_ld_scripts_collapse_to_one(self):
        document = new_document()
        for _ in range(2):
            script = document.new_tag("script", attrs={"type": JSON_LD_TYPE})
            script.string = "{}"
            document.head.append(script)

        apply_metadata(document, _metadata())
        assert _count(document, "script", type=JSON_LD_TYPE) == 1
