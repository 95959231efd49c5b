# ABOUTME: Tests for primary image resolution from infobox fields, image listing, and raw page text
# ABOUTME: Covers field priority, namespace/underscore matching, text-position fallback, and no-image outcomes

from unittest.mock import AsyncMock

import pytest
from conftest import image_url

from wiki_facets.core.images import (
    IMAGE_FIELD_KEYS,
    find_image,
    infobox_image_name,
    rank_by_text_position,
    resolve_main_image,
    titles_match,
)
from wiki_facets.core.models import ImageCandidate, ImageInfo


def candidate(title: str, with_info: bool = True) -> ImageCandidate:
    return ImageCandidate(title=title, imageinfo=[ImageInfo(url=image_url(title))] if with_info else [])


class TestInfoboxImageName:
    """Test picking the image filename out of infobox fields"""

    def test_priority_order(self):
        assert IMAGE_FIELD_KEYS == ("image", "bildname", "imagen", "Immagine", "badge", "logo")

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ({"image": "Batman.png"}, "Batman.png"),
            ({"bildname": "File:Foo.png"}, "Foo.png"),
            ({"logo": "Logo.svg", "image": "Main.jpg"}, "Main.jpg"),
            ({"image": "", "imagen": "Imagen.jpg"}, "Imagen.jpg"),
            ({"Immagine": ["Primo.png", "Secondo.png"]}, "Primo.png"),
            ({"badge": "Datei:Abzeichen.png"}, "Abzeichen.png"),
            ({"caption": "A caption"}, None),
            ({}, None),
        ],
    )
    def test_infobox_image_name(self, fields, expected):
        assert infobox_image_name(fields) == expected


class TestTitleMatching:
    """Test matching listing titles against infobox filenames"""

    @pytest.mark.parametrize(
        "title,filename,expected",
        [
            ("File:Foo.png", "Foo.png", True),
            ("File:Foo_Bar.png", "Foo Bar.png", True),
            ("File:Foo Bar.png", "Foo_Bar.png", True),
            ("Foo.png", "Foo.png", True),
            ("File:Foo.png", "Bar.png", False),
            ("File:Foo.png", "foo.png", False),
        ],
    )
    def test_titles_match(self, title, filename, expected):
        assert titles_match(title, filename) is expected

    def test_find_image_returns_first_match(self):
        first = candidate("File:Foo.png")
        duplicate = ImageCandidate(title="File:Foo.png", imageinfo=[ImageInfo(url="https://other.test/Foo.png")])
        assert find_image([candidate("File:Bar.png"), first, duplicate], "Foo.png") is first

    def test_find_image_no_match(self):
        assert find_image([candidate("File:Bar.png")], "Foo.png") is None


class TestRankByTextPosition:
    """Test the text-position ordering used when no infobox image exists"""

    def test_later_mentions_sort_first(self):
        text = "Intro [[File:A.png]] middle [[File:B.png]] end [[File:C.png]]"
        images = [candidate("File:A.png"), candidate("File:B.png"), candidate("File:C.png")]

        ranked = rank_by_text_position(images, text)

        assert [image.title for image in ranked] == ["File:C.png", "File:B.png", "File:A.png"]

    def test_unmentioned_images_sort_last_in_listing_order(self):
        text = "Only [[File:B.png]] here"
        images = [candidate("File:X.png"), candidate("File:B.png"), candidate("File:Y.png")]

        ranked = rank_by_text_position(images, text)

        assert [image.title for image in ranked] == ["File:B.png", "File:X.png", "File:Y.png"]


class TestResolveMainImage:
    """Test the full resolution heuristic"""

    @pytest.mark.asyncio
    async def test_infobox_field_wins_regardless_of_listing_order(self):
        raw_text = AsyncMock(return_value="")
        images = [candidate("File:Bar.png"), candidate("File:Foo.png")]

        url = await resolve_main_image(images, {"bildname": "Foo.png"}, raw_text)

        assert url == image_url("File:Foo.png")
        raw_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_space_in_infobox_matches_underscore_in_listing(self):
        images = [candidate("File:Foo_Bar.png")]

        url = await resolve_main_image(images, {"image": "Foo Bar.png"}, AsyncMock(return_value=""))

        assert url == image_url("File:Foo_Bar.png")

    @pytest.mark.asyncio
    async def test_list_valued_field_uses_first_element(self):
        images = [candidate("File:Second.png"), candidate("File:First.png")]

        url = await resolve_main_image(images, {"image": ["First.png", "Second.png"]}, AsyncMock(return_value=""))

        assert url == image_url("File:First.png")

    @pytest.mark.asyncio
    async def test_matched_image_without_info_is_none(self):
        images = [candidate("File:Foo.png", with_info=False)]

        assert await resolve_main_image(images, {"image": "Foo.png"}, AsyncMock(return_value="")) is None

    @pytest.mark.asyncio
    async def test_infobox_filename_with_empty_listing_skips_fallback(self):
        raw_text = AsyncMock(return_value="[[File:Foo.png]]")

        assert await resolve_main_image([], {"image": "Foo.png"}, raw_text) is None
        raw_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_infobox_filename_not_listed_is_none(self):
        raw_text = AsyncMock(return_value="[[File:Bar.png]]")

        assert await resolve_main_image([candidate("File:Bar.png")], {"image": "Foo.png"}, raw_text) is None
        raw_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fallback_uses_text_position(self):
        raw_text = AsyncMock(return_value="{{Infobox}} [[File:Early.png]] text [[File:Late.png]]")
        images = [candidate("File:Early.png"), candidate("File:Late.png")]

        url = await resolve_main_image(images, {"name": "Batman"}, raw_text)

        assert url == image_url("File:Late.png")
        raw_text.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fallback_returns_listing_url_when_text_mentions_nothing(self):
        images = [candidate("File:Only.png")]

        url = await resolve_main_image(images, {}, AsyncMock(return_value=None))

        assert url == image_url("File:Only.png")

    @pytest.mark.asyncio
    async def test_fallback_top_candidate_without_info_is_none(self):
        images = [candidate("File:Bare.png", with_info=False)]

        assert await resolve_main_image(images, {}, AsyncMock(return_value="[[File:Bare.png]]")) is None

    @pytest.mark.asyncio
    async def test_no_images_and_no_field_is_none(self):
        assert await resolve_main_image([], {}, AsyncMock(return_value="plain text")) is None
