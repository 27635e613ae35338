# ABOUTME: Tests for balanced scanning and infobox/image extraction
# ABOUTME: Pure string logic - no HTTP involved

import time

import pytest

from authorinfo.core.models import ImageRef, InfoboxSpan
from authorinfo.extraction.base import MalformedMarkupError
from authorinfo.extraction.wiki.infobox import (
    extract_body_text,
    extract_image_from_body,
    extract_image_from_infobox,
    extract_infobox,
    find_image,
    infobox_rows,
    iter_balanced,
    split_top_level,
)

BACH_INFOBOX = """{{Infobox person
| name = Johann Sebastian Bach
| image = Johann Sebastian Bach.jpg
| caption = Bach in a 1748 portrait by {{nowrap|Elias Gottlob Haussmann}}
| birth_date = {{birth date|1685|3|31|df=y}}
}}"""


class TestIterBalanced:
    """Depth-counting scanner semantics"""

    def test_top_level_groups_only(self):
        text = "a [[b [[c]] d]] e [f]"
        spans = [text[s:e] for s, e in iter_balanced(text)]
        assert spans == ["[[b [[c]] d]]", "[f]"]

    def test_braces(self):
        text = "x {{a|{{b}}}} y {c}"
        assert [text[s:e] for s, e in iter_balanced(text, "{", "}")] == ["{{a|{{b}}}}", "{c}"]

    def test_unmatched_opener_is_skipped(self):
        text = "[a [b] c"
        assert [text[s:e] for s, e in iter_balanced(text)] == ["[b]"]

    def test_stray_closer_is_ignored(self):
        text = "] [a] ]"
        assert [text[s:e] for s, e in iter_balanced(text)] == ["[a]"]

    @pytest.mark.parametrize("text", ["", "no brackets", "[[[", "]]]"])
    def test_no_groups(self, text):
        assert list(iter_balanced(text)) == []

    def test_deep_nesting(self):
        text = "[" * 500 + "]" * 500
        assert list(iter_balanced(text)) == [(0, 1000)]

    def test_groups_inside_unclosed_opener(self):
        text = "{{Infobox x {{a}} {{b|{{c}}}}"
        spans = [text[s:e] for s, e in iter_balanced(text, "{", "}")]
        assert spans == ["{{a}}", "{{b|{{c}}}}"]

    def test_long_run_of_unclosed_openers_scans_linearly(self):
        """Vandalized pages must not make the scan quadratic"""
        text = "{" * 50_000 + " lead {{ndash}} text"

        started = time.perf_counter()
        spans = [text[s:e] for s, e in iter_balanced(text, "{", "}")]
        elapsed = time.perf_counter() - started

        assert spans == ["{{ndash}}"]
        assert elapsed < 1.0


class TestSplitTopLevel:
    def test_nested_pipes_are_kept(self):
        assert split_top_level("a.jpg|thumb|by [[X|Y]] {{t|u}}") == ["a.jpg", "thumb", "by [[X|Y]] {{t|u}}"]

    def test_no_separator(self):
        assert split_top_level("single") == ["single"]


class TestExtractInfobox:
    def test_finds_infobox_span(self):
        body = "{{Other}}\n" + BACH_INFOBOX + "\n'''Bach''' was a composer."
        span = extract_infobox(body)

        assert span is not None
        assert span.text == BACH_INFOBOX
        assert body[span.start : span.end] == BACH_INFOBOX

    def test_first_infobox_wins(self):
        body = "{{Infobox first\n|image=A.jpg}}\n{{Infobox second\n|image=B.jpg}}"
        span = extract_infobox(body)
        assert span.text == "{{Infobox first\n|image=A.jpg}}"

    def test_nested_infobox_is_not_top_level(self):
        assert extract_infobox("{{Wrapper|{{Infobox inner}}}}") is None

    def test_absent(self):
        assert extract_infobox("Plain text with {{cite web|url=x}}") is None

    def test_case_sensitive_token(self):
        assert extract_infobox("{{infobox person\n|image=A.jpg}}") is None


class TestInfoboxImage:
    """Image name and caption rows of an infobox"""

    def test_image_and_caption(self):
        span = InfoboxSpan(text="{{Infobox foo\n|image=Foo Bar.jpg\n|caption=A caption}}", start=0, end=48)
        assert extract_image_from_infobox(span) == ImageRef(name="Foo_Bar.jpg", caption="A caption")

    @pytest.mark.parametrize("key", ["img", "Image", "image:", "IMAGE_NAME"])
    def test_image_key_synonyms(self, key):
        span = InfoboxSpan(text=f"{{{{Infobox x\n| {key} = Some File.png\n}}}}", start=0, end=10)
        assert extract_image_from_infobox(span).name == "Some_File.png"

    @pytest.mark.parametrize("key", ["caption", "img_capt", "Image_Caption"])
    def test_caption_key_synonyms(self, key):
        span = InfoboxSpan(text=f"{{{{Infobox x\n|image=a.png\n|{key}=Hello}}}}", start=0, end=10)
        assert extract_image_from_infobox(span).caption == "Hello"

    def test_last_row_wins(self):
        span = InfoboxSpan(text="{{Infobox x\n|image=first.png\n|img=second.png\n|caption=one\n|caption=two}}", start=0, end=1)
        assert extract_image_from_infobox(span) == ImageRef(name="second.png", caption="two")

    def test_value_keeps_equals_signs(self):
        span = InfoboxSpan(text="{{Infobox x\n|image=a.png\n|caption=x = y}}", start=0, end=1)
        assert extract_image_from_infobox(span).caption == "x = y"

    def test_no_image_row(self):
        span = InfoboxSpan(text="{{Infobox x\n|caption=Orphan caption}}", start=0, end=1)
        assert extract_image_from_infobox(span) is None

    def test_empty_image_value(self):
        span = InfoboxSpan(text="{{Infobox x\n|image=\n|caption=c}}", start=0, end=1)
        assert extract_image_from_infobox(span) is None

    def test_malformed_span_downgrades_to_none(self):
        span = InfoboxSpan(text="Infobox without braces", start=0, end=1)
        with pytest.raises(MalformedMarkupError):
            infobox_rows(span)
        assert extract_image_from_infobox(span) is None

    def test_real_world_infobox(self):
        image = extract_image_from_infobox(extract_infobox(BACH_INFOBOX))
        assert image.name == "Johann_Sebastian_Bach.jpg"
        assert image.caption == "Bach in a 1748 portrait by {{nowrap|Elias Gottlob Haussmann}}"


class TestBodyImage:
    def test_first_image_link(self):
        body = "Text [[Image:First one.jpg|thumb|First caption]] and [[Image:Second.jpg]]"
        assert extract_image_from_body(body) == ImageRef(name="First_one.jpg", caption="First caption")

    def test_without_caption(self):
        assert extract_image_from_body("[[Image:Lonely.png]]") == ImageRef(name="Lonely.png", caption=None)

    def test_caption_is_last_segment_cleaned(self):
        body = "[[Image:Bach.jpg|thumb|200px|Portrait {{circa|1748}} by <i>Haussmann</i>]]"
        assert extract_image_from_body(body).caption == "Portrait  by Haussmann"

    def test_nested_link_in_caption(self):
        body = "[[Image:Bach.jpg|thumb|Portrait by [[Elias Gottlob Haussmann|Haussmann]]]] rest"
        image = extract_image_from_body(body)
        assert image.name == "Bach.jpg"
        assert image.caption == "Portrait by [[Elias Gottlob Haussmann|Haussmann]]"

    def test_file_links_are_not_body_images(self):
        assert extract_image_from_body("[[File:Bach.jpg|thumb|Caption]]") is None

    def test_no_image(self):
        assert extract_image_from_body("[[Leipzig]] only") is None


class TestFindImage:
    def test_infobox_takes_priority(self):
        body = "{{Infobox x\n|image=Box.jpg}}\n[[Image:Body.jpg|Body caption]]"
        assert find_image(body, extract_infobox(body)).name == "Box.jpg"

    def test_body_is_fallback(self):
        body = "{{Infobox x\n|name=No image}}\n[[Image:Body.jpg|Body caption]]"
        assert find_image(body, extract_infobox(body)) == ImageRef(name="Body.jpg", caption="Body caption")

    def test_no_infobox(self):
        assert find_image("[[Image:Body.jpg]]", None).name == "Body.jpg"


class TestBodyText:
    def test_text_after_infobox(self):
        body = "lead-in {{Infobox x\n|image=a}}\nAfter."
        assert extract_body_text(body, extract_infobox(body)) == "\nAfter."

    def test_whole_body_without_infobox(self):
        assert extract_body_text("Everything", None) == "Everything"
