import pytest

from prompt_converters.conversion.content_codec import (
    PART_DELIMITER,
    as_content_parts,
    contains_token,
    content_to_text,
    expand_content,
    flatten_content,
    new_content_token,
    prepend_speaker,
    relabel_first_text,
    split_data_url,
)

IMAGE = {"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBORw0KGgo="}}
VIDEO = {"type": "video_url", "video_url": {"url": "data:video/webm;base64,GkXfow=="}}


@pytest.mark.unit
class TestFlattenContent:
    def test_string_passes_through(self):
        tokens = {}
        assert flatten_content("hello", tokens) == "hello"
        assert tokens == {}

    def test_none_becomes_empty_string(self):
        assert flatten_content(None, {}) == ""

    def test_text_parts_are_joined_with_blank_line(self):
        content = [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]
        assert flatten_content(content, {}) == "a\n\nb"

    def test_non_text_parts_become_tokens(self):
        tokens = {}
        text = flatten_content([{"type": "text", "text": "look"}, IMAGE, VIDEO], tokens)

        segments = text.split(PART_DELIMITER)
        assert segments[0] == "look"
        assert len(tokens) == 2
        assert tokens[segments[1]] == IMAGE
        assert tokens[segments[2]] == VIDEO

    def test_tokens_are_unique_within_map(self):
        tokens = {}
        flatten_content([IMAGE] * 20, tokens)
        assert len(tokens) == 20


@pytest.mark.unit
class TestExpandContent:
    def test_restores_parts_in_order(self):
        tokens = {}
        content = [{"type": "text", "text": "look"}, IMAGE, {"type": "text", "text": "nice"}]
        parts = expand_content(flatten_content(content, tokens), tokens)
        assert parts == content

    def test_adjacent_text_segments_are_remerged(self):
        tokens = {}
        text = flatten_content([IMAGE], tokens)
        parts = expand_content(f"a{PART_DELIMITER}b{PART_DELIMITER}{text}", tokens)
        assert parts == [{"type": "text", "text": "a\n\nb"}, IMAGE]

    def test_expanded_parts_are_copies(self):
        tokens = {}
        text = flatten_content([IMAGE], tokens)
        parts = expand_content(text, tokens)
        parts[0]["image_url"]["url"] = "changed"
        assert IMAGE["image_url"]["url"].startswith("data:image/png")

    def test_token_inside_a_segment_is_not_substituted(self):
        tokens = {}
        token = flatten_content([IMAGE], tokens)
        parts = expand_content(f"see {token}", tokens)
        assert parts == [{"type": "text", "text": f"see {token}"}]


@pytest.mark.unit
class TestHelpers:
    def test_contains_token(self):
        tokens = {}
        token = flatten_content([IMAGE], tokens)
        assert contains_token(f"x\n\n{token}", tokens)
        assert not contains_token("plain", tokens)
        assert not contains_token(None, tokens)
        assert not contains_token("plain", {})

    def test_new_content_token_avoids_existing(self):
        tokens = {}
        token = new_content_token(tokens)
        tokens[token] = IMAGE
        assert new_content_token(tokens) != token

    def test_prepend_speaker_plain_text(self):
        assert prepend_speaker("hi", "Bob") == "Bob: hi"

    def test_prepend_speaker_keeps_leading_token_matchable(self):
        tokens = {}
        token = flatten_content([IMAGE], tokens)
        text = prepend_speaker(token, "Bob", tokens)
        assert expand_content(text, tokens) == [{"type": "text", "text": "Bob:"}, IMAGE]

    def test_content_to_text_drops_non_text_parts(self):
        content = [{"type": "text", "text": "a"}, IMAGE, {"type": "text", "text": "b"}]
        assert content_to_text(content) == "a\n\nb"
        assert content_to_text(None) == ""
        assert content_to_text("s") == "s"

    def test_as_content_parts(self):
        assert as_content_parts("hi") == [{"type": "text", "text": "hi"}]
        assert as_content_parts([IMAGE]) == [IMAGE]

    def test_split_data_url(self):
        assert split_data_url("data:image/png;base64,AAAA") == ("image/png", "AAAA")
        assert split_data_url("data:;base64,AAAA") == ("", "AAAA")

    def test_relabel_first_text_touches_only_the_first_text_part(self):
        parts = [IMAGE, {"type": "text", "text": "a"}, {"type": "text", "text": "b"}]
        relabelled = relabel_first_text(parts, lambda text: f"Bob: {text}")
        assert relabelled == [
            IMAGE,
            {"type": "text", "text": "Bob: a"},
            {"type": "text", "text": "b"},
        ]
        assert parts[1] == {"type": "text", "text": "a"}

    def test_relabel_first_text_inserts_label_without_text_parts(self):
        assert relabel_first_text([IMAGE], lambda text: f"Bob: {text}") == [
            {"type": "text", "text": "Bob:"},
            IMAGE,
        ]
        assert relabel_first_text([IMAGE], lambda text: text) == [IMAGE]
