from __future__ import annotations

import pytest

from syrinc.lrc.model import Tag
from syrinc.lrc.tags import extract_tags, pop_tag


@pytest.mark.parametrize(
    "line, tags",
    [
        ("[ti: Song name] lyrics", [Tag("ti", "Song name")]),
        ("[ar: Artist][al: Album][offset: 750]", [Tag("ar", "Artist"), Tag("al", "Album"), Tag("offset", "750")]),
        ("[offset:-2315]", [Tag("offset", "-2315")]),
        ("[01:53.00] Si de mí todo entregué", [Tag("time", "01:53.00")]),
        ("[al:$AD BOYZ 4 LIFE II]", [Tag("al", "$AD BOYZ 4 LIFE II")]),
        ("[re:Replay:Extra]", [Tag("re", "Replay:Extra")]),
        ("[length]", [Tag("length", "")]),
        ("<00:12.00>word <ar:x>", [Tag("time", "00:12.00"), Tag("ar", "x")]),
        ("[]", []),
        ("no brackets at all", []),
        ("[malformed", []),
    ],
)
def test_extract_tags(line, tags):
    assert extract_tags(line) == tags


class TestPopTag:
    multi = "[ti: Ella][ar:Junior H] [00:00.00] Y una bolsita"

    def test_basic(self):
        assert pop_tag("[offset: 500] I walk the line", "offset") == "I walk the line"
        assert (
            pop_tag("[of:-150] Si de mí todo entregué y siempre me han pagado mal", "of")
            == "Si de mí todo entregué y siempre me han pagado mal"
        )

    def test_multi_tag_line(self):
        assert pop_tag(self.multi, "ti") == "[ar:Junior H] [00:00.00] Y una bolsita"
        assert pop_tag(self.multi, "ar") == "[ti: Ella] [00:00.00] Y una bolsita"

    def test_timestamps_are_not_tags(self):
        assert pop_tag(self.multi, "00:00.00") == self.multi

    def test_absent_key_is_identity(self):
        assert pop_tag("plain text no brackets", "offset") == "plain text no brackets"
        assert pop_tag("[00:01.00]   spaced   text", "ar") == "[00:01.00]   spaced   text"

    def test_unclosed_bracket_is_left_alone(self):
        assert pop_tag("[key) malformed", "key") == "[key) malformed"

    def test_empty_key(self):
        assert pop_tag("[] empty key", "") == "empty key"

    def test_repeated_key_removes_all(self):
        assert pop_tag("[repeat:repeat][repeat:repeat] double", "repeat") == "double"

    def test_spaces_inside_tag(self):
        assert pop_tag("[space :  after] space test", "space") == "space test"

    def test_key_only_in_value_is_skipped(self):
        assert pop_tag("[ti: A title] words", "title") == "[ti: A title] words"

    def test_key_in_lyric_text_is_skipped(self):
        assert pop_tag("[00:12.00] until [ti:Song]", "ti") == "[00:12.00] until"
        assert pop_tag("[00:12.00] until", "ti") == "[00:12.00] until"

    def test_angle_delimited(self):
        assert pop_tag("<ar:x> hello", "ar") == "hello"

    def test_keeps_surrounding_spacing(self):
        assert pop_tag("[00:10.00][ar:x]Hello", "ar") == "[00:10.00]Hello"
        assert pop_tag("[00:10.00] [ar:x] Hello", "ar") == "[00:10.00] Hello"
