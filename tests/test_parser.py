import unittest

from iptv_filter.core.parser import extract_attribute, parse_playlist

SCENARIO_TEXT = (
    "#EXTM3U\n"
    '#EXTINF:-1 tvg-id="x" tvg-logo="l.png",Channel A\n'
    "http://good.example/stream.m3u8\n"
)


class ParsePlaylistTests(unittest.TestCase):
    def test_single_entry_fields(self):
        entries = parse_playlist(SCENARIO_TEXT)
        self.assertEqual(1, len(entries))
        entry = entries[0]
        self.assertEqual(0, entry.index)
        self.assertEqual('#EXTINF:-1 tvg-id="x" tvg-logo="l.png",Channel A', entry.meta_line)
        self.assertEqual("Channel A", entry.name)
        self.assertEqual("x", entry.tvg_id)
        self.assertEqual("l.png", entry.tvg_logo)
        self.assertEqual("http://good.example/stream.m3u8", entry.stream_url)

    def test_name_keeps_everything_after_first_comma(self):
        entries = parse_playlist("#EXTINF:-1,News, Weather, Sport\nhttp://a.test/1\n")
        self.assertEqual("News, Weather, Sport", entries[0].name)

    def test_missing_attributes_default_to_empty(self):
        entries = parse_playlist("#EXTINF:-1 group-title=\"News\"\nhttp://a.test/1\n")
        self.assertEqual("", entries[0].tvg_id)
        self.assertEqual("", entries[0].tvg_logo)
        self.assertEqual("", entries[0].name)

    def test_blank_lines_between_directive_and_url_are_skipped(self):
        entries = parse_playlist("#EXTINF:-1,A\n\n   \nhttp://a.test/1\n")
        self.assertEqual("http://a.test/1", entries[0].stream_url)

    def test_trailing_directive_has_empty_url(self):
        entries = parse_playlist("#EXTINF:-1,A\nhttp://a.test/1\n#EXTINF:-1,B\n")
        self.assertEqual(2, len(entries))
        self.assertEqual("", entries[1].stream_url)

    def test_directive_followed_by_directive_has_empty_url(self):
        entries = parse_playlist("#EXTINF:-1,A\n#EXTINF:-1,B\nhttp://a.test/b\n")
        self.assertEqual(["", "http://a.test/b"], [e.stream_url for e in entries])
        self.assertEqual([0, 1], [e.index for e in entries])

    def test_crlf_and_surrounding_whitespace(self):
        entries = parse_playlist("#EXTM3U\r\n  #EXTINF:-1,A  \r\n  http://a.test/1  \r\n")
        self.assertEqual("#EXTINF:-1,A", entries[0].meta_line)
        self.assertEqual("http://a.test/1", entries[0].stream_url)

    def test_lines_without_directive_are_ignored(self):
        text = "#EXTM3U\nhttp://orphan.test/x\n#EXTVLCOPT:http-user-agent=x\n"
        self.assertEqual([], parse_playlist(text))

    def test_empty_text(self):
        self.assertEqual([], parse_playlist(""))

    def test_parsing_is_idempotent(self):
        text = SCENARIO_TEXT + "#EXTINF:-1,B\nhttp://a.test/b\n#EXTINF:-1,C\n"
        self.assertEqual(parse_playlist(text), parse_playlist(text))


class ExtractAttributeTests(unittest.TestCase):
    def test_present_and_absent(self):
        line = '#EXTINF:-1 tvg-id="abc.tv" tvg-logo="",Name'
        self.assertEqual("abc.tv", extract_attribute(line, "tvg-id"))
        self.assertEqual("", extract_attribute(line, "tvg-logo"))
        self.assertEqual("", extract_attribute(line, "group-title"))


if __name__ == "__main__":
    unittest.main()
