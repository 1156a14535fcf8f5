import tempfile
import unittest
from pathlib import Path

from iptv_filter.core.assembler import build_manifest, write_manifest
from iptv_filter.models.entry import PlaylistEntry, ValidationVerdict, VerdictReason


def verdict(index: int, keep: bool = True) -> ValidationVerdict:
    entry = PlaylistEntry(
        index=index,
        meta_line=f'#EXTINF:-1 tvg-id="c{index}",Channel {index}',
        name=f"Channel {index}",
        stream_url=f"http://a.test/{index}.m3u8",
    )
    reason = VerdictReason.BODY_MARKER if keep else VerdictReason.BAD_STATUS
    return ValidationVerdict(entry, keep, reason)


class BuildManifestTests(unittest.TestCase):
    def test_header_only_when_nothing_kept(self):
        self.assertEqual("#EXTM3U\n", build_manifest([]))
        self.assertEqual("#EXTM3U\n", build_manifest([verdict(0, keep=False)]))

    def test_kept_entries_written_verbatim_in_input_order(self):
        completed = [verdict(2), verdict(0), verdict(1, keep=False), verdict(3)]
        self.assertEqual(
            "#EXTM3U\n"
            '#EXTINF:-1 tvg-id="c0",Channel 0\nhttp://a.test/0.m3u8\n'
            '#EXTINF:-1 tvg-id="c2",Channel 2\nhttp://a.test/2.m3u8\n'
            '#EXTINF:-1 tvg-id="c3",Channel 3\nhttp://a.test/3.m3u8\n',
            build_manifest(completed),
        )

    def test_completion_order_can_be_preserved(self):
        completed = [verdict(2), verdict(0), verdict(3)]
        text = build_manifest(completed, preserve_completion_order=True)
        urls = [line for line in text.splitlines() if line.startswith("http")]
        self.assertEqual(
            ["http://a.test/2.m3u8", "http://a.test/0.m3u8", "http://a.test/3.m3u8"], urls
        )

    def test_dropped_urls_never_appear(self):
        text = build_manifest([verdict(0), verdict(1, keep=False)])
        self.assertNotIn("http://a.test/1.m3u8", text)


class WriteManifestTests(unittest.IsolatedAsyncioTestCase):
    async def test_creates_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "playlist" / "nested" / "index.m3u"
            await write_manifest(path, "#EXTM3U\n")
            self.assertEqual("#EXTM3U\n", path.read_text(encoding="utf-8"))

    async def test_overwrites_existing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "index.m3u"
            path.write_text("stale", encoding="utf-8")
            await write_manifest(path, "#EXTM3U\n")
            self.assertEqual("#EXTM3U\n", path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
