# tests/test_runner.py

"""Tests for the headless CLI runners and argument parsing."""

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from main import _build_parser
from src.cli.runner import run_list, run_show, run_track

FIXTURES_DIR = Path(__file__).parent / "fixtures"
KETTLE_URL = "https://www.amazon.com/Electric-Kettle/dp/B0KETTLE01"


class TestRunners(unittest.IsolatedAsyncioTestCase):
    """track / show / list against a temp JSON store."""

    def setUp(self) -> None:
        patcher = patch("src.scrapers.base_scraper.curl_requests.Session")
        patcher.start()
        self.addCleanup(patcher.stop)
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp_dir = Path(tmp.name)
        self.store = str(self.tmp_dir / "store.json")
        self.page = str(FIXTURES_DIR / "amazon_product.html")

    async def test_track_from_saved_page(self) -> None:
        """Tracking a saved page writes the store."""
        code = await run_track(KETTLE_URL, self.page, self.store)
        self.assertEqual(code, 0)
        with open(self.store, encoding="utf-8") as f:
            data = json.load(f)
        self.assertIn("B0KETTLE01", data["products"])

    async def test_track_page_without_price_fails(self) -> None:
        code = await run_track(
            "https://www.amazon.com/dp/B0BLENDER1",
            str(FIXTURES_DIR / "amazon_no_price.html"),
            self.store,
        )
        self.assertEqual(code, 1)
        self.assertFalse(Path(self.store).exists())

    async def test_track_missing_html_file_fails(self) -> None:
        code = await run_track(
            KETTLE_URL, str(self.tmp_dir / "nope.html"), self.store,
        )
        self.assertEqual(code, 1)

    async def test_show_json(self) -> None:
        """show --json emits the record and analysis."""
        await run_track(KETTLE_URL, self.page, self.store)
        await run_track(KETTLE_URL, self.page, self.store)
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = await run_show("B0KETTLE01", True, self.store)
        self.assertEqual(code, 0)
        data = json.loads(buf.getvalue())
        self.assertEqual(data["analysis"]["status"], "stable")
        self.assertEqual(data["analysis"]["sample_count"], 2)

    async def test_show_unknown_fails(self) -> None:
        self.assertEqual(await run_show("B0MISSING0", False, self.store), 1)

    async def test_show_corrupt_store_fails(self) -> None:
        Path(self.store).write_text("{{{", encoding="utf-8")
        self.assertEqual(await run_show("B0KETTLE01", False, self.store), 1)

    async def test_list_empty_and_populated(self) -> None:
        self.assertEqual(await run_list(self.store), 0)
        await run_track(KETTLE_URL, self.page, self.store)
        self.assertEqual(await run_list(self.store), 0)


class TestParser(unittest.TestCase):
    """main._build_parser sub-commands."""

    def test_track_args(self) -> None:
        args = _build_parser().parse_args(
            ["--store", "s.json", "track", KETTLE_URL, "--html", "p.html"],
        )
        self.assertEqual(args.command, "track")
        self.assertEqual(args.store_path, "s.json")
        self.assertEqual(args.html_path, "p.html")

    def test_show_json_flag(self) -> None:
        args = _build_parser().parse_args(["show", "B0KETTLE01", "--json"])
        self.assertTrue(args.as_json)

    def test_command_required(self) -> None:
        with self.assertRaises(SystemExit):
            _build_parser().parse_args([])


if __name__ == "__main__":
    unittest.main()
