import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from explorer.cli.main import main

ADDR = "0x" + "a" * 40


class CliTests(unittest.TestCase):
    def test_static_run_reports_empty_history(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["--address", ADDR, "--use-static"])

        self.assertEqual(code, 0)
        self.assertIn("StaticTransferAdapter", out.getvalue())
        self.assertIn("No transactions found for this address.", out.getvalue())

    def test_invalid_address_exits_with_2(self) -> None:
        err = io.StringIO()
        with redirect_stdout(io.StringIO()), redirect_stderr(err):
            code = main(["--address", "0x1234", "--use-static"])

        self.assertEqual(code, 2)
        self.assertIn("Invalid address", err.getvalue())

    def test_writes_feed_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with redirect_stdout(io.StringIO()):
                code = main(["--address", ADDR, "--use-static", "--out", tmp])

            with open(os.path.join(tmp, "feed.json"), encoding="utf-8") as f:
                data = json.load(f)

        self.assertEqual(code, 0)
        self.assertEqual(data["address"], ADDR)
        self.assertEqual(data["state"], "complete")
        self.assertEqual(data["cursors"]["from"]["status"], "exhausted")
        self.assertEqual(data["items"], [])


if __name__ == "__main__":
    unittest.main()
