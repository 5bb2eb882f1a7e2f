"""CLI argument validation, search output, and viewer dispatch tests.

Verifies how ``suttaviewer.cli.main`` routes between ``--search`` output and
the interactive viewer, and which option combinations it rejects.
"""

from __future__ import annotations

import io
import json
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fakes import sample_raw

from suttaviewer import cli
from suttaviewer.corpus import DEFAULT_COLLECTION_CODES, clear_metadata_stores


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.metadata = self.root / "meta.json"
        self.metadata.write_text(json.dumps(sample_raw()), encoding="utf-8")
        patchers = [
            mock.patch("suttaviewer.cli.configure_logging"),
            mock.patch("suttaviewer.cli.load_collection_codes", return_value=DEFAULT_COLLECTION_CODES),
            mock.patch("suttaviewer.cli.load_style_name", return_value="monokai"),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        clear_metadata_stores()
        self._tmp.cleanup()

    def run_main(self, *argv: str) -> str:
        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            cli.main(["--metadata", str(self.metadata), *argv])
        return stdout.getvalue()


class CliSearchTests(CliTestCase):
    def test_search_prints_display_and_path(self) -> None:
        output = self.run_main("--search", "root")

        self.assertEqual(output, "mn1: The Root of All Things / Mūlapariyāyasutta (MN)\t/c/mn1\n")

    def test_scoped_search(self) -> None:
        output = self.run_main("--search", "1", "--scope", "MN")

        self.assertEqual([line.split(":")[0] for line in output.splitlines()], ["mn1", "mn11", "mn51"])

    def test_no_matches_exits(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("--search", "zzz")

        self.assertEqual(str(ctx.exception), "No suttas match 'zzz'.")

    def test_blank_query_exits(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("--search", "  ")

        self.assertEqual(str(ctx.exception), "Search query is empty.")

    def test_unreadable_metadata_exits_with_message(self) -> None:
        self.metadata.write_text("{broken", encoding="utf-8")

        with self.assertRaises(SystemExit) as ctx:
            self.run_main("--search", "root")

        self.assertIn("Could not parse metadata file", str(ctx.exception))


class CliValidationTests(CliTestCase):
    def test_rejected_combinations(self) -> None:
        target = self.root / "dn1_sc_engl"
        target.write_text("text\n", encoding="utf-8")
        cases = [
            (["--search", "root", str(target)], "Cannot combine --search"),
            (["--scope", "DN"], "--scope only applies"),
            (["--pair", "e1,p1"], "--pair needs a sutta PATH"),
            ([str(self.root / "missing_sc_pali")], "Path not found"),
        ]
        for argv, message in cases:
            with self.subTest(argv=argv):
                with mock.patch("suttaviewer.cli.run_viewer") as run_viewer:
                    with self.assertRaises(SystemExit) as ctx:
                        self.run_main(*argv)
                run_viewer.assert_not_called()
                self.assertIn(message, str(ctx.exception))

    def test_invalid_pair_is_an_argument_error(self) -> None:
        for value in ("e1", "e1,x9", "e1,"):
            with self.subTest(value=value):
                with mock.patch("sys.stderr", new_callable=io.StringIO), self.assertRaises(SystemExit) as ctx:
                    self.run_main("--pair", value, "somefile")
                self.assertEqual(ctx.exception.code, 2)


class CliViewerDispatchTests(CliTestCase):
    def test_path_and_pair_are_passed_to_viewer(self) -> None:
        target = self.root / "dn1_sc_engl"
        target.write_text("text\n", encoding="utf-8")

        with mock.patch("suttaviewer.cli.run_viewer") as run_viewer:
            self.run_main(str(target), "--pair", "e1,p1", "--no-color")

        run_viewer.assert_called_once()
        store = run_viewer.call_args.args[0]
        self.assertEqual(store.path, self.metadata.resolve())
        self.assertEqual(
            run_viewer.call_args.kwargs,
            {"path": target, "pair": ("e1", "p1"), "style": "monokai", "no_color": True},
        )

    def test_without_path_starts_navigator(self) -> None:
        with mock.patch("suttaviewer.cli.run_viewer") as run_viewer:
            self.run_main("--style", "native")

        self.assertIsNone(run_viewer.call_args.kwargs["path"])
        self.assertEqual(run_viewer.call_args.kwargs["style"], "native")


class ConfigureLoggingTests(unittest.TestCase):
    def test_log_file_receives_records(self) -> None:
        with mock.patch("suttaviewer.cli.logging.basicConfig") as basic_config:
            cli.configure_logging("/tmp/sv.log", verbose=True, interactive=True)

        self.assertEqual(basic_config.call_args.kwargs["filename"], "/tmp/sv.log")
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.DEBUG)

    def test_interactive_without_log_file_installs_nothing(self) -> None:
        with mock.patch("suttaviewer.cli.logging.basicConfig") as basic_config:
            cli.configure_logging(None, verbose=False, interactive=True)

        basic_config.assert_not_called()

    def test_non_interactive_logs_warnings_to_stderr(self) -> None:
        with mock.patch("suttaviewer.cli.logging.basicConfig") as basic_config:
            cli.configure_logging(None, verbose=False, interactive=False)

        self.assertEqual(basic_config.call_args.kwargs["level"], logging.WARNING)


if __name__ == "__main__":
    unittest.main()
