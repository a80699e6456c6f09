# tests/test_main.py

"""Tests for the command-line entry point."""

import unittest
from unittest.mock import AsyncMock, patch

import main


class TestBuildParser(unittest.TestCase):
    """Argument parsing."""

    def test_search_defaults(self) -> None:
        args = main._build_parser().parse_args(["nutella"])
        self.assertEqual(args.query, "nutella")
        self.assertIsNone(args.code)
        self.assertIsNone(args.page_size)
        self.assertEqual(args.output_format, "json")
        self.assertFalse(args.health)

    def test_product_flags(self) -> None:
        args = main._build_parser().parse_args(
            ["-c", "6408430000050", "-a", "-l", "2", "-f", "table"]
        )
        self.assertEqual(args.code, "6408430000050")
        self.assertTrue(args.alternatives)
        self.assertEqual(args.limit, 2)
        self.assertEqual(args.output_format, "table")

    def test_unknown_format_rejected(self) -> None:
        with patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                main._build_parser().parse_args(["nutella", "-f", "xml"])


class TestMain(unittest.TestCase):
    """main() dispatch and exit codes."""

    def _run(self, argv: list[str]) -> int:
        with patch("sys.argv", ["snackbar", *argv]), patch.object(
            main, "setup_logging"
        ):
            with self.assertRaises(SystemExit) as ctx:
                main.main()
        return ctx.exception.code

    def test_dispatches_search(self) -> None:
        with patch(
            "snackbar.cli.runner.cli_search", new=AsyncMock(return_value=0)
        ) as mock_search:
            code = self._run(["nutella", "-n", "5"])
        self.assertEqual(code, 0)
        mock_search.assert_awaited_once_with(
            query="nutella", page_size=5, output_format="json"
        )

    def test_dispatches_product(self) -> None:
        with patch(
            "snackbar.cli.runner.cli_product", new=AsyncMock(return_value=1)
        ) as mock_product:
            code = self._run(["--code", "123"])
        self.assertEqual(code, 1)
        mock_product.assert_awaited_once_with(
            code="123",
            output_format="json",
            with_alternatives=False,
            limit=None,
        )

    def test_dispatches_health(self) -> None:
        with patch(
            "snackbar.cli.runner.run_health_check",
            new=AsyncMock(return_value=0),
        ) as mock_health:
            code = self._run(["--health"])
        self.assertEqual(code, 0)
        mock_health.assert_awaited_once()

    def test_no_arguments_prints_help(self) -> None:
        with patch("sys.stderr"):
            code = self._run([])
        self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
