"""Tests for the Forge command line interface."""

import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from PIL import Image

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from forge.main import main, create_parser
from forge.testing import create_test_image


class TestCommandLine(unittest.TestCase):
    """Test the edit and info commands end to end."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.input_path = os.path.join(self.temp_dir, "input.png")
        create_test_image(400, 300).save(self.input_path)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_parser_defaults(self):
        args = create_parser().parse_args(["edit", self.input_path])
        self.assertEqual(args.quality, 80)
        self.assertEqual(args.filter, "lanczos")
        self.assertEqual(args.resize_mode, "filter")
        self.assertIsNone(args.output)

    def test_global_flags_precede_the_command(self):
        args = create_parser().parse_args(["--debug", "-v", "edit", self.input_path,
                                           "--blur", "2", "-q", "50", "-o", "out.webp"])
        self.assertTrue(args.debug)
        self.assertTrue(args.verbose)
        self.assertEqual(args.blur, 2.0)
        self.assertEqual(args.quality, 50)
        self.assertEqual(args.output, "out.webp")

        args = create_parser().parse_args(["info", self.input_path])
        self.assertEqual(args.input_file, self.input_path)

    def test_edit_to_file(self):
        output = os.path.join(self.temp_dir, "out", "thumb.jpg")

        with redirect_stderr(io.StringIO()):
            main(["edit", self.input_path, "--crop-square", "--resize", "100", "100",
                  "--unsharp", "0", "1", "1", "0.05", "-o", output])

        with Image.open(output) as saved:
            self.assertEqual(saved.size, (100, 100))
            self.assertEqual(saved.format, "JPEG")

    def test_edit_resize_modes(self):
        for mode in ("adaptive", "sample", "scale", "thumbnail"):
            with self.subTest(mode=mode):
                output = os.path.join(self.temp_dir, f"{mode}.png")
                with redirect_stderr(io.StringIO()):
                    main(["edit", self.input_path, "--resize", "0", "200",
                          "--resize-mode", mode, "-o", output])

                with Image.open(output) as saved:
                    self.assertEqual(saved.size, (200, 150))

    def test_edit_to_stdout(self):
        stdout = io.TextIOWrapper(io.BytesIO())

        with redirect_stdout(stdout):
            main(["edit", self.input_path, "--rotate", "90", "--modulate", "100", "0", "100"])

        data = stdout.buffer.getvalue()
        with Image.open(io.BytesIO(data)) as decoded:
            self.assertEqual(decoded.format, "PNG")
            self.assertEqual(decoded.size, (300, 400))

    def test_edit_missing_input(self):
        missing = os.path.join(self.temp_dir, "missing.png")
        stderr = io.StringIO()

        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            main(["edit", missing, "-o", os.path.join(self.temp_dir, "out.png")])

        self.assertEqual(context.exception.code, 1)
        self.assertIn(f"Could not load image '{missing}' for editing", stderr.getvalue())

    def test_info(self):
        stdout = io.StringIO()

        with redirect_stdout(stdout):
            main(["info", self.input_path])

        output = stdout.getvalue()
        self.assertIn("Size: 400x300", output)
        self.assertIn("Format: PNG", output)

    def test_no_command_prints_help(self):
        stdout = io.StringIO()

        with redirect_stdout(stdout):
            main([])

        self.assertIn("usage", stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
