import unittest

from mailsessions.errors import MalformedField, MalformedLine
from mailsessions.parsers.lines import DecodedLine, decode_line, normalize_line


class LineDecoderTests(unittest.TestCase):
    def test_decodes_timestamp_session_key_and_value(self) -> None:
        decoded = decode_line("2021-01-01T10:00:00.000000 A client=foo")
        self.assertEqual(decoded, DecodedLine("2021-01-01T10:00:00.000000", "A", "client", "foo"))

    def test_whitespace_runs_decode_like_single_spaces(self) -> None:
        expected = decode_line("2021-01-01T10:00:00 A from=a@x")
        self.assertEqual(decode_line("2021-01-01T10:00:00  A   from=a@x"), expected)
        self.assertEqual(decode_line("2021-01-01T10:00:00\tA \t from=a@x"), expected)

    def test_line_terminators_are_dropped(self) -> None:
        self.assertEqual(decode_line("2021-01-01T10:00:00 A to=b@x\r\n").value, "b@x")
        self.assertEqual(decode_line("2021-01-01T10:00:00 A to=b@x\n").value, "b@x")

    def test_only_first_equals_splits_key_from_value(self) -> None:
        decoded = decode_line("2021-01-01T10:00:00 A message-id=abc=def==")
        self.assertEqual(decoded.key, "message-id")
        self.assertEqual(decoded.value, "abc=def==")

    def test_empty_value_is_allowed(self) -> None:
        decoded = decode_line("2021-01-01T10:00:00 A status=")
        self.assertEqual(decoded.key, "status")
        self.assertEqual(decoded.value, "")

    def test_fragment_without_equals_is_malformed_field(self) -> None:
        with self.assertRaises(MalformedField) as ctx:
            decode_line("2021-01-01T10:00:00 A client")
        self.assertEqual(ctx.exception.fragment, "client")
        self.assertEqual(ctx.exception.kind, "malformed_field")

    def test_wrong_token_count_is_malformed_line(self) -> None:
        for line in (
            "2021-01-01T10:00:00 A",
            "2021-01-01T10:00:00 A client=foo extra",
            "",
            " 2021-01-01T10:00:00 A client=foo",
            "2021-01-01T10:00:00 A client=foo ",
        ):
            with self.subTest(line=line):
                with self.assertRaises(MalformedLine):
                    decode_line(line)

    def test_malformed_line_reports_normalized_text(self) -> None:
        with self.assertRaises(MalformedLine) as ctx:
            decode_line("a  b   c d")
        self.assertEqual(ctx.exception.line, "a b c d")
        self.assertIn("'a b c d'", str(ctx.exception))

    def test_normalize_line_collapses_whitespace(self) -> None:
        self.assertEqual(normalize_line("x \t\t y   z\r\n"), "x y z")

    def test_non_ascii_space_is_not_a_separator(self) -> None:
        with self.assertRaises(MalformedLine):
            decode_line("2021-01-01T10:00:00\u00a0A client=foo")

    def test_carriage_return_inside_a_line_is_whitespace(self) -> None:
        with self.assertRaises(MalformedLine) as ctx:
            decode_line("2021-01-01T10:00:00 A client=foo\r2021-01-01T10:00:01 A to=b@x\n")
        self.assertEqual(ctx.exception.line, "2021-01-01T10:00:00 A client=foo 2021-01-01T10:00:01 A to=b@x")


if __name__ == "__main__":
    unittest.main()
