import unittest

from golinks.errors import InvalidNameError
from golinks.names import (
    BANNED_NAMES,
    EDIT_PREFIX,
    clean_name,
    encode_id,
    generated_name,
    has_banned_prefix,
    is_banned_name,
    parse_name,
    validate_name,
)


class ParseNameTests(unittest.TestCase):
    def test_root_is_empty_name(self):
        self.assertEqual(parse_name("/", "/"), "")

    def test_strips_prefix(self):
        self.assertEqual(parse_name("/", "/foo"), "foo")
        self.assertEqual(parse_name(EDIT_PREFIX, "/edit/foo"), "foo")
        self.assertEqual(parse_name(EDIT_PREFIX, "/edit/"), "")

    def test_keeps_nested_segments(self):
        self.assertEqual(parse_name("/", "/foo/bar"), "foo/bar")

    def test_result_never_starts_with_prefix(self):
        cases = [
            ("/", "//foo"),
            ("/", "///"),
            (EDIT_PREFIX, "/edit//edit/foo"),
            (EDIT_PREFIX, "/edit/edit/x"),
            ("a", "aaab"),
        ]
        for prefix, path in cases:
            with self.subTest(prefix=prefix, path=path):
                self.assertFalse(parse_name(prefix, path).startswith(prefix))


class CleanNameTests(unittest.TestCase):
    def test_strips_surrounding_slashes(self):
        self.assertEqual(clean_name("/foo/"), "foo")
        self.assertEqual(clean_name("//foo/bar//"), "foo/bar")
        self.assertEqual(clean_name("foo"), "foo")


class BannedNameTests(unittest.TestCase):
    def test_edit_prefix_token_is_banned(self):
        self.assertTrue(is_banned_name(EDIT_PREFIX.strip("/")))

    def test_every_ban_set_member_is_banned(self):
        for name in BANNED_NAMES:
            self.assertTrue(is_banned_name(name))
        self.assertIn("api", BANNED_NAMES)

    def test_regular_names_are_not_banned(self):
        self.assertFalse(is_banned_name("foo"))
        self.assertFalse(is_banned_name(""))
        self.assertFalse(is_banned_name("edit/foo"))

    def test_banned_prefix_checks_first_segment(self):
        self.assertTrue(has_banned_prefix("api"))
        self.assertTrue(has_banned_prefix("links/x/y"))
        self.assertFalse(has_banned_prefix("foo/api"))
        self.assertFalse(has_banned_prefix("apix"))

    def test_validate_name_rejects_reserved(self):
        for name in ("api", "edit", ":abc", "api/x", "edit/x", "links/x"):
            with self.subTest(name=name):
                with self.assertRaises(InvalidNameError):
                    validate_name(name)
        validate_name("foo")
        validate_name("team/docs")
        validate_name("editor")


class GeneratedNameTests(unittest.TestCase):
    def test_encode_id(self):
        self.assertEqual(encode_id(0), "0")
        self.assertEqual(encode_id(61), "Z")
        self.assertEqual(encode_id(62), "10")

    def test_generated_name_has_reserved_prefix(self):
        self.assertEqual(generated_name(1), ":1")
        with self.assertRaises(ValueError):
            encode_id(-1)


if __name__ == "__main__":
    unittest.main()
