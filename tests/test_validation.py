# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from moodfit.validation import (
    is_username_valid,
    sanitize_username,
    username_validation_error,
    username_validation_message,
)


class TestUsernameValidation(unittest.TestCase):
    def test_valid_names(self) -> None:
        for name in ("Sam", "  jo  ", "fit_fan 99", "A" * 20):
            self.assertTrue(is_username_valid(name), name)
            self.assertEqual(username_validation_message(name), "Username is valid")

    def test_error_messages(self) -> None:
        cases = {
            None: "Please enter a username",
            "   ": "Please enter a username",
            "a": "Username must be at least 2 characters",
            "a" * 21: "Username must be less than 20 characters",
            "bad-name!": "Username can only contain letters, numbers, spaces, and underscores",
            "Admin": "This username is not available",
            " guest ": "This username is not available",
            "__ _": "Username must contain at least one letter or number",
        }
        for name, message in cases.items():
            self.assertEqual(username_validation_error(name), message, name)
            self.assertFalse(is_username_valid(name))

    def test_sanitize(self) -> None:
        self.assertEqual(sanitize_username("  Big   Lifter__42 "), "Big Lifter_42")
        self.assertEqual(sanitize_username(None), "")


if __name__ == "__main__":
    unittest.main()
