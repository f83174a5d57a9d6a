"""
Tests for the Result type.
"""

from django.test import SimpleTestCase

from apps.common.types import Err, Ok


class ResultTypeTestCase(SimpleTestCase):

    def test_ok(self):
        result = Ok(21)

        self.assertTrue(result.is_ok())
        self.assertFalse(result.is_err())
        self.assertEqual(result.unwrap(), 21)
        self.assertEqual(result.unwrap_or(0), 21)
        self.assertEqual(result.map(lambda v: v * 2).unwrap(), 42)

    def test_ok_map_failure_becomes_err(self):
        result = Ok(1).map(lambda v: v / 0)
        self.assertTrue(result.is_err())

    def test_err(self):
        result = Err('boom')

        self.assertTrue(result.is_err())
        self.assertEqual(result.unwrap_or(7), 7)
        self.assertIs(result.map(lambda v: v), result)
        with self.assertRaises(ValueError):
            result.unwrap()
