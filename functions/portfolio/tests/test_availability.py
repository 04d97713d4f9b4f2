import unittest

from portfolio.availability import is_remote_available
from portfolio.config import PLACEHOLDER_REMOTE_KEY, PLACEHOLDER_REMOTE_URL


class RemoteAvailabilityTests(unittest.TestCase):
    def test_configured_values(self):
        self.assertTrue(
            is_remote_available("postgresql://db.example.com/portfolio", "secret")
        )

    def test_missing_or_blank_values(self):
        self.assertFalse(is_remote_available(None, "secret"))
        self.assertFalse(is_remote_available("postgresql://db/portfolio", None))
        self.assertFalse(is_remote_available("   ", "secret"))
        self.assertFalse(is_remote_available("postgresql://db/portfolio", ""))

    def test_placeholders(self):
        self.assertFalse(is_remote_available(PLACEHOLDER_REMOTE_URL, "secret"))
        self.assertFalse(
            is_remote_available("https://placeholder.supabase.co", "secret")
        )
        self.assertFalse(
            is_remote_available("postgresql://db/portfolio", PLACEHOLDER_REMOTE_KEY)
        )


if __name__ == "__main__":
    unittest.main()
