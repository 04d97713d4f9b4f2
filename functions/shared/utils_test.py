# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================



import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from shared import utils


class SlugTest(unittest.TestCase):

    def test_generate_slug(self):
        self.assertEqual(utils.generate_slug("Hello, World!"), "hello-world")
        self.assertEqual(
            utils.generate_slug("  Building WordPress   Themes  "),
            "building-wordpress-themes",
        )
        self.assertEqual(utils.generate_slug("--Already-Slugged--"), "already-slugged")
        self.assertEqual(utils.generate_slug(""), "")

    def test_unique_ids_differ(self):
        self.assertNotEqual(utils.get_unique_id(), utils.get_unique_id())


class TimestampTest(unittest.TestCase):

    def test_format_timestamp(self):
        value = datetime(2024, 3, 5, 10, 20, 30, 123456, tzinfo=timezone.utc)
        self.assertEqual(utils.format_timestamp(value), "2024-03-05T10:20:30.123Z")

    def test_parse_timestamp(self):
        parsed = utils.parse_timestamp("2024-03-05T10:20:30.123Z")
        self.assertEqual(
            parsed, datetime(2024, 3, 5, 10, 20, 30, 123000, tzinfo=timezone.utc)
        )
        naive = utils.parse_timestamp("2024-03-05T10:20:30")
        self.assertEqual(naive.tzinfo, timezone.utc)
        self.assertIsNone(utils.parse_timestamp("not a date"))
        self.assertIsNone(utils.parse_timestamp(None))

    def test_next_timestamp_is_current_time(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        stamp = utils.parse_timestamp(utils.next_timestamp())
        self.assertGreaterEqual(stamp, before)

    def test_next_timestamp_moves_past_previous(self):
        frozen = datetime(2024, 1, 1, 12, 0, 0, 500700, tzinfo=timezone.utc)
        previous = "2024-01-01T12:00:00.500Z"

        class FrozenDatetime(datetime):
            @classmethod
            def now(cls, tz=None):
                return frozen

        with patch.object(utils, "datetime", FrozenDatetime):
            self.assertEqual(
                utils.next_timestamp(previous), "2024-01-01T12:00:00.501Z"
            )
            self.assertEqual(
                utils.next_timestamp("2024-01-01T13:00:00.000Z"),
                "2024-01-01T13:00:00.001Z",
            )
            self.assertEqual(
                utils.next_timestamp("2023-12-31T00:00:00.000Z"),
                "2024-01-01T12:00:00.500Z",
            )


if __name__ == "__main__":
    unittest.main()
