import re
import unittest
from unittest.mock import patch

from app.services import job_ids
from app.services.job_ids import generate_job_id, job_id_timestamp


class JobIdTest(unittest.TestCase):
    def test_format(self):
        job_id = generate_job_id()
        self.assertRegex(job_id, re.compile(r"^job_\d{13,}_[0-9a-z]{9}$"))

    def test_unique_within_a_burst(self):
        ids = [generate_job_id() for _ in range(2000)]
        self.assertEqual(len(set(ids)), len(ids))

    def test_timestamp_never_goes_backwards(self):
        with patch.object(job_ids, "_last_millis", 0), patch.object(
            job_ids.time, "time", side_effect=[2_000_000_000.0, 1_999_999_990.0]
        ):
            first = generate_job_id()
            second = generate_job_id()
        self.assertEqual(job_id_timestamp(first), 2_000_000_000_000)
        self.assertGreaterEqual(job_id_timestamp(second), job_id_timestamp(first))

    def test_timestamp_parsing_rejects_garbage(self):
        with self.assertRaises(ValueError):
            job_id_timestamp("task_1_abc")
        with self.assertRaises(ValueError):
            job_id_timestamp("job_x_abc")
        with self.assertRaises(ValueError):
            job_id_timestamp("nounderscores")


if __name__ == "__main__":
    unittest.main()
