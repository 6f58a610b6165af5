#!/usr/bin/env python3
"""
Unit tests for metadata_service module
"""
import os
import sys
import json
import unittest
import tempfile
from unittest.mock import patch

# Add the project root directory to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from takeout_matcher.errors import (
	SidecarMalformedValueError,
	SidecarMissingFieldError,
	SidecarParseError,
	SidecarReadError,
)
from takeout_matcher.models.metadata import MetadataRecord
from takeout_matcher.services.metadata_service import MetadataService


class TestMetadataService(unittest.TestCase):
	"""Test cases for MetadataService class"""

	def setUp(self):
		self.temp_dir = tempfile.TemporaryDirectory()
		self.test_dir = self.temp_dir.name

		self.test_json = {
			"title": "IMG_1234.jpg",
			"description": "",
			"photoTakenTime": {
				"timestamp": "1612345678",
				"formatted": "February 3, 2021 at 10:01:18 AM UTC"
			},
			"geoData": {
				"latitude": 37.7749,
				"longitude": -122.4194,
				"altitude": 0
			}
		}

	def tearDown(self):
		self.temp_dir.cleanup()

	def write_sidecar(self, name, content):
		path = os.path.join(self.test_dir, name)
		with open(path, 'w', encoding='utf-8') as f:
			if isinstance(content, str):
				f.write(content)
			else:
				json.dump(content, f)
		return path

	def test_extract_record(self):
		path = self.write_sidecar("IMG_1234.jpg.json", self.test_json)

		record = MetadataService.extract_record(path)

		self.assertEqual(record, MetadataRecord("IMG_1234.jpg", 1612345678, path))

	def test_title_is_not_normalized(self):
		self.test_json["title"] = "  Beach Day (1).JPG"
		path = self.write_sidecar("beach.json", self.test_json)

		self.assertEqual(MetadataService.extract_record(path).title, "  Beach Day (1).JPG")

	def test_timestamp_with_surrounding_whitespace(self):
		self.test_json["photoTakenTime"]["timestamp"] = " 1609459200\n"
		path = self.write_sidecar("a.json", self.test_json)

		self.assertEqual(MetadataService.extract_record(path).captured_at, 1609459200)

	def test_missing_file(self):
		path = os.path.join(self.test_dir, "missing.json")
		with self.assertRaises(SidecarReadError) as ctx:
			MetadataService.extract_record(path)
		self.assertEqual(ctx.exception.path, path)
		self.assertIn(path, str(ctx.exception))

	def test_invalid_json(self):
		path = self.write_sidecar("broken.json", '{"title": "a.jpg", ')
		with self.assertRaises(SidecarParseError) as ctx:
			MetadataService.extract_record(path)
		self.assertIn(path, str(ctx.exception))

	def test_top_level_must_be_object(self):
		path = self.write_sidecar("list.json", '[1, 2, 3]')
		with self.assertRaises(SidecarParseError):
			MetadataService.extract_record(path)

	def test_missing_title(self):
		del self.test_json["title"]
		path = self.write_sidecar("no_title.json", self.test_json)
		with self.assertRaises(SidecarMissingFieldError) as ctx:
			MetadataService.extract_record(path)
		self.assertEqual(ctx.exception.field, "title")
		self.assertIn("'title'", str(ctx.exception))

	def test_title_not_a_string(self):
		self.test_json["title"] = 42
		path = self.write_sidecar("bad_title.json", self.test_json)
		with self.assertRaises(SidecarMalformedValueError):
			MetadataService.extract_record(path)

	def test_missing_photo_taken_time(self):
		del self.test_json["photoTakenTime"]
		path = self.write_sidecar("no_time.json", self.test_json)
		with self.assertRaises(SidecarMissingFieldError) as ctx:
			MetadataService.extract_record(path)
		self.assertEqual(ctx.exception.field, "photoTakenTime")

	def test_missing_nested_timestamp(self):
		del self.test_json["photoTakenTime"]["timestamp"]
		path = self.write_sidecar("no_timestamp.json", self.test_json)
		with self.assertRaises(SidecarMissingFieldError) as ctx:
			MetadataService.extract_record(path)
		self.assertEqual(ctx.exception.field, "photoTakenTime.timestamp")

	def test_malformed_timestamps(self):
		for value in [1612345678, "", "abc", "16123.5", "-5", None, {"seconds": 1}, "9" * 5000]:
			with self.subTest(value=value):
				self.test_json["photoTakenTime"]["timestamp"] = value
				path = self.write_sidecar("bad_timestamp.json", self.test_json)
				with self.assertRaises(SidecarMalformedValueError) as ctx:
					MetadataService.extract_record(path)
				self.assertEqual(ctx.exception.field, "photoTakenTime.timestamp")
				self.assertIn(path, str(ctx.exception))

	def test_photo_taken_time_not_an_object(self):
		self.test_json["photoTakenTime"] = "1612345678"
		path = self.write_sidecar("flat.json", self.test_json)
		with self.assertRaises(SidecarMalformedValueError):
			MetadataService.extract_record(path)

	def test_extract_all_keeps_order(self):
		paths = []
		for i, name in enumerate(["c.jpg", "a.jpg", "b.jpg"]):
			self.test_json["title"] = name
			self.test_json["photoTakenTime"]["timestamp"] = str(1000 + i)
			paths.append(self.write_sidecar(f"{name}.json", self.test_json))

		records = MetadataService.extract_all(paths)

		self.assertEqual([r.title for r in records], ["c.jpg", "a.jpg", "b.jpg"])
		self.assertEqual([r.captured_at for r in records], [1000, 1001, 1002])

	def test_extract_all_fails_fast(self):
		good = self.write_sidecar("good.json", self.test_json)
		bad = self.write_sidecar("bad.json", "not json")
		later = self.write_sidecar("later.json", self.test_json)

		with patch.object(MetadataService, 'extract_record', wraps=MetadataService.extract_record) as extract:
			with self.assertRaises(SidecarParseError) as ctx:
				MetadataService.extract_all([good, bad, later])

		self.assertEqual(ctx.exception.path, bad)
		self.assertEqual(extract.call_count, 2)

	def test_extract_all_empty(self):
		self.assertEqual(MetadataService.extract_all([]), [])


if __name__ == '__main__':
	unittest.main()
