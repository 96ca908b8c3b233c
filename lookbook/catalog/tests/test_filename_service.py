"""
Tests for image filename parsing.
"""
from django.test import SimpleTestCase

from catalog.services.images.filename_service import (
    ImageFilenameError,
    has_primary_marker,
    parse_image_filename,
    parse_image_listing,
)


class ParseImageFilenameTests(SimpleTestCase):
    def test_model_ref_and_colour_are_first_two_segments(self):
        parsed = parse_image_filename("PD760221-OFF-1.jpg", url="https://cdn/PD760221-OFF-1.jpg")

        self.assertEqual(parsed.model_ref, "PD760221")
        self.assertEqual(parsed.color, "OFF")
        self.assertEqual(parsed.filename, "PD760221-OFF-1.jpg")
        self.assertEqual(parsed.url, "https://cdn/PD760221-OFF-1.jpg")
        self.assertFalse(parsed.is_primary)

    def test_parsing_is_case_insensitive(self):
        parsed = parse_image_filename("pd760221-off-2_f.JPG")

        self.assertEqual(parsed.model_ref, "PD760221")
        self.assertEqual(parsed.color, "OFF")
        self.assertTrue(parsed.is_primary)

    def test_two_segments_are_enough(self):
        parsed = parse_image_filename("AB12-COG.png")
        self.assertEqual((parsed.model_ref, parsed.color), ("AB12", "COG"))

    def test_directory_prefix_is_ignored(self):
        parsed = parse_image_filename("products/CV866522-COG-F.webp")

        self.assertEqual(parsed.filename, "CV866522-COG-F.webp")
        self.assertEqual(parsed.model_ref, "CV866522")
        self.assertTrue(parsed.is_primary)

    def test_single_segment_is_rejected(self):
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("BADFILE.jpg")

    def test_unknown_extension_is_rejected(self):
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("PD1-OFF-1.pdf")
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("PD1-OFF-1")

    def test_empty_segments_are_rejected(self):
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("-OFF-1.jpg")
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("PD1--1.jpg")
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("")

    def test_segments_wider_than_index_columns_are_rejected(self):
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("A" * 51 + "-BLACK-1.jpg")
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("PD1-" + "B" * 51 + "-1.jpg")
        with self.assertRaises(ImageFilenameError):
            parse_image_filename("PD1-OFF-" + "x" * 250 + ".jpg")

        parsed = parse_image_filename("A" * 50 + "-" + "B" * 50 + ".jpg")
        self.assertEqual(len(parsed.model_ref), 50)

    def test_marker_in_colour_segment_stays_part_of_colour(self):
        parsed = parse_image_filename("PD1-OFF_F.jpg")

        self.assertEqual(parsed.color, "OFF_F")
        self.assertTrue(parsed.is_primary)

    def test_primary_marker(self):
        self.assertTrue(has_primary_marker("PD1-OFF_F.jpg"))
        self.assertTrue(has_primary_marker("PD1-OFF-f.png"))
        self.assertFalse(has_primary_marker("PD1-OFF-FRONT.jpg"))
        self.assertFalse(has_primary_marker("PD1-OFF-1.jpg"))


class ParseImageListingTests(SimpleTestCase):
    def test_bad_names_are_skipped_not_raised(self):
        result = parse_image_listing([
            "PD1-OFF-1.jpg",
            "BADFILE.jpg",
            ("PD1-OFF-2_F.jpg", "https://cdn/PD1-OFF-2_F.jpg"),
            "readme.txt",
        ])

        self.assertEqual([entry.filename for entry in result.entries], ["PD1-OFF-1.jpg", "PD1-OFF-2_F.jpg"])
        self.assertEqual(result.entries[1].url, "https://cdn/PD1-OFF-2_F.jpg")
        self.assertEqual(result.entries[0].url, "")
        self.assertEqual(result.skipped, ["BADFILE.jpg", "readme.txt"])

    def test_empty_listing(self):
        result = parse_image_listing([])
        self.assertEqual(result.entries, [])
        self.assertEqual(result.skipped, [])
