"""
Tests for grouping parsed images into per model/colour galleries.
"""
import random

from django.test import SimpleTestCase

from catalog.services.images.filename_service import ParsedImage, parse_image_listing
from catalog.services.images.media_service import ImageGroup, group_images, image_group_key


def _entries(*filenames):
    return parse_image_listing(
        [(name, f"https://cdn.test/products/{name}") for name in filenames]
    ).entries


class ImageGroupKeyTests(SimpleTestCase):
    def test_model_ref_uppercased_and_colour_normalised(self):
        self.assertEqual(image_group_key(" pd1 ", "black logo"), ("PD1", "BLACK"))
        self.assertEqual(image_group_key("CV866522", "Off White"), ("CV866522", "OFFWHITE"))


class GroupImagesTests(SimpleTestCase):
    def test_primary_image_leads_the_gallery(self):
        groups = group_images(parse_image_listing(["PD760221-OFF-1.jpg", "PD760221-OFF-2_F.jpg"]).entries)

        self.assertEqual(list(groups), [("PD760221", "OFF")])
        group = groups[("PD760221", "OFF")]
        self.assertEqual(group.image_url, "PD760221-OFF-2_F.jpg")
        self.assertEqual(group.gallery, ["PD760221-OFF-2_F.jpg", "PD760221-OFF-1.jpg"])

    def test_listing_order_kept_for_non_primary_images(self):
        groups = group_images(_entries("PD1-OFF-3.jpg", "PD1-OFF-1.jpg", "PD1-OFF-F.jpg", "PD1-OFF-2.jpg"))

        self.assertEqual(
            groups[("PD1", "OFF")].gallery,
            [
                "https://cdn.test/products/PD1-OFF-F.jpg",
                "https://cdn.test/products/PD1-OFF-3.jpg",
                "https://cdn.test/products/PD1-OFF-1.jpg",
                "https://cdn.test/products/PD1-OFF-2.jpg",
            ],
        )

    def test_colour_spellings_share_a_group(self):
        groups = group_images(_entries("PD1-BLACKLOGO-1.jpg", "PD1-BLACKOS-2.jpg", "PD1-BLACK-3.jpg"))

        self.assertEqual(list(groups), [("PD1", "BLACK")])
        self.assertEqual(len(groups[("PD1", "BLACK")].urls), 3)

    def test_two_segment_primary_gets_its_own_group(self):
        groups = group_images(_entries("PD1-OFF-1.jpg", "PD1-OFF_F.jpg"))

        self.assertEqual(list(groups), [("PD1", "OFF"), ("PD1", "OFFF")])
        self.assertEqual(groups[("PD1", "OFF")].image_url, "https://cdn.test/products/PD1-OFF-1.jpg")

    def test_repeated_urls_are_dropped(self):
        entry = ParsedImage(filename="PD1-OFF-1.jpg", model_ref="PD1", color="OFF", url="https://cdn.test/a.jpg")
        groups = group_images([entry, entry])

        self.assertEqual(groups[("PD1", "OFF")].urls, ("https://cdn.test/a.jpg",))

    def test_groups_iterate_in_key_order(self):
        groups = group_images(_entries("ZZ1-RED-1.jpg", "AA1-OFF-1.jpg", "AA1-BLA-1.jpg"))

        self.assertEqual(list(groups), [("AA1", "BLA"), ("AA1", "OFF"), ("ZZ1", "RED")])
        self.assertIsInstance(groups[("ZZ1", "RED")], ImageGroup)
        self.assertEqual(groups[("ZZ1", "RED")].key, ("ZZ1", "RED"))

    def test_grouping_is_repeatable(self):
        entries = _entries("PD1-OFF-1.jpg", "PD1-OFF-2_F.jpg", "CV2-COG-1.png", "CV2-COG-F.png")

        self.assertEqual(group_images(entries), group_images(entries))

    def test_reordered_listing_gives_same_groups(self):
        entries = _entries("PD1-OFF-1.jpg", "PD1-OFF-2_F.jpg", "CV2-COG-1.png", "CV2-COG-F.png", "CV2-COG-2.png")
        shuffled = list(entries)
        random.Random(7).shuffle(shuffled)

        first, second = group_images(entries), group_images(shuffled)

        self.assertEqual(list(first), list(second))
        for key in first:
            self.assertEqual(set(first[key].urls), set(second[key].urls))
            self.assertTrue(first[key].image_url.rsplit('.', 1)[0].endswith(('-F', '_F')))
            self.assertTrue(second[key].image_url.rsplit('.', 1)[0].endswith(('-F', '_F')))

    def test_empty_input(self):
        self.assertEqual(group_images([]), {})
