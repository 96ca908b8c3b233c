"""
Tests for image storage listings (Supabase REST API and local directory).
"""
import os
import shutil
import tempfile
from unittest import mock

import requests
from django.test import SimpleTestCase, override_settings

from catalog.services.images.storage_service import (
    LocalImageDirectory,
    StorageListingError,
    SupabaseStorageListing,
    get_listing,
)


def _response(payload):
    response = mock.Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class SupabaseStorageListingTests(SimpleTestCase):
    def setUp(self):
        self.listing = SupabaseStorageListing(
            base_url="https://storage.test/",
            api_key="secret",
            bucket="guess-images",
            folder="products",
        )

    @mock.patch.object(SupabaseStorageListing, "PAGE_SIZE", 2)
    @mock.patch("catalog.services.images.storage_service.requests.post")
    def test_pages_through_listing(self, post):
        post.side_effect = [
            _response([{"name": "PD1-OFF-1.jpg"}, {"name": "archive"}]),
            _response([{"name": "PD1-OFF-2_F.jpg"}]),
        ]

        items = list(self.listing)

        self.assertEqual(
            items,
            [
                ("PD1-OFF-1.jpg", "https://storage.test/storage/v1/object/public/guess-images/products/PD1-OFF-1.jpg"),
                ("PD1-OFF-2_F.jpg", "https://storage.test/storage/v1/object/public/guess-images/products/PD1-OFF-2_F.jpg"),
            ],
        )
        self.assertEqual(post.call_count, 2)
        first_call, second_call = post.call_args_list
        self.assertEqual(first_call.args[0], "https://storage.test/storage/v1/object/list/guess-images")
        self.assertEqual(first_call.kwargs["json"]["prefix"], "products")
        self.assertEqual(first_call.kwargs["json"]["offset"], 0)
        self.assertEqual(second_call.kwargs["json"]["offset"], 2)
        self.assertEqual(first_call.kwargs["headers"]["Authorization"], "Bearer secret")

    @mock.patch("catalog.services.images.storage_service.time.sleep")
    @mock.patch("catalog.services.images.storage_service.requests.post")
    def test_gives_up_after_retries(self, post, sleep):
        post.side_effect = requests.ConnectionError("boom")

        with self.assertRaises(StorageListingError):
            list(self.listing)

        self.assertEqual(post.call_count, SupabaseStorageListing.MAX_RETRIES)
        self.assertEqual(sleep.call_count, SupabaseStorageListing.MAX_RETRIES - 1)

    @mock.patch("catalog.services.images.storage_service.requests.post")
    def test_unexpected_payload(self, post):
        post.return_value = _response({"error": "not found"})

        with self.assertRaises(StorageListingError):
            list(self.listing)

    def test_public_url_quotes_names(self):
        self.assertEqual(
            self.listing.public_url("PD1-OFF 1.jpg"),
            "https://storage.test/storage/v1/object/public/guess-images/products/PD1-OFF%201.jpg",
        )

    @override_settings(SUPABASE_URL="", SUPABASE_SERVICE_ROLE_KEY="")
    def test_requires_configuration(self):
        with self.assertRaises(StorageListingError):
            SupabaseStorageListing()


class LocalImageDirectoryTests(SimpleTestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp()
        os.makedirs(os.path.join(self.root, "b"))
        for relative in ("PD1-OFF-1.JPG", "b/PD1-OFF-2.jpg", "notes.txt"):
            with open(os.path.join(self.root, relative), "wb") as fh:
                fh.write(b"x")

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def test_lists_images_sorted_with_urls(self):
        items = list(LocalImageDirectory(root=self.root, base_url="/media/products"))

        self.assertEqual(
            items,
            [
                ("PD1-OFF-1.JPG", "/media/products/PD1-OFF-1.JPG"),
                ("PD1-OFF-2.jpg", "/media/products/b/PD1-OFF-2.jpg"),
            ],
        )

    def test_missing_directory(self):
        with self.assertRaises(StorageListingError):
            LocalImageDirectory(root=os.path.join(self.root, "missing"))

    def test_get_listing_factory(self):
        self.assertIsInstance(get_listing("local", root=self.root), LocalImageDirectory)
        self.assertIsInstance(get_listing("storage"), SupabaseStorageListing)
        with self.assertRaises(StorageListingError):
            get_listing("ftp")
