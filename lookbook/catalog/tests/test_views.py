"""
Tests for the catalog JSON views (reports and colour-match diagnostics).
"""
from django.contrib.auth.models import User
from django.test import TestCase
from django.urls import reverse

from catalog.models import Product
from productimages.models import ImageIndexEntry


class StaffViewTestCase(TestCase):
    """Base fixture: a logged-in staff user."""

    def setUp(self):
        self.staff = User.objects.create_user(username="staff", password="pass12345", is_staff=True)
        self.client.force_login(self.staff)


class ProductsWithoutImagesViewTests(StaffViewTestCase):
    def setUp(self):
        super().setUp()
        Product.objects.create(model_ref="PD1", color="OFF", image_url="https://cdn.test/PD1-OFF-F.jpg")
        Product.objects.create(model_ref="ZZ1", color="RED", brand="GUESS", subcategory="תיק צד")
        Product.objects.create(model_ref="AA1", color="BLA")

    def test_summary_and_sorted_list(self):
        response = self.client.get(reverse("catalog:products_without_images"))

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["success"])
        self.assertEqual(data["summary"], {
            "totalProducts": 3,
            "productsWithImages": 1,
            "productsWithoutImages": 2,
            "percentage": 33.3,
        })
        self.assertEqual([item["modelRef"] for item in data["products"]], ["AA1", "ZZ1"])
        self.assertEqual(data["products"][1], {
            "modelRef": "ZZ1", "color": "RED", "subcategory": "תיק צד", "brand": "GUESS",
        })

    def test_requires_staff(self):
        self.client.logout()
        User.objects.create_user(username="customer", password="pass12345")
        self.client.login(username="customer", password="pass12345")

        response = self.client.get(reverse("catalog:products_without_images"))

        self.assertEqual(response.status_code, 302)

    def test_post_not_allowed(self):
        response = self.client.post(reverse("catalog:products_without_images"))
        self.assertEqual(response.status_code, 405)


class ImageStatsViewTests(StaffViewTestCase):
    def test_counts(self):
        ImageIndexEntry.objects.create(model_ref="PD1", color="OFF", filename="PD1-OFF-1.jpg", url="u1")
        ImageIndexEntry.objects.create(model_ref="PD1", color="BLA", filename="PD1-BLA-1.jpg", url="u2")
        Product.objects.create(model_ref="PD1", color="OFF", image_url="u1")
        Product.objects.create(model_ref="PD1", color="RED")

        response = self.client.get(reverse("catalog:image_stats"))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["stats"], {
            "total_in_index": 2,
            "unique_model_refs": 1,
            "unique_colors": 2,
            "total_products": 2,
            "products_with_images": 1,
            "products_without_images": 1,
        })


class DebugColorMatchViewTests(StaffViewTestCase):
    def test_alias_match(self):
        response = self.client.get(reverse("catalog:debug_color_match"), {"imgColor": "COG", "prodColor": "cognac"})

        data = response.json()
        self.assertTrue(data["matches"])
        self.assertEqual(data["imageToken"], "COG")
        self.assertEqual(data["productToken"], "COGNAC")
        self.assertIn("COGNAC", data["imageAliases"])
        self.assertEqual(data["tableVersion"], 1)

    def test_defaults_and_fixed_cases(self):
        data = self.client.get(reverse("catalog:debug_color_match")).json()

        self.assertEqual(data["imageColor"], "OFFWHITE")
        self.assertEqual(data["productColor"], "COG")
        self.assertFalse(data["matches"])
        self.assertEqual(
            [(case["prod"], case["match"]) for case in data["testCases"]],
            [("OFF", True), ("COG", False), ("COGNAC", False), ("BLA", False), ("BLACK", False)],
        )
