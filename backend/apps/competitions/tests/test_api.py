from __future__ import annotations

import shutil
import tempfile
from datetime import date

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from apps.accounts.models import UserRole
from apps.competitions.models import Competition, CompetitionDocument

User = get_user_model()


class PublicCompetitionApiTests(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        Competition.objects.create(
            title="Post CS II", slug="post-cs-ii", keywords="chimie", start_date=date(2026, 3, 1)
        )
        Competition.objects.create(
            title="Asistent", slug="asistent", status=Competition.STATUS_ARCHIVED, start_date=date(2025, 3, 1)
        )

    def test_list_with_counts_and_years(self):
        r = self.client.get("/api/competitions")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(len(r.data["results"]), 2)
        self.assertEqual(r.data["years"], [2026, 2025])
        self.assertEqual(r.data["counts"], {"active": 1, "archived": 1})

    def test_list_filters(self):
        r = self.client.get("/api/competitions", {"status": "archived"})
        self.assertEqual([c["slug"] for c in r.data["results"]], ["asistent"])
        r = self.client.get("/api/competitions", {"q": "chim", "year": "2026"})
        self.assertEqual([c["slug"] for c in r.data["results"]], ["post-cs-ii"])

    def test_detail_and_not_found_shape(self):
        r = self.client.get("/api/competitions/post-cs-ii")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["title"], "Post CS II")
        self.assertEqual(r.data["documents"], [])

        r = self.client.get("/api/competitions/nu-exista")
        self.assertEqual(r.status_code, 404)
        self.assertIn("error", r.json())


class AdminCompetitionApiTests(TestCase):
    def setUp(self):
        cache.clear()
        self.media = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media)
        self.override.enable()
        self.client = APIClient()
        self.editor = User.objects.create_user(
            username="editor@icmpp.ro", email="editor@icmpp.ro", password="Concurs-2026-sigur"
        )
        UserRole.objects.create(user_id=self.editor.id, role=UserRole.ROLE_EDITOR)
        self.client.force_authenticate(self.editor)

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media, ignore_errors=True)

    def test_requires_panel_role(self):
        anon = APIClient()
        self.assertEqual(anon.get("/api/admin/competitions").status_code, 403)

        nobody = User.objects.create_user(username="x@icmpp.ro", email="x@icmpp.ro", password="Concurs-2026-sigur")
        c = APIClient()
        c.force_authenticate(nobody)
        r = c.get("/api/admin/dashboard")
        self.assertEqual(r.status_code, 403)
        self.assertIn("error", r.json())

    def test_crud_flow(self):
        r = self.client.post(
            "/api/admin/competitions",
            {"title": "Concurs Poștal ÎȚ", "description": "desc", "end_date": "2026-12-31"},
            format="json",
        )
        self.assertEqual(r.status_code, 201)
        cid = r.data["id"]
        self.assertEqual(r.data["slug"], "concurs-postal-it")

        r = self.client.patch(f"/api/admin/competitions/{cid}", {"status": "archived"}, format="json")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data["status"], "archived")

        r = self.client.get("/api/admin/competitions", {"status": "archived", "q": "Concurs"})
        self.assertEqual([c["id"] for c in r.data], [cid])

        r = self.client.get("/api/admin/dashboard")
        self.assertEqual(r.data["archived"], 1)

        r = self.client.delete(f"/api/admin/competitions/{cid}")
        self.assertEqual(r.status_code, 204)
        self.assertEqual(self.client.get(f"/api/admin/competitions/{cid}").status_code, 404)

    def test_validation_error_shape(self):
        r = self.client.post("/api/admin/competitions", {"title": ""}, format="json")
        self.assertEqual(r.status_code, 400)
        body = r.json()
        self.assertEqual(body["error"], "Titlul este obligatoriu.")
        self.assertIn("title", body["fields"])

    def test_document_upload_reorder_and_move(self):
        comp = Competition.objects.create(title="Post CS II", slug="post-cs-ii")
        ids = []
        for name in ("anunt", "bibliografie", "rezultate"):
            upload = SimpleUploadedFile(f"{name}.pdf", b"%PDF-1.4", content_type="application/pdf")
            r = self.client.post(
                f"/api/admin/competitions/{comp.id}/documents",
                {"title": name, "file": upload},
                format="multipart",
            )
            self.assertEqual(r.status_code, 201, r.content)
            ids.append(r.data["id"])
        self.assertTrue(r.data["url"].endswith(".pdf"))

        r = self.client.post(
            f"/api/admin/competitions/{comp.id}/documents/reorder",
            {"order": [{"id": ids[2], "order_index": 0}, {"id": ids[0], "order_index": 1}, {"id": ids[1], "order_index": 2}]},
            format="json",
        )
        self.assertEqual(r.status_code, 200)
        self.assertEqual([d["title"] for d in r.data["results"]], ["rezultate", "anunt", "bibliografie"])

        r = self.client.post(
            f"/api/admin/competitions/{comp.id}/documents/{ids[1]}/move", {"direction": "up"}, format="json"
        )
        self.assertEqual([d["title"] for d in r.data["results"]], ["rezultate", "bibliografie", "anunt"])

        public = APIClient().get("/api/competitions/post-cs-ii")
        self.assertEqual([d["title"] for d in public.data["documents"]], ["rezultate", "bibliografie", "anunt"])

    def test_upload_rejects_unsupported_type(self):
        comp = Competition.objects.create(title="Post CS II", slug="post-cs-ii")
        upload = SimpleUploadedFile("virus.exe", b"MZ")
        r = self.client.post(
            f"/api/admin/competitions/{comp.id}/documents", {"title": "x", "file": upload}, format="multipart"
        )
        self.assertEqual(r.status_code, 400)
        self.assertIn("file", r.json()["fields"])
        self.assertFalse(CompetitionDocument.objects.exists())

    def test_reorder_requires_list(self):
        comp = Competition.objects.create(title="Post CS II", slug="post-cs-ii")
        r = self.client.post(f"/api/admin/competitions/{comp.id}/documents/reorder", {}, format="json")
        self.assertEqual(r.status_code, 400)
