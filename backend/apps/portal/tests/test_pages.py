from __future__ import annotations

import shutil
import tempfile
from datetime import date

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings

from apps.accounts.models import UserRole
from apps.competitions.models import Competition, CompetitionDocument

User = get_user_model()

PASSWORD = "Concurs-2026-sigur"


class PublicPagesTests(TestCase):
    def setUp(self):
        cache.clear()
        self.active = Competition.objects.create(
            title="Post CS II", slug="post-cs-ii", start_date=date(2026, 3, 1), end_date=date(2026, 4, 15)
        )
        Competition.objects.create(title="Asistent 2025", slug="asistent-2025", status=Competition.STATUS_ARCHIVED)

    def test_list_defaults_to_active_tab(self):
        r = self.client.get("/concursuri/")
        self.assertEqual(r.status_code, 200)
        self.assertContains(r, "Post CS II")
        self.assertNotContains(r, "Asistent 2025")
        self.assertContains(r, "01-03-2026")

        r = self.client.get("/concursuri/", {"status": "archived"})
        self.assertContains(r, "Asistent 2025")
        self.assertNotContains(r, "Post CS II")

    def test_search_without_results(self):
        r = self.client.get("/", {"q": "inexistent"})
        self.assertContains(r, "Nu există concursuri active pentru criteriile selectate.")

    def test_detail_and_missing(self):
        r = self.client.get("/concursuri/post-cs-ii/")
        self.assertContains(r, "1 martie 2026")
        self.assertContains(r, "Nu există documente atașate acestui concurs.")

        r = self.client.get("/concursuri/nu-exista/")
        self.assertEqual(r.status_code, 404)
        self.assertContains(r, "Concurs negăsit", status_code=404)

    def test_regular_pages_deny_framing(self):
        r = self.client.get("/concursuri/")
        self.assertEqual(r.headers.get("X-Frame-Options"), "DENY")
        self.assertContains(r, "Institutul de Chimie")

    def test_embed_pages_are_frameable_without_chrome(self):
        for url in ("/embed/concursuri/", "/embed/concursuri/post-cs-ii/"):
            r = self.client.get(url)
            self.assertEqual(r.status_code, 200)
            self.assertNotIn("X-Frame-Options", r.headers)
            self.assertNotContains(r, "Institutul de Chimie")
        r = self.client.get("/embed/concursuri/")
        self.assertContains(r, 'href="/embed/concursuri/post-cs-ii/"')


class AdminConsoleAccessTests(TestCase):
    def setUp(self):
        cache.clear()
        self.editor = User.objects.create_user(username="ed@icmpp.ro", email="ed@icmpp.ro", password=PASSWORD)
        UserRole.objects.create(user_id=self.editor.id, role=UserRole.ROLE_EDITOR)

    def test_anonymous_is_redirected_to_login(self):
        for url in ("/admin/", "/admin/concursuri/", "/admin/concursuri/nou/", "/admin/utilizatori/"):
            r = self.client.get(url)
            self.assertEqual(r.status_code, 302, url)
            self.assertTrue(r["Location"].startswith("/admin/login/"), r["Location"])

    def test_account_without_role_is_redirected(self):
        User.objects.create_user(username="x@icmpp.ro", email="x@icmpp.ro", password=PASSWORD)
        self.client.login(username="x@icmpp.ro", password=PASSWORD)
        r = self.client.get("/admin/")
        self.assertEqual(r.status_code, 302)
        self.assertTrue(r["Location"].startswith("/admin/login/"))

    def test_login_flow(self):
        r = self.client.post("/admin/login/", {"email": "ed@gmail.com", "password": PASSWORD})
        self.assertEqual(r.status_code, 200)
        self.assertContains(r, "Doar utilizatorii cu email")

        r = self.client.post("/admin/login/", {"email": "ed@icmpp.ro", "password": "parola-gresita"})
        self.assertContains(r, "Email sau parolă incorectă.")

        r = self.client.post("/admin/login/", {"email": "ed@icmpp.ro", "password": PASSWORD, "next": "/admin/concursuri/"})
        self.assertRedirects(r, "/admin/concursuri/")

        r = self.client.post("/admin/logout/")
        self.assertRedirects(r, "/admin/login/")
        self.assertEqual(self.client.get("/admin/").status_code, 302)

    def test_login_rejects_external_next(self):
        r = self.client.post("/admin/login/", {"email": "ed@icmpp.ro", "password": PASSWORD, "next": "https://evil.example/"})
        self.assertRedirects(r, "/admin/", fetch_redirect_response=False)

    def test_editor_cannot_open_user_manager(self):
        self.client.login(username="ed@icmpp.ro", password=PASSWORD)
        r = self.client.get("/admin/utilizatori/")
        self.assertRedirects(r, "/admin/")


class AdminCompetitionPagesTests(TestCase):
    def setUp(self):
        cache.clear()
        self.media = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media)
        self.override.enable()
        self.editor = User.objects.create_user(username="ed@icmpp.ro", email="ed@icmpp.ro", password=PASSWORD)
        UserRole.objects.create(user_id=self.editor.id, role=UserRole.ROLE_EDITOR)
        self.client.login(username="ed@icmpp.ro", password=PASSWORD)

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media, ignore_errors=True)

    def _create(self, **extra):
        data = {"title": "Concurs Poștal ÎȚ", "slug": "", "status": "active", "description": "", "keywords": ""}
        data.update(extra)
        return self.client.post("/admin/concursuri/nou/", data)

    def test_create_generates_slug_and_redirects_to_editor(self):
        r = self._create()
        competition = Competition.objects.get()
        self.assertEqual(competition.slug, "concurs-postal-it")
        self.assertRedirects(r, f"/admin/concursuri/{competition.id}/")

    def test_create_shows_field_errors(self):
        self._create()
        r = self._create(slug="concurs-postal-it")
        self.assertEqual(r.status_code, 200)
        self.assertContains(r, "Există deja un concurs cu acest slug.")
        self.assertEqual(Competition.objects.count(), 1)

    def test_edit_and_document_manager(self):
        self._create()
        competition = Competition.objects.get()
        url = f"/admin/concursuri/{competition.id}/"

        r = self.client.post(url, {"action": "save", "title": "Post CS II", "slug": "post-cs-ii", "status": "archived"})
        self.assertRedirects(r, url)
        competition.refresh_from_db()
        self.assertEqual((competition.slug, competition.status), ("post-cs-ii", "archived"))

        for name in ("anunt", "rezultate"):
            upload = SimpleUploadedFile(f"{name}.pdf", b"%PDF-1.4", content_type="application/pdf")
            r = self.client.post(url, {"action": "upload", "title": name, "file": upload})
            self.assertRedirects(r, url)
        first, second = CompetitionDocument.objects.order_by("order_index")

        self.client.post(url, {"action": "move", "document_id": second.id, "direction": "up"})
        self.assertEqual(
            list(CompetitionDocument.objects.order_by("order_index").values_list("title", flat=True)),
            ["rezultate", "anunt"],
        )

        self.client.post(url, {"action": "update_document", "document_id": first.id, "title": "Anunț concurs"})
        first.refresh_from_db()
        self.assertEqual(first.title, "Anunț concurs")

        page = self.client.get(url)
        self.assertContains(page, "Anunț concurs")
        self.assertContains(page, "rezultate.pdf")

        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(url, {"action": "delete_document", "document_id": second.id})
        self.assertEqual(CompetitionDocument.objects.count(), 1)

        r = self.client.post(url, {"action": "delete"})
        self.assertRedirects(r, "/admin/concursuri/")
        self.assertFalse(Competition.objects.exists())

    def test_document_actions_are_scoped_to_the_edited_competition(self):
        other = Competition.objects.create(title="Alt concurs", slug="alt-concurs")
        foreign = CompetitionDocument.objects.create(
            competition=other, title="strain", file_path="x/strain.pdf", file_name="strain.pdf", order_index=0
        )
        self._create()
        url = f"/admin/concursuri/{Competition.objects.get(slug='concurs-postal-it').id}/"

        r = self.client.post(
            url, {"action": "update_document", "document_id": foreign.id, "title": "schimbat"}, follow=True
        )
        self.assertContains(r, "Documentul nu a fost găsit.")
        self.client.post(url, {"action": "delete_document", "document_id": foreign.id})

        foreign.refresh_from_db()
        self.assertEqual(foreign.title, "strain")

    def test_upload_rejects_unsupported_type(self):
        self._create()
        competition = Competition.objects.get()
        upload = SimpleUploadedFile("virus.exe", b"MZ")
        r = self.client.post(f"/admin/concursuri/{competition.id}/", {"action": "upload", "title": "x", "file": upload})
        self.assertEqual(r.status_code, 400)
        self.assertContains(r, "Format de fișier neacceptat", status_code=400)

    def test_list_search(self):
        self._create()
        self._create(title="Tehnician laborator", slug="tehnician")
        r = self.client.get("/admin/concursuri/", {"q": "Tehnician"})
        self.assertContains(r, "Tehnician laborator")
        self.assertNotContains(r, "Concurs Poștal")

    def test_unknown_competition_is_404(self):
        self.assertEqual(self.client.get("/admin/concursuri/999/").status_code, 404)


class AdminUsersPageTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(username="admin@icmpp.ro", email="admin@icmpp.ro", password=PASSWORD)
        UserRole.objects.create(user_id=self.admin.id, role=UserRole.ROLE_ADMIN)
        self.client.login(username="admin@icmpp.ro", password=PASSWORD)

    def test_page_prefills_temporary_password(self):
        r = self.client.get("/admin/utilizatori/")
        self.assertEqual(r.status_code, 200)
        self.assertContains(r, "admin@icmpp.ro")
        self.assertEqual(len(r.context["form"].initial["password"]), 12)

    def test_create_and_delete(self):
        r = self.client.post(
            "/admin/utilizatori/",
            {"action": "create", "email": "nou@icmpp.ro", "password": PASSWORD, "role": "editor"},
            follow=True,
        )
        self.assertContains(r, "nou@icmpp.ro")
        created = User.objects.get(email="nou@icmpp.ro")
        self.assertEqual(UserRole.objects.get(user_id=created.id).role, "editor")

        r = self.client.post("/admin/utilizatori/", {"action": "delete", "user_id": created.id}, follow=True)
        self.assertFalse(User.objects.filter(pk=created.id).exists())
        self.assertContains(r, "Utilizatorul a fost șters.")

    def test_create_rejects_external_domain(self):
        r = self.client.post(
            "/admin/utilizatori/",
            {"action": "create", "email": "nou@gmail.com", "password": PASSWORD, "role": "editor"},
        )
        self.assertEqual(r.status_code, 200)
        self.assertContains(r, "Email-ul trebuie să fie @icmpp.ro")
        self.assertFalse(User.objects.filter(email="nou@gmail.com").exists())

    def test_cannot_delete_self(self):
        r = self.client.post("/admin/utilizatori/", {"action": "delete", "user_id": self.admin.id}, follow=True)
        self.assertContains(r, "Nu vă puteți șterge propriul cont.")
        self.assertTrue(User.objects.filter(pk=self.admin.id).exists())
