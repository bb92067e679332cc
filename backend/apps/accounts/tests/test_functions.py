from __future__ import annotations

from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from apps.accounts import functions
from apps.accounts.guards import CallerContext
from apps.accounts.models import UserRole
from apps.core.errors import Forbidden, NotFound, StoreError, ValidationFailed
from apps.core.models import AuditLog

User = get_user_model()

PASSWORD = "Concurs-2026-sigur"


def make_user(email, role=None):
    user = User.objects.create_user(username=email, email=email, password=PASSWORD)
    if role:
        UserRole.objects.create(user_id=user.id, role=role)
    return user


class CreateUserTests(TestCase):
    def setUp(self):
        self.admin = make_user("admin@icmpp.ro", UserRole.ROLE_ADMIN)
        self.caller = CallerContext(user=self.admin, role=UserRole.ROLE_ADMIN)

    def test_creates_account_and_role(self):
        out = functions.create_user(
            self.caller, {"email": " Editor@ICMPP.ro ", "password": PASSWORD, "role": "editor"}
        )
        self.assertTrue(out["success"])
        self.assertEqual(out["user"]["email"], "editor@icmpp.ro")
        user = User.objects.get(pk=out["user"]["id"])
        self.assertTrue(user.is_active)
        self.assertTrue(user.check_password(PASSWORD))
        self.assertEqual(UserRole.objects.get(user_id=user.id).role, "editor")
        self.assertTrue(AuditLog.objects.filter(action="user_create", target_id=str(user.id)).exists())

    def test_non_institutional_email_creates_nothing(self):
        with self.assertRaises(ValidationFailed):
            functions.create_user(self.caller, {"email": "x@gmail.com", "password": PASSWORD, "role": "editor"})
        self.assertFalse(User.objects.filter(email="x@gmail.com").exists())

    def test_rejects_bad_role_and_weak_password(self):
        with self.assertRaises(ValidationFailed):
            functions.create_user(self.caller, {"email": "a@icmpp.ro", "password": PASSWORD, "role": "owner"})
        with self.assertRaises(ValidationFailed):
            functions.create_user(self.caller, {"email": "a@icmpp.ro", "password": "", "role": "editor"})
        with self.assertRaises(ValidationFailed):
            functions.create_user(self.caller, {"email": "a@icmpp.ro", "password": "scurt", "role": "editor"})
        self.assertFalse(User.objects.filter(email="a@icmpp.ro").exists())

    def test_rejects_non_string_fields(self):
        for payload in (
            {"email": ["a@icmpp.ro"], "password": PASSWORD, "role": "editor"},
            {"email": None, "password": PASSWORD, "role": "editor"},
            {"email": "a@icmpp.ro", "password": ["x"], "role": "editor"},
        ):
            with self.assertRaises(ValidationFailed):
                functions.create_user(self.caller, payload)
        self.assertFalse(User.objects.filter(email="a@icmpp.ro").exists())

    def test_duplicate_email(self):
        with self.assertRaises(ValidationFailed):
            functions.create_user(self.caller, {"email": "admin@icmpp.ro", "password": PASSWORD, "role": "editor"})

    def test_failed_role_insert_removes_account(self):
        with mock.patch("apps.accounts.functions.assign_role", side_effect=DatabaseError("boom")):
            with self.assertRaises(StoreError) as ctx:
                functions.create_user(self.caller, {"email": "nou@icmpp.ro", "password": PASSWORD, "role": "editor"})
        self.assertEqual(str(ctx.exception.detail), "Eroare la atribuirea rolului.")
        self.assertFalse(User.objects.filter(email="nou@icmpp.ro").exists())
        self.assertFalse(UserRole.objects.exclude(user_id=self.admin.id).exists())

    def test_editor_cannot_create(self):
        editor = make_user("ed@icmpp.ro", UserRole.ROLE_EDITOR)
        with self.assertRaises(Forbidden):
            functions.create_user(
                CallerContext(user=editor, role=UserRole.ROLE_EDITOR),
                {"email": "x@icmpp.ro", "password": PASSWORD, "role": "editor"},
            )
        self.assertFalse(User.objects.filter(email="x@icmpp.ro").exists())


class ListAndDeleteUserTests(TestCase):
    def setUp(self):
        self.admin = make_user("admin@icmpp.ro", UserRole.ROLE_ADMIN)
        self.editor = make_user("editor@icmpp.ro", UserRole.ROLE_EDITOR)
        self.caller = CallerContext(user=self.admin, role=UserRole.ROLE_ADMIN)

    def test_list_skips_roles_without_account(self):
        UserRole.objects.create(user_id=424242, role=UserRole.ROLE_EDITOR)
        users = functions.list_users(self.caller)["users"]
        self.assertEqual(
            [(u["email"], u["role"]) for u in users],
            [("admin@icmpp.ro", "admin"), ("editor@icmpp.ro", "editor")],
        )
        self.assertEqual(users[1]["user_id"], self.editor.id)

    def test_list_by_non_admin_is_forbidden(self):
        with self.assertRaises(Forbidden):
            functions.list_users(CallerContext(user=self.editor, role=UserRole.ROLE_EDITOR))

    def test_delete_removes_role_and_account(self):
        out = functions.delete_user(self.caller, {"user_id": self.editor.id})
        self.assertTrue(out["success"])
        self.assertFalse(User.objects.filter(pk=self.editor.id).exists())
        self.assertFalse(UserRole.objects.filter(user_id=self.editor.id).exists())

    def test_delete_accepts_camel_case_id(self):
        functions.delete_user(self.caller, {"userId": str(self.editor.id)})
        self.assertFalse(User.objects.filter(pk=self.editor.id).exists())

    def test_delete_is_atomic(self):
        provider = mock.Mock()
        provider.delete_user.side_effect = DatabaseError("boom")
        with self.assertRaises(StoreError):
            functions.delete_user(self.caller, {"user_id": self.editor.id}, provider=provider)
        self.assertTrue(UserRole.objects.filter(user_id=self.editor.id).exists())

    def test_delete_rejects_self_and_bad_ids(self):
        with self.assertRaises(ValidationFailed):
            functions.delete_user(self.caller, {"user_id": self.admin.id})
        with self.assertRaises(ValidationFailed):
            functions.delete_user(self.caller, {"user_id": "abc"})
        with self.assertRaises(ValidationFailed):
            functions.delete_user(self.caller, {})
        with self.assertRaises(NotFound):
            functions.delete_user(self.caller, {"user_id": 987654})
