from __future__ import annotations

from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command
from django.test import TestCase

from apps.accounts.models import UserRole, role_for

User = get_user_model()


class CreateAdminCommandTests(TestCase):
    def test_creates_then_updates(self):
        out = StringIO()
        call_command("create_admin", "--email", "Sef@icmpp.ro", "--password", "Concurs-2026-sigur", stdout=out)
        user = User.objects.get(username="sef@icmpp.ro")
        self.assertEqual(role_for(user), UserRole.ROLE_ADMIN)
        self.assertIn("Created", out.getvalue())

        call_command(
            "create_admin", "--email", "sef@icmpp.ro", "--password", "Alt-concurs-2026", "--role", "editor", stdout=out
        )
        user.refresh_from_db()
        self.assertTrue(user.check_password("Alt-concurs-2026"))
        self.assertEqual(role_for(user), UserRole.ROLE_EDITOR)
        self.assertEqual(UserRole.objects.filter(user_id=user.id).count(), 1)

    def test_rejects_external_email(self):
        with self.assertRaises(CommandError):
            call_command("create_admin", "--email", "sef@gmail.com", "--password", "Concurs-2026-sigur")
        self.assertFalse(User.objects.exists())
