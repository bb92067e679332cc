from __future__ import annotations

import getpass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from apps.accounts.models import UserRole
from apps.accounts.provider import institutional_domain, is_institutional_email, normalize_email


class Command(BaseCommand):
    help = "Create or update an admin-panel account with the 'admin' role (interactive or via flags)."

    def add_arguments(self, parser):
        parser.add_argument("--email", type=str, help="Institutional email address")
        parser.add_argument("--password", type=str, help="Password (use with caution)")
        parser.add_argument("--role", type=str, default=UserRole.ROLE_ADMIN, choices=[UserRole.ROLE_ADMIN, UserRole.ROLE_EDITOR])

    def handle(self, *args, **options):
        User = get_user_model()
        email = options.get("email")
        password = options.get("password")
        role = options["role"]

        if not email:
            email = input("Email: ").strip()
        email = normalize_email(email)
        if not is_institutional_email(email):
            raise CommandError(f"Email must end with @{institutional_domain()}.")
        if not password:
            pw1 = getpass.getpass("Password (min 8 chars): ")
            pw2 = getpass.getpass("Confirm password: ")
            if pw1 != pw2:
                raise CommandError("Passwords do not match.")
            password = pw1

        if len(password) < 8:
            raise CommandError("Password too short. Must be at least 8 characters.")

        user, created = User.objects.get_or_create(username=email, defaults={"email": email})
        user.email = email
        user.is_active = True
        user.set_password(password)
        user.save()
        UserRole.objects.update_or_create(user_id=user.pk, defaults={"role": role})

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created {role} account '{email}'"))
        else:
            self.stdout.write(self.style.WARNING(f"Updated existing account '{email}' (role: {role})"))
