from django.contrib import admin
from .models import UserRole


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ("id", "user_id", "role")
    list_filter = ("role",)
    search_fields = ("user_id",)
