from django.contrib import admin

from .models import Competition, CompetitionDocument


class CompetitionDocumentInline(admin.TabularInline):
    model = CompetitionDocument
    extra = 0
    fields = ("order_index", "title", "doc_date", "file_name", "file_type")
    readonly_fields = ("file_name", "file_type")


@admin.register(Competition)
class CompetitionAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "slug", "status", "start_date", "end_date", "auto_archive", "created_at")
    list_filter = ("status", "auto_archive")
    search_fields = ("title", "slug", "keywords")
    prepopulated_fields = {"slug": ("title",)}
    inlines = [CompetitionDocumentInline]


@admin.register(CompetitionDocument)
class CompetitionDocumentAdmin(admin.ModelAdmin):
    list_display = ("id", "competition", "title", "order_index", "file_name", "created_at")
    search_fields = ("title", "file_name", "competition__title")
