from __future__ import annotations

from django.db import models
from django.utils import timezone


class Competition(models.Model):
    STATUS_ACTIVE = "active"
    STATUS_ARCHIVED = "archived"
    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Activ"),
        (STATUS_ARCHIVED, "Arhivat"),
    ]

    title = models.CharField(max_length=300)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True, default="")
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    keywords = models.CharField(max_length=500, blank=True, default="")  # comma-separated
    auto_archive = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["status", "-created_at"], name="competition_status_created_idx")]

    def __str__(self) -> str:
        return self.title

    def keyword_list(self) -> list[str]:
        return [k.strip() for k in (self.keywords or "").split(",") if k.strip()]


class CompetitionDocument(models.Model):
    competition = models.ForeignKey(Competition, on_delete=models.CASCADE, related_name="documents")
    title = models.CharField(max_length=300)
    doc_date = models.DateField(null=True, blank=True)
    description = models.TextField(blank=True, default="")
    file_path = models.CharField(max_length=500)  # key in the default storage
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=120, blank=True, default="")
    order_index = models.IntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["order_index", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["competition", "order_index"],
                name="uniq_document_order_per_competition",
            )
        ]

    def __str__(self) -> str:
        return f"{self.title} (#{self.order_index} of {self.competition_id})"
