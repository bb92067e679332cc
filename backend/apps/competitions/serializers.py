from __future__ import annotations

from rest_framework import serializers

from .listing import year_of
from .models import Competition, CompetitionDocument
from .storage import public_url


class CompetitionSerializer(serializers.ModelSerializer):
    year = serializers.SerializerMethodField()

    class Meta:
        model = Competition
        fields = [
            "id",
            "title",
            "slug",
            "description",
            "status",
            "start_date",
            "end_date",
            "keywords",
            "auto_archive",
            "year",
            "created_at",
            "updated_at",
        ]

    def get_year(self, obj):
        return year_of(obj)


class DocumentSerializer(serializers.ModelSerializer):
    competition_id = serializers.IntegerField(read_only=True)
    url = serializers.SerializerMethodField()

    class Meta:
        model = CompetitionDocument
        fields = [
            "id",
            "competition_id",
            "title",
            "doc_date",
            "description",
            "file_path",
            "file_name",
            "file_type",
            "order_index",
            "url",
            "created_at",
        ]

    def get_url(self, obj):
        return public_url(obj.file_path)


class CompetitionDetailSerializer(CompetitionSerializer):
    documents = serializers.SerializerMethodField()

    class Meta(CompetitionSerializer.Meta):
        fields = CompetitionSerializer.Meta.fields + ["documents"]

    def get_documents(self, obj):
        docs = getattr(obj, "document_list", None)
        if docs is None:
            docs = obj.documents.order_by("order_index", "id")
        return DocumentSerializer(docs, many=True).data


class CompetitionWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Competition
        fields = ["title", "slug", "description", "status", "start_date", "end_date", "keywords", "auto_archive"]
        extra_kwargs = {
            "title": {"error_messages": {"required": "Titlul este obligatoriu.", "blank": "Titlul este obligatoriu."}},
            "slug": {
                # uniqueness is checked in validate_slug with a readable message
                "validators": [],
                "error_messages": {
                    "required": "Slug-ul este obligatoriu.",
                    "blank": "Slug-ul este obligatoriu.",
                    "invalid": "Slug-ul poate conține doar litere, cifre și cratime.",
                }
            },
            "status": {"error_messages": {"invalid_choice": "Status invalid."}},
        }

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Titlul este obligatoriu.")
        return value

    def validate_slug(self, value):
        qs = Competition.objects.filter(slug=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Există deja un concurs cu acest slug.")
        return value

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "Data de final nu poate fi înaintea datei de început."})
        return attrs


class DocumentWriteSerializer(serializers.ModelSerializer):
    order_index = serializers.IntegerField(min_value=0, required=False)

    class Meta:
        model = CompetitionDocument
        fields = ["title", "doc_date", "description", "order_index"]
        extra_kwargs = {
            "title": {
                "error_messages": {
                    "required": "Titlul documentului este obligatoriu.",
                    "blank": "Titlul documentului este obligatoriu.",
                }
            },
        }

    def validate_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Titlul documentului este obligatoriu.")
        return value


class ReorderItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    order_index = serializers.IntegerField(min_value=0)
