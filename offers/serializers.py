"""
offers/serializers.py

DRF serializers that define the JSON shapes of the offers API.
Keep these thin and explicit; they are our API contract.

- OfferSerializer:        full admin record (camelCase keys + computed isVisible)
- PublicOfferSerializer:  the public listing subset
- OfferInputSerializer:   create/PATCH payload → OfferFields (presence-aware)
- LoginSerializer / UploadResultSerializer: docs + response shapes
"""
from rest_framework import serializers

from .repository import OfferFields
from .visibility import is_visible


class OfferSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True, allow_null=True)
    isActive = serializers.BooleanField(source="is_active", read_only=True)
    startAt = serializers.DateTimeField(source="start_at", read_only=True, allow_null=True)
    endAt = serializers.DateTimeField(source="end_at", read_only=True, allow_null=True)
    thumbnailPath = serializers.CharField(source="thumbnail_path", read_only=True, allow_null=True)
    pdfPath = serializers.CharField(source="pdf_path", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)
    isVisible = serializers.SerializerMethodField()

    def get_isVisible(self, obj) -> bool:
        now = self.context.get("now")
        return is_visible(obj, now) if now is not None else False


class PublicOfferSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True, allow_null=True)
    startAt = serializers.DateTimeField(source="start_at", read_only=True, allow_null=True)
    endAt = serializers.DateTimeField(source="end_at", read_only=True, allow_null=True)
    thumbnailPath = serializers.CharField(source="thumbnail_path", read_only=True, allow_null=True)
    pdfPath = serializers.CharField(source="pdf_path", read_only=True, allow_null=True)


class OfferInputSerializer(serializers.Serializer):
    """
    Always used with partial=True: only keys actually sent end up in
    validated_data, so "omitted" and "sent as null/false" stay distinct.
    Whether title is required is the repository's call (create vs update).
    """
    title = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True, trim_whitespace=False)
    isActive = serializers.BooleanField(source="is_active", required=False)
    startAt = serializers.DateTimeField(source="start_at", required=False, allow_null=True)
    endAt = serializers.DateTimeField(source="end_at", required=False, allow_null=True)
    thumbnailPath = serializers.CharField(source="thumbnail_path", required=False, allow_null=True,
                                          allow_blank=True, max_length=500)
    pdfPath = serializers.CharField(source="pdf_path", required=False, allow_null=True,
                                    allow_blank=True, max_length=500)

    def to_fields(self) -> OfferFields:
        return OfferFields(**self.validated_data)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class UploadResultSerializer(serializers.Serializer):
    path = serializers.CharField()
    mimeType = serializers.CharField(source="mime_type")
    originalName = serializers.CharField(source="original_name")
