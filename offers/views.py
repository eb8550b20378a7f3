"""
offers/views.py

Endpoints:
Admin (Bearer token from /admin/login required unless noted)
- POST   /admin/login          (public) → {"token": "..."}
- GET    /admin/offers         → every offer, newest first, with isVisible
- POST   /admin/offers         → create (title required) → 201
- PATCH  /admin/offers/{id}    → partial update (omitted fields untouched)
- DELETE /admin/offers/{id}    → {"ok": true}; asset files reclaimed best-effort
- POST   /admin/upload         → multipart field "file" → {path, mimeType, originalName}

Public
- GET    /api/offers?limit=N   → visible offers, newest first (default 3, max 50)
- GET    /uploads/<name>       → uploaded asset bytes
- GET    /health               → {"ok": true}

Errors from any endpoint are shaped {"error": "<message>"} by
offers.handlers.api_exception_handler.
"""
import logging

from django.conf import settings
from django.views.static import serve
from rest_framework import permissions, status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from . import services
from .errors import AuthError, ValidationError
from .models import Offer
from .serializers import (
    LoginSerializer,
    OfferInputSerializer,
    OfferSerializer,
    PublicOfferSerializer,
    UploadResultSerializer,
)
from .visibility import clamp_limit, list_public

# Swagger / OpenAPI
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

logger = logging.getLogger(__name__)


ERROR_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={"error": openapi.Schema(type=openapi.TYPE_STRING)},
)

# Documented body for create/PATCH. Every key is optional on PATCH;
# sending null clears a field, leaving a key out keeps the stored value.
OFFER_REQUEST_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "title": openapi.Schema(type=openapi.TYPE_STRING, description="Required on create; cannot be blank."),
        "description": openapi.Schema(type=openapi.TYPE_STRING, x_nullable=True),
        "isActive": openapi.Schema(type=openapi.TYPE_BOOLEAN, description="Manual on/off switch (default false)."),
        "startAt": openapi.Schema(type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME, x_nullable=True,
                                  description="Visible from this instant (inclusive). null = no lower bound."),
        "endAt": openapi.Schema(type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME, x_nullable=True,
                                description="Visible until this instant (inclusive). null = no upper bound."),
        "thumbnailPath": openapi.Schema(type=openapi.TYPE_STRING, x_nullable=True,
                                        description="Path returned by /admin/upload."),
        "pdfPath": openapi.Schema(type=openapi.TYPE_STRING, x_nullable=True,
                                  description="Path returned by /admin/upload."),
    },
    example={
        "title": "Summer sale",
        "description": "Up to 30% off",
        "isActive": True,
        "startAt": "2025-06-01T00:00:00Z",
        "endAt": "2025-06-30T23:59:59Z",
        "thumbnailPath": None,
        "pdfPath": None,
    },
)


def _input_fields(request):
    ser = OfferInputSerializer(data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    return ser.to_fields()


# ----------------------------------------------------------------------------- #
# Admin: login                                                                  #
# ----------------------------------------------------------------------------- #
class LoginRateThrottle(AnonRateThrottle):
    scope = "login"


class LoginView(APIView):
    """POST /admin/login: exchange the admin username/password for a Bearer token."""
    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    throttle_classes = [LoginRateThrottle]

    @swagger_auto_schema(
        tags=["Admin"],
        operation_description="Log in as the admin. The returned token is valid for 12 hours.",
        request_body=LoginSerializer,
        security=[],
        responses={
            200: openapi.Response("Token", openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={"token": openapi.Schema(type=openapi.TYPE_STRING)},
            )),
            400: openapi.Response("Missing credentials", ERROR_SCHEMA),
            401: openapi.Response("Invalid credentials", ERROR_SCHEMA),
        },
    )
    def post(self, request):
        data = request.data if hasattr(request.data, "get") else {}
        username = data.get("username")
        password = data.get("password")
        if not username or not password:
            raise ValidationError("Missing credentials.")

        try:
            token = services.auth_gate().login(str(username), str(password))
        except AuthError:
            logger.warning("Failed admin login attempt")
            raise
        return Response({"token": token})


# ----------------------------------------------------------------------------- #
# Admin: offers CRUD                                                            #
# ----------------------------------------------------------------------------- #
class AdminOfferListView(APIView):
    """GET/POST /admin/offers"""
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        tags=["Admin"],
        operation_description="List every offer (newest first) with its computed `isVisible` flag.",
        responses={200: OfferSerializer(many=True), 401: openapi.Response("Unauthorized", ERROR_SCHEMA)},
    )
    def get(self, request):
        offers = services.offer_repository().list()
        ser = OfferSerializer(offers, many=True, context={"now": services.current_time()})
        return Response(ser.data)

    @swagger_auto_schema(
        tags=["Admin"],
        operation_description="Create an offer. Only `title` is required; omitted optional fields stay empty.",
        request_body=OFFER_REQUEST_SCHEMA,
        responses={
            201: OfferSerializer,
            400: openapi.Response("Bad Request", ERROR_SCHEMA),
            401: openapi.Response("Unauthorized", ERROR_SCHEMA),
        },
    )
    def post(self, request):
        offer = services.offer_repository().create(_input_fields(request))
        ser = OfferSerializer(offer, context={"now": services.current_time()})
        return Response(ser.data, status=status.HTTP_201_CREATED)


class AdminOfferDetailView(APIView):
    """PATCH/DELETE /admin/offers/{id}"""
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        tags=["Admin"],
        operation_description=(
            "Partially update an offer. Keys you send overwrite (null clears); "
            "keys you leave out are not touched. `isActive: false` is applied."
        ),
        request_body=OFFER_REQUEST_SCHEMA,
        responses={
            200: OfferSerializer,
            400: openapi.Response("Bad Request", ERROR_SCHEMA),
            401: openapi.Response("Unauthorized", ERROR_SCHEMA),
            404: openapi.Response("Not Found", ERROR_SCHEMA),
        },
    )
    def patch(self, request, pk):
        offer = services.offer_repository().update(pk, _input_fields(request))
        ser = OfferSerializer(offer, context={"now": services.current_time()})
        return Response(ser.data)

    @swagger_auto_schema(
        tags=["Admin"],
        operation_description="Delete an offer permanently; its uploaded files are removed best-effort.",
        responses={
            200: openapi.Response("Deleted", openapi.Schema(
                type=openapi.TYPE_OBJECT,
                properties={"ok": openapi.Schema(type=openapi.TYPE_BOOLEAN)},
            )),
            401: openapi.Response("Unauthorized", ERROR_SCHEMA),
            404: openapi.Response("Not Found", ERROR_SCHEMA),
        },
    )
    def delete(self, request, pk):
        services.offer_repository().delete(pk)
        return Response({"ok": True})


# ----------------------------------------------------------------------------- #
# Admin: upload                                                                 #
# ----------------------------------------------------------------------------- #
class AssetUploadView(APIView):
    """
    POST /admin/upload (multipart, field "file")

    Accepts PDF/PNG/JPEG/WEBP/GIF up to 15 MB, judged by the declared content
    type only. Returns the path to put into thumbnailPath/pdfPath.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @swagger_auto_schema(
        tags=["Admin"],
        operation_description="Upload a thumbnail or PDF. The returned `path` is also its public URL path.",
        manual_parameters=[
            openapi.Parameter("file", openapi.IN_FORM, type=openapi.TYPE_FILE, required=True,
                              description="PDF, PNG, JPEG, WEBP or GIF (max 15 MB)"),
        ],
        responses={
            200: UploadResultSerializer,
            400: openapi.Response("No file / unsupported type / too large", ERROR_SCHEMA),
            401: openapi.Response("Unauthorized", ERROR_SCHEMA),
        },
    )
    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            raise ValidationError("No file uploaded.")
        stored = services.asset_store().store(upload, upload.content_type, upload.name)
        return Response(UploadResultSerializer(stored).data)


# ----------------------------------------------------------------------------- #
# Public                                                                        #
# ----------------------------------------------------------------------------- #
class PublicOfferListView(APIView):
    """GET /api/offers: offers visible right now, newest first. No auth."""
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(
        tags=["Public"],
        operation_description=(
            "Offers that are active and inside their start/end window right now.\n\n"
            "- `?limit=` number of offers (default 3, max 50)"
        ),
        manual_parameters=[
            openapi.Parameter("limit", openapi.IN_QUERY, type=openapi.TYPE_INTEGER,
                              description="How many offers to return (default 3, max 50)"),
        ],
        security=[],
        responses={200: PublicOfferSerializer(many=True)},
    )
    def get(self, request):
        limit = clamp_limit(
            request.query_params.get("limit"),
            default=settings.OFFERS_PUBLIC_DEFAULT_LIMIT,
            maximum=settings.OFFERS_PUBLIC_MAX_LIMIT,
        )
        offers = list_public(Offer.objects.all(), services.current_time(), limit)
        return Response(PublicOfferSerializer(offers, many=True).data)


@swagger_auto_schema(method="get", tags=["Public"], security=[], responses={200: "OK"})
@api_view(["GET"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def health(request):
    return Response({"ok": True})


def serve_asset(request, path):
    """Serve an uploaded file from OFFERS_UPLOAD_DIR (404 if missing)."""
    return serve(request, path, document_root=settings.OFFERS_UPLOAD_DIR)
