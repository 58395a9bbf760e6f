from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="hoteldesk API",
        default_version="v1",
        description="호텔 객실/예약 관리 및 카카오 챗봇 스킬 서버",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    path("v1/customers/", include("customers.urls")),
    path("v1/rooms/", include("rooms.urls")),
    path("v1/reservations/", include("reservations.urls")),
    path("v1/", include("chatbot.urls")),
    path("swagger/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
]
