from django.urls import path
from .views import ReservationDetail, ReservationList, ReservationTypeDetail, ReservationTypeList

urlpatterns = [
    # Reservation api 관련
    path("", ReservationList.as_view(), name="reservation-list"),
    path("<int:reservation_id>/", ReservationDetail.as_view(), name="reservation-detail"),

    # ReservationType api 관련
    path("types/", ReservationTypeList.as_view(), name="reservation-type-list"),
    path("types/<str:type_id>/", ReservationTypeDetail.as_view(), name="reservation-type-detail"),
]
