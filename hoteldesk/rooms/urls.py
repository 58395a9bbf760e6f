from django.urls import path
from .views import DailyInventory, InventoryAdjustmentList, RoomDetail, RoomImage, RoomList

urlpatterns = [
    path("", RoomList.as_view(), name="room-list"),  # GET, POST /v1/rooms/
    path("<int:room_id>/", RoomDetail.as_view(), name="room-detail"),  # GET, PUT, DELETE /v1/rooms/<room_id>/
    path("<int:room_id>/image/", RoomImage.as_view(), name="room-image"),  # GET /v1/rooms/<room_id>/image/
    path(
        "inventory-adjustments/",
        InventoryAdjustmentList.as_view(),
        name="inventory-adjustment-list",
    ),  # GET, POST /v1/rooms/inventory-adjustments/
    path("inventory/", DailyInventory.as_view(), name="daily-inventory"),  # GET /v1/rooms/inventory/
]
