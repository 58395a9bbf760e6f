from django.db.models import ProtectedError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

# Swagger 관련 import
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from reservations.store import get_store

from .calendar import to_local_date, today
from .images import parse_data_url
from .inventory import EFFECTIVE_STATUSES, daily_inventory, effective_inventory, set_adjustment, sold_count
from .models import Room
from .serializers import RoomInventoryAdjustmentSerializer, RoomSerializer

# 로깅 파일
from logger import get_logger

logger = get_logger("hoteldesk.rooms")


class RoomList(APIView):
    @swagger_auto_schema(
        operation_summary="객실 목록 조회",
        operation_description="sort_order 순으로 객실 목록을 반환합니다.",
        responses={200: RoomSerializer(many=True)},
    )
    def get(self, request):
        rooms = Room.objects.all().order_by("sort_order", "room_id")
        serializer = RoomSerializer(rooms, many=True)
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_summary="객실 생성",
        operation_description="""
        새 객실을 등록합니다.
        - prices: monday ~ sunday 7개 요일 모두 {stay_price, day_use_price}
        - sort_order 를 생략하면 마지막 순서로 추가됩니다.
        """,
        request_body=RoomSerializer,
        responses={201: RoomSerializer, 400: "필수값 누락 또는 가격표 오류"},
    )
    def post(self, request):
        serializer = RoomSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        room = serializer.save()
        logger.info(f"객실 생성: {room.room_id} {room.room_type}")
        return Response(RoomSerializer(room).data, status=201)


class RoomDetail(APIView):
    @swagger_auto_schema(
        operation_summary="객실 상세 조회",
        responses={200: RoomSerializer, 404: "존재하지 않는 객실"},
    )
    def get(self, request, room_id):
        room = get_object_or_404(Room, room_id=room_id)
        return Response(RoomSerializer(room).data)

    @swagger_auto_schema(
        operation_summary="객실 수정",
        operation_description="전달한 필드만 수정합니다.",
        request_body=RoomSerializer,
        responses={200: RoomSerializer, 400: "입력값 오류", 404: "존재하지 않는 객실"},
    )
    def put(self, request, room_id):
        room = get_object_or_404(Room, room_id=room_id)
        serializer = RoomSerializer(room, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        serializer.save()
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_summary="객실 삭제",
        responses={204: "삭제 완료", 400: "예약이 있는 객실", 404: "존재하지 않는 객실"},
    )
    def delete(self, request, room_id):
        room = get_object_or_404(Room, room_id=room_id)
        try:
            room.delete()
        except ProtectedError:
            return Response(
                {"error": "예약 내역이 있는 객실은 삭제할 수 없습니다."}, status=400
            )
        return Response(status=status.HTTP_204_NO_CONTENT)


class InventoryAdjustmentList(APIView):
    @swagger_auto_schema(
        operation_summary="재고 조정 목록 조회",
        operation_description="date 하루 또는 start ~ end 기간(양끝 포함)의 재고 조정 내역을 반환합니다.",
        manual_parameters=[
            openapi.Parameter("date", openapi.IN_QUERY, type=openapi.TYPE_STRING, format="date"),
            openapi.Parameter("start", openapi.IN_QUERY, type=openapi.TYPE_STRING, format="date"),
            openapi.Parameter("end", openapi.IN_QUERY, type=openapi.TYPE_STRING, format="date"),
            openapi.Parameter("room_id", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: RoomInventoryAdjustmentSerializer(many=True), 400: "날짜 형식 오류"},
    )
    def get(self, request):
        day = request.query_params.get("date")
        start = request.query_params.get("start")
        end = request.query_params.get("end")
        room_id = request.query_params.get("room_id")

        try:
            if day:
                start = end = to_local_date(day)
            else:
                start = to_local_date(start) if start else None
                end = to_local_date(end) if end else None
            room_id = int(room_id) if room_id else None
        except ValueError:
            return Response({"error": "날짜 또는 room_id 형식이 올바르지 않습니다."}, status=400)

        adjustments = get_store().get_room_inventory_adjustments(
            room_id=room_id, start=start, end=end
        )
        serializer = RoomInventoryAdjustmentSerializer(adjustments, many=True)
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_summary="재고 조정 저장",
        operation_description="""
        (객실, 날짜) 재고 조정치를 저장합니다.
        - delta = 0 이면 조정을 삭제합니다.
        - 조정 후 재고가 이미 판매된 객실 수보다 적으면 400
        """,
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "room_id": openapi.Schema(type=openapi.TYPE_INTEGER),
                "date": openapi.Schema(type=openapi.TYPE_STRING, format="date"),
                "delta": openapi.Schema(type=openapi.TYPE_INTEGER),
            },
            required=["room_id", "date", "delta"],
        ),
        responses={200: "저장된 조정치와 실재고/판매수", 400: "입력값 오류 또는 판매수 초과", 404: "존재하지 않는 객실"},
    )
    def post(self, request):
        room_id = request.data.get("room_id")
        day = request.data.get("date")
        delta = request.data.get("delta")
        if room_id is None or not day or delta is None:
            return Response({"error": "room_id, date, delta 는 필수입니다."}, status=400)

        try:
            adjustment = set_adjustment(room_id, day, delta)
        except (ValidationError, NotFound):
            raise
        except Exception as e:
            logger.exception("재고 조정 저장 중 예외 발생")
            return Response(
                {"error": "서버 내부 오류가 발생했습니다.", "detail": str(e)}, status=500
            )

        store = get_store()
        room = store.get_room(room_id)
        adjustments = store.get_room_inventory_adjustments(
            room_id=room.room_id, start=adjustment.date, end=adjustment.date
        )
        reservations = store.get_reservations(room_id=room.room_id, statuses=EFFECTIVE_STATUSES)
        data = RoomInventoryAdjustmentSerializer(adjustment).data
        data["effective_inventory"] = effective_inventory(room, adjustment.date, adjustments)
        data["sold"] = sold_count(reservations, room.room_id, adjustment.date)
        return Response(data)


class DailyInventory(APIView):
    @swagger_auto_schema(
        operation_summary="날짜별 재고 현황",
        operation_description="객실별 기본재고, 조정치, 실재고, 판매수, 잔여를 반환합니다. date 생략 시 오늘.",
        manual_parameters=[
            openapi.Parameter("date", openapi.IN_QUERY, type=openapi.TYPE_STRING, format="date"),
        ],
        responses={200: "객실별 재고 현황 목록", 400: "날짜 형식 오류"},
    )
    def get(self, request):
        day = request.query_params.get("date")
        try:
            day = to_local_date(day) if day else today()
        except ValueError:
            return Response({"error": "date 형식이 올바르지 않습니다."}, status=400)
        return Response(daily_inventory(day))


class RoomImage(APIView):
    @swagger_auto_schema(
        operation_summary="객실 이미지 서빙",
        operation_description="직접 업로드한 이미지(data URL)만 서빙합니다. 외부 URL 이미지는 404.",
        responses={200: "이미지 바이너리", 404: "이미지 없음"},
    )
    def get(self, request, room_id):
        room = get_object_or_404(Room, room_id=room_id)
        parsed = parse_data_url(room.room_image_url)
        if parsed is None:
            return Response({"error": "이미지를 찾을 수 없습니다."}, status=404)

        mime_type, data = parsed
        response = HttpResponse(data, content_type=mime_type)
        response["Cache-Control"] = "public, max-age=31536000, immutable"
        return response
