from datetime import timedelta

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

# Swagger 관련 import
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from rooms.calendar import to_instant, to_local_date

from .models import DEFAULT_RESERVATION_TYPE_ID, Reservation, ReservationType
from .serializers import ReservationSerializer, ReservationTypeSerializer
from .services import create_manual_reservation, update_reservation
from .store import get_store

# 로깅 파일
from logger import get_logger

logger = get_logger("hoteldesk.reservations")

UPDATABLE_FIELDS = (
    "status",
    "room_id",
    "check_in",
    "check_out",
    "total_price",
    "admin_memo",
    "reservation_type_id",
    "guest_cancellation_confirmed",
)


# Reservation API
class ReservationList(APIView):
    @swagger_auto_schema(
        operation_summary="예약 목록 조회",
        operation_description="""
        예약 목록을 최신순으로 반환합니다.
        - status: 상태 필터
        - room_id: 객실 필터
        - start, end: 해당 기간과 겹치는 예약만 (양끝 포함)
        """,
        manual_parameters=[
            openapi.Parameter("status", openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter("room_id", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter("start", openapi.IN_QUERY, type=openapi.TYPE_STRING, format="date"),
            openapi.Parameter("end", openapi.IN_QUERY, type=openapi.TYPE_STRING, format="date"),
        ],
        responses={200: ReservationSerializer(many=True), 400: "필터 형식 오류"},
    )
    def get(self, request):
        reservations = Reservation.objects.select_related(
            "room", "customer", "reservation_type"
        ).order_by("-created_at")

        status_filter = request.query_params.get("status")
        room_id = request.query_params.get("room_id")
        start = request.query_params.get("start")
        end = request.query_params.get("end")

        try:
            if status_filter:
                reservations = reservations.filter(status=status_filter)
            if room_id:
                reservations = reservations.filter(room_id=int(room_id))
            if start:
                reservations = reservations.filter(check_out__gte=to_instant(to_local_date(start)))
            if end:
                # end 날짜 다음날 자정 이전에 체크인
                end_day = to_local_date(end)
                reservations = reservations.filter(
                    check_in__lt=to_instant(end_day + timedelta(days=1))
                )
        except ValueError:
            return Response({"error": "필터 값 형식이 올바르지 않습니다."}, status=400)

        serializer = ReservationSerializer(reservations, many=True)
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_summary="관리자 수기 예약 생성",
        operation_description="""
        재고를 확인한 뒤 예약을 생성합니다. 기본 상태는 confirmed, source 는 manual.
        customer_id 가 없으면 guest_name / guest_phone 으로 고객을 찾거나 새로 만듭니다.
        """,
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "room_id": openapi.Schema(type=openapi.TYPE_INTEGER),
                "check_in": openapi.Schema(type=openapi.TYPE_STRING, format="date"),
                "check_out": openapi.Schema(type=openapi.TYPE_STRING, format="date"),
                "customer_id": openapi.Schema(type=openapi.TYPE_INTEGER),
                "guest_name": openapi.Schema(type=openapi.TYPE_STRING),
                "guest_phone": openapi.Schema(type=openapi.TYPE_STRING),
                "total_price": openapi.Schema(type=openapi.TYPE_INTEGER),
                "reservation_type_id": openapi.Schema(type=openapi.TYPE_STRING),
                "admin_memo": openapi.Schema(type=openapi.TYPE_STRING),
                "status": openapi.Schema(type=openapi.TYPE_STRING),
            },
            required=["room_id", "check_in", "check_out"],
        ),
        responses={
            201: ReservationSerializer,
            400: "필수값 누락 or 재고 없음 or 날짜 오류",
        },
    )
    def post(self, request):
        room_id = request.data.get("room_id")
        check_in = request.data.get("check_in")
        check_out = request.data.get("check_out")
        if not room_id or not check_in or not check_out:
            return Response({"error": "room_id, check_in, check_out 은 필수입니다."}, status=400)

        try:
            total_price = int(request.data.get("total_price") or 0)
        except (TypeError, ValueError):
            return Response({"error": "total_price 는 정수여야 합니다."}, status=400)

        try:
            reservation = create_manual_reservation(
                room_id=room_id,
                check_in=check_in,
                check_out=check_out,
                customer_id=request.data.get("customer_id"),
                guest_name=request.data.get("guest_name"),
                guest_phone=request.data.get("guest_phone"),
                total_price=total_price,
                reservation_type_id=request.data.get("reservation_type_id"),
                admin_memo=request.data.get("admin_memo", ""),
                status=request.data.get("status") or "confirmed",
            )
        except ValidationError:
            raise
        except Exception as e:
            # 예기치 못한 오류 로깅
            logger.exception("예약 생성 중 예외 발생")
            return Response(
                {"error": "서버 내부 오류가 발생했습니다.", "detail": str(e)},
                status=500,
            )

        return Response(ReservationSerializer(reservation).data, status=201)


class ReservationDetail(APIView):
    @swagger_auto_schema(
        operation_summary="예약 상세 조회",
        responses={200: ReservationSerializer, 404: "존재하지 않는 예약"},
    )
    def get(self, request, reservation_id):
        reservation = get_object_or_404(
            Reservation.objects.select_related("room", "customer", "reservation_type"),
            reservation_id=reservation_id,
        )
        return Response(ReservationSerializer(reservation).data)

    @swagger_auto_schema(
        operation_summary="예약 수정 / 상태 변경",
        operation_description="""
        전달한 필드만 수정합니다.
        - 상태 전이: pending -> confirmed | rejected, confirmed -> cancelled_by_admin
        - 객실/날짜를 바꾸면 자기 자신을 제외하고 재고를 다시 확인합니다.
        - confirmed / rejected / cancelled_by_admin 으로 바뀌면 고객에게 알림이 발송됩니다.
        """,
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "status": openapi.Schema(type=openapi.TYPE_STRING),
                "room_id": openapi.Schema(type=openapi.TYPE_INTEGER),
                "check_in": openapi.Schema(type=openapi.TYPE_STRING, format="date"),
                "check_out": openapi.Schema(type=openapi.TYPE_STRING, format="date"),
                "total_price": openapi.Schema(type=openapi.TYPE_INTEGER),
                "admin_memo": openapi.Schema(type=openapi.TYPE_STRING),
                "reservation_type_id": openapi.Schema(type=openapi.TYPE_STRING),
                "guest_cancellation_confirmed": openapi.Schema(type=openapi.TYPE_BOOLEAN),
            },
        ),
        responses={
            200: ReservationSerializer,
            400: "허용되지 않는 상태 전이 or 재고 없음",
            404: "존재하지 않는 예약",
        },
    )
    def put(self, request, reservation_id):
        changes = {key: request.data[key] for key in UPDATABLE_FIELDS if key in request.data}
        if "total_price" in changes:
            try:
                changes["total_price"] = int(changes["total_price"])
            except (TypeError, ValueError):
                return Response({"error": "total_price 는 정수여야 합니다."}, status=400)

        try:
            reservation = update_reservation(reservation_id, changes)
        except (ValidationError, NotFound):
            raise
        except Exception as e:
            logger.exception("예약 수정 중 예외 발생")
            return Response(
                {"error": "서버 내부 오류가 발생했습니다.", "detail": str(e)},
                status=500,
            )
        return Response(ReservationSerializer(reservation).data)

    @swagger_auto_schema(
        operation_summary="예약 삭제",
        operation_description="예약 기록을 삭제합니다. (알림 없음)",
        responses={204: "삭제 완료", 404: "존재하지 않는 예약"},
    )
    def delete(self, request, reservation_id):
        if not get_store().delete_reservation(reservation_id):
            return Response({"error": "예약을 찾을 수 없습니다."}, status=404)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ReservationType API
class ReservationTypeList(APIView):
    @swagger_auto_schema(
        operation_summary="예약 유형 목록 조회",
        responses={200: ReservationTypeSerializer(many=True)},
    )
    def get(self, request):
        types = ReservationType.objects.all().order_by("created_at")
        return Response(ReservationTypeSerializer(types, many=True).data)

    @swagger_auto_schema(
        operation_summary="예약 유형 생성",
        request_body=ReservationTypeSerializer,
        responses={201: ReservationTypeSerializer, 400: "name 누락 or 중복 ID"},
    )
    def post(self, request):
        serializer = ReservationTypeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        reservation_type = serializer.save()
        return Response(ReservationTypeSerializer(reservation_type).data, status=201)


class ReservationTypeDetail(APIView):
    @swagger_auto_schema(
        operation_summary="예약 유형 수정",
        request_body=ReservationTypeSerializer,
        responses={200: ReservationTypeSerializer, 400: "기본 유형 수정 불가", 404: "존재하지 않는 유형"},
    )
    def put(self, request, type_id):
        reservation_type = get_object_or_404(ReservationType, type_id=type_id)
        serializer = ReservationTypeSerializer(reservation_type, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        serializer.save()
        return Response(serializer.data)

    @swagger_auto_schema(
        operation_summary="예약 유형 삭제",
        operation_description="삭제된 유형을 쓰던 예약은 유형 없음으로 바뀝니다.",
        responses={204: "삭제 완료", 400: "기본 유형 삭제 불가", 404: "존재하지 않는 유형"},
    )
    def delete(self, request, type_id):
        if type_id == DEFAULT_RESERVATION_TYPE_ID:
            return Response({"error": "기본 예약 유형은 삭제할 수 없습니다."}, status=400)
        reservation_type = get_object_or_404(ReservationType, type_id=type_id)
        reservation_type.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
