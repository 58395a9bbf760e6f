from rest_framework.views import APIView
from rest_framework.response import Response
from drf_yasg.utils import swagger_auto_schema

from .models import Customer
from .serializers import CustomerSerializer


class CustomerList(APIView):
    @swagger_auto_schema(
        operation_summary="고객 목록 조회",
        operation_description="예약/채팅과 분리된 고객 마스터 데이터를 조회합니다.",
        responses={200: CustomerSerializer(many=True)},
    )
    def get(self, request):
        customers = Customer.objects.all().order_by("-created_at")
        serializer = CustomerSerializer(customers, many=True)
        return Response(serializer.data)
