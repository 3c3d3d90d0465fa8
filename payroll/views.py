from django.shortcuts import get_object_or_404
from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.views import APIView

from common.utils import api_response
from employees.models import Employee

from .models import PayrollRecord
from .serializers import (
    ComputedPayrollSerializer,
    PayrollBulkGenerateSerializer,
    PayrollGenerateSerializer,
    PayrollRecordSerializer,
    PayrollStatusSerializer,
)
from .services import (
    PayrollGenerationService,
    apply_record_filters,
    change_status,
    resolve_period,
    summarize_by_period,
)

MODE_PREVIEW = "preview"
MODE_GENERATE = "generate"


def _service_for(data) -> PayrollGenerationService:
    period = resolve_period(
        period=data.get("period"),
        start_date=data.get("start_date"),
        end_date=data.get("end_date"),
    )
    return PayrollGenerationService(period=period)


class PayrollRecordViewSet(viewsets.ModelViewSet):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = PayrollRecordSerializer

    def get_queryset(self):
        queryset = PayrollRecord.objects.select_related("employee")
        return apply_record_filters(queryset, self.request.query_params).order_by("-start_date", "employee_id")

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):
        record = self.get_object()
        serializer = PayrollStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = change_status(
            record,
            serializer.validated_data["status"],
            payment_date=serializer.validated_data.get("payment_date"),
        )
        return api_response(
            success=True,
            message=f"Payroll status changed to {record.status}.",
            data=PayrollRecordSerializer(record).data,
        )


class PayrollRunView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, mode):
        serializer = PayrollGenerateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        employee = get_object_or_404(Employee, id=data["employee_id"])
        service = _service_for(data)
        options = {
            "bonus": data.get("bonus"),
            "extra_deductions": data.get("extra_deductions"),
            "status": data.get("status"),
        }

        if mode == MODE_GENERATE:
            result = service.generate(employee, **options)
            return api_response(
                success=True,
                message="Payroll record generated.",
                data=PayrollRecordSerializer(result.record).data,
                status=201,
            )

        computed = service.compute(employee, **options)
        return api_response(
            success=True,
            message="Payroll preview computed.",
            data=ComputedPayrollSerializer(computed).data,
        )


class PayrollBulkRunView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, mode):
        serializer = PayrollBulkGenerateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = _service_for(data)
        employee_ids = data.get("employee_ids")

        if mode == MODE_GENERATE:
            results = service.generate_bulk(employee_ids)
            payload = PayrollRecordSerializer([result.record for result in results], many=True).data
            return api_response(
                success=True,
                message="Bulk payroll generated.",
                data={"results": payload, "count": len(payload), "period": service.period.label},
                status=201,
            )

        computed = service.compute_bulk(employee_ids)
        payload = ComputedPayrollSerializer(computed, many=True).data
        return api_response(
            success=True,
            message="Bulk payroll preview computed.",
            data={"results": payload, "count": len(payload), "period": service.period.label},
        )


class PayrollSummaryView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        queryset = apply_record_filters(PayrollRecord.objects.all(), request.query_params)
        summaries = summarize_by_period(queryset)
        return api_response(
            success=True,
            message="Payroll summary retrieved.",
            data={"results": summaries, "count": len(summaries)},
        )
