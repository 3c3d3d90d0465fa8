from rest_framework import permissions, viewsets
from rest_framework.decorators import action

from common.utils import api_response

from .models import AttendanceRecord
from .serializers import AttendanceBulkCreateSerializer, AttendanceRecordSerializer, AttendanceSummarySerializer
from .services import apply_record_filters, bulk_create_records, count_by_status


class AttendanceRecordViewSet(viewsets.ModelViewSet):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AttendanceRecordSerializer

    def get_queryset(self):
        queryset = AttendanceRecord.objects.select_related("employee")
        return apply_record_filters(queryset, self.request.query_params).order_by("-date", "employee_id")

    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request):
        serializer = AttendanceBulkCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        created = bulk_create_records(serializer.validated_data["records"])
        created_ids = [record.id for record in created]
        if all(created_ids):
            rows = AttendanceRecord.objects.select_related("employee").filter(id__in=created_ids)
        else:
            rows = created
        payload = AttendanceRecordSerializer(rows, many=True).data
        return api_response(
            success=True,
            message="Attendance records created.",
            data={"results": payload, "count": len(payload)},
            status=201,
        )

    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        params = AttendanceSummarySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        queryset = apply_record_filters(AttendanceRecord.objects.all(), params.validated_data)
        counts = count_by_status(queryset)
        return api_response(
            success=True,
            message="Attendance summary retrieved.",
            data={"counts": counts, "total": sum(counts.values())},
        )
