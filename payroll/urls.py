from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    MODE_GENERATE,
    MODE_PREVIEW,
    PayrollBulkRunView,
    PayrollRecordViewSet,
    PayrollRunView,
    PayrollSummaryView,
)


router = DefaultRouter()
router.register(r"records", PayrollRecordViewSet, basename="payroll-record")

urlpatterns = [
    path("", include(router.urls)),
    path("preview/", PayrollRunView.as_view(), {"mode": MODE_PREVIEW}, name="payroll-preview"),
    path("generate/", PayrollRunView.as_view(), {"mode": MODE_GENERATE}, name="payroll-generate"),
    path("preview-bulk/", PayrollBulkRunView.as_view(), {"mode": MODE_PREVIEW}, name="payroll-preview-bulk"),
    path("generate-bulk/", PayrollBulkRunView.as_view(), {"mode": MODE_GENERATE}, name="payroll-generate-bulk"),
    path("summary/", PayrollSummaryView.as_view(), name="payroll-summary"),
]
