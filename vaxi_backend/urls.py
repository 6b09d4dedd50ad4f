"""VaxiApp URL Configuration.

API routes:
    /api/auth/     - Authentication (core)
    /api/health/   - Health check (core)
    /api/subjects/ - Users' own profiles and dependents (subjects)
    /api/vaccines/ - Catalog, schedules, reminders, planner (vaccines)
"""

from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path


def root(request):
    """Plain-text root endpoint; doubles as a trivial liveness probe."""
    return HttpResponse("VaxiApp backend is running.")


urlpatterns = [
    path("", root, name="root"),
    path("admin/", admin.site.urls),

    path("api/", include("vaxi_backend.core.urls")),
    path("api/", include("vaxi_backend.subjects.urls")),
    path("api/", include("vaxi_backend.vaccines.urls")),
]
