"""Core App URLs.

Prefix: /api/
Routes:
    GET  /api/health/       - Health check (no auth)
    POST /api/auth/login/   - JWT pair for username, email or phone login
    POST /api/auth/refresh/ - New access token
    POST /api/auth/logout/  - Audit the logout
    GET  /api/auth/me/      - Signed-in account
"""

from django.urls import path

from vaxi_backend.core.views import LoginView, LogoutView, MeView, RefreshView, health

app_name = 'core'

urlpatterns = [
    path('health/', health, name='health'),
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/refresh/', RefreshView.as_view(), name='refresh'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),
    path('auth/me/', MeView.as_view(), name='me'),
]
