"""Subjects App URLs.

Prefix: /api/
Routes:
    GET/POST    /api/subjects/       - List/Create subjects
    GET/PUT     /api/subjects/<pk>/  - Retrieve/Update subject
"""

from django.urls import path

from vaxi_backend.subjects.views import (
    SubjectListCreateView,
    SubjectRetrieveUpdateView,
)

app_name = 'subjects'

urlpatterns = [
    path('subjects/', SubjectListCreateView.as_view(), name='list'),
    path('subjects/<int:pk>/', SubjectRetrieveUpdateView.as_view(), name='detail'),
]
