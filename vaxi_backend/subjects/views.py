from rest_framework import generics, status
from rest_framework.response import Response

from vaxi_backend.core.utils import log_subject_action
from vaxi_backend.subjects.models import Subject
from vaxi_backend.subjects.permissions import SubjectPermission
from vaxi_backend.subjects.providers import subjects_for_user
from vaxi_backend.subjects.serializers import SubjectReadSerializer, SubjectWriteSerializer
from vaxi_backend.vaccines.services import regenerate_for_subject


class SubjectListCreateView(generics.ListCreateAPIView):
    """List visible subjects or create a new one owned by the current user.

    A subject created with a date of birth gets its schedule and planner
    generated right away.
    """

    permission_classes = [SubjectPermission]

    def get_queryset(self):
        return subjects_for_user(self.request.user)

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return SubjectWriteSerializer
        return SubjectReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subject: Subject = serializer.save(owner=request.user)
        log_subject_action(request.user, 'subject_created', subject_id=subject.id)

        if subject.date_of_birth is not None:
            regenerate_for_subject(subject.id)

        out = SubjectReadSerializer(subject, context={'request': request}).data
        headers = self.get_success_headers(out)
        return Response(out, status=status.HTTP_201_CREATED, headers=headers)


class SubjectRetrieveUpdateView(generics.RetrieveUpdateAPIView):
    """Retrieve or update a subject; a changed date of birth regenerates its plans."""

    permission_classes = [SubjectPermission]

    def get_queryset(self):
        return subjects_for_user(self.request.user)

    def get_serializer_class(self):
        if self.request.method in ['PUT', 'PATCH']:
            return SubjectWriteSerializer
        return SubjectReadSerializer

    def perform_update(self, serializer):
        old_dob = serializer.instance.date_of_birth
        obj = serializer.save()
        dob_changed = obj.date_of_birth != old_dob
        log_subject_action(
            self.request.user,
            'subject_updated',
            subject_id=obj.id,
            meta={'date_of_birth_changed': dob_changed},
        )
        if dob_changed and obj.date_of_birth is not None:
            regenerate_for_subject(obj.id)
