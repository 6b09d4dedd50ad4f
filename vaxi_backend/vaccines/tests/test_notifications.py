from django.test import TestCase

from vaxi_backend.vaccines.exceptions import NotFoundError, ValidationError
from vaxi_backend.vaccines.models import NotificationPermission
from vaxi_backend.vaccines.services.notifications import (
    delete_notification_permissions,
    get_notification_permissions,
    has_any_notification_permission,
    update_notification_permissions,
)
from vaxi_backend.vaccines.tests.mixins import VaccineTestMixin


class NotificationPermissionTest(VaccineTestMixin, TestCase):
    databases = {"default"}

    def test_defaults_created_on_first_read(self):
        result = get_notification_permissions(self.member.id)

        self.assertTrue(result.success)
        permissions = result["permissions"]
        self.assertFalse(permissions.notification)
        self.assertFalse(permissions.calendar)
        self.assertFalse(permissions.email)
        self.assertEqual(NotificationPermission.objects.filter(user=self.member).count(), 1)

        get_notification_permissions(self.member.id)
        self.assertEqual(NotificationPermission.objects.filter(user=self.member).count(), 1)

    def test_partial_update(self):
        update_notification_permissions(self.member.id, notification=True, email=True)

        result = update_notification_permissions(self.member.id, email=False)

        permissions = result["permissions"]
        self.assertTrue(permissions.notification)
        self.assertFalse(permissions.calendar)
        self.assertFalse(permissions.email)

    def test_update_rejects_unknown_channel_and_non_bool(self):
        unknown = update_notification_permissions(self.member.id, sms=True)
        self.assertIsInstance(unknown.error, ValidationError)

        not_bool = update_notification_permissions(self.member.id, calendar="yes")
        self.assertIsInstance(not_bool.error, ValidationError)
        self.assertEqual(not_bool.error.field, "calendar")

    def test_unknown_user(self):
        self.assertIsInstance(get_notification_permissions(404404).error, NotFoundError)
        self.assertIsInstance(update_notification_permissions(404404, email=True).error, NotFoundError)

    def test_any_enabled(self):
        self.assertFalse(has_any_notification_permission(self.member.id)["any_enabled"])

        get_notification_permissions(self.member.id)
        self.assertFalse(has_any_notification_permission(self.member.id)["any_enabled"])

        update_notification_permissions(self.member.id, calendar=True)
        self.assertTrue(has_any_notification_permission(self.member.id)["any_enabled"])

    def test_delete_resets_to_defaults(self):
        update_notification_permissions(self.member.id, notification=True)

        result = delete_notification_permissions(self.member.id)

        self.assertTrue(result["deleted"])
        self.assertFalse(NotificationPermission.objects.filter(user=self.member).exists())
        self.assertFalse(get_notification_permissions(self.member.id)["permissions"].notification)
        self.assertFalse(delete_notification_permissions(404404)["deleted"])
