from django.contrib.auth.models import AbstractUser
from django.db import models
from django.conf import settings


class Role(models.Model):
    """Access role of an account.

    ``admin`` maintains the vaccine catalog, ``clinician`` may read and act on
    every subject and ``member`` only sees the subjects they own.
    """

    ADMIN = 'admin'
    CLINICIAN = 'clinician'
    MEMBER = 'member'

    name = models.CharField(max_length=64, unique=True, db_index=True)
    label = models.CharField(max_length=128)

    class Meta:
        db_table = 'core_role'
        ordering = ['name']
        verbose_name = 'Role'
        verbose_name_plural = 'Roles'

    def __str__(self) -> str:
        return self.label


class User(AbstractUser):
    """Account that owns subjects (itself and its dependents).

    Login accepts the username, the email or the phone number, so ``email``
    is unique and ``phone_number`` is stored verbatim.
    """

    email = models.EmailField('email address', blank=True, unique=True)
    phone_number = models.CharField(max_length=20, blank=True, default='')
    role = models.ForeignKey(
        Role,
        null=True,
        blank=True,
        on_delete=models.PROTECT,
        related_name='users',
    )

    class Meta:
        db_table = 'core_user'
        ordering = ['username']
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self) -> str:
        full_name = self.get_full_name()
        return f"{full_name} ({self.username})" if full_name else self.username


class AuditLog(models.Model):
    """Append-only trail of account and vaccination actions.

    ``subject_id`` is a plain integer so rows survive subject deletion.
    ``meta`` carries action details such as counts or changed fields.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
    )
    role_name = models.CharField(max_length=50, db_index=True)
    action = models.CharField(max_length=50, db_index=True)
    subject_id = models.IntegerField(null=True, blank=True, db_index=True)
    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)
    meta = models.JSONField(null=True, blank=True)

    class Meta:
        db_table = 'core_auditlog'
        ordering = ['-timestamp', '-id']
        verbose_name = 'Audit Log'
        verbose_name_plural = 'Audit Logs'
        indexes = [
            models.Index(fields=['action', 'timestamp'], name='core_auditl_action_6f1c2e_idx'),
            models.Index(fields=['subject_id', 'timestamp'], name='core_auditl_subject_3b9d41_idx'),
        ]

    def __str__(self) -> str:
        target = f"subject {self.subject_id}" if self.subject_id is not None else "account"
        when = self.timestamp.strftime("%Y-%m-%d %H:%M") if self.timestamp else "unsaved"
        return f"{when} {self.action} on {target}"
