from django.conf import settings
from django.db import models


class Subject(models.Model):
    """A person vaccination schedules are generated for.

    Either the account holder's own profile (``relation="self"``) or one of
    their dependents (child, parent, spouse, ...). Only ``date_of_birth``
    drives schedule regeneration; ``country`` is informational.
    """

    RELATION_SELF = 'self'

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='subjects',
    )
    relation = models.CharField(max_length=50, default=RELATION_SELF)
    full_name = models.CharField(max_length=200)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subjects_subject'
        ordering = ['owner_id', 'id']
        verbose_name = 'Subject'
        verbose_name_plural = 'Subjects'

    def __str__(self) -> str:
        return f"{self.full_name} ({self.relation}, owner_id={self.owner_id})"

    @property
    def is_dependent(self) -> bool:
        return self.relation != self.RELATION_SELF
