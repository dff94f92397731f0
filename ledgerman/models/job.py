"""
SyncJob model: durable "publish this quantity" work unit.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ledgerman.models.enums import Provider, SyncJobStatus


class SyncJobQuerySet(models.QuerySet):
    """Custom QuerySet for SyncJob with convenience filters."""

    def due(self, now=None):
        """PENDING, unlocked jobs whose next_run_at has passed, oldest first."""
        now = now or timezone.now()
        return self.filter(
            status=SyncJobStatus.PENDING,
            next_run_at__lte=now,
            locked_at__isnull=True,
        ).order_by('next_run_at', 'id')

    def stale(self, locked_before):
        """RUNNING jobs whose lock is older than locked_before."""
        return self.filter(
            status=SyncJobStatus.RUNNING,
            locked_at__lt=locked_before,
        )


class SyncJob(models.Model):
    """
    Set the published quantity of one item on one channel.

    LIFECYCLE:

        PENDING ──claim──► RUNNING ──ok──► SUCCEEDED
           ▲                  │
           └──── retry ───────┤ error (attempts < max)
                              ▼
                           FAILED (attempts >= max)

    One row per (user, provider, item). Enqueueing again overwrites the
    target and resets the job, so only the newest intent is ever published.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('User'),
    )
    provider = models.CharField(
        max_length=10,
        choices=Provider.choices,
        verbose_name=_('Channel'),
    )
    item = models.ForeignKey(
        'ledgerman.Item',
        on_delete=models.CASCADE,
        related_name='sync_jobs',
        verbose_name=_('Item'),
    )
    listing = models.ForeignKey(
        'ledgerman.ChannelListing',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sync_jobs',
        verbose_name=_('Listing'),
    )
    target_qty = models.IntegerField(verbose_name=_('Target quantity'))

    status = models.CharField(
        max_length=10,
        choices=SyncJobStatus.choices,
        default=SyncJobStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    attempts = models.PositiveIntegerField(default=0, verbose_name=_('Attempts'))
    last_error = models.TextField(null=True, blank=True, verbose_name=_('Last error'))
    next_run_at = models.DateTimeField(default=timezone.now, verbose_name=_('Next run'))
    locked_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Locked at'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SyncJobQuerySet.as_manager()

    class Meta:
        verbose_name = _('Sync Job')
        verbose_name_plural = _('Sync Jobs')
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'provider', 'item'],
                name='unique_sync_job_per_channel_item',
            ),
        ]
        indexes = [
            models.Index(fields=['status', 'next_run_at'], name='ledger_job_status_due_idx'),
            models.Index(fields=['user', 'status', 'next_run_at'], name='ledger_job_user_status_due_idx'),
        ]

    @property
    def is_terminal(self) -> bool:
        return self.status in (SyncJobStatus.SUCCEEDED, SyncJobStatus.FAILED)

    def __str__(self) -> str:
        return f"{self.provider} ← {self.target_qty} [{self.status}] item {self.item_id}"
