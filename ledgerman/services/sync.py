"""
Inventory sync queue: push published quantities to sales channels.

    enqueue()      upsert one job per (user, provider, item), newest target wins
    run_due()      claim due jobs and call the channel client for each
    reclaim_stale() release RUNNING jobs whose runner died

Claiming is a conditional UPDATE (PENDING + unlocked → RUNNING + locked);
whoever changes the row owns the job, so concurrent runners never
process the same job twice. Channel errors never leave this module: they
are stored on the job and retried with backoff.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from django.db import transaction
from django.utils import timezone

from ledgerman.adapters.registry import get_channel_client
from ledgerman.conf import ledgerman_settings
from ledgerman.models.enums import SyncJobStatus
from ledgerman.models.job import SyncJob
from ledgerman.models.listing import ChannelListing
from ledgerman.services.items import get_item
from ledgerman.services.visibility import SyncTarget, VisibilityPolicies

logger = logging.getLogger('ledgerman')


class ChannelSyncError(Exception):
    """A channel refused or could not apply an update."""


@dataclass(frozen=True)
class SyncPlan:
    central_stock: int
    targets: list[SyncTarget] = field(default_factory=list)
    enqueued: int = 0


@dataclass
class SyncRunResult:
    processed: int = 0
    succeeded: int = 0
    failed: int = 0

    def as_dict(self) -> dict[str, int]:
        return {'processed': self.processed, 'succeeded': self.succeeded, 'failed': self.failed}


def backoff_minutes(attempts: int, schedule=None) -> int:
    """
    Retry delay after the given (already incremented) attempt count.

    Default schedule: 1, 5, 15, 30, then 60 minutes for every later attempt.
    """
    schedule = tuple(schedule or ledgerman_settings.SYNC_BACKOFF_MINUTES)
    index = min(max(attempts, 1), len(schedule)) - 1
    return schedule[index]


class InventorySync:
    """Sync job queue methods."""

    @classmethod
    def enqueue(cls, user, item, targets, now: datetime | None = None) -> int:
        """
        Upsert a PENDING job per target.

        An existing job for the same (user, provider, item) is reset:
        new target, attempts 0, no error, unlocked, due now.

        Returns:
            Number of jobs written
        """
        now = now or timezone.now()
        item_id = getattr(item, 'pk', item)
        enqueued = 0

        for target in targets:
            SyncJob.objects.update_or_create(
                user=user,
                provider=target.provider,
                item_id=item_id,
                defaults={
                    'listing_id': target.listing_id,
                    'target_qty': target.target_qty,
                    'status': SyncJobStatus.PENDING,
                    'attempts': 0,
                    'last_error': None,
                    'next_run_at': now,
                    'locked_at': None,
                },
            )
            enqueued += 1

        if enqueued:
            logger.info(
                "sync.enqueued",
                extra={"user_id": user.pk, "item_id": item_id, "jobs": enqueued},
            )
        return enqueued

    @classmethod
    def sync_item(cls, user, item) -> SyncPlan:
        """Recompute an item's channel targets and enqueue them."""
        item = get_item(user, item)
        central, targets = VisibilityPolicies.targets_for(user, item)
        enqueued = cls.enqueue(user, item, targets)
        return SyncPlan(central_stock=central, targets=targets, enqueued=enqueued)

    @classmethod
    def autosync(cls, user, item) -> SyncPlan | None:
        """
        sync_item() after a stock change, if enabled and the item is listed.

        Never raises: the stock change that triggered it has already been
        committed and must not fail because of the sync.
        """
        if not ledgerman_settings.AUTO_SYNC:
            return None
        item_id = getattr(item, 'pk', item)
        if not ChannelListing.objects.filter(user=user, item_id=item_id, is_active=True).exists():
            return None
        try:
            return cls.sync_item(user, item_id)
        except Exception:
            logger.exception("sync.autosync.error", extra={"item_id": item_id})
            return None

    @classmethod
    def autosync_on_commit(cls, user, item) -> None:
        """
        Run autosync() once the surrounding transaction commits.

        Outside a transaction it runs immediately. A rolled back change
        enqueues nothing.
        """
        item_id = getattr(item, 'pk', item)
        transaction.on_commit(lambda: cls.autosync(user, item_id))

    @classmethod
    def claim(cls, job, now: datetime | None = None) -> datetime | None:
        """
        Take ownership of a PENDING, unlocked job.

        Returns:
            The lock timestamp if this caller won the claim, else None
        """
        locked_at = now or timezone.now()
        won = SyncJob.objects.filter(
            pk=getattr(job, 'pk', job),
            status=SyncJobStatus.PENDING,
            locked_at__isnull=True,
        ).update(status=SyncJobStatus.RUNNING, locked_at=locked_at, updated_at=locked_at)
        return locked_at if won == 1 else None

    @classmethod
    def run_due(cls, user=None, limit: int | None = None,
                now: datetime | None = None) -> SyncRunResult:
        """
        Process up to ``limit`` due jobs (one user, or everyone if user is None).

        Jobs are taken by next_run_at, then id. Jobs claimed by another
        runner in the meantime are skipped and not counted.
        """
        now = now or timezone.now()
        limit = limit if limit is not None else ledgerman_settings.SYNC_BATCH_LIMIT
        qs = SyncJob.objects.due(now)
        if user is not None:
            qs = qs.filter(user=user)

        result = SyncRunResult()
        for candidate in list(qs[:max(0, int(limit))]):
            locked_at = cls.claim(candidate, now)
            if locked_at is None:
                continue
            # The row may have been re-enqueued between the select and the claim
            job = SyncJob.objects.select_related('listing').get(pk=candidate.pk)
            result.processed += 1
            try:
                cls._dispatch(job)
            except Exception as exc:
                cls._mark_failed(job, locked_at, exc, now)
                result.failed += 1
            else:
                cls._mark_succeeded(job, locked_at, now)
                result.succeeded += 1

        if result.processed:
            logger.info("sync.run", extra=result.as_dict())
        return result

    @classmethod
    def reclaim_stale(cls, ttl_minutes: int | None = None,
                      now: datetime | None = None) -> int:
        """
        Return RUNNING jobs locked for longer than the TTL to the queue.

        The abandoned run counts as a failed attempt, so a job whose runner
        keeps dying still ends up FAILED.

        Returns:
            Number of jobs reclaimed
        """
        ttl = ttl_minutes if ttl_minutes is not None else ledgerman_settings.SYNC_LOCK_TTL_MINUTES
        if not ttl or ttl <= 0:
            return 0
        now = now or timezone.now()

        reclaimed = 0
        for job in SyncJob.objects.stale(now - timedelta(minutes=ttl)):
            if cls._mark_failed(job, job.locked_at, ChannelSyncError("lock expired"), now):
                reclaimed += 1

        if reclaimed:
            logger.warning("sync.jobs.reclaimed", extra={"reclaimed": reclaimed})
        return reclaimed

    @classmethod
    def retry(cls, jobs) -> int:
        """Make FAILED jobs due again with a fresh attempt budget."""
        now = timezone.now()
        return jobs.filter(status=SyncJobStatus.FAILED).update(
            status=SyncJobStatus.PENDING,
            attempts=0,
            next_run_at=now,
            locked_at=None,
            last_error=None,
            updated_at=now,
        )

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _dispatch(cls, job: SyncJob) -> None:
        listing = None
        if job.listing_id is not None:
            listing = ChannelListing.objects.filter(pk=job.listing_id).first()
        if listing is None:
            raise ChannelSyncError("listing missing")

        client = get_channel_client(job.provider)
        outcome = client.update_stock(listing=listing, target_qty=job.target_qty)
        if not getattr(outcome, 'ok', False):
            raise ChannelSyncError(getattr(outcome, 'message', None) or "provider update failed")

    @classmethod
    def _mark_succeeded(cls, job: SyncJob, locked_at: datetime, now: datetime) -> bool:
        # Conditional on our lock: a re-enqueue during the run must survive
        updated = SyncJob.objects.filter(
            pk=job.pk, status=SyncJobStatus.RUNNING, locked_at=locked_at,
        ).update(
            status=SyncJobStatus.SUCCEEDED,
            locked_at=None,
            last_error=None,
            updated_at=now,
        )
        logger.info(
            "sync.job.succeeded",
            extra={"job_id": job.pk, "provider": job.provider, "target_qty": job.target_qty},
        )
        return updated == 1

    @classmethod
    def _mark_failed(cls, job: SyncJob, locked_at: datetime, error: Exception,
                     now: datetime) -> bool:
        attempts = job.attempts + 1
        terminal = attempts >= ledgerman_settings.SYNC_MAX_ATTEMPTS
        message = str(error) or error.__class__.__name__

        updated = SyncJob.objects.filter(
            pk=job.pk, status=SyncJobStatus.RUNNING, locked_at=locked_at,
        ).update(
            status=SyncJobStatus.FAILED if terminal else SyncJobStatus.PENDING,
            attempts=attempts,
            last_error=message,
            next_run_at=now + timedelta(minutes=backoff_minutes(attempts)),
            locked_at=None,
            updated_at=now,
        )
        logger.warning(
            "sync.job.failed",
            extra={
                "job_id": job.pk,
                "provider": job.provider,
                "attempts": attempts,
                "terminal": terminal,
                "error": message,
            },
        )
        return updated == 1
