"""
Management command to push pending stock quantities to sales channels.

Usage:
    python manage.py run_inventory_sync
    python manage.py run_inventory_sync --user 42 --limit 50
    python manage.py run_inventory_sync --no-reclaim
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from ledgerman import inventory


class Command(BaseCommand):
    """Run due inventory sync jobs."""

    help = 'Runs due inventory sync jobs against the sales channels'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user',
            type=int,
            help='Only run jobs of this user id'
        )
        parser.add_argument(
            '--limit',
            type=int,
            help='Maximum number of jobs to process'
        )
        parser.add_argument(
            '--no-reclaim',
            action='store_true',
            help='Do not return stale RUNNING jobs to the queue first'
        )

    def handle(self, *args, **options):
        user = None
        if options['user'] is not None:
            User = get_user_model()
            try:
                user = User.objects.get(pk=options['user'])
            except User.DoesNotExist:
                raise CommandError(f"User {options['user']} not found") from None

        if not options['no_reclaim']:
            reclaimed = inventory.reclaim_stale()
            if reclaimed:
                self.stdout.write(f'{reclaimed} stale job(s) returned to the queue')

        result = inventory.run_due(user=user, limit=options['limit'])
        message = (
            f"{result.processed} job(s) processed: "
            f"{result.succeeded} succeeded, {result.failed} failed"
        )
        if result.failed:
            self.stdout.write(self.style.WARNING(message))
        else:
            self.stdout.write(self.style.SUCCESS(message))
