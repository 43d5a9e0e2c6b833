"""
Management command to seed partner sharing configuration.
Every shareable field starts disabled; administrators enable fields from the
partner settings screen.
Run: python manage.py init_partner_sharing [--force]
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from app.platform.flac.descriptors import registered_descriptors
from app.platform.flac.store import SharingConfigStore


class Command(BaseCommand):
    help = 'Seed buyer and seller sharing configuration with every field disabled'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Reset existing configuration to all-disabled',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        force = options['force']
        store = SharingConfigStore()

        self.stdout.write(self.style.SUCCESS('Initializing partner sharing configuration...'))

        for descriptor in registered_descriptors():
            existing = store.get(descriptor.entity_type)
            if not isinstance(existing, dict):
                existing = {}

            if force:
                config = {name: False for name in descriptor.shareable_fields()}
            else:
                config = dict(existing)
                for name in descriptor.shareable_fields():
                    config.setdefault(name, False)

            added = len(config) - len(existing) if not force else len(config)
            store.put(descriptor.entity_type, config)
            action = 'Reset' if force else 'Seeded'
            self.stdout.write(f'  {action} {descriptor.entity_type}: {added} fields ({len(config)} total)')

        self.stdout.write(self.style.SUCCESS('\nPartner sharing configuration initialized successfully!'))
