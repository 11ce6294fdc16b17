"""
Management command to import assets, components, accessories, VMs or IAM accounts from a CSV file
"""
import os
from django.core.management.base import BaseCommand
from django.conf import settings
from backend.core.csv_import import CSVImportError
from backend.core.importing import save_records
from backend.inventory.importers import (
    asset_records_from_csv, component_records_from_csv, accessory_records_from_csv,
)
from backend.inventory.serializers import AssetSerializer, ComponentSerializer, AccessorySerializer
from backend.virtualization.importers import vm_records_from_csv
from backend.virtualization.serializers import VirtualMachineSerializer
from backend.iam.importers import iam_records_from_csv
from backend.iam.serializers import IAMAccountSerializer

IMPORTERS = {
    'assets': (asset_records_from_csv, AssetSerializer),
    'components': (component_records_from_csv, ComponentSerializer),
    'accessories': (accessory_records_from_csv, AccessorySerializer),
    'vms': (vm_records_from_csv, VirtualMachineSerializer),
    'iam-accounts': (iam_records_from_csv, IAMAccountSerializer),
}


class Command(BaseCommand):
    help = "Imports records of the given type from a CSV file"

    def add_arguments(self, parser):
        parser.add_argument(
            '--type',
            dest='entity_type',
            required=True,
            choices=sorted(IMPORTERS),
            help='Kind of record the CSV holds',
        )
        parser.add_argument(
            '--csv-file',
            type=str,
            required=True,
            help='Path to the CSV file (relative paths are resolved from the project root)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Validate every row and report, but roll back instead of saving',
        )

    def handle(self, *args, **options):
        entity_type = options['entity_type']
        csv_file = options['csv_file']
        dry_run = options['dry_run']
        records_from_csv, serializer_class = IMPORTERS[entity_type]

        if not os.path.isabs(csv_file):
            csv_file = os.path.normpath(os.path.join(settings.BASE_DIR, '..', csv_file))

        self.stdout.write(self.style.SUCCESS("=" * 80))
        self.stdout.write(self.style.SUCCESS(f"IMPORTING {entity_type.upper()} FROM CSV"))
        self.stdout.write(self.style.SUCCESS("=" * 80))
        self.stdout.write(f"CSV File: {csv_file}")
        if dry_run:
            self.stdout.write(self.style.WARNING("Dry run: nothing will be saved"))

        if not os.path.exists(csv_file):
            self.stdout.write(self.style.ERROR(f"Error: CSV file not found at {csv_file}"))
            return

        try:
            with open(csv_file, 'r', encoding='utf-8-sig') as f:
                records = records_from_csv(f.read())
        except CSVImportError as e:
            self.stdout.write(self.style.ERROR(f"Error reading CSV file: {e.message}"))
            return
        except UnicodeDecodeError:
            self.stdout.write(self.style.ERROR("Error reading CSV file: the file must be UTF-8 encoded"))
            return

        result = save_records(records, serializer_class, dry_run=dry_run)

        for error in result['errors']:
            self.stdout.write(self.style.ERROR(f"  ✗ Line {error['line']}: {dict(error['errors'])}"))

        model = serializer_class.Meta.model
        self.stdout.write(self.style.SUCCESS("\n" + "=" * 80))
        self.stdout.write(self.style.SUCCESS("SUMMARY"))
        self.stdout.write(self.style.SUCCESS("=" * 80))
        self.stdout.write(f"Rows Read: {len(records)}")
        self.stdout.write(f"{'Valid' if dry_run else 'Imported'}: {result['successful']}")
        if result['failed']:
            self.stdout.write(self.style.ERROR(f"Failed: {result['failed']}"))
        self.stdout.write(f"Total {model._meta.verbose_name_plural.title()} in Database: {model.objects.count()}")
        self.stdout.write(self.style.SUCCESS("=" * 80))
