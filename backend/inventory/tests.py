"""
Comprehensive test suite for Inventory module
Tests: Asset/Component/Accessory CRUD, CSV import conversion rules, export, filters
"""
import re
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from backend.core.csv_import import CSVImportError, parse_csv
from backend.core.models import AuditLog
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.inventory.models import Asset, Component, Accessory, generate_asset_tag
from backend.inventory.importers import (
    ASSET_ALIASES, asset_records_from_csv, component_records_from_csv, accessory_records_from_csv,
    map_condition, map_accessory_status,
)


class AssetConversionTests(TestCase):
    """Test CSV row conversion for assets"""

    def test_condition_mapping(self):
        self.assertEqual(map_condition('Poor'), 'Bad')
        self.assertEqual(map_condition('damaged'), 'Bad')
        self.assertEqual(map_condition('Excellent'), 'Good')
        self.assertEqual(map_condition(''), 'Good')
        self.assertEqual(map_condition('Fair'), 'Fair')

    def test_generated_tag_format(self):
        tag = generate_asset_tag('Monitor', 4)
        self.assertRegex(tag, r'^SRPH-MON-\d{6}-005$')
        self.assertRegex(generate_asset_tag(None, 0), r'^SRPH-AST-\d{6}-001$')

    def test_generated_tag_skips_existing(self):
        first = generate_asset_tag('Laptop', 0)
        TestDataFactory.create_asset(asset_tag=first)
        self.assertNotEqual(generate_asset_tag('Laptop', 0), first)

    def test_records_apply_defaults(self):
        records = asset_records_from_csv('Device Name,Serial,Cost,Status\nXPS 13,SN1,"$1,299.00",Deployed\n')
        line, data = records[0]
        self.assertEqual(line, 2)
        self.assertEqual(data['name'], 'XPS 13')
        self.assertEqual(data['category'], 'Laptop')
        self.assertEqual(data['status'], 'deployed')
        self.assertEqual(data['condition'], 'Good')
        self.assertEqual(data['purchase_cost'], '1299.00')
        self.assertTrue(re.match(r'^SRPH-LAP-\d{6}-001$', data['asset_tag']))

    def test_unknown_columns_become_custom_fields(self):
        _, data = asset_records_from_csv('name,Cost Center\nXPS,CC-42\n')[0]
        self.assertEqual(data['custom_fields'], {'cost center': 'CC-42'})

    def test_na_and_short_rows_tolerated(self):
        records = asset_records_from_csv('name,serial,location\nXPS,N/A\n')
        _, data = records[0]
        self.assertEqual(data['serial_number'], '')
        self.assertIsNone(data['location'])

    def test_location_aliases(self):
        for header in ('site', 'office', 'building', 'room'):
            rows = parse_csv(f'{header}\nHQ\n', ASSET_ALIASES)
            self.assertEqual(rows[0][1], {'location': 'HQ'})


class StockItemConversionTests(TestCase):
    """Test CSV row conversion for components and accessories"""

    def test_component_defaults(self):
        _, data = component_records_from_csv('name,category\nRAM,Memory\n')[0]
        self.assertEqual(data['quantity'], 1)
        self.assertEqual(data['notes'], 'Imported via CSV')

    def test_component_requires_headers(self):
        with self.assertRaisesMessage(CSVImportError, 'missing required headers: category'):
            component_records_from_csv('name,quantity\nRAM,2\n')

    def test_component_requires_values(self):
        with self.assertRaisesMessage(CSVImportError, 'Line 3 is missing required values'):
            component_records_from_csv('name,category\nRAM,Memory\nSSD,\n')

    def test_component_quantity_must_be_integer(self):
        with self.assertRaises(CSVImportError) as ctx:
            component_records_from_csv('name,category,qty\nRAM,Memory,lots\n')
        self.assertEqual(ctx.exception.line, 2)

    def test_accessory_status_substring(self):
        self.assertEqual(map_accessory_status('Borrowed by Alice'), 'borrowed')
        self.assertEqual(map_accessory_status('RETURNED'), 'returned')
        self.assertEqual(map_accessory_status('Defective - cable'), 'defective')
        self.assertEqual(map_accessory_status('In stock'), 'available')
        self.assertEqual(map_accessory_status(None), 'available')

    def test_accessory_records(self):
        _, data = accessory_records_from_csv('name,category,status\nHeadset,Audio,borrowed\n')[0]
        self.assertEqual(data['status'], 'borrowed')
        self.assertIsNone(data['assigned_to'])


class AssetAPITests(TestCase):
    """Test asset endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_generates_tag(self):
        response = self.client.post('/api/assets/', {'name': 'ThinkPad', 'category': 'Laptop'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['asset_tag'].startswith('SRPH-LAP-'))
        self.assertEqual(response.data['status'], 'available')
        self.assertEqual(response.data['condition'], 'Good')

    def test_duplicate_tag_rejected(self):
        TestDataFactory.create_asset(asset_tag='TAG-1')
        response = self.client.post('/api/assets/', {'asset_tag': 'TAG-1', 'name': 'Copy'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('asset_tag', response.data)

    def test_invalid_status_rejected(self):
        response = self.client.post('/api/assets/', {'name': 'X', 'status': 'lost'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_and_delete(self):
        asset = TestDataFactory.create_asset()
        response = self.client.patch(f'/api/assets/{asset.id}/', {'status': 'deployed', 'purchase_date': ''})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status_display'], 'Deployed')

        response = self.client.delete(f'/api/assets/{asset.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Asset.objects.filter(id=asset.id).exists())
        self.assertEqual(
            list(AuditLog.objects.order_by('id').values_list('action', flat=True)),
            ['update', 'delete'],
        )

    def test_missing_asset_returns_404(self):
        response = self.client.get('/api/assets/999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_filters_and_search(self):
        TestDataFactory.create_asset(name='Dell XPS', status='deployed', department='IT')
        TestDataFactory.create_asset(name='MacBook', status='available', department='HR')
        TestDataFactory.create_asset(name='Dell Monitor', category='Monitor', status='available')

        self.assertEqual(self.client.get('/api/assets/?search=dell').data['count'], 2)
        self.assertEqual(self.client.get('/api/assets/?status=available').data['count'], 2)
        self.assertEqual(self.client.get('/api/assets/?status=all').data['count'], 3)
        self.assertEqual(self.client.get('/api/assets/?category=monitor').data['count'], 1)
        self.assertEqual(self.client.get('/api/assets/?department=hr').data['count'], 1)

    def test_list_is_paginated(self):
        for _ in range(12):
            TestDataFactory.create_asset()
        response = self.client.get('/api/assets/?page=2&limit=5')
        self.assertEqual(response.data['count'], 12)
        self.assertEqual(response.data['total_pages'], 3)
        self.assertEqual(len(response.data['results']), 5)
        self.assertEqual(response.data['page_numbers'], [1, 2, 3])

    def test_import_csv_file(self):
        upload = TestDataFactory.csv_upload(
            'Asset Tag,Device Name,Category,Condition,Purchase Date,Cost,Notes\n'
            'T-1,XPS 13,Laptop,poor,03/15/2024,"$1,299.00",spare\n'
            ',Dell P2419,Monitor,,2024-01-02,250,\n'
        )
        response = self.client.post('/api/assets/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['successful'], 2)
        self.assertEqual(response.data['failed'], 0)

        laptop = Asset.objects.get(asset_tag='T-1')
        self.assertEqual(laptop.condition, 'Bad')
        self.assertEqual(laptop.purchase_cost, Decimal('1299.00'))
        self.assertEqual(laptop.purchase_date.isoformat(), '2024-03-15')
        self.assertEqual(laptop.notes, 'spare')
        monitor = Asset.objects.get(name='Dell P2419')
        self.assertTrue(monitor.asset_tag.startswith('SRPH-MON-'))
        self.assertTrue(AuditLog.objects.filter(action='import', model_name='Asset').exists())

    def test_import_reports_row_errors(self):
        TestDataFactory.create_asset(asset_tag='T-1')
        upload = TestDataFactory.csv_upload('tag,name\nT-1,Dup\nT-2,Fresh\n')
        response = self.client.post('/api/assets/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['successful'], 1)
        self.assertEqual(response.data['errors'][0]['line'], 2)

    def test_import_with_nothing_valid(self):
        upload = TestDataFactory.csv_upload('name,status\nX,lost\n')
        response = self.client.post('/api/assets/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'No valid data to import')
        self.assertEqual(response.data['failed'], 1)

    def test_import_rejects_excel(self):
        upload = TestDataFactory.csv_upload('x', name='assets.xlsx')
        response = self.client.post('/api/assets/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Excel', response.data['error'])

    def test_import_json_records(self):
        payload = {'assets': [{'asset_tag': 'J-1', 'name': 'Tablet', 'category': 'Tablet'}]}
        response = self.client.post('/api/assets/import/', payload)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Asset.objects.filter(asset_tag='J-1').exists())

    def test_import_without_payload(self):
        response = self.client.post('/api/assets/import/', {})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_export(self):
        TestDataFactory.create_asset(name='Dell, XPS', asset_tag='T-9', status='deployed')
        TestDataFactory.create_asset(name='Other', status='available')
        response = self.client.get('/api/assets/export/?status=deployed')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertRegex(response['Content-Disposition'], r'assets-\d{4}-\d{2}-\d{2}\.csv')
        lines = response.content.decode().strip().split('\n')
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith('Asset Tag,Name,Serial Number'))
        self.assertTrue(lines[1].startswith('T-9,"Dell, XPS"'))

    def test_export_reimports(self):
        TestDataFactory.create_asset(asset_tag='T-5', name='XPS', location='HQ')
        content = self.client.get('/api/assets/export/').content.decode()
        _, data = asset_records_from_csv(content)[0]
        self.assertEqual(data['asset_tag'], 'T-5')
        self.assertEqual(data['location'], 'HQ')
        self.assertEqual(data['custom_fields'], {})


class ComponentAPITests(TestCase):
    """Test component endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_crud(self):
        response = self.client.post('/api/components/', {'name': 'RAM 16GB', 'category': 'Memory', 'quantity': 4})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        component_id = response.data['id']

        response = self.client.put(f'/api/components/{component_id}/',
                                   {'name': 'RAM 32GB', 'category': 'Memory', 'quantity': 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Component.objects.get(id=component_id).name, 'RAM 32GB')

    def test_negative_quantity_rejected(self):
        response = self.client.post('/api/components/', {'name': 'SSD', 'category': 'Storage', 'quantity': -1})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_import_strict_column_count(self):
        upload = TestDataFactory.csv_upload('name,category,quantity\nRAM,Memory,2\nSSD,Storage\n')
        response = self.client.post('/api/components/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['line'], 3)
        self.assertEqual(Component.objects.count(), 0)

    def test_import(self):
        upload = TestDataFactory.csv_upload('Name,Category,Qty,Serial Number\nRAM,Memory,3,SN-1\n')
        response = self.client.post('/api/components/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        component = Component.objects.get()
        self.assertEqual(component.quantity, 3)
        self.assertEqual(component.serial_number, 'SN-1')
        self.assertEqual(component.notes, 'Imported via CSV')


class AccessoryAPITests(TestCase):
    """Test accessory endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_assign_to_user(self):
        accessory = TestDataFactory.create_accessory()
        response = self.client.patch(f'/api/accessories/{accessory.id}/',
                                     {'assigned_to': self.user.id, 'status': 'borrowed'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['assigned_to_username'], self.user.username)

        response = self.client.get(f'/api/accessories/?assigned_to={self.user.id}')
        self.assertEqual(response.data['count'], 1)

    def test_import_and_export(self):
        upload = TestDataFactory.csv_upload('name,category,status\nHeadset,Audio,Borrowed\nDongle,Adapter,\n')
        response = self.client.post('/api/accessories/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Accessory.objects.get(name='Headset').status, 'borrowed')
        self.assertEqual(Accessory.objects.get(name='Dongle').status, 'available')

        response = self.client.get('/api/accessories/export/?status=borrowed')
        lines = response.content.decode().strip().split('\n')
        self.assertEqual(lines[0], 'Name,Category,Status,Quantity,Serial Number,Manufacturer,Model,Notes,Assigned To')
        self.assertEqual(len(lines), 2)
