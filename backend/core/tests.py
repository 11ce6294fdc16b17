"""
Test suite for the shared core layer
Tests: CSV parsing/export helpers, pagination, list cache, audit logs, auth, import_csv command
"""
import os
import tempfile
from io import StringIO

from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase, SimpleTestCase, override_settings
from rest_framework import status
from rest_framework.test import APIRequestFactory
from rest_framework.request import Request
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.core.models import AuditLog
from backend.core.csv_import import (
    CSVImportError, parse_csv, read_csv_upload, parse_bool, parse_int, clean_number,
    normalize_choice, default_columns, render_csv, csv_response,
)
from backend.core.importing import handle_export
from backend.core.pagination import get_page_numbers, paginate
from backend.core.cache_signals import suspend_cache_signals, is_suspended
from backend.core.cache_utils import cached_list, invalidate_list_cache
from backend.core.utils import create_audit_log
from backend.inventory.models import Asset, Component
from backend.inventory.serializers import ComponentSerializer
from backend.iam.models import IAMAccount
from backend.virtualization.models import VirtualMachine

ALIASES = {
    'name': ('name', 'device name'),
    'serial_number': ('serial', 'serial number'),
    'notes': ('notes',),
}


class ParseCSVTests(SimpleTestCase):
    """Test header alias mapping and row parsing"""

    def test_aliases_are_case_insensitive(self):
        rows = parse_csv('Device Name,SERIAL\nLaptop 1,SN1\n', ALIASES)
        self.assertEqual(rows, [(2, {'name': 'Laptop 1', 'serial_number': 'SN1'})])

    def test_quoted_values_keep_commas_and_quotes(self):
        rows = parse_csv('name,notes\n"Dell, XPS","Says ""hi"""\n', ALIASES)
        self.assertEqual(rows[0][1], {'name': 'Dell, XPS', 'notes': 'Says "hi"'})

    def test_space_after_delimiter_is_ignored(self):
        rows = parse_csv('name, serial\nA, "SN, 1"\n', ALIASES)
        self.assertEqual(rows[0][1], {'name': 'A', 'serial_number': 'SN, 1'})

    def test_header_only_is_rejected(self):
        with self.assertRaisesMessage(CSVImportError, 'at least a header row and one data row'):
            parse_csv('name,serial\n', ALIASES)

    def test_empty_content_is_rejected(self):
        with self.assertRaises(CSVImportError):
            parse_csv('', ALIASES)

    def test_oversized_cell_is_an_import_error(self):
        with self.assertRaises(CSVImportError) as ctx:
            parse_csv('name,notes\nA,' + 'x' * 140000 + '\n', ALIASES)
        self.assertEqual(ctx.exception.line, 2)
        self.assertIn('field larger than field limit', ctx.exception.message)

    def test_missing_required_header(self):
        with self.assertRaisesMessage(CSVImportError, 'missing required headers: serial_number'):
            parse_csv('name\nA\n', ALIASES, required=('name', 'serial_number'))

    def test_required_header_matched_through_alias(self):
        rows = parse_csv('device name,serial number\nA,B\n', ALIASES, required=('name', 'serial_number'))
        self.assertEqual(len(rows), 1)

    def test_strict_column_count_mismatch(self):
        with self.assertRaises(CSVImportError) as ctx:
            parse_csv('name,serial\nA,B\nC\n', ALIASES)
        self.assertEqual(ctx.exception.message, 'Line 3 has 1 values, but header has 2 columns')
        self.assertEqual(ctx.exception.line, 3)

    def test_lenient_pads_and_truncates(self):
        rows = parse_csv('name,serial\nA\nB,SN2,extra\n', ALIASES, strict=False)
        self.assertEqual(rows, [(2, {'name': 'A'}), (3, {'name': 'B', 'serial_number': 'SN2'})])

    def test_blank_lines_skipped_and_line_numbers_kept(self):
        rows = parse_csv('\nname,serial\n\nA,SN1\n,\nB,SN2\n', ALIASES)
        self.assertEqual([line for line, _ in rows], [4, 6])

    def test_skip_values_are_dropped(self):
        rows = parse_csv('name,serial\nA,N/A\n', ALIASES, skip_values=('N/A',))
        self.assertEqual(rows[0][1], {'name': 'A'})

    def test_unknown_headers(self):
        dropped = parse_csv('name,color\nA,red\n', ALIASES)
        kept = parse_csv('name,Color\nA,red\n', ALIASES, keep_unknown=True)
        self.assertEqual(dropped[0][1], {'name': 'A'})
        self.assertEqual(kept[0][1], {'name': 'A', 'extra': {'color': 'red'}})


class CSVUploadTests(SimpleTestCase):
    """Test uploaded file validation"""

    def test_reads_utf8_with_bom(self):
        upload = TestDataFactory.csv_upload('\ufeffname\nA\n')
        self.assertEqual(read_csv_upload(upload), 'name\nA\n')

    def test_excel_file_rejected(self):
        upload = TestDataFactory.csv_upload('x', name='assets.xlsx')
        with self.assertRaisesMessage(CSVImportError, 'Excel files are not directly supported'):
            read_csv_upload(upload)

    def test_other_extension_rejected(self):
        upload = TestDataFactory.csv_upload('x', name='assets.txt')
        with self.assertRaisesMessage(CSVImportError, 'Unsupported file format. Please upload a CSV file.'):
            read_csv_upload(upload)

    @override_settings(CSV_IMPORT_MAX_BYTES=10)
    def test_oversized_file_rejected(self):
        upload = TestDataFactory.csv_upload('name\n' + 'A\n' * 20)
        with self.assertRaisesMessage(CSVImportError, 'too large'):
            read_csv_upload(upload)


class CSVValueTests(SimpleTestCase):
    """Test cell coercion and CSV rendering"""

    def test_parse_bool(self):
        for value in ('true', 'Yes', '1', ' TRUE '):
            self.assertTrue(parse_bool(value))
        for value in ('false', 'no', '0', '', None, 'maybe'):
            self.assertFalse(parse_bool(value))

    def test_parse_int(self):
        self.assertEqual(parse_int('7'), 7)
        self.assertEqual(parse_int('', default=1), 1)
        with self.assertRaises(ValueError):
            parse_int('seven')

    def test_clean_number(self):
        self.assertEqual(clean_number('$1,299.00'), '1299.00')
        self.assertIsNone(clean_number('USD'))

    def test_normalize_choice(self):
        choices = [('access_removed', 'Access Removed'), ('active', 'Active')]
        self.assertEqual(normalize_choice('Access Removed', choices), 'access_removed')
        self.assertEqual(normalize_choice('ACTIVE', choices), 'active')
        self.assertEqual(normalize_choice('', choices, default='active'), 'active')
        self.assertEqual(normalize_choice('unknown', choices), 'unknown')

    def test_default_columns(self):
        self.assertEqual(default_columns(['purchase_date']), [('purchase_date', 'Purchase Date')])

    def test_render_csv_quotes_and_formats(self):
        rows = [{'name': 'Dell, XPS', 'active': True, 'cost': None}]
        content = render_csv(rows, [('name', 'Name'), ('active', 'Active'), ('cost', 'Cost')])
        self.assertEqual(content, 'Name,Active,Cost\n"Dell, XPS",true,\n')

    def test_exported_csv_parses_back(self):
        rows = [{'name': 'Quote "x"', 'serial_number': 'SN1'}]
        content = render_csv(rows, [('name', 'name'), ('serial_number', 'serial')])
        self.assertEqual(parse_csv(content, ALIASES)[0][1], rows[0])

    def test_csv_response_headers(self):
        response = csv_response([], [('name', 'Name')], 'assets-2024-01-01.csv')
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        self.assertEqual(response['Content-Disposition'], 'attachment; filename="assets-2024-01-01.csv"')


class PageNumberTests(SimpleTestCase):
    """Test the compact pager"""

    def test_small_page_counts_list_everything(self):
        self.assertEqual(get_page_numbers(1, 1), [1])
        self.assertEqual(get_page_numbers(3, 5), [1, 2, 3, 4, 5])

    def test_start(self):
        self.assertEqual(get_page_numbers(1, 10), [1, 2, '...', 10])
        self.assertEqual(get_page_numbers(3, 10), [1, 2, 3, 4, '...', 10])

    def test_middle(self):
        self.assertEqual(get_page_numbers(5, 10), [1, '...', 4, 5, 6, '...', 10])

    def test_end(self):
        self.assertEqual(get_page_numbers(10, 10), [1, '...', 9, 10])
        self.assertEqual(get_page_numbers(8, 10), [1, '...', 7, 8, 9, 10])


class PaginateTests(TestCase):
    """Test page slicing and the response shape"""

    def setUp(self):
        cache.clear()
        for index in range(12):
            TestDataFactory.create_component(name=f'Part {index}')
        self.factory = APIRequestFactory()

    def _paginate(self, query):
        request = Request(self.factory.get('/api/components/', query))
        return paginate(request, Component.objects.order_by('id'), ComponentSerializer)

    def test_shape(self):
        data = self._paginate({'page': 2, 'limit': 5})
        self.assertEqual(data['count'], 12)
        self.assertEqual(data['page'], 2)
        self.assertEqual(data['page_size'], 5)
        self.assertEqual(data['total_pages'], 3)
        self.assertEqual(data['next'], 3)
        self.assertEqual(data['previous'], 1)
        self.assertEqual(data['page_numbers'], [1, 2, 3])
        self.assertEqual(len(data['results']), 5)

    def test_out_of_range_and_garbage(self):
        data = self._paginate({'page': 99, 'limit': 'abc'})
        self.assertEqual(data['page'], 2)
        self.assertEqual(data['page_size'], 10)
        self.assertIsNone(data['next'])

    def test_zero_and_negative_pages_return_first_page(self):
        for page in (0, -1):
            data = self._paginate({'page': page, 'limit': 5})
            self.assertEqual(data['page'], 1)
            self.assertIsNone(data['previous'])
            self.assertEqual(data['results'][0]['name'], 'Part 0')

    @override_settings(MAX_PAGE_SIZE=4)
    def test_limit_is_clamped(self):
        self.assertEqual(self._paginate({'limit': 1000})['page_size'], 4)
        self.assertEqual(self._paginate({'limit': 0})['page_size'], 1)


class ExportTests(TestCase):
    """Test the shared export pipeline"""

    def setUp(self):
        self.user = TestDataFactory.create_user()

    def test_columns_default_to_serializer_fields(self):
        TestDataFactory.create_component(name='RAM', category='Memory')
        request = Request(APIRequestFactory().get('/api/components/export/'))
        request.user = self.user
        response = handle_export(request, Component.objects.all(), ComponentSerializer, None, 'components.csv')
        lines = response.content.decode().strip().split('\n')
        self.assertTrue(lines[0].startswith('Id,Name,Category,Quantity,Serial Number'))
        self.assertIn('Purchase Date', lines[0])
        self.assertIn('RAM,Memory', lines[1])
        self.assertEqual(AuditLog.objects.get(action='export').changes, {'rows': 1})


class ListCacheTests(TestCase):
    """Test list cache invalidation"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_invalidates_cached_list(self):
        self.assertEqual(self.client.get('/api/iam-accounts/').data['count'], 0)
        TestDataFactory.create_iam_account()
        self.assertEqual(self.client.get('/api/iam-accounts/').data['count'], 1)

    def test_delete_invalidates_cached_list(self):
        vm = TestDataFactory.create_vm()
        self.assertEqual(self.client.get('/api/vms/').data['count'], 1)
        vm.delete()
        self.assertEqual(self.client.get('/api/vms/').data['count'], 0)

    def test_suspended_signals_keep_cache_until_invalidated(self):
        request = Request(APIRequestFactory().get('/api/assets/'))

        def count():
            return cached_list(request, Asset, lambda: {'count': Asset.objects.count()})['count']

        self.assertEqual(count(), 0)
        with suspend_cache_signals():
            self.assertTrue(is_suspended())
            TestDataFactory.create_asset()
        self.assertFalse(is_suspended())
        self.assertEqual(count(), 0)
        invalidate_list_cache(Asset)
        self.assertEqual(count(), 1)

    def test_user_changes_invalidate_accessory_list(self):
        borrower = TestDataFactory.create_user(username='borrower')
        TestDataFactory.create_accessory(name='Headset 1', status='borrowed', assigned_to=borrower)
        response = self.client.get('/api/accessories/')
        self.assertEqual(response.data['results'][0]['assigned_to_username'], 'borrower')

        borrower.username = 'lender'
        borrower.save()
        response = self.client.get('/api/accessories/')
        self.assertEqual(response.data['results'][0]['assigned_to_username'], 'lender')

        borrower.delete()
        response = self.client.get('/api/accessories/')
        self.assertIsNone(response.data['results'][0]['assigned_to_username'])

    def test_query_strings_are_cached_separately(self):
        TestDataFactory.create_iam_account(status='active')
        TestDataFactory.create_iam_account(status='expired')
        self.assertEqual(self.client.get('/api/iam-accounts/').data['count'], 2)
        self.assertEqual(self.client.get('/api/iam-accounts/?status=expired').data['count'], 1)


class AuditLogTests(TestCase):
    """Test audit log helpers and endpoints"""

    def setUp(self):
        cache.clear()
        self.admin = TestDataFactory.create_user(is_staff=True)
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()

    def test_create_audit_log_skips_incomplete(self):
        self.assertIsNone(create_audit_log(action='create', model_name='Asset'))
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_crud_writes_audit_log(self):
        self.client.authenticate_user(self.user)
        response = self.client.post('/api/components/', {'name': 'RAM 16GB', 'category': 'Memory'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        log = AuditLog.objects.get()
        self.assertEqual(log.action, 'create')
        self.assertEqual(log.model_name, 'Component')
        self.assertEqual(log.user, self.user)

    def test_non_staff_only_sees_own_logs(self):
        create_audit_log(action='delete', model_name='Asset', object_id=1, user=self.admin)
        own = create_audit_log(action='delete', model_name='Asset', object_id=2, user=self.user)

        self.client.authenticate_user(self.user)
        response = self.client.get('/api/audit-logs/')
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['id'], own.id)

        self.client.authenticate_user(self.admin)
        self.assertEqual(self.client.get('/api/audit-logs/').data['count'], 2)

    def test_filter_by_action(self):
        create_audit_log(action='import', model_name='Asset', object_id='bulk', user=self.admin)
        create_audit_log(action='export', model_name='Asset', object_id='bulk', user=self.admin)
        self.client.authenticate_user(self.admin)
        response = self.client.get('/api/audit-logs/?action=import')
        self.assertEqual(response.data['count'], 1)

    def test_detail_permission(self):
        log = create_audit_log(action='delete', model_name='Asset', object_id=1, user=self.admin)
        self.client.authenticate_user(self.user)
        response = self.client.get(f'/api/audit-logs/{log.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AuthTests(TestCase):
    """Test authentication endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user(username='alice', password='secret123')
        self.client = AuthenticatedAPIClient()

    def test_login_and_me(self):
        response = self.client.post('/api/auth/login/', {'username': 'alice', 'password': 'secret123'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get('/api/auth/me/')
        self.assertEqual(me.data['username'], 'alice')
        self.assertFalse(me.data['is_admin'])

    def test_unauthenticated_requests_rejected(self):
        response = self.client.get('/api/assets/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_user_list(self):
        self.client.authenticate_user(self.user)
        response = self.client.get('/api/users/?search=ali')
        self.assertEqual([user['username'] for user in response.data], ['alice'])


class ImportCSVCommandTests(TestCase):
    """Test the import_csv management command"""

    def setUp(self):
        cache.clear()

    def _write_csv(self, content):
        handle, path = tempfile.mkstemp(suffix='.csv')
        with os.fdopen(handle, 'w', encoding='utf-8') as f:
            f.write(content)
        self.addCleanup(os.remove, path)
        return path

    def _run(self, *args):
        out = StringIO()
        call_command('import_csv', *args, stdout=out)
        return out.getvalue()

    def test_imports_vms(self):
        path = self._write_csv('vmId,vmName,hypervisor\nVM-1,web-01,KVM\nVM-2,web-02,KVM\n')
        output = self._run('--type', 'vms', '--csv-file', path)
        self.assertIn('Imported: 2', output)
        self.assertEqual(VirtualMachine.objects.count(), 2)

    def test_dry_run_saves_nothing(self):
        path = self._write_csv('requestor,knox id,permission,cloud platform\nJohn,K1,IAM:ReadOnly,AWS\n')
        output = self._run('--type', 'iam-accounts', '--csv-file', path, '--dry-run')
        self.assertIn('Valid: 1', output)
        self.assertEqual(IAMAccount.objects.count(), 0)

    def test_reports_row_errors(self):
        path = self._write_csv('name,category,quantity\nRAM,Memory,2\nSSD,Storage,-1\n')
        output = self._run('--type', 'components', '--csv-file', path)
        self.assertIn('Line 3', output)
        self.assertIn('Failed: 1', output)
        self.assertEqual(Component.objects.count(), 1)

    def test_missing_file(self):
        output = self._run('--type', 'assets', '--csv-file', '/nonexistent/assets.csv')
        self.assertIn('CSV file not found', output)

    def test_invalid_csv(self):
        path = self._write_csv('vmName\nweb-01\n')
        output = self._run('--type', 'vms', '--csv-file', path)
        self.assertIn('missing required headers', output)

    def test_oversized_cell_reported(self):
        path = self._write_csv('vmId,vmName,hypervisor,remarks\nVM-1,vm-1,ESXi,' + 'x' * 140000 + '\n')
        output = self._run('--type', 'vms', '--csv-file', path)
        self.assertIn('Error reading CSV file: Line 2', output)
        self.assertEqual(VirtualMachine.objects.count(), 0)
