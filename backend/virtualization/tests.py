"""
Test suite for Virtualization module
Tests: VM CRUD, CSV import rules, export round trip, filters
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from backend.core.csv_import import CSVImportError
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.virtualization.models import VirtualMachine
from backend.virtualization.importers import vm_records_from_csv


class VMConversionTests(TestCase):
    """Test CSV row conversion for virtual machines"""

    def test_defaults(self):
        _, data = vm_records_from_csv('VM ID,VM Name,Hypervisor\nVM-1,web-01,KVM\n')[0]
        self.assertEqual(data['vm_status'], 'Provisioning')
        self.assertFalse(data['internet_access'])
        self.assertEqual(data['hostname'], 'N/A')
        self.assertEqual(data['remarks'], 'N/A')
        self.assertIsNone(data['start_date'])
        self.assertIsNone(data['date_deleted'])

    def test_internet_access_and_na(self):
        content = 'vmid,vmname,hypervisor,internet,rack\nVM-1,web-01,KVM,Yes,N/A\n'
        _, data = vm_records_from_csv(content)[0]
        self.assertTrue(data['internet_access'])
        self.assertEqual(data['rack'], 'N/A')

    def test_required_headers(self):
        with self.assertRaisesMessage(CSVImportError, 'missing required headers: hypervisor'):
            vm_records_from_csv('vmid,vmname\nVM-1,web-01\n')

    def test_row_missing_required_value(self):
        with self.assertRaises(CSVImportError) as ctx:
            vm_records_from_csv('vmid,vmname,hypervisor\nVM-1,web-01,KVM\nVM-2,,KVM\n')
        self.assertTrue(ctx.exception.message.startswith('Line 3: Missing required field(s).'))
        self.assertIn('vm_name: ""', ctx.exception.message)

    def test_strict_column_count(self):
        with self.assertRaisesMessage(CSVImportError, 'Line 2 has 2 values, but header has 3 columns'):
            vm_records_from_csv('vmid,vmname,hypervisor\nVM-1,web-01\n')


class VirtualMachineAPITests(TestCase):
    """Test virtual machine endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_with_defaults(self):
        response = self.client.post('/api/vms/', {'vm_id': 'VM-1', 'vm_name': 'web-01', 'hypervisor': 'KVM'})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['vm_status'], 'Provisioning')
        self.assertEqual(response.data['vm_ip'], 'N/A')

    def test_create_requires_hypervisor(self):
        response = self.client.post('/api/vms/', {'vm_id': 'VM-1', 'vm_name': 'web-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('hypervisor', response.data)

    def test_end_date_before_start_date(self):
        response = self.client.post('/api/vms/', {
            'vm_id': 'VM-1', 'vm_name': 'web-01', 'hypervisor': 'KVM',
            'start_date': '2024-05-01', 'end_date': '2024-04-01',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_date', response.data)

    def test_blank_dates_clear_value(self):
        vm = TestDataFactory.create_vm(start_date='2024-01-01')
        response = self.client.patch(f'/api/vms/{vm.id}/', {'start_date': ''})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['start_date'])

    def test_filters(self):
        TestDataFactory.create_vm(vm_name='db-01', hypervisor='KVM', internet_access=True)
        TestDataFactory.create_vm(vm_name='web-01', hypervisor='Hyper-V')
        self.assertEqual(self.client.get('/api/vms/?hypervisor=kvm').data['count'], 1)
        self.assertEqual(self.client.get('/api/vms/?internet_access=true').data['count'], 1)
        self.assertEqual(self.client.get('/api/vms/?search=web').data['count'], 1)
        self.assertEqual(self.client.get('/api/vms/?hypervisor=all').data['count'], 2)

    def test_import(self):
        upload = TestDataFactory.csv_upload(
            'vmId,vmName,vmStatus,internetAccess,hypervisor,startDate\n'
            'VM-1,web-01,Running,true,KVM,2024-01-15\n'
            'VM-2,web-02,,false,KVM,\n'
        )
        response = self.client.post('/api/vms/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['successful'], 2)
        vm = VirtualMachine.objects.get(vm_id='VM-1')
        self.assertTrue(vm.internet_access)
        self.assertEqual(vm.start_date.isoformat(), '2024-01-15')
        self.assertEqual(VirtualMachine.objects.get(vm_id='VM-2').vm_status, 'Provisioning')

    def test_import_error_reports_line(self):
        upload = TestDataFactory.csv_upload('vmId,vmName,hypervisor\nVM-1,,KVM\n')
        response = self.client.post('/api/vms/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['line'], 2)

    def test_import_oversized_cell_is_a_bad_request(self):
        upload = TestDataFactory.csv_upload('vmId,vmName,hypervisor,remarks\nVM-1,vm-1,ESXi,' + 'x' * 140000 + '\n')
        response = self.client.post('/api/vms/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('field larger than field limit', response.data['error'])
        self.assertEqual(VirtualMachine.objects.count(), 0)

    def test_export_round_trip(self):
        TestDataFactory.create_vm(vm_id='VM-7', vm_name='app-07', internet_access=True, remarks='Has, comma')
        response = self.client.get('/api/vms/export/')
        self.assertRegex(response['Content-Disposition'], r'vms-\d{4}-\d{2}-\d{2}\.csv')
        content = response.content.decode()
        self.assertTrue(content.startswith('vmId,vmName,vmStatus,vmIp,internetAccess'))

        _, data = vm_records_from_csv(content)[0]
        self.assertEqual(data['vm_id'], 'VM-7')
        self.assertTrue(data['internet_access'])
        self.assertEqual(data['remarks'], 'Has, comma')
