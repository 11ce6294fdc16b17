"""
Test suite for IAM accounts
Tests: CRUD, duration display, filters and filter options, CSV import/export/template
"""
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from backend.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from backend.iam.models import IAMAccount
from backend.iam.importers import iam_records_from_csv


class IAMConversionTests(TestCase):
    """Test CSV row conversion for IAM accounts"""

    def test_aliases_and_status_normalization(self):
        content = (
            'Requestor,Knox ID,Permission/IAM/SCOP,Cloud Platform,Notes,Status\n'
            'John,K1,IAM:ReadOnly,AWS,temp access,Access Removed\n'
        )
        _, data = iam_records_from_csv(content)[0]
        self.assertEqual(data['permission'], 'IAM:ReadOnly')
        self.assertEqual(data['remarks'], 'temp access')
        self.assertEqual(data['status'], 'access_removed')

    def test_status_defaults_to_active(self):
        _, data = iam_records_from_csv('requestor,knoxid,permission,cloudplatform\nJohn,K1,P,AWS\n')[0]
        self.assertEqual(data['status'], 'active')

    def test_incomplete_rows_are_skipped(self):
        content = (
            'requestor,knoxid,permission,cloudplatform\n'
            'John,K1,P,AWS\n'
            'Jane,K2,,Azure\n'
            'N/A,K3,P,GCP\n'
        )
        records = iam_records_from_csv(content)
        self.assertEqual([line for line, _ in records], [2])


class IAMAccountAPITests(TestCase):
    """Test IAM account endpoints"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create(self):
        response = self.client.post('/api/iam-accounts/', {
            'requestor': 'John Doe', 'knox_id': 'KNOX001', 'permission': 'IAM:ReadOnly',
            'cloud_platform': 'AWS', 'duration_start_date': '2024-01-15', 'duration_end_date': '',
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'active')
        self.assertEqual(response.data['duration_display'], {'start': '2024-01-15', 'end': 'N/A'})

    def test_required_fields(self):
        response = self.client.post('/api/iam-accounts/', {'requestor': '', 'permission': 'P'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['requestor'][0], 'Requestor is required')
        self.assertEqual(response.data['knox_id'][0], 'Knox ID is required')
        self.assertEqual(response.data['cloud_platform'][0], 'Cloud Platform is required')

    def test_end_before_start_rejected(self):
        account = TestDataFactory.create_iam_account()
        response = self.client.patch(f'/api/iam-accounts/{account.id}/', {
            'duration_start_date': '2024-06-01', 'duration_end_date': '2024-01-01',
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_extended_hides_dates(self):
        account = TestDataFactory.create_iam_account(
            status='extended', duration_start_date='2024-01-01', duration_end_date='2024-02-01',
        )
        response = self.client.get(f'/api/iam-accounts/{account.id}/')
        self.assertEqual(response.data['duration_display'], 'Extended (dates removed)')

    def test_access_removed_marks_start_removed(self):
        account = TestDataFactory.create_iam_account(
            status='access_removed', duration_start_date='2024-01-01', duration_end_date='2024-02-01',
        )
        response = self.client.get(f'/api/iam-accounts/{account.id}/')
        self.assertEqual(response.data['duration_display'], {
            'start': '2024-01-01', 'end': '2024-02-01', 'start_removed': True,
        })

        active = TestDataFactory.create_iam_account(duration_start_date='2024-01-01')
        response = self.client.get(f'/api/iam-accounts/{active.id}/')
        self.assertNotIn('start_removed', response.data['duration_display'])

    def test_approval_expired_flag(self):
        expired = TestDataFactory.create_iam_account(status='expired', approval_id='APR-1')
        active = TestDataFactory.create_iam_account(approval_id='APR-2')
        self.assertTrue(self.client.get(f'/api/iam-accounts/{expired.id}/').data['approval_expired'])
        self.assertFalse(self.client.get(f'/api/iam-accounts/{active.id}/').data['approval_expired'])

    def test_filters(self):
        TestDataFactory.create_iam_account(requestor='Alice', cloud_platform='AWS', project_accounts='dev-1')
        TestDataFactory.create_iam_account(requestor='Bob', cloud_platform='Azure', status='expired')
        self.assertEqual(self.client.get('/api/iam-accounts/?cloud_platform=AWS').data['count'], 1)
        self.assertEqual(self.client.get('/api/iam-accounts/?status=expired').data['count'], 1)
        self.assertEqual(self.client.get('/api/iam-accounts/?project_accounts=dev-1').data['count'], 1)
        self.assertEqual(self.client.get('/api/iam-accounts/?search=bob').data['count'], 1)
        self.assertEqual(self.client.get('/api/iam-accounts/?status=all&cloud_platform=all').data['count'], 2)

    def test_filter_options(self):
        TestDataFactory.create_iam_account(cloud_platform='Azure', project_accounts='prod-2')
        TestDataFactory.create_iam_account(cloud_platform='AWS', status='expired', project_accounts='')
        TestDataFactory.create_iam_account(cloud_platform='AWS')
        response = self.client.get('/api/iam-accounts/filter-options/')
        self.assertEqual(response.data, {
            'cloud_platforms': ['AWS', 'Azure'],
            'statuses': ['active', 'expired'],
            'project_accounts': ['prod-2'],
        })

    def test_template_imports_cleanly(self):
        response = self.client.get('/api/iam-accounts/template/')
        self.assertEqual(response['Content-Disposition'], 'attachment; filename="iam-accounts-template.csv"')
        content = response.content.decode()
        self.assertTrue(content.startswith('requestor,knoxId,permission,durationStartDate'))

        upload = TestDataFactory.csv_upload(content, name='iam-accounts-template.csv')
        response = self.client.post('/api/iam-accounts/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['successful'], 2)
        jane = IAMAccount.objects.get(knox_id='KNOX002')
        self.assertEqual(jane.cloud_platform, 'Azure')
        self.assertEqual(jane.duration_end_date.isoformat(), '2024-08-01')

    def test_import_json(self):
        payload = {'accounts': [
            {'requestor': 'John', 'knox_id': 'K1', 'permission': 'P', 'cloud_platform': 'AWS'},
            {'requestor': 'Jane', 'knox_id': 'K2', 'permission': 'P', 'cloud_platform': 'AWS', 'status': 'bogus'},
        ]}
        response = self.client.post('/api/iam-accounts/import/', payload)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['successful'], 1)
        self.assertEqual(response.data['failed'], 1)
        self.assertEqual(response.data['errors'][0]['line'], 2)

    def test_import_with_only_incomplete_rows(self):
        upload = TestDataFactory.csv_upload('requestor,knoxid\nJohn,K1\n')
        response = self.client.post('/api/iam-accounts/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'No valid data to import')

    def test_export(self):
        TestDataFactory.create_iam_account(knox_id='K9', remarks='Needs, review', status='expired')
        TestDataFactory.create_iam_account(knox_id='K8')
        response = self.client.get('/api/iam-accounts/export/?status=expired')
        self.assertRegex(response['Content-Disposition'], r'iam-accounts-\d{4}-\d{2}-\d{2}\.csv')
        lines = response.content.decode().strip().split('\n')
        self.assertEqual(lines[0], 'Requestor,Knox ID,Permission/IAM/SCOP,Duration Start Date,Duration End Date,'
                                   'Cloud Platform,Project Accounts,Approval ID,Remarks,Status')
        self.assertEqual(len(lines), 2)
        self.assertIn('"Needs, review",expired', lines[1])

        _, data = iam_records_from_csv(response.content.decode())[0]
        self.assertEqual(data['knox_id'], 'K9')
