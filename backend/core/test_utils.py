"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from backend.inventory.models import Asset, Component, Accessory
from backend.virtualization.models import VirtualMachine
from backend.iam.models import IAMAccount
from decimal import Decimal
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )
        return user

    @staticmethod
    def create_asset(name=None, category='Laptop', status='available', **kwargs):
        """Create a test asset (asset tag is generated)"""
        if not name:
            name = f'Asset_{TestDataFactory.random_string(6)}'
        kwargs.setdefault('serial_number', f'SN-{TestDataFactory.random_string(8).upper()}')
        kwargs.setdefault('purchase_cost', Decimal('1000.00'))
        return Asset.objects.create(name=name, category=category, status=status, **kwargs)

    @staticmethod
    def create_component(name=None, category='Memory', quantity=1, **kwargs):
        """Create a test component"""
        if not name:
            name = f'Component_{TestDataFactory.random_string(6)}'
        return Component.objects.create(name=name, category=category, quantity=quantity, **kwargs)

    @staticmethod
    def create_accessory(name=None, category='Headset', status='available', **kwargs):
        """Create a test accessory"""
        if not name:
            name = f'Accessory_{TestDataFactory.random_string(6)}'
        return Accessory.objects.create(name=name, category=category, status=status, **kwargs)

    @staticmethod
    def create_vm(vm_id=None, vm_name=None, hypervisor='VMware ESXi', **kwargs):
        """Create a test virtual machine"""
        if not vm_id:
            vm_id = f'VM-{TestDataFactory.random_string(6).upper()}'
        if not vm_name:
            vm_name = f'vm-{TestDataFactory.random_string(6).lower()}'
        return VirtualMachine.objects.create(vm_id=vm_id, vm_name=vm_name, hypervisor=hypervisor, **kwargs)

    @staticmethod
    def create_iam_account(requestor='John Doe', knox_id=None, permission='IAM:ReadOnly',
                           cloud_platform='AWS', status='active', **kwargs):
        """Create a test IAM account"""
        if not knox_id:
            knox_id = f'KNOX{TestDataFactory.random_string(4).upper()}'
        return IAMAccount.objects.create(
            requestor=requestor,
            knox_id=knox_id,
            permission=permission,
            cloud_platform=cloud_platform,
            status=status,
            **kwargs
        )

    @staticmethod
    def csv_upload(content, name='import.csv'):
        """Wrap CSV text as a multipart file upload"""
        return SimpleUploadedFile(name, content.encode('utf-8'), content_type='text/csv')


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
