from django.conf import settings
from django.db import models
from django.utils import timezone

ASSET_TAG_PREFIX = 'SRPH'


def generate_asset_tag(category=None, index=None):
    """
    Generate a unique asset tag: SRPH-<CAT>-<timestamp>-<index>

    CAT is the first three letters of the category (AST when unknown), timestamp
    the last six digits of the current epoch milliseconds and index the 1-based
    row position, zero-padded to three digits.
    """
    category_code = category.strip().upper()[:3] if category and category.strip() else 'AST'
    suffix = index + 1 if index is not None else 1

    while True:
        timestamp = str(int(timezone.now().timestamp() * 1000))[-6:]
        tag = f"{ASSET_TAG_PREFIX}-{category_code}-{timestamp}-{suffix:03d}"
        if not Asset.objects.filter(asset_tag=tag).exists():
            return tag
        suffix += 1


class Asset(models.Model):
    """Tracked hardware asset (laptop, desktop, monitor, phone...)"""
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('deployed', 'Deployed'),
        ('pending', 'Pending'),
        ('overdue', 'Overdue'),
        ('on-hand', 'On-Hand'),
        ('archived', 'Archived'),
    ]

    CONDITION_GOOD = 'Good'
    CONDITION_BAD = 'Bad'

    asset_tag = models.CharField(max_length=100, unique=True, blank=True, db_index=True)
    name = models.CharField(max_length=200, blank=True, null=True)
    serial_number = models.CharField(max_length=200, blank=True, default='', db_index=True)
    category = models.CharField(max_length=100, default='Laptop')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='available', db_index=True)
    condition = models.CharField(max_length=50, default=CONDITION_GOOD)
    model = models.CharField(max_length=200, blank=True, null=True)
    manufacturer = models.CharField(max_length=200, blank=True, null=True)
    purchase_date = models.DateField(blank=True, null=True)
    purchase_cost = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    location = models.CharField(max_length=200, blank=True, null=True)
    knox_id = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    ip_address = models.CharField(max_length=64, blank=True, null=True)
    mac_address = models.CharField(max_length=64, blank=True, null=True)
    os_type = models.CharField(max_length=100, blank=True, null=True)
    department = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    warranty = models.CharField(max_length=100, blank=True, null=True)
    supplier = models.CharField(max_length=200, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    custom_fields = models.JSONField(default=dict, blank=True)  # unmapped CSV columns
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        if not self.asset_tag:
            self.asset_tag = generate_asset_tag(self.category)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.asset_tag} ({self.name or self.category})"

    class Meta:
        db_table = 'assets'
        ordering = ['-updated_at', '-id']


class Component(models.Model):
    """Internal parts kept in stock (RAM, drives, CPUs...)"""
    name = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    quantity = models.PositiveIntegerField(default=1)
    serial_number = models.CharField(max_length=200, blank=True, null=True)
    manufacturer = models.CharField(max_length=200, blank=True, null=True)
    model = models.CharField(max_length=200, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    purchase_date = models.DateField(blank=True, null=True)
    purchase_cost = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    location = models.CharField(max_length=200, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} x{self.quantity}"

    class Meta:
        db_table = 'components'
        ordering = ['-updated_at', '-id']


class Accessory(models.Model):
    """Peripherals that are lent to users (headsets, adapters, keyboards...)"""
    STATUS_CHOICES = [
        ('available', 'Available'),
        ('borrowed', 'Borrowed'),
        ('returned', 'Returned'),
        ('defective', 'Defective'),
    ]

    name = models.CharField(max_length=200)
    category = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='available', db_index=True)
    quantity = models.PositiveIntegerField(default=1)
    serial_number = models.CharField(max_length=200, blank=True, null=True)
    manufacturer = models.CharField(max_length=200, blank=True, null=True)
    model = models.CharField(max_length=200, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    purchase_date = models.DateField(blank=True, null=True)
    purchase_cost = models.DecimalField(max_digits=12, decimal_places=2, blank=True, null=True)
    location = models.CharField(max_length=200, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    assigned_to = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='accessories')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'accessories'
        verbose_name_plural = 'accessories'
        ordering = ['-updated_at', '-id']
