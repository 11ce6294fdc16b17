from django.db import models

CLOUD_PLATFORMS = ['AWS', 'Azure', 'Google Cloud', 'Oracle Cloud']


class IAMAccount(models.Model):
    """Cloud IAM permission grant with a validity window"""
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('expired', 'Expired'),
        ('extended', 'Extended'),
        ('access_removed', 'Access Removed'),
    ]

    requestor = models.CharField(max_length=200)
    knox_id = models.CharField(max_length=100, db_index=True)
    permission = models.CharField(max_length=255, help_text='Permission / IAM role / scope granted')
    duration_start_date = models.DateField(blank=True, null=True)
    duration_end_date = models.DateField(blank=True, null=True)
    cloud_platform = models.CharField(max_length=100, db_index=True)
    project_accounts = models.CharField(max_length=255, blank=True, null=True)
    approval_id = models.CharField(max_length=100, blank=True, null=True)
    remarks = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.knox_id} - {self.permission} ({self.cloud_platform})"

    class Meta:
        db_table = 'iam_accounts'
        verbose_name = 'IAM account'
        ordering = ['-updated_at', '-id']
