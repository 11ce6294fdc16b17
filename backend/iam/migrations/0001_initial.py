# Generated manually for the initial IAM account schema

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='IAMAccount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('requestor', models.CharField(max_length=200)),
                ('knox_id', models.CharField(db_index=True, max_length=100)),
                ('permission', models.CharField(help_text='Permission / IAM role / scope granted', max_length=255)),
                ('duration_start_date', models.DateField(blank=True, null=True)),
                ('duration_end_date', models.DateField(blank=True, null=True)),
                ('cloud_platform', models.CharField(db_index=True, max_length=100)),
                ('project_accounts', models.CharField(blank=True, max_length=255, null=True)),
                ('approval_id', models.CharField(blank=True, max_length=100, null=True)),
                ('remarks', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('active', 'Active'), ('expired', 'Expired'), ('extended', 'Extended'), ('access_removed', 'Access Removed')], db_index=True, default='active', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'IAM account',
                'db_table': 'iam_accounts',
                'ordering': ['-updated_at', '-id'],
            },
        ),
    ]
