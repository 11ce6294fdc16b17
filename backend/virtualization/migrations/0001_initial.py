# Generated manually for the initial virtual machine schema

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='VirtualMachine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('vm_id', models.CharField(db_index=True, max_length=100)),
                ('vm_name', models.CharField(max_length=200)),
                ('vm_status', models.CharField(db_index=True, default='Provisioning', max_length=50)),
                ('vm_ip', models.CharField(default='N/A', max_length=64)),
                ('internet_access', models.BooleanField(default=False)),
                ('vm_os', models.CharField(default='N/A', max_length=100)),
                ('vm_os_version', models.CharField(default='N/A', max_length=100)),
                ('hypervisor', models.CharField(max_length=100)),
                ('hostname', models.CharField(default='N/A', max_length=200)),
                ('host_model', models.CharField(default='N/A', max_length=200)),
                ('host_ip', models.CharField(default='N/A', max_length=64)),
                ('host_os', models.CharField(default='N/A', max_length=100)),
                ('rack', models.CharField(default='N/A', max_length=100)),
                ('deployed_by', models.CharField(default='N/A', max_length=200)),
                ('user', models.CharField(default='N/A', max_length=200)),
                ('department', models.CharField(default='N/A', max_length=100)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('jira_ticket', models.CharField(default='N/A', max_length=100)),
                ('remarks', models.TextField(default='N/A')),
                ('date_deleted', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'virtual_machines',
                'ordering': ['-updated_at', '-id'],
            },
        ),
    ]
